"""Core rendering module.

Components:
    vector: numpy-backed vector helpers, reflection and refraction
    ray: Ray data structure and the secondary-ray bias rule
    transform: Object-to-world transforms for rays, points and normals
    options: RenderOptions, the configuration threaded through every trace
    integrator: Recursive Whitted-style light transport
    progressive: Taichi accumulation buffer for multi-pass rendering

All geometry and shading math runs on the CPU in float64 numpy arrays.
"""

from .options import DEFAULT_MAX_RECURSION, RenderOptions
from .ray import RAY_EPSILON, Ray, make_ray, offset_origin, ray_at
from .transform import Transform, transform_direction, transform_normal, transform_point
from .vector import (
    Vec3,
    as_vec3,
    cross,
    dot,
    length,
    normalize,
    reflect,
    refract,
    schlick_reflectance,
    vec3,
)

# Note: integrator and progressive are NOT imported here to avoid circular imports.
# Import directly from whitted.core.integrator or whitted.core.progressive when needed.

__all__ = [
    "Ray",
    "RAY_EPSILON",
    "ray_at",
    "make_ray",
    "offset_origin",
    "Vec3",
    "vec3",
    "as_vec3",
    "length",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_reflectance",
    "Transform",
    "transform_point",
    "transform_direction",
    "transform_normal",
    "RenderOptions",
    "DEFAULT_MAX_RECURSION",
]
