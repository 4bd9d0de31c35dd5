"""Recursive Whitted-style integrator.

trace() computes the color seen along one world ray:

1. Find the closest primitive hit (linear scan); a miss returns the scene
   background.
2. Resolve the world point and normal through the primitive's transform and
   evaluate the local Phong shading.
3. While depth < max_recursion, spawn secondary rays:
   - transparent and reflective (dielectric): Schlick-Fresnel blend of a
     reflected ray (or the glow color) and a refracted ray, absorbed by
     Beer's law when the incoming ray travelled inside the volume;
   - reflective only: mirror reflection scaled by reflectivity;
   - transparent only: refraction scaled by transparency.
4. Add the secondary contributions (rescaled from [0, 255] to [0, 1]) to the
   local color, clamp each channel to [0, 1] and return it scaled to [0, 255].

Each call works only on its own ray, point and normal, so the recursion tree
shares no mutable state. Randomness is confined to area-light jitter and is
drawn from the caller's numpy Generator.

Example:
    >>> import numpy as np
    >>> from whitted.core.integrator import trace
    >>> from whitted.core.ray import make_ray
    >>> from whitted.geometry import Sphere
    >>> from whitted.materials import Material
    >>> from whitted.scene import AreaLight, Scene
    >>> scene = Scene([Sphere.create((0, 0, 0), 1.0, Material(color=(255, 0, 0)))],
    ...               light=AreaLight.point((0, 5, 0)))
    >>> color = trace(make_ray((0, 0, 5), (0, 0, -1)), scene)
    >>> color.shape
    (3,)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from whitted.core.options import RenderOptions
from whitted.core.ray import Ray, offset_origin
from whitted.core.vector import Vec3, reflect, refract, schlick_reflectance
from whitted.geometry.primitive import SurfaceHit
from whitted.materials.shading import ShadingInputs, shade
from whitted.scene.scene import Scene

Color = npt.NDArray[np.float64]

# Refractive index of the medium surrounding every primitive
AIR_IOR = 1.0

_DEFAULT_OPTIONS = RenderOptions()


def fresnel_reflectance(direction: Vec3, normal: Vec3, ior: float) -> float:
    """Schlick reflectance for a ray meeting a surface of index ior.

    Args:
        direction: Unit direction of the incoming ray.
        normal: Unit outward surface normal (pointing out of the volume).
        ior: Index of refraction of the volume.

    Returns:
        Reflectance in [0, 1]; exactly 1.0 on total internal reflection.
    """
    cos_i = -float(np.dot(direction, normal))
    if cos_i < 0.0:
        # Leaving the volume: swap media and measure against the inner normal
        return schlick_reflectance(-cos_i, ior, AIR_IOR)
    return schlick_reflectance(cos_i, AIR_IOR, ior)


def _refracted_ray(
    point: Vec3,
    direction: Vec3,
    facing_normal: Vec3,
    n1: float,
    n2: float,
    bias: float,
) -> Ray | None:
    refracted = refract(direction, facing_normal, n1 / n2)
    if refracted is None:
        return None
    return Ray(origin=offset_origin(point, facing_normal, refracted, bias), direction=refracted)


def _reflected_ray(point: Vec3, direction: Vec3, facing_normal: Vec3, bias: float) -> Ray:
    reflected = reflect(direction, facing_normal)
    return Ray(origin=offset_origin(point, facing_normal, reflected, bias), direction=reflected)


def trace(
    ray: Ray,
    scene: Scene,
    options: RenderOptions | None = None,
    rng: np.random.Generator | None = None,
    depth: int = 0,
) -> Color:
    """Compute the color along a world ray.

    Args:
        ray: World-space ray with a unit direction.
        scene: Scene to render (read-only).
        options: Shading switches and recursion limit (defaults apply if None).
        rng: Source of area-light jitter. A fresh unseeded Generator is used
            if None.
        depth: Current recursion depth; callers start at 0.

    Returns:
        RGB color with channels in [0, 255].
    """
    if options is None:
        options = _DEFAULT_OPTIONS
    if rng is None:
        rng = np.random.default_rng()

    hit = scene.closest_hit(ray)
    if hit is None:
        return scene.background_array

    primitive = hit.primitive
    surface = primitive.surface_at(ray, hit.t)
    inputs = ShadingInputs.from_hit(surface, ray.direction)
    color = shade(inputs, scene, options, rng)

    if depth < options.max_recursion:
        color = color + _secondary(ray, surface, hit.t, scene, options, rng, depth) / 255.0

    result = np.clip(color, 0.0, 1.0) * 255.0
    assert np.all(np.isfinite(result)), f"non-finite color {result} at depth {depth}"
    return result


def _secondary(
    ray: Ray,
    surface: SurfaceHit,
    t: float,
    scene: Scene,
    options: RenderOptions,
    rng: np.random.Generator,
    depth: int,
) -> Color:
    """Reflection/refraction contribution on a [0, 255] scale."""
    primitive = surface.primitive
    material = primitive.material
    reflectivity = primitive.get_reflectivity(surface.local_point)
    transparency = primitive.get_transparency(surface.local_point)
    if reflectivity <= 0.0 and transparency <= 0.0:
        return np.zeros(3)

    direction = ray.direction
    normal = surface.normal
    inside = float(np.dot(direction, normal)) > 0.0
    facing = -normal if inside else normal
    n1, n2 = (material.ior, AIR_IOR) if inside else (AIR_IOR, material.ior)
    bias = options.bias

    def reflected() -> Color:
        if material.glow_color is not None:
            return np.array(material.glow_color, dtype=np.float64)
        return trace(_reflected_ray(surface.point, direction, facing, bias),
                     scene, options, rng, depth + 1)

    def refracted() -> Color:
        refr_ray = _refracted_ray(surface.point, direction, facing, n1, n2, bias)
        if refr_ray is None:
            return np.zeros(3)
        return trace(refr_ray, scene, options, rng, depth + 1)

    if reflectivity > 0.0 and transparency > 0.0:
        reflectance = fresnel_reflectance(direction, normal, material.ior)
        contribution = reflectance * reflected()
        if reflectance < 1.0:
            contribution = contribution + (1.0 - reflectance) * refracted()
        if inside:
            contribution = contribution * np.power(material.filter_array, t)
        return contribution

    if reflectivity > 0.0:
        return reflectivity * reflected()
    return transparency * refracted()
