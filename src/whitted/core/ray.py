"""Ray data structure and secondary-ray helpers.

A Ray is an immutable origin/direction pair. World rays built with make_ray()
have unit-length directions; rays mapped into a primitive's object space keep
whatever length the inverse transform gives them, so intersection code must
not assume a unit direction.

Example:
    >>> from whitted.core.ray import make_ray, ray_at
    >>> ray = make_ray((0.0, 0.0, 5.0), (0.0, 0.0, -2.0))
    >>> ray_at(ray, 4.0)
    array([0., 0., 1.])
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from whitted.core.vector import Vec3, as_vec3, normalize

# Offset applied to secondary ray origins to avoid self-intersection
RAY_EPSILON = 1e-4


def _frozen(v: npt.ArrayLike) -> Vec3:
    arr = as_vec3(v)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Unit length for world rays;
            possibly scaled for object-space rays.
    """

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _frozen(self.origin))
        object.__setattr__(self, "direction", _frozen(self.direction))

    def __repr__(self) -> str:
        o, d = self.origin, self.direction
        return f"Ray(origin=({o[0]:g}, {o[1]:g}, {o[2]:g}), direction=({d[0]:g}, {d[1]:g}, {d[2]:g}))"


def make_ray(origin: npt.ArrayLike, direction: npt.ArrayLike) -> Ray:
    """Create a world-space ray, normalizing the direction.

    Raises:
        ValueError: If the direction is the zero vector.
    """
    d = as_vec3(direction)
    if not np.any(d):
        raise ValueError("Ray direction must be non-zero")
    return Ray(origin=as_vec3(origin), direction=normalize(d))


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point origin + t * direction."""
    return ray.origin + t * ray.direction


def offset_origin(
    point: Vec3,
    normal: Vec3,
    direction: Vec3,
    bias: float = RAY_EPSILON,
) -> Vec3:
    """Displace a surface point so a new ray starts on the side it travels into.

    The point moves by bias along the normal if the direction leaves through
    the normal's side of the surface, and against it otherwise. Reflection
    rays therefore start outside, refraction rays entering a volume start just
    inside it, and rays exiting a volume start just outside it.

    Args:
        point: The surface point.
        normal: A unit surface normal (either orientation).
        direction: Direction of the ray that will be cast from the point.
        bias: Size of the displacement.

    Returns:
        The displaced origin.
    """
    if float(np.dot(direction, normal)) > 0.0:
        return point + normal * bias
    return point - normal * bias
