"""Sphere primitive: the unit sphere at the origin in object space.

Arbitrary spheres (and ellipsoids) are obtained through the transform, so the
intersection only ever solves against the unit sphere:

    a t^2 + b t + c = 0,  a = d.d,  b = 2 d.o,  c = o.o - 1

where o and d are the object-space ray origin and direction. When the origin
lies inside the sphere the larger root is returned, so a ray cast from inside
(for example a refracted ray that has just entered) exits through the far
side instead of re-hitting the surface it started from.

Example:
    >>> from whitted.core.ray import make_ray
    >>> from whitted.geometry.sphere import Sphere
    >>> sphere = Sphere.create(center=(0.0, 0.0, -5.0), radius=1.0)
    >>> sphere.intersects(make_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
    4.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from whitted.core.ray import Ray
from whitted.core.transform import Transform
from whitted.core.vector import Vec3, normalize
from whitted.geometry.primitive import Primitive
from whitted.materials.material import Material


@dataclass(frozen=True, eq=False)
class Sphere(Primitive):
    """A unit sphere placed in the world by its transform."""

    @classmethod
    def create(
        cls,
        center: npt.ArrayLike = (0.0, 0.0, 0.0),
        radius: float = 1.0,
        material: Material | None = None,
    ) -> Sphere:
        """Create a sphere from a world-space center and radius.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere.
            material: Surface material (default white Phong material).

        Returns:
            A unit sphere scaled by radius and translated to center.

        Raises:
            ValueError: If radius is not positive.
        """
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        cx, cy, cz = (float(c) for c in np.asarray(center, dtype=np.float64))
        transform = Transform.identity().scaled(radius, radius, radius).translated(cx, cy, cz)
        return cls(material=material or Material(), transform=transform)

    def local_intersect(self, local_ray: Ray) -> float | None:
        o = local_ray.origin
        d = local_ray.direction
        a = float(np.dot(d, d))
        b = 2.0 * float(np.dot(d, o))
        oo = float(np.dot(o, o))
        c = oo - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0 or a == 0.0:
            return None
        sqrt_d = math.sqrt(discriminant)

        if oo < 1.0:
            return (-b + sqrt_d) / (2.0 * a)
        return (-b - sqrt_d) / (2.0 * a)

    def local_normal(self, local_point: Vec3, local_direction: Vec3) -> Vec3:
        # Outward; the integrator flips it when the ray is inside
        return normalize(local_point)

    def uv_at(self, local_point: Vec3) -> tuple[float, float]:
        x, y, z = normalize(local_point)
        theta = math.acos(max(-1.0, min(1.0, y)))
        phi = math.atan2(z, -x)
        if phi < 0.0:
            phi += 2.0 * math.pi
        return phi / (2.0 * math.pi), (math.pi - theta) / math.pi
