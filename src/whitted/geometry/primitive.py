"""Shared contract for transformable, shadable primitives.

Every primitive stores canonical geometry in object space, a Material and a
Transform. Subclasses implement three object-space hooks:

    local_intersect(local_ray) -> t or None
    local_normal(local_point, local_direction) -> unit normal
    uv_at(local_point) -> (u, v)

and inherit the world-space pipeline: intersects() maps the world ray into
object space, surface_at() maps the hit point and normal back, and the
*_at() accessors resolve material properties (optionally texture-backed)
at an object-space point.

Primitives are immutable. rotate(), scale() and translate() return new
primitives with the step composed onto the transform.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace

import numpy as np
import numpy.typing as npt

from whitted.core.ray import Ray, ray_at
from whitted.core.transform import Transform
from whitted.core.vector import Vec3, cross, normalize
from whitted.materials.material import Material


@dataclass(frozen=True, eq=False)
class SurfaceHit:
    """World-space description of a ray hitting a primitive.

    Attributes:
        primitive: The primitive that was hit.
        t: Ray parameter of the hit (same value in world and object space).
        point: World-space hit point.
        normal: Unit world-space normal (after normal mapping).
        local_point: Object-space hit point, used for material lookups.
    """

    primitive: Primitive
    t: float
    point: Vec3
    normal: Vec3
    local_point: Vec3


@dataclass(frozen=True, eq=False, kw_only=True)
class Primitive(ABC):
    """Base class for all shapes the integrator can intersect and shade.

    Attributes:
        material: Surface material.
        transform: Object -> world transform with its inverse.
    """

    material: Material = field(default_factory=Material)
    transform: Transform = field(default_factory=Transform.identity)

    # =========================================================================
    # Object-space geometry (implemented by subclasses)
    # =========================================================================

    @abstractmethod
    def local_intersect(self, local_ray: Ray) -> float | None:
        """Intersect an object-space ray.

        The ray direction may not be unit length. Returns the ray parameter
        of the hit (possibly negative, callers filter) or None on a miss.
        """

    @abstractmethod
    def local_normal(self, local_point: Vec3, local_direction: Vec3) -> Vec3:
        """Unit geometric normal at an object-space point."""

    @abstractmethod
    def uv_at(self, local_point: Vec3) -> tuple[float, float]:
        """Texture coordinate at an object-space point."""

    # =========================================================================
    # World-space pipeline
    # =========================================================================

    def intersects(self, ray: Ray) -> float | None:
        """Intersect a world ray, returning its parameter t or None."""
        return self.local_intersect(self.transform.to_local(ray))

    def normal(self, local_point: Vec3, local_direction: Vec3) -> Vec3:
        """Object-space shading normal, perturbed by the normal map if any."""
        n = self.local_normal(local_point, local_direction)
        if self.material.normal_map is not None:
            n = self._perturb_normal(n, local_point)
        return n

    def surface_at(self, ray: Ray, t: float) -> SurfaceHit:
        """Resolve world point and normal for a hit found by intersects().

        Args:
            ray: The world ray that was intersected.
            t: The parameter returned by intersects() for that ray.

        Returns:
            The SurfaceHit for this primitive.
        """
        local_ray = self.transform.to_local(ray)
        local_point = ray_at(local_ray, t)
        local_n = self.normal(local_point, local_ray.direction)
        return SurfaceHit(
            primitive=self,
            t=t,
            point=self.transform.point_to_world(local_point),
            normal=self.transform.normal_to_world(local_n),
            local_point=local_point,
        )

    def _perturb_normal(self, n: Vec3, local_point: Vec3) -> Vec3:
        u, v = self.uv_at(local_point)
        texel = self.material.normal_map.color_at(u, v)  # type: ignore[union-attr]
        tangent_space = normalize(2.0 * texel - 255.0)

        reference = np.array([0.0, 1.0, 0.0])
        if abs(float(np.dot(reference, n))) > 0.9:
            reference = np.array([1.0, 0.0, 0.0])
        tangent = normalize(cross(reference, n))
        bitangent = cross(n, tangent)
        return normalize(
            tangent_space[0] * tangent + tangent_space[1] * bitangent + tangent_space[2] * n
        )

    # =========================================================================
    # Material lookups (object-space point)
    # =========================================================================

    def color_at(self, local_point: Vec3) -> npt.NDArray[np.float64]:
        if self.material.texture is not None:
            return self.material.texture.color_at(*self.uv_at(local_point))
        return np.array(self.material.color, dtype=np.float64)

    def ambient_color_at(self, local_point: Vec3) -> npt.NDArray[np.float64]:
        """Surface color scaled by the ambient percent and ambient occlusion."""
        ambient = self.material.ambient_percent * self.color_at(local_point)
        if self.material.ambient_occlusion is not None:
            u, v = self.uv_at(local_point)
            ambient = ambient * (self.material.ambient_occlusion.color_at(u, v)[0] / 255.0)
        return ambient

    def specular_color_at(self, local_point: Vec3) -> npt.NDArray[np.float64]:
        return np.array(self.material.specular_color, dtype=np.float64)

    def specular_light_at(self, local_point: Vec3) -> npt.NDArray[np.float64]:
        if self.material.specular_map is not None:
            return self.material.specular_map.color_at(*self.uv_at(local_point))
        return np.array(self.material.specular_light, dtype=np.float64)

    def get_transparency(self, local_point: Vec3) -> float:
        if self.material.opacity_map is not None:
            u, v = self.uv_at(local_point)
            return 1.0 - float(self.material.opacity_map.color_at(u, v)[0]) / 255.0
        return self.material.transparency

    def get_reflectivity(self, local_point: Vec3) -> float:
        if self.material.reflectivity_map is not None:
            u, v = self.uv_at(local_point)
            scale = float(self.material.reflectivity_map.color_at(u, v)[0]) / 255.0
            return self.material.reflectivity * scale
        return self.material.reflectivity

    # =========================================================================
    # Immutable transform composition
    # =========================================================================

    def rotate(self, axis: npt.ArrayLike, angle: float) -> Primitive:
        """Return a copy rotated by angle (radians) about axis."""
        return replace(self, transform=self.transform.rotated(axis, angle))

    def scale(self, sx: float, sy: float, sz: float) -> Primitive:
        """Return a copy scaled along the world axes."""
        return replace(self, transform=self.transform.scaled(sx, sy, sz))

    def translate(self, x: float, y: float, z: float) -> Primitive:
        """Return a copy translated by (x, y, z)."""
        return replace(self, transform=self.transform.translated(x, y, z))

    def with_material(self, material: Material) -> Primitive:
        return replace(self, material=material)
