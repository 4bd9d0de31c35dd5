"""Triangle primitive with Cramer's-rule barycentric intersection.

The triangle's vertices are stored as given (object space, identity transform
by default). Intersection solves

    o + t d = v0 + beta (v1 - v0) + gamma (v2 - v0)

for (beta, gamma, t) with Cramer's rule. A determinant that is near zero
relative to the triangle's area means the ray is parallel to the triangle's
plane and is reported as a miss instead of dividing by zero.

Triangles are double-sided: the normal is flipped to face the side the ray
arrives from, so shading is forward-facing regardless of winding order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from whitted.core.ray import Ray
from whitted.core.vector import Vec3, as_vec3, cross, normalize
from whitted.geometry.primitive import Primitive

# Determinants below this fraction of |e1 x e2| |d| are treated as parallel
# ray/plane
DETERMINANT_EPSILON = 1e-12

DEFAULT_UVS = ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0))


def _frozen(v: npt.ArrayLike) -> Vec3:
    arr = as_vec3(v)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Triangle(Primitive):
    """A triangle defined by three object-space vertices.

    Attributes:
        v0: First vertex.
        v1: Second vertex.
        v2: Third vertex.
        uvs: Texture coordinates of (v0, v1, v2).
    """

    v0: Vec3
    v1: Vec3
    v2: Vec3
    uvs: tuple[tuple[float, float], ...] = field(default=DEFAULT_UVS)

    def __post_init__(self) -> None:
        object.__setattr__(self, "v0", _frozen(self.v0))
        object.__setattr__(self, "v1", _frozen(self.v1))
        object.__setattr__(self, "v2", _frozen(self.v2))
        uvs = tuple((float(u), float(v)) for u, v in self.uvs)
        if len(uvs) != 3:
            raise ValueError(f"Triangle needs 3 texture coordinates, got {len(uvs)}")
        object.__setattr__(self, "uvs", uvs)
        if not np.any(cross(self.v1 - self.v0, self.v2 - self.v0)):
            raise ValueError("Triangle vertices are collinear")

    def local_intersect(self, local_ray: Ray) -> float | None:
        v0, v1, v2 = self.v0, self.v1, self.v2
        e = local_ray.origin
        g, h, i = local_ray.direction

        a, b, c = v0 - v1
        d, ee, f = v0 - v2
        j, k, l = v0 - e

        ei_hf = ee * i - h * f
        gf_di = g * f - d * i
        dh_eg = d * h - ee * g
        m = a * ei_hf + b * gf_di + c * dh_eg
        scale = np.linalg.norm(cross(v1 - v0, v2 - v0)) * np.linalg.norm(local_ray.direction)
        if abs(m) < DETERMINANT_EPSILON * scale:
            return None

        beta = (j * ei_hf + k * gf_di + l * dh_eg) / m
        if beta < 0.0:
            return None

        ak_jb = a * k - j * b
        jc_al = j * c - a * l
        bl_kc = b * l - k * c
        gamma = (i * ak_jb + h * jc_al + g * bl_kc) / m
        if gamma < 0.0 or beta + gamma > 1.0:
            return None

        return float(-(f * ak_jb + ee * jc_al + d * bl_kc) / m)

    def local_normal(self, local_point: Vec3, local_direction: Vec3) -> Vec3:
        n = normalize(cross(self.v1 - self.v0, self.v2 - self.v0))
        # Face the side the ray arrives from
        if float(np.dot(n, local_direction)) < 0.0:
            return n
        return -n

    def barycentric(self, local_point: Vec3) -> tuple[float, float, float]:
        """Barycentric weights (alpha, beta, gamma) of a point in the plane."""
        e1 = self.v1 - self.v0
        e2 = self.v2 - self.v0
        p = np.asarray(local_point, dtype=np.float64) - self.v0
        d11 = float(np.dot(e1, e1))
        d12 = float(np.dot(e1, e2))
        d22 = float(np.dot(e2, e2))
        dp1 = float(np.dot(p, e1))
        dp2 = float(np.dot(p, e2))
        denom = d11 * d22 - d12 * d12
        beta = (d22 * dp1 - d12 * dp2) / denom
        gamma = (d11 * dp2 - d12 * dp1) / denom
        return 1.0 - beta - gamma, beta, gamma

    def uv_at(self, local_point: Vec3) -> tuple[float, float]:
        weights = self.barycentric(local_point)
        u = sum(w * uv[0] for w, uv in zip(weights, self.uvs))
        v = sum(w * uv[1] for w, uv in zip(weights, self.uvs))
        return u, v
