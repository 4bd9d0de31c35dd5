"""Affine transform pipeline between world space and object space.

Each primitive stores its canonical geometry in object space plus a forward
transform (object -> world) and its precomputed inverse (world -> object).
Intersection happens in object space:

1. The world ray is mapped into object space with the inverse transform.
   Origins are points (homogeneous w = 1), directions are vectors (w = 0, so
   translation never leaks into them). The direction is NOT renormalized, so
   the parameter t found in object space is the same t along the world ray.
2. The object-space hit point is mapped back with the forward transform.
3. Normals are mapped with the inverse-transpose of the forward transform and
   renormalized, which keeps them perpendicular under non-uniform scaling.

Transforms are immutable values. rotated(), scaled() and translated() return
a new Transform with the step composed on the left of the forward matrix and
its inverse composed on the right of the inverse matrix.

Example:
    >>> from whitted.core.transform import Transform, transform_point
    >>> xf = Transform.identity().scaled(2.0, 2.0, 2.0).translated(0.0, 1.0, 0.0)
    >>> transform_point((1.0, 0.0, 0.0), xf.matrix)
    array([2., 1., 0.])
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from whitted.core.ray import Ray
from whitted.core.vector import Vec3, as_vec3, normalize

Mat4 = npt.NDArray[np.float64]


def transform_point(point: npt.ArrayLike, matrix: Mat4) -> Vec3:
    """Apply an affine transform to a point (homogeneous w = 1)."""
    p = np.append(np.asarray(point, dtype=np.float64), 1.0)
    return (matrix @ p)[:3]


def transform_direction(direction: npt.ArrayLike, matrix: Mat4) -> Vec3:
    """Apply only the linear part of a transform to a direction (w = 0)."""
    d = np.append(np.asarray(direction, dtype=np.float64), 0.0)
    return (matrix @ d)[:3]


def transform_normal(normal: npt.ArrayLike, inverse: Mat4) -> Vec3:
    """Map an object-space normal to world space.

    Uses the transpose of the inverse forward transform, then renormalizes.

    Args:
        normal: The object-space normal.
        inverse: The inverse of the forward (object -> world) transform.

    Returns:
        The unit world-space normal.
    """
    n = inverse[:3, :3].T @ np.asarray(normal, dtype=np.float64)
    return normalize(n)


def _freeze(matrix: Mat4) -> Mat4:
    m = np.array(matrix, dtype=np.float64)
    m.flags.writeable = False
    return m


def rotation_matrix(axis: npt.ArrayLike, angle: float) -> Mat4:
    """Rotation by angle (radians, right-handed) about an arbitrary axis.

    Builds an orthonormal basis (u, v, w) with w along the axis, rotates about
    w in that basis and maps the result back.

    Raises:
        ValueError: If the axis is the zero vector.
    """
    a = as_vec3(axis)
    if not np.any(a):
        raise ValueError("Rotation axis must be non-zero")
    w = normalize(a)
    helper = np.array([0.0, 0.0, 1.0])
    if abs(float(np.dot(w, helper))) > 0.9:
        helper = np.array([0.0, 1.0, 0.0])
    u = normalize(np.cross(w, helper))
    v = np.cross(w, u)

    basis = np.identity(4)
    basis[0, :3] = u
    basis[1, :3] = v
    basis[2, :3] = w

    c, s = math.cos(angle), math.sin(angle)
    spin = np.identity(4)
    spin[0, 0], spin[0, 1] = c, -s
    spin[1, 0], spin[1, 1] = s, c
    return basis.T @ spin @ basis


def scaling_matrix(sx: float, sy: float, sz: float) -> Mat4:
    return np.diag([sx, sy, sz, 1.0]).astype(np.float64)


def translation_matrix(x: float, y: float, z: float) -> Mat4:
    m = np.identity(4)
    m[:3, 3] = (x, y, z)
    return m


@dataclass(frozen=True, eq=False)
class Transform:
    """A forward affine transform paired with its inverse.

    Attributes:
        matrix: Object -> world 4x4 matrix.
        inverse: World -> object 4x4 matrix, always inv(matrix).
    """

    matrix: Mat4
    inverse: Mat4

    def __post_init__(self) -> None:
        object.__setattr__(self, "matrix", _freeze(self.matrix))
        object.__setattr__(self, "inverse", _freeze(self.inverse))
        assert np.all(np.isfinite(self.matrix)), "non-finite transform"
        assert np.all(np.isfinite(self.inverse)), "non-finite inverse transform"

    @classmethod
    def identity(cls) -> "Transform":
        return cls(np.identity(4), np.identity(4))

    def _compose(self, step: Mat4, step_inverse: Mat4) -> "Transform":
        return Transform(step @ self.matrix, self.inverse @ step_inverse)

    def rotated(self, axis: npt.ArrayLike, angle: float) -> "Transform":
        """Return this transform followed by a rotation about axis."""
        rot = rotation_matrix(axis, angle)
        # Orthonormal: the transpose is the exact inverse
        return self._compose(rot, rot.T)

    def scaled(self, sx: float, sy: float, sz: float) -> "Transform":
        """Return this transform followed by a scale.

        Raises:
            ValueError: If any factor is zero (the transform would be singular).
        """
        if sx == 0.0 or sy == 0.0 or sz == 0.0:
            raise ValueError(f"Scale factors must be non-zero, got ({sx}, {sy}, {sz})")
        return self._compose(
            scaling_matrix(sx, sy, sz),
            scaling_matrix(1.0 / sx, 1.0 / sy, 1.0 / sz),
        )

    def translated(self, x: float, y: float, z: float) -> "Transform":
        """Return this transform followed by a translation."""
        return self._compose(translation_matrix(x, y, z), translation_matrix(-x, -y, -z))

    def to_local(self, ray: Ray) -> Ray:
        """Map a world ray into object space without renormalizing it."""
        return Ray(
            origin=transform_point(ray.origin, self.inverse),
            direction=transform_direction(ray.direction, self.inverse),
        )

    def point_to_world(self, point: npt.ArrayLike) -> Vec3:
        return transform_point(point, self.matrix)

    def normal_to_world(self, normal: npt.ArrayLike) -> Vec3:
        return transform_normal(normal, self.inverse)

    def __repr__(self) -> str:
        return f"Transform(matrix={self.matrix.tolist()})"
