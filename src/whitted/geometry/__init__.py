"""Geometry module for shape primitives.

Components:
    primitive: Shared Primitive contract and the SurfaceHit record
    sphere: Unit sphere placed by its transform
    triangle: Double-sided triangle with barycentric texture coordinates

Intersection is a brute-force linear scan over the scene's primitives; each
primitive intersects in its own object space and reports the ray parameter t,
which is identical in world space because object-space ray directions are
never renormalized.
"""

from .primitive import Primitive, SurfaceHit
from .sphere import Sphere
from .triangle import DETERMINANT_EPSILON, Triangle

__all__ = [
    "Primitive",
    "SurfaceHit",
    "Sphere",
    "Triangle",
    "DETERMINANT_EPSILON",
]
