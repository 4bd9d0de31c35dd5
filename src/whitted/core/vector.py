"""Vector utilities for CPU ray tracing.

All vectors are numpy float64 arrays of shape (3,). These helpers keep call
sites short and centralize the few formulas (reflection, refraction, Schlick)
that the shading model and the integrator share.

Example:
    >>> from whitted.core.vector import vec3, normalize, reflect
    >>> n = vec3(0.0, 1.0, 0.0)
    >>> reflect(normalize(vec3(1.0, -1.0, 0.0)), n)
    array([0.70710678, 0.70710678, 0.        ])
"""

import math

import numpy as np
import numpy.typing as npt

Vec3 = npt.NDArray[np.float64]


def vec3(x: float, y: float, z: float) -> Vec3:
    """Build a float64 3-vector."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(v: npt.ArrayLike) -> Vec3:
    """Coerce a sequence or array into a float64 3-vector.

    Raises:
        ValueError: If the input does not have exactly three components.
    """
    arr = np.asarray(v, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {np.shape(v)}")
    return arr.copy()


def dot(a: Vec3, b: Vec3) -> float:
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    return np.cross(a, b)


def length(v: Vec3) -> float:
    return float(np.linalg.norm(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    A zero-length vector is returned unchanged rather than producing NaN.
    """
    n = np.linalg.norm(v)
    if n == 0.0:
        return np.array(v, dtype=np.float64)
    return v / n


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Mirror an incident direction about a unit normal."""
    return incident - 2.0 * np.dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, eta: float) -> Vec3 | None:
    """Refract a unit direction through a surface using Snell's law.

    Args:
        incident: The incoming unit direction (pointing toward the surface).
        normal: Unit normal on the incident side (dot(incident, normal) <= 0).
        eta: Ratio of refractive indices n_incident / n_transmitted.

    Returns:
        The refracted unit direction, or None on total internal reflection.
    """
    cos_i = -float(np.dot(incident, normal))
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    if k < 0.0:
        return None
    return normalize(eta * incident + (eta * cos_i - math.sqrt(k)) * normal)


def schlick_reflectance(cos_i: float, n1: float, n2: float) -> float:
    """Fresnel reflectance using Schlick's approximation.

    Args:
        cos_i: Cosine of the incident angle, measured on the incident side.
        n1: Refractive index of the medium the ray travels in.
        n2: Refractive index of the medium on the far side of the surface.

    Returns:
        Reflectance in [0, 1]. Total internal reflection returns exactly 1.0.
    """
    r0 = ((n1 - n2) / (n1 + n2)) ** 2
    cosine = cos_i
    if n1 > n2:
        ratio = n1 / n2
        sin2_t = ratio * ratio * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            return 1.0
        cosine = math.sqrt(1.0 - sin2_t)
    x = 1.0 - cosine
    return r0 + (1.0 - r0) * x**5
