"""Unit tests for rays and the secondary-ray bias rule."""

import numpy as np
import pytest

from whitted.core.ray import RAY_EPSILON, Ray, make_ray, offset_origin, ray_at
from whitted.core.vector import vec3


class TestRay:
    """Tests for ray construction."""

    def test_make_ray_normalizes(self):
        """Test that make_ray produces a unit direction."""
        ray = make_ray((0, 0, 0), (0, 0, -5))
        np.testing.assert_allclose(ray.direction, [0.0, 0.0, -1.0])

    def test_make_ray_rejects_zero_direction(self):
        """Test that a zero direction raises ValueError."""
        with pytest.raises(ValueError, match="non-zero"):
            make_ray((0, 0, 0), (0, 0, 0))

    def test_plain_constructor_keeps_length(self):
        """Test that Ray() does not renormalize (object-space rays)."""
        ray = Ray(origin=(0, 0, 0), direction=(0, 0, 2))
        np.testing.assert_allclose(ray.direction, [0.0, 0.0, 2.0])

    def test_ray_is_immutable(self):
        """Test that ray arrays cannot be modified in place."""
        ray = make_ray((0, 0, 0), (1, 0, 0))
        with pytest.raises(ValueError):
            ray.origin[0] = 5.0

    def test_ray_at(self):
        """Test point evaluation along the ray."""
        ray = make_ray((0, 0, 5), (0, 0, -1))
        np.testing.assert_allclose(ray_at(ray, 4.0), [0.0, 0.0, 1.0])


class TestOffsetOrigin:
    """Tests for the bias rule shared by shadow, reflection and refraction rays."""

    def test_outgoing_ray_moves_along_normal(self):
        """Test that a ray leaving through the normal side starts outside."""
        p = offset_origin(vec3(0, 0, 1), vec3(0, 0, 1), vec3(0, 1, 1))
        np.testing.assert_allclose(p, [0.0, 0.0, 1.0 + RAY_EPSILON])

    def test_entering_ray_moves_against_normal(self):
        """Test that a refraction ray entering a volume starts inside."""
        p = offset_origin(vec3(0, 0, 1), vec3(0, 0, 1), vec3(0, 0, -1))
        np.testing.assert_allclose(p, [0.0, 0.0, 1.0 - RAY_EPSILON])

    def test_custom_bias(self):
        """Test that the bias magnitude is configurable."""
        p = offset_origin(vec3(0, 0, 0), vec3(1, 0, 0), vec3(1, 0, 0), bias=0.5)
        np.testing.assert_allclose(p, [0.5, 0.0, 0.0])
