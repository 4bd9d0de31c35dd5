"""Unit tests for sphere intersection, normals and texture coordinates.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (far root)
- Scaled and translated spheres
- UV mapping
"""

import math

import numpy as np
import pytest

from whitted.core.ray import Ray, make_ray
from whitted.geometry import Sphere
from whitted.materials import Material


class TestSphereCreate:
    """Tests for Sphere.create and transform composition."""

    def test_create_places_sphere(self):
        """Test that create maps the unit sphere to center and radius."""
        sphere = Sphere.create((1.0, 2.0, 3.0), 0.5)
        np.testing.assert_allclose(sphere.transform.point_to_world((0, 0, 0)), [1.0, 2.0, 3.0])
        np.testing.assert_allclose(sphere.transform.point_to_world((1, 0, 0)), [1.5, 2.0, 3.0])

    def test_create_rejects_non_positive_radius(self):
        """Test that a zero radius raises ValueError."""
        with pytest.raises(ValueError, match="positive"):
            Sphere.create((0, 0, 0), 0.0)

    def test_translate_returns_new_primitive(self):
        """Test that translate leaves the original sphere untouched."""
        sphere = Sphere.create((0, 0, 0), 1.0)
        moved = sphere.translate(0.0, 0.0, -3.0)
        assert moved is not sphere
        assert sphere.intersects(make_ray((0, 0, 5), (0, 0, -1))) == pytest.approx(4.0)
        assert moved.intersects(make_ray((0, 0, 5), (0, 0, -1))) == pytest.approx(7.0)

    def test_with_material(self):
        """Test material replacement."""
        red = Material(color=(255, 0, 0))
        sphere = Sphere.create((0, 0, 0), 1.0).with_material(red)
        assert sphere.material == red


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_direct_hit_distance(self):
        """Test that t equals distance to center minus radius."""
        sphere = Sphere.create((0.0, 0.0, -10.0), 2.0)
        t = sphere.intersects(make_ray((0, 0, 0), (0, 0, -1)))
        assert t == pytest.approx(8.0)

    def test_miss(self):
        """Test that a ray passing beside the sphere misses."""
        sphere = Sphere.create((0, 0, 0), 1.0)
        assert sphere.intersects(make_ray((0, 2, 5), (0, 0, -1))) is None

    def test_inside_origin_returns_far_root(self):
        """Test that a ray starting inside returns the exit distance."""
        sphere = Sphere.create((0, 0, 0), 1.0)
        t = sphere.intersects(make_ray((0, 0, 0), (1, 0, 0)))
        assert t == pytest.approx(1.0)

    def test_sphere_behind_ray_is_negative(self):
        """Test that a sphere behind the origin yields a negative parameter."""
        sphere = Sphere.create((0, 0, 0), 1.0)
        t = sphere.intersects(make_ray((0, 0, 5), (0, 0, 1)))
        assert t is not None and t < 0.0

    def test_local_intersect_handles_unnormalized_direction(self):
        """Test that object-space rays with long directions scale t."""
        sphere = Sphere()
        t = sphere.local_intersect(Ray(origin=(0, 0, 5), direction=(0, 0, -2)))
        assert t == pytest.approx(2.0)

    def test_world_t_matches_for_scaled_sphere(self):
        """Test that world t is exact for a non-uniformly scaled sphere."""
        sphere = Sphere().scale(3.0, 1.0, 1.0)
        t = sphere.intersects(make_ray((10, 0, 0), (-1, 0, 0)))
        assert t == pytest.approx(7.0)


class TestSphereSurface:
    """Tests for world-space surface resolution and UV mapping."""

    def test_surface_point_and_normal(self):
        """Test hit point and outward normal from the front."""
        sphere = Sphere.create((0, 0, 0), 1.0)
        ray = make_ray((0, 0, 5), (0, 0, -1))
        hit = sphere.surface_at(ray, sphere.intersects(ray))
        np.testing.assert_allclose(hit.point, [0.0, 0.0, 1.0], atol=1e-12)
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, 1.0], atol=1e-12)

    def test_normal_stays_outward_from_inside(self):
        """Test that the sphere reports its outward normal for inside hits."""
        sphere = Sphere.create((0, 0, 0), 1.0)
        ray = make_ray((0, 0, 0), (0, 0, 1))
        hit = sphere.surface_at(ray, sphere.intersects(ray))
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, 1.0], atol=1e-12)

    def test_uv_poles(self):
        """Test that v runs from 0 at the south pole to 1 at the north pole."""
        sphere = Sphere()
        assert sphere.uv_at(np.array([0.0, 1.0, 0.0]))[1] == pytest.approx(1.0)
        assert sphere.uv_at(np.array([0.0, -1.0, 0.0]))[1] == pytest.approx(0.0)

    def test_uv_equator(self):
        """Test the longitude mapping around the equator."""
        sphere = Sphere()
        u, v = sphere.uv_at(np.array([-1.0, 0.0, 0.0]))
        assert u == pytest.approx(0.0)
        assert v == pytest.approx(0.5)
        u, _ = sphere.uv_at(np.array([1.0, 0.0, 0.0]))
        assert u == pytest.approx(0.5)
        u, _ = sphere.uv_at(np.array([0.0, 0.0, 1.0]))
        assert u == pytest.approx(0.25)

    def test_uv_in_unit_range(self):
        """Test that UVs stay in [0, 1] across the sphere."""
        sphere = Sphere()
        for theta in np.linspace(0.0, math.pi, 7):
            for phi in np.linspace(0.0, 2 * math.pi, 9):
                p = np.array([
                    math.sin(theta) * math.cos(phi),
                    math.cos(theta),
                    math.sin(theta) * math.sin(phi),
                ])
                u, v = sphere.uv_at(p)
                assert 0.0 <= u <= 1.0
                assert 0.0 <= v <= 1.0
