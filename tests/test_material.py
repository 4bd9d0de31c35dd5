"""Unit tests for Material validation and texture-backed lookups."""

import numpy as np
import pytest

from whitted.geometry import Sphere, Triangle
from whitted.materials import Material, Texture


def solid(value, size=2):
    return Texture(np.full((size, size, 3), value, dtype=np.uint8))


class TestMaterialValidation:
    """Tests for construction-time validation."""

    def test_defaults(self):
        """Test the default Phong material."""
        mat = Material()
        assert mat.color == (255.0, 255.0, 255.0)
        assert mat.ambient_percent == 0.5
        assert mat.reflectivity == 0.0
        assert mat.transparency == 0.0
        assert mat.ior == 1.0
        assert mat.glow_color is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"color": (300, 0, 0)},
            {"color": (-1, 0, 0)},
            {"reflectivity": 1.5},
            {"transparency": -0.1},
            {"shininess": -1.0},
            {"ior": 0.9},
            {"color_filter": (1.0, 2.0, 1.0)},
            {"color_filter": (1.0, 1.0)},
            {"glow_color": (0, 0, 256)},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        """Test that out-of-range properties raise ValueError."""
        with pytest.raises(ValueError):
            Material(**kwargs)

    def test_evolve_revalidates(self):
        """Test that evolve returns a validated copy."""
        mat = Material()
        assert mat.evolve(reflectivity=0.5).reflectivity == 0.5
        with pytest.raises(ValueError):
            mat.evolve(reflectivity=2.0)

    def test_filter_array(self):
        """Test the color filter as an array."""
        mat = Material(color_filter=(0.5, 1.0, 0.25))
        np.testing.assert_allclose(mat.filter_array, [0.5, 1.0, 0.25])


class TestMaterialLookups:
    """Tests for the primitive-side material accessors."""

    def test_plain_color(self):
        """Test that an untextured primitive returns the base color."""
        sphere = Sphere(material=Material(color=(10, 20, 30)))
        np.testing.assert_allclose(sphere.color_at(np.array([0.0, 1.0, 0.0])), [10, 20, 30])

    def test_texture_overrides_color(self):
        """Test that a texture supplies the surface color."""
        sphere = Sphere(material=Material(color=(10, 20, 30), texture=solid(77)))
        np.testing.assert_allclose(sphere.color_at(np.array([0.0, 1.0, 0.0])), [77, 77, 77])

    def test_ambient_color_uses_percent(self):
        """Test that ambient color is the surface color scaled by ambient_percent."""
        sphere = Sphere(material=Material(color=(200, 100, 0), ambient_percent=0.25))
        np.testing.assert_allclose(
            sphere.ambient_color_at(np.array([1.0, 0.0, 0.0])), [50.0, 25.0, 0.0]
        )

    def test_ambient_occlusion_scales_ambient(self):
        """Test that the occlusion map's red channel darkens the ambient color."""
        mat = Material(color=(200, 200, 200), ambient_occlusion=solid(51))
        sphere = Sphere(material=mat)
        np.testing.assert_allclose(
            sphere.ambient_color_at(np.array([1.0, 0.0, 0.0])), [20.0, 20.0, 20.0]
        )

    def test_opacity_map_sets_transparency(self):
        """Test that transparency is one minus the opacity map's red channel."""
        sphere = Sphere(material=Material(transparency=0.0, opacity_map=solid(0)))
        assert sphere.get_transparency(np.array([1.0, 0.0, 0.0])) == pytest.approx(1.0)

    def test_reflectivity_map_scales_reflectivity(self):
        """Test that the reflectivity map scales the base reflectivity."""
        sphere = Sphere(material=Material(reflectivity=0.8, reflectivity_map=solid(255)))
        assert sphere.get_reflectivity(np.array([1.0, 0.0, 0.0])) == pytest.approx(0.8)

    def test_specular_map_sets_specular_light(self):
        """Test that the specular map supplies the specular light intensity."""
        sphere = Sphere(material=Material(specular_map=solid(128)))
        np.testing.assert_allclose(
            sphere.specular_light_at(np.array([1.0, 0.0, 0.0])), [128, 128, 128]
        )

    def test_flat_normal_map_keeps_geometric_normal(self):
        """Test that the neutral normal-map texel (128, 128, 255) barely tilts the normal."""
        flat = Texture(np.tile(np.array([128, 128, 255], dtype=np.uint8), (2, 2, 1)))
        tri = Triangle(v0=(0, 0, 0), v1=(1, 0, 0), v2=(0, 1, 0),
                       material=Material(normal_map=flat))
        n = tri.normal(np.array([0.2, 0.2, 0.0]), np.array([0.0, 0.0, -1.0]))
        np.testing.assert_allclose(n, [0.0, 0.0, 1.0], atol=0.01)
