"""Unit tests for nearest-neighbour textures."""

import numpy as np
import pytest
from PIL import Image as PILImage

from whitted.materials import Texture

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def two_row_texture():
    """2x2 texture: red top row, blue bottom row."""
    data = np.zeros((2, 2, 3), dtype=np.uint8)
    data[0, :] = RED
    data[1, :] = BLUE
    return Texture(data)


class TestTexture:
    """Tests for texel lookup."""

    def test_dimensions(self):
        """Test width and height properties."""
        tex = Texture(np.zeros((3, 5, 4), dtype=np.uint8))
        assert tex.width == 5
        assert tex.height == 3

    def test_v_grows_upward(self):
        """Test that v = 0 samples the bottom row of the image."""
        tex = two_row_texture()
        np.testing.assert_array_equal(tex.color_at(0.25, 0.25), BLUE)
        np.testing.assert_array_equal(tex.color_at(0.25, 0.75), RED)

    def test_out_of_range_clamps(self):
        """Test that coordinates outside [0, 1] clamp to the border."""
        tex = two_row_texture()
        np.testing.assert_array_equal(tex.color_at(-3.0, 5.0), RED)
        np.testing.assert_array_equal(tex.color_at(7.0, -1.0), BLUE)

    def test_alpha_channel_dropped(self):
        """Test that RGBA data yields RGB colors."""
        tex = Texture(np.full((1, 1, 4), 9, dtype=np.uint8))
        assert tex.color_at(0.5, 0.5).shape == (3,)

    def test_color_is_a_copy(self):
        """Test that callers cannot modify texels through a lookup."""
        tex = two_row_texture()
        color = tex.color_at(0.5, 0.5)
        color[0] = 1.0
        assert tex.color_at(0.5, 0.5)[0] == 255.0

    @pytest.mark.parametrize("shape", [(2, 2), (2, 2, 2), (0, 2, 3)])
    def test_invalid_shapes_rejected(self, shape):
        """Test that malformed arrays raise ValueError."""
        with pytest.raises(ValueError):
            Texture(np.zeros(shape, dtype=np.uint8))

    def test_from_image(self, tmp_path):
        """Test decoding an image file through Pillow."""
        path = tmp_path / "stripes.png"
        data = np.zeros((2, 2, 3), dtype=np.uint8)
        data[0, :] = RED
        data[1, :] = BLUE
        PILImage.fromarray(data).save(path)

        tex = Texture.from_image(str(path))
        assert (tex.width, tex.height) == (2, 2)
        np.testing.assert_array_equal(tex.color_at(0.5, 0.9), RED)
