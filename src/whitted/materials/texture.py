"""Nearest-neighbour image textures.

A Texture wraps an (H, W, C) uint8 array with C >= 3. Texture coordinates
(u, v) in [0, 1] map to texels with v growing upward, so v = 0 is the bottom
row of the image. Lookups outside the image are clamped to the border texel.

Example:
    >>> import numpy as np
    >>> from whitted.materials.texture import Texture
    >>> tex = Texture(np.full((4, 4, 3), 200, dtype=np.uint8))
    >>> tex.color_at(0.5, 0.5)
    array([200., 200., 200.])
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


class Texture:
    """An RGB(A) texel grid sampled with nearest-neighbour lookup.

    Attributes:
        width: Texture width in texels.
        height: Texture height in texels.
    """

    def __init__(self, data: npt.ArrayLike) -> None:
        """Wrap a texel array.

        Args:
            data: Array of shape (height, width, channels) with at least three
                channels in [0, 255]. Row 0 is the top of the image.

        Raises:
            ValueError: If the array is not 3-D, is empty, or has fewer than
                three channels.
        """
        arr = np.asarray(data)
        if arr.ndim != 3 or arr.shape[2] < 3:
            raise ValueError(f"Texture data must have shape (H, W, C>=3), got {arr.shape}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError("Texture data must not be empty")
        self._texels = np.array(arr[:, :, :3], dtype=np.float64)
        self._texels.flags.writeable = False

    @classmethod
    def from_image(cls, filepath: str) -> Texture:
        """Decode an image file into a texture.

        Args:
            filepath: Path to any image format Pillow can read.

        Returns:
            A new Texture with the image's RGB channels.
        """
        with PILImage.open(filepath) as image:
            return cls(np.asarray(image.convert("RGB"), dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self._texels.shape[1])

    @property
    def height(self) -> int:
        return int(self._texels.shape[0])

    def color_at(self, u: float, v: float) -> npt.NDArray[np.float64]:
        """Return the RGB texel nearest to texture coordinate (u, v).

        Args:
            u: Horizontal coordinate, 0 at the left edge.
            v: Vertical coordinate, 0 at the bottom edge.

        Returns:
            The texel color as a float64 array with channels in [0, 255].
        """
        i = math.floor(u * self.width)
        j = math.floor(v * self.height)
        i = max(0, min(self.width - 1, i))
        j = max(0, min(self.height - 1, j))
        return self._texels[self.height - 1 - j, i].copy()

    def __repr__(self) -> str:
        return f"Texture(width={self.width}, height={self.height})"
