"""Camera module for view and ray generation.

Components:
    pinhole: Pinhole (perspective) camera, primary rays and image rendering

Ray generation uses normalized image coordinates:
    s in [0, 1]: left to right across the image
    t in [0, 1]: bottom to top across the image

Rendered images are returned with row 0 at the top.
"""

from .pinhole import PinholeCamera, render_image, render_pixel

__all__ = [
    "PinholeCamera",
    "render_pixel",
    "render_image",
]
