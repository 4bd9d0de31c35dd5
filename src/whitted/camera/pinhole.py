"""Pinhole camera model for perspective projection ray generation.

This module implements a pinhole camera that generates primary rays and the
two rendering entry points built on it:

- render_pixel(): average of one or more traces through a pixel
- render_image(): a full (height, width, 3) float32 image in [0, 1]

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Example:
    >>> import numpy as np
    >>> from whitted.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through image center
    >>> ray.direction
    array([ 0.,  0., -1.])
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from whitted.core.integrator import trace
from whitted.core.options import RenderOptions
from whitted.core.ray import Ray, make_ray
from whitted.core.vector import Vec3, as_vec3, cross, normalize
from whitted.scene.scene import Scene

logger = logging.getLogger(__name__)

# Callback receives (rows_done, total_rows)
RowCallback = Callable[[int, int], None]


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    A pinhole camera produces perfect perspective projection with no
    depth of field effects.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 60.0
    aspect_ratio: float = 1.0
    _origin: Vec3 = field(init=False, repr=False)
    _horizontal: Vec3 = field(init=False, repr=False)
    _vertical: Vec3 = field(init=False, repr=False)
    _lower_left: Vec3 = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        self.setup()

    def setup(self) -> None:
        """Compute the orthonormal basis and viewport from the view parameters.

        Called on construction; call again after mutating any attribute.

        Raises:
            ValueError: If lookfrom equals lookat or vup is parallel to the
                view direction.
        """
        h = math.tan(math.radians(self.vfov) / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        lookfrom = as_vec3(self.lookfrom)
        w = lookfrom - as_vec3(self.lookat)
        if not np.any(w):
            raise ValueError("lookfrom and lookat must differ")
        w = normalize(w)
        u = cross(as_vec3(self.vup), w)
        if not np.any(u):
            raise ValueError("vup must not be parallel to the view direction")
        u = normalize(u)
        v = cross(w, u)

        self._origin = lookfrom
        self._horizontal = viewport_width * u
        self._vertical = viewport_height * v
        self._lower_left = lookfrom - w - self._horizontal / 2.0 - self._vertical / 2.0

    @property
    def origin(self) -> Vec3:
        return self._origin.copy()

    def get_ray(self, s: float, t: float) -> Ray:
        """Generate a ray through normalized image coordinates (s, t).

        Args:
            s: Horizontal coordinate in [0, 1] (left to right).
            t: Vertical coordinate in [0, 1] (bottom to top).

        Returns:
            A unit-direction world ray from the camera position through the
            specified point on the image plane.
        """
        target = self._lower_left + s * self._horizontal + t * self._vertical
        return make_ray(self._origin, target - self._origin)


# =============================================================================
# Rendering
# =============================================================================


def render_pixel(
    camera: PinholeCamera,
    scene: Scene,
    x: int,
    y: int,
    width: int,
    height: int,
    samples: int = 1,
    options: RenderOptions | None = None,
    rng: np.random.Generator | None = None,
    jitter: bool | None = None,
) -> npt.NDArray[np.float64]:
    """Average color of one pixel.

    Args:
        camera: The camera generating primary rays.
        scene: Scene to render.
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Number of traces averaged for the pixel.
        options: Render options passed to every trace.
        rng: Source of sub-pixel jitter and light sampling.
        jitter: Offset each sample randomly inside the pixel. Defaults to
            True when samples > 1, otherwise rays pass through the pixel
            center.

    Returns:
        RGB color with channels in [0, 255].

    Raises:
        ValueError: If samples is less than 1.
    """
    if samples < 1:
        raise ValueError(f"samples must be at least 1, got {samples}")
    if rng is None:
        rng = np.random.default_rng()
    if jitter is None:
        jitter = samples > 1

    # Image rows grow downward, t grows upward
    row = height - 1 - y
    total = np.zeros(3)
    for _ in range(samples):
        dx, dy = rng.random(2) if jitter else (0.5, 0.5)
        ray = camera.get_ray((x + dx) / width, (row + dy) / height)
        total += trace(ray, scene, options, rng)
    return total / samples


def render_image(
    camera: PinholeCamera,
    scene: Scene,
    width: int,
    height: int,
    samples: int = 1,
    options: RenderOptions | None = None,
    rng: np.random.Generator | None = None,
    jitter: bool | None = None,
    callback: RowCallback | None = None,
) -> npt.NDArray[np.float32]:
    """Render a full image.

    Args:
        camera: The camera generating primary rays.
        scene: Scene to render.
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Traces averaged per pixel.
        options: Render options passed to every trace.
        rng: Source of sub-pixel jitter and light sampling.
        jitter: See render_pixel().
        callback: Optional callback invoked after each row with
            (rows_done, height).

    Returns:
        Array of shape (height, width, 3), dtype float32, values in [0, 1],
        row 0 at the top.

    Raises:
        ValueError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if rng is None:
        rng = np.random.default_rng()

    logger.debug("Rendering %dx%d image at %d sample(s) per pixel", width, height, samples)
    image = np.zeros((height, width, 3), dtype=np.float32)
    for y in range(height):
        for x in range(width):
            color = render_pixel(
                camera, scene, x, y, width, height, samples, options, rng, jitter
            )
            image[y, x] = color / 255.0
        if callback is not None:
            callback(y + 1, height)
    logger.debug("Finished %dx%d image", width, height)
    return np.clip(image, 0.0, 1.0)
