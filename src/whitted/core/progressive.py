"""Progressive renderer for iterative pass accumulation.

Each pass renders the whole image once on the CPU with jittered primary rays
and fresh light samples, then folds the frame into a Taichi accumulation
buffer as a running average. Repeated passes converge toward an anti-aliased,
noise-free image.

The accumulation buffer lives in Taichi fields owned by the renderer, so
taichi must be initialized (ti.init) before a ProgressiveRenderer is created.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.progressive import ProgressiveRenderer
    >>> from whitted.scene.demo import create_demo_scene
    >>>
    >>> scene, camera = create_demo_scene()
    >>> renderer = ProgressiveRenderer(camera, scene, 64, 48, rng=np.random.default_rng(0))
    >>> renderer.render(4)  # Accumulate 4 passes
    >>> image = renderer.get_image_numpy()
"""

import logging
from collections.abc import Callable, Generator
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.options import RenderOptions

if TYPE_CHECKING:
    from whitted.camera.pinhole import PinholeCamera
    from whitted.scene.scene import Scene

logger = logging.getLogger(__name__)

# Callback receives (current_passes, target_passes)
ProgressCallback = Callable[[int, int], None]

# Largest supported image edge in pixels
MAX_IMAGE_SIZE = 2048


# =============================================================================
# Accumulation Kernels
# =============================================================================


@ti.kernel
def _accumulate(buffer: ti.template(), frame: ti.types.ndarray(), passes: ti.i32):
    """Fold one frame into the running average.

    Args:
        buffer: (height, width) vector field holding the running average.
        frame: (height, width, 3) float32 frame in [0, 1].
        passes: Number of passes including this one.
    """
    for y, x in buffer:
        color = ti.Vector([frame[y, x, 0], frame[y, x, 1], frame[y, x, 2]])

        # Check for NaN/Inf and replace with zero
        for c in ti.static(range(3)):
            if ti.math.isnan(color[c]) or ti.math.isinf(color[c]):
                color[c] = 0.0

        # Running average: avg_n = avg_{n-1} + (x_n - avg_{n-1}) / n
        buffer[y, x] += (color - buffer[y, x]) / ti.cast(passes, ti.f32)


# =============================================================================
# Progressive Renderer
# =============================================================================


class ProgressiveRenderer:
    """A progressive renderer that accumulates passes over time.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(
        self,
        camera: "PinholeCamera",
        scene: "Scene",
        width: int,
        height: int,
        options: RenderOptions | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Initialize the progressive renderer.

        Args:
            camera: Camera generating primary rays.
            scene: Scene to render.
            width: Image width in pixels (max MAX_IMAGE_SIZE).
            height: Image height in pixels (max MAX_IMAGE_SIZE).
            options: Render options for every pass.
            rng: Source of jitter and light samples across all passes.

        Raises:
            ValueError: If dimensions are not positive or exceed the maximum
                supported size.
        """
        self._check_dimensions(width, height)
        self._camera = camera
        self._scene = scene
        self._options = options if options is not None else RenderOptions()
        self._rng = rng if rng is not None else np.random.default_rng()
        self._width = width
        self._height = height
        self._passes = 0
        self._buffer = ti.Vector.field(3, dtype=ti.f32, shape=(height, width))

    @staticmethod
    def _check_dimensions(width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if width > MAX_IMAGE_SIZE or height > MAX_IMAGE_SIZE:
            raise ValueError(
                f"Image dimensions ({width}x{height}) exceed maximum supported "
                f"({MAX_IMAGE_SIZE}x{MAX_IMAGE_SIZE})"
            )

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def sample_count(self) -> int:
        """Get the number of passes accumulated so far."""
        return self._passes

    def reset(self) -> None:
        """Clear the accumulator without changing the image dimensions."""
        self._buffer.fill(0.0)
        self._passes = 0

    def resize(self, width: int, height: int) -> None:
        """Reallocate the buffer for new dimensions and reset.

        Raises:
            ValueError: If dimensions are invalid.
        """
        self._check_dimensions(width, height)
        self._width = width
        self._height = height
        self._buffer = ti.Vector.field(3, dtype=ti.f32, shape=(height, width))
        self._passes = 0

    def _render_pass(self) -> None:
        # Imported here because whitted.camera depends on whitted.core
        from whitted.camera.pinhole import render_image

        frame = render_image(
            self._camera,
            self._scene,
            self._width,
            self._height,
            samples=1,
            options=self._options,
            rng=self._rng,
            jitter=True,
        )
        self._passes += 1
        _accumulate(self._buffer, np.ascontiguousarray(frame, dtype=np.float32), self._passes)
        logger.debug("Accumulated pass %d", self._passes)

    def render(self, num_passes: int = 1, callback: ProgressCallback | None = None) -> None:
        """Accumulate passes with an optional progress callback.

        Can be called multiple times to continue refining the image.

        Args:
            num_passes: Number of passes to add.
            callback: Optional callback invoked after each pass with
                (current_total_passes, target_total_passes).
        """
        for current, target in self.render_progressive(num_passes):
            if callback is not None:
                callback(current, target)

    def render_progressive(self, num_passes: int = 1) -> Generator[tuple[int, int], None, None]:
        """Accumulate passes, yielding progress after each one.

        Yields:
            Tuple of (current_total_passes, target_total_passes).
        """
        if num_passes <= 0:
            return

        target = self._passes + num_passes
        while self._passes < target:
            self._render_pass()
            yield (self._passes, target)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the accumulated image.

        Returns:
            NumPy array of shape (height, width, 3), dtype float32, values in
            [0, 1], row 0 at the top.

        Raises:
            RuntimeError: If no pass has been rendered since the last reset.
        """
        if self._passes == 0:
            raise RuntimeError("No passes rendered yet. Call render() first.")
        image = self._buffer.to_numpy().astype(np.float32)
        return np.clip(image, 0.0, 1.0)

    def __repr__(self) -> str:
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"passes={self.sample_count})"
        )
