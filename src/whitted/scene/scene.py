"""Scene container and closest-hit queries.

A Scene is an ordered, read-only collection of primitives plus one area
light, an ambient light intensity and a background color. Intersection is a
brute-force linear scan: every primitive is tested and the smallest ray
parameter above T_MIN wins, independent of the order primitives were added.

Example:
    >>> from whitted.core.ray import make_ray
    >>> from whitted.geometry import Sphere
    >>> from whitted.scene import AreaLight, Scene
    >>> scene = Scene(
    ...     primitives=[Sphere.create((0, 0, -3), 1.0), Sphere.create((0, 0, -6), 1.0)],
    ...     light=AreaLight.point((0, 5, 0)),
    ... )
    >>> hit = scene.closest_hit(make_ray((0, 0, 0), (0, 0, -1)))
    >>> hit.t
    2.0
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from whitted.core.ray import Ray
from whitted.geometry.primitive import Primitive
from whitted.materials.material import RGB, check_color
from whitted.scene.light import AreaLight

logger = logging.getLogger(__name__)

# Hits closer than this are ignored
T_MIN = 1e-9


@dataclass(frozen=True)
class Intersection:
    """The closest primitive along a ray and its ray parameter."""

    primitive: Primitive
    t: float


@dataclass(frozen=True, eq=False)
class Scene:
    """Primitives, light and environment for one render.

    Attributes:
        primitives: Ordered primitives (stored as a tuple).
        light: The scene's single area light.
        ambient_light: Ambient light intensity with channels in [0, 255].
        background: Color returned for rays that hit nothing.
    """

    primitives: tuple[Primitive, ...]
    light: AreaLight
    ambient_light: RGB = (255.0, 255.0, 255.0)
    background: RGB = (0.0, 0.0, 0.0)
    _ambient: npt.NDArray[np.float64] = field(init=False, repr=False)
    _background: npt.NDArray[np.float64] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "primitives", tuple(self.primitives))
        object.__setattr__(self, "ambient_light", check_color("ambient_light", self.ambient_light))
        object.__setattr__(self, "background", check_color("background", self.background))
        object.__setattr__(self, "_ambient", np.array(self.ambient_light, dtype=np.float64))
        object.__setattr__(self, "_background", np.array(self.background, dtype=np.float64))
        logger.debug("Scene built with %d primitives, %d light samples",
                     len(self.primitives), self.light.samples)

    @property
    def ambient_array(self) -> npt.NDArray[np.float64]:
        return self._ambient.copy()

    @property
    def background_array(self) -> npt.NDArray[np.float64]:
        return self._background.copy()

    def with_primitives(self, primitives: Iterable[Primitive]) -> Scene:
        """Return a scene with extra primitives appended."""
        return Scene(
            primitives=self.primitives + tuple(primitives),
            light=self.light,
            ambient_light=self.ambient_light,
            background=self.background,
        )

    def closest_hit(self, ray: Ray, t_min: float = T_MIN) -> Intersection | None:
        """Find the primitive with the smallest ray parameter above t_min.

        Args:
            ray: The world ray.
            t_min: Lower bound (exclusive) for accepted hits.

        Returns:
            The closest Intersection, or None if the ray hits nothing.
        """
        closest: Intersection | None = None
        for primitive in self.primitives:
            t = primitive.intersects(ray)
            if t is None or t <= t_min:
                continue
            if closest is None or t < closest.t:
                closest = Intersection(primitive, t)
        return closest
