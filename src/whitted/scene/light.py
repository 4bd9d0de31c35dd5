"""Rectangular area light with jittered grid sampling.

The light is a parallelogram spanned by two edge vectors from a corner. Each
edge is split into steps, giving a u_steps x v_steps grid of cells; a sample
is a random point inside one cell. Averaging shadow tests over all cells
produces soft shadows. The centroid serves as the point-light position when
soft shadows are disabled.

Randomness always comes from a caller-supplied numpy Generator so renders are
reproducible under a fixed seed.

Example:
    >>> import numpy as np
    >>> from whitted.scene.light import AreaLight
    >>> light = AreaLight(corner=(-1, 5, -1), u_edge=(2, 0, 0), u_steps=4,
    ...                   v_edge=(0, 0, 2), v_steps=4, color=(255, 255, 255))
    >>> light.samples
    16
    >>> light.position
    array([0., 5., 0.])
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from whitted.core.vector import Vec3, as_vec3
from whitted.materials.material import RGB, check_color


def _frozen(v: npt.ArrayLike) -> Vec3:
    arr = as_vec3(v)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class AreaLight:
    """A planar area light.

    Attributes:
        corner: One corner of the light.
        u_edge: Full first edge vector.
        u_steps: Number of cells along u_edge.
        v_edge: Full second edge vector.
        v_steps: Number of cells along v_edge.
        color: Light color with channels in [0, 255].
        uvec: Cell size along u (u_edge / u_steps).
        vvec: Cell size along v (v_edge / v_steps).
        samples: Total number of cells.
        position: Centroid of the light.
    """

    corner: Vec3
    u_edge: Vec3
    u_steps: int
    v_edge: Vec3
    v_steps: int
    color: RGB = (255.0, 255.0, 255.0)
    uvec: Vec3 = field(init=False)
    vvec: Vec3 = field(init=False)
    samples: int = field(init=False)
    position: Vec3 = field(init=False)

    def __post_init__(self) -> None:
        if self.u_steps < 1 or self.v_steps < 1:
            raise ValueError(
                f"Light grid needs at least one step per edge, got {self.u_steps}x{self.v_steps}"
            )
        corner = _frozen(self.corner)
        u_edge = _frozen(self.u_edge)
        v_edge = _frozen(self.v_edge)
        object.__setattr__(self, "corner", corner)
        object.__setattr__(self, "u_edge", u_edge)
        object.__setattr__(self, "v_edge", v_edge)
        object.__setattr__(self, "color", check_color("light color", self.color))
        object.__setattr__(self, "uvec", _frozen(u_edge / self.u_steps))
        object.__setattr__(self, "vvec", _frozen(v_edge / self.v_steps))
        object.__setattr__(self, "samples", int(self.u_steps * self.v_steps))
        object.__setattr__(self, "position", _frozen(corner + 0.5 * u_edge + 0.5 * v_edge))

    @classmethod
    def point(cls, position: npt.ArrayLike, color: RGB = (255.0, 255.0, 255.0)) -> AreaLight:
        """A degenerate 1x1 light whose every sample is the given position."""
        zero = (0.0, 0.0, 0.0)
        return cls(corner=position, u_edge=zero, u_steps=1, v_edge=zero, v_steps=1, color=color)

    @property
    def color_array(self) -> npt.NDArray[np.float64]:
        return np.array(self.color, dtype=np.float64)

    def sample_at(self, i: int, j: int, rng: np.random.Generator) -> Vec3:
        """Return a jittered point inside grid cell (i, j).

        Args:
            i: Cell index along u, in [0, u_steps).
            j: Cell index along v, in [0, v_steps).
            rng: Source of the jitter.

        Returns:
            corner + uvec * (i + xi1) + vvec * (j + xi2), xi uniform in [0, 1).
        """
        xi1, xi2 = rng.random(2)
        return self.corner + self.uvec * (i + xi1) + self.vvec * (j + xi2)

    def sample_points(self, rng: np.random.Generator) -> Iterator[Vec3]:
        """Yield one jittered sample per grid cell."""
        for i in range(self.u_steps):
            for j in range(self.v_steps):
                yield self.sample_at(i, j, rng)
