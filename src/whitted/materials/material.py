"""Surface material properties for Phong-shaded primitives.

A Material bundles everything a primitive needs for shading and for the
recursive integrator: base color, per-term enable flags, shininess,
reflectivity, transparency with index of refraction, a per-channel color
filter, an optional glow color, and optional texture maps.

Colors are RGB triples with channels in [0, 255]. Reflectivity, transparency
and color filter channels are fractions in [0, 1].

Example:
    >>> from whitted.materials.material import Material
    >>> glass = Material(color=(240, 240, 255), reflectivity=0.2,
    ...                  transparency=0.9, ior=1.5)
    >>> glass.ior
    1.5
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np
import numpy.typing as npt

from whitted.materials.texture import Texture

RGB = tuple[float, float, float]

WHITE: RGB = (255.0, 255.0, 255.0)


def check_color(name: str, color: Any) -> RGB:
    values = tuple(float(c) for c in color)
    if len(values) != 3:
        raise ValueError(f"{name} must have 3 channels, got {len(values)}")
    for c in values:
        if c < 0.0 or c > 255.0:
            raise ValueError(f"{name} channel {c} is outside [0, 255]")
    return values  # type: ignore[return-value]


def _check_fraction(name: str, value: float) -> float:
    if value < 0.0 or value > 1.0:
        raise ValueError(f"{name} = {value} must be between 0 and 1")
    return float(value)


@dataclass(frozen=True)
class Material:
    """Phong material with reflection, refraction and texture maps.

    Attributes:
        color: Base surface color.
        ambient_on: Whether this surface receives ambient light.
        diffuse_on: Whether this surface receives Lambertian diffuse light.
        specular_on: Whether this surface shows Blinn-Phong highlights.
        ambient_percent: Fraction of the surface color used as ambient color.
        specular_color: Color of specular highlights.
        specular_light: Specular light intensity, replaced by the specular map
            when one is set.
        shininess: Specular exponent.
        reflectivity: Fraction of mirror-reflected light in [0, 1].
        transparency: Fraction of transmitted light in [0, 1].
        ior: Index of refraction of the volume behind the surface (>= 1).
        color_filter: Per-channel transmittance used both for shadow
            attenuation and for Beer's-law absorption inside the volume.
        glow_color: Fixed color used instead of a traced reflection ray.
        texture: Surface color map.
        normal_map: Tangent-space normal map.
        specular_map: Specular light map.
        opacity_map: Opacity map; transparency becomes 1 - red / 255.
        reflectivity_map: Reflectivity map; reflectivity is scaled by red / 255.
        ambient_occlusion: Ambient occlusion map; ambient is scaled by red / 255.
    """

    color: RGB = (255.0, 255.0, 255.0)
    ambient_on: bool = True
    diffuse_on: bool = True
    specular_on: bool = True
    ambient_percent: float = 0.5
    specular_color: RGB = WHITE
    specular_light: RGB = WHITE
    shininess: float = 200.0
    reflectivity: float = 0.0
    transparency: float = 0.0
    ior: float = 1.0
    color_filter: RGB = (1.0, 1.0, 1.0)
    glow_color: RGB | None = None
    texture: Texture | None = field(default=None, compare=False)
    normal_map: Texture | None = field(default=None, compare=False)
    specular_map: Texture | None = field(default=None, compare=False)
    opacity_map: Texture | None = field(default=None, compare=False)
    reflectivity_map: Texture | None = field(default=None, compare=False)
    ambient_occlusion: Texture | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", check_color("color", self.color))
        object.__setattr__(
            self, "specular_color", check_color("specular_color", self.specular_color)
        )
        object.__setattr__(
            self, "specular_light", check_color("specular_light", self.specular_light)
        )
        if self.glow_color is not None:
            object.__setattr__(self, "glow_color", check_color("glow_color", self.glow_color))
        _check_fraction("ambient_percent", self.ambient_percent)
        _check_fraction("reflectivity", self.reflectivity)
        _check_fraction("transparency", self.transparency)
        if self.shininess < 0.0:
            raise ValueError(f"shininess = {self.shininess} must be non-negative")
        if self.ior < 1.0:
            raise ValueError(
                f"Index of refraction = {self.ior} is less than 1.0. "
                "IOR must be >= 1.0 for physically meaningful materials."
            )
        filt = tuple(_check_fraction("color_filter", float(c)) for c in self.color_filter)
        if len(filt) != 3:
            raise ValueError(f"color_filter must have 3 channels, got {len(filt)}")
        object.__setattr__(self, "color_filter", filt)

    @property
    def filter_array(self) -> npt.NDArray[np.float64]:
        return np.array(self.color_filter, dtype=np.float64)

    def evolve(self, **changes: Any) -> Material:
        """Return a copy with the given fields replaced (and revalidated)."""
        return replace(self, **changes)
