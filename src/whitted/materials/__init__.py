"""Materials module for surface appearance.

Components:
    texture: Nearest-neighbour image textures
    material: Phong material with reflection, refraction and texture maps
    shading: Ambient, diffuse and specular terms plus shadow attenuation
"""

from .material import RGB, WHITE, Material, check_color
from .shading import (
    MAX_OCCLUDER_HOPS,
    ShadingInputs,
    ambient_term,
    diffuse_term,
    shade,
    shadow_attenuation,
    specular_term,
)
from .texture import Texture

__all__ = [
    "Material",
    "RGB",
    "WHITE",
    "check_color",
    "Texture",
    "ShadingInputs",
    "ambient_term",
    "diffuse_term",
    "specular_term",
    "shadow_attenuation",
    "shade",
    "MAX_OCCLUDER_HOPS",
]
