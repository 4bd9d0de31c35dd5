"""Recursive Whitted-style ray tracer.

This package renders scenes of transformed geometric primitives lit by an
area light, using a recursive integrator with Phong shading, soft shadows,
mirror reflection and Fresnel-blended refraction.

Subpackages:
    core: Vector helpers, rays, the transform pipeline, render options,
        the recursive integrator and the progressive driver
    geometry: Primitive contract and the Sphere / Triangle shapes
    materials: Surface materials, textures and the Phong shading model
    scene: Area light, scene container and demo scene factories
    camera: Pinhole camera and the pixel loop
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
