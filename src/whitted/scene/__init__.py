"""Scene module for lights, primitives and demo scenes.

Components:
    light: Rectangular area light with jittered grid sampling
    scene: Scene container and the closest-hit linear scan
    demo: Factory for a small showcase scene
"""

from .light import AreaLight
from .scene import T_MIN, Intersection, Scene

# Note: demo is NOT imported here because it depends on whitted.camera.
# Import it directly: from whitted.scene.demo import create_demo_scene

__all__ = [
    "AreaLight",
    "Scene",
    "Intersection",
    "T_MIN",
]
