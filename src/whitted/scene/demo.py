"""Showcase scene configuration.

This module provides a factory for a small scene that exercises every part of
the Whitted integrator:

- A light gray floor built from two triangles
- A red diffuse sphere (Phong shading, soft shadows)
- A mirror sphere (reflection recursion)
- A glass sphere (Fresnel-blended reflection and refraction, tinted shadow)
- A square area light above the spheres

The coordinate system places the floor at y = 0 with the camera in front of
the scene at positive z looking toward the origin.

Example:
    >>> import numpy as np
    >>> from whitted.camera import render_image
    >>> from whitted.scene.demo import create_demo_scene
    >>>
    >>> scene, camera = create_demo_scene()
    >>> image = render_image(camera, scene, 32, 24, rng=np.random.default_rng(0))
"""

from dataclasses import dataclass

from whitted.camera.pinhole import PinholeCamera
from whitted.geometry import Sphere, Triangle
from whitted.materials import Material
from whitted.scene.light import AreaLight
from whitted.scene.scene import Scene

# =============================================================================
# Demo Parameters
# =============================================================================


@dataclass
class DemoSceneParams:
    """Parameters for configuring the demo scene.

    Attributes:
        light_color: RGB color of the area light (channels in [0, 255]).
        light_steps: Grid resolution per edge of the area light.
        light_size: Edge length of the square light.
        floor_color: RGB color of the floor.
        diffuse_color: RGB color of the diffuse sphere.
        glass_ior: Index of refraction of the glass sphere.
        glass_filter: Per-channel color filter of the glass sphere.

    Example:
        >>> params = DemoSceneParams(light_steps=2)
        >>> params.light_steps
        2
    """

    light_color: tuple[float, float, float] = (255.0, 255.0, 255.0)
    light_steps: int = 4
    light_size: float = 2.0
    floor_color: tuple[float, float, float] = (200.0, 200.0, 200.0)
    diffuse_color: tuple[float, float, float] = (220.0, 40.0, 40.0)
    glass_ior: float = 1.5
    glass_filter: tuple[float, float, float] = (0.9, 0.95, 1.0)


# =============================================================================
# Demo Constants
# =============================================================================

# Half extent of the square floor
FLOOR_SIZE = 6.0

# Height of the area light above the floor
LIGHT_HEIGHT = 6.0

SPHERE_RADIUS = 1.0

MIRROR_REFLECTIVITY = 0.9
GLASS_REFLECTIVITY = 0.1
GLASS_TRANSPARENCY = 0.9


# =============================================================================
# Demo Factory
# =============================================================================


def create_demo_scene(
    params: DemoSceneParams | None = None,
    aspect_ratio: float = 4.0 / 3.0,
) -> tuple[Scene, PinholeCamera]:
    """Create the showcase scene and a camera framing it.

    Args:
        params: Optional DemoSceneParams for customizing light and colors.
            If None, uses default DemoSceneParams().
        aspect_ratio: Aspect ratio of the returned camera.

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    if params is None:
        params = DemoSceneParams()

    floor_mat = Material(color=params.floor_color, specular_on=False)
    diffuse_mat = Material(color=params.diffuse_color, shininess=50.0)
    mirror_mat = Material(color=(30.0, 30.0, 30.0), reflectivity=MIRROR_REFLECTIVITY)
    glass_mat = Material(
        color=(10.0, 10.0, 10.0),
        reflectivity=GLASS_REFLECTIVITY,
        transparency=GLASS_TRANSPARENCY,
        ior=params.glass_ior,
        color_filter=params.glass_filter,
    )

    # Floor (two triangles, y = 0)
    s = FLOOR_SIZE
    floor = [
        Triangle(v0=(-s, 0.0, -s), v1=(-s, 0.0, s), v2=(s, 0.0, s), material=floor_mat),
        Triangle(v0=(-s, 0.0, -s), v1=(s, 0.0, s), v2=(s, 0.0, -s), material=floor_mat),
    ]

    # Spheres resting on the floor
    r = SPHERE_RADIUS
    spheres = [
        Sphere.create((-2.2, r, 0.0), r, diffuse_mat),
        Sphere.create((0.0, r, -1.0), r, mirror_mat),
        Sphere.create((2.2, r, 0.5), r, glass_mat),
    ]

    # Area light (square, centered above the spheres)
    half = params.light_size / 2.0
    light = AreaLight(
        corner=(-half, LIGHT_HEIGHT, -half),
        u_edge=(params.light_size, 0.0, 0.0),
        u_steps=params.light_steps,
        v_edge=(0.0, 0.0, params.light_size),
        v_steps=params.light_steps,
        color=params.light_color,
    )

    scene = Scene(
        primitives=floor + spheres,
        light=light,
        ambient_light=(60.0, 60.0, 60.0),
        background=(20.0, 20.0, 40.0),
    )

    camera = PinholeCamera(
        lookfrom=(0.0, 2.5, 8.0),
        lookat=(0.0, 0.8, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=45.0,
        aspect_ratio=aspect_ratio,
    )

    return scene, camera
