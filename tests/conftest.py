"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: a seeded random
generator, default render options and a few small reference scenes.
"""

import numpy as np
import pytest

from whitted.core.options import RenderOptions
from whitted.geometry import Sphere
from whitted.materials import Material
from whitted.scene import AreaLight, Scene


@pytest.fixture
def rng():
    """Seeded generator so light jitter is reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def options():
    """Default render options (hard shadows, recursion depth 3)."""
    return RenderOptions()


@pytest.fixture
def red_sphere_scene():
    """Unit red sphere at the origin lit by a point light on the +z axis."""
    return Scene(
        primitives=[Sphere.create((0.0, 0.0, 0.0), 1.0, Material(color=(255.0, 0.0, 0.0)))],
        light=AreaLight.point((0.0, 0.0, 10.0)),
    )


@pytest.fixture
def blue_background():
    """Background color used to detect rays that escape the scene."""
    return (0.0, 0.0, 255.0)


@pytest.fixture
def dark_glass():
    """Black, fully transparent glass with no highlights of its own."""
    return Material(color=(0.0, 0.0, 0.0), specular_on=False, transparency=1.0, ior=1.5)
