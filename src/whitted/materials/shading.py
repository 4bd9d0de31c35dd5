"""Phong shading model with area-light soft shadows.

All colors enter as [0, 255] channels and leave as unclamped [0, 1]-scale
contributions; the integrator clamps once after recursion.

Terms (per channel c):
    diffuse   = color[c]/255 * light[c]/255 * max(0, n.l)
    ambient   = ambient_color[c]/255 * ambient_light[c]/255
    specular  = specular_color[c]/255 * specular_light[c]/255 * max(0, n.h)^shininess
    final     = shadow[c] * (diffuse + specular) + ambient

where h = normalize(view + l). Each term is gated by the matching switch in
both RenderOptions and the surface Material.

Shadow rays that hit a transparent occluder are re-cast from just past it,
multiplying the transmittance by the occluder's transparency and color
filter, so glass casts tinted partial shadows while opaque surfaces block
the light completely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from whitted.core.options import RenderOptions
from whitted.core.ray import Ray, offset_origin
from whitted.core.vector import Vec3, length, normalize

if TYPE_CHECKING:
    from whitted.geometry.primitive import SurfaceHit
    from whitted.scene.scene import Scene

Color = npt.NDArray[np.float64]

# Maximum number of transparent occluders a shadow ray passes through
MAX_OCCLUDER_HOPS = 32


@dataclass(frozen=True, eq=False)
class ShadingInputs:
    """Per-hit inputs to the shading model.

    Attributes:
        point: World-space hit point.
        normal: Unit world-space normal.
        view: Unit direction from the hit point back toward the viewer.
        surface_color: Diffuse surface color.
        ambient_color: Ambient surface color.
        specular_color: Specular highlight color.
        specular_light: Specular light intensity.
        shininess: Specular exponent.
        ambient_on: Material ambient switch.
        diffuse_on: Material diffuse switch.
        specular_on: Material specular switch.
    """

    point: Vec3
    normal: Vec3
    view: Vec3
    surface_color: Color
    ambient_color: Color
    specular_color: Color
    specular_light: Color
    shininess: float
    ambient_on: bool = True
    diffuse_on: bool = True
    specular_on: bool = True

    @classmethod
    def from_hit(cls, hit: SurfaceHit, ray_direction: Vec3) -> ShadingInputs:
        """Gather shading inputs for a surface hit."""
        primitive = hit.primitive
        material = primitive.material
        local_point = hit.local_point
        return cls(
            point=hit.point,
            normal=hit.normal,
            view=normalize(-np.asarray(ray_direction, dtype=np.float64)),
            surface_color=primitive.color_at(local_point),
            ambient_color=primitive.ambient_color_at(local_point),
            specular_color=primitive.specular_color_at(local_point),
            specular_light=primitive.specular_light_at(local_point),
            shininess=material.shininess,
            ambient_on=material.ambient_on,
            diffuse_on=material.diffuse_on,
            specular_on=material.specular_on,
        )


def diffuse_term(color: Color, light_color: Color, normal: Vec3, light_dir: Vec3) -> Color:
    """Lambertian diffuse contribution."""
    return (color / 255.0) * (light_color / 255.0) * max(0.0, float(np.dot(normal, light_dir)))


def ambient_term(ambient_color: Color, ambient_light: Color) -> Color:
    """Ambient contribution, independent of the light direction."""
    return (ambient_color / 255.0) * (ambient_light / 255.0)


def specular_term(
    specular_color: Color,
    specular_light: Color,
    normal: Vec3,
    view: Vec3,
    light_dir: Vec3,
    shininess: float,
) -> Color:
    """Blinn-Phong specular contribution using the half vector."""
    half = normalize(view + light_dir)
    intensity = max(0.0, float(np.dot(normal, half))) ** shininess
    return (specular_color / 255.0) * (specular_light / 255.0) * intensity


def shadow_attenuation(
    point: Vec3,
    normal: Vec3,
    light_point: Vec3,
    scene: Scene,
    options: RenderOptions,
    hops: int = 0,
) -> Color:
    """Per-channel transmittance from a surface point to a light sample.

    The shadow ray starts bias away from the surface on the side facing the
    light. Any hit closer than the light sample is an occluder: opaque
    occluders return zero, transparent ones recurse from just past the
    occluder and scale the result by its transparency and color filter.

    Args:
        point: World-space surface point.
        normal: Unit surface normal at point (either orientation).
        light_point: The light sample position.
        scene: Scene to test against.
        options: Supplies the bias.
        hops: Number of occluders already passed through.

    Returns:
        Transmittance per channel in [0, 1].
    """
    to_light = light_point - point
    distance = length(to_light)
    if distance == 0.0:
        return np.ones(3)
    direction = to_light / distance

    origin = offset_origin(point, normal, direction, options.bias)
    ray = Ray(origin=origin, direction=direction)
    hit = scene.closest_hit(ray)
    if hit is None or hit.t >= length(light_point - origin):
        return np.ones(3)

    occluder = hit.primitive
    surface = occluder.surface_at(ray, hit.t)
    transparency = occluder.get_transparency(surface.local_point)
    if transparency <= 0.0 or hops >= MAX_OCCLUDER_HOPS:
        return np.zeros(3)

    beyond = shadow_attenuation(
        surface.point, surface.normal, light_point, scene, options, hops + 1
    )
    return transparency * occluder.material.filter_array * beyond


def shade(
    inputs: ShadingInputs,
    scene: Scene,
    options: RenderOptions,
    rng: np.random.Generator,
) -> Color:
    """Local (non-recursive) color at a hit point.

    With soft shadows on, diffuse, specular and shadow attenuation are each
    averaged over one jittered sample per light cell. Otherwise the light's
    centroid is the single sample, with one hard shadow test unless
    sampled_point_shadows asks for a grid-averaged shadow.

    Returns:
        Unclamped color on a [0, 1] scale.
    """
    light = scene.light
    light_color = light.color_array

    use_ambient = options.ambient_on and inputs.ambient_on
    use_diffuse = options.diffuse_on and inputs.diffuse_on
    use_specular = options.specular_on and inputs.specular_on

    result = np.zeros(3)
    if use_ambient:
        result += ambient_term(inputs.ambient_color, scene.ambient_array)
    if not (use_diffuse or use_specular):
        return result

    if options.soft_shadows_on:
        shading_points = list(light.sample_points(rng))
        shadow_points = shading_points
    else:
        shading_points = [light.position]
        if options.sampled_point_shadows:
            shadow_points = list(light.sample_points(rng))
        else:
            shadow_points = shading_points

    diffuse = np.zeros(3)
    specular = np.zeros(3)
    for sample in shading_points:
        light_dir = normalize(sample - inputs.point)
        if use_diffuse:
            diffuse += diffuse_term(inputs.surface_color, light_color, inputs.normal, light_dir)
        if use_specular:
            specular += specular_term(
                inputs.specular_color,
                inputs.specular_light,
                inputs.normal,
                inputs.view,
                light_dir,
                inputs.shininess,
            )
    diffuse /= len(shading_points)
    specular /= len(shading_points)

    shadow = np.zeros(3)
    for sample in shadow_points:
        shadow += shadow_attenuation(inputs.point, inputs.normal, sample, scene, options)
    shadow /= len(shadow_points)

    return result + shadow * (diffuse + specular)
