"""Recursive Whitted-style color accumulation.

Example:
    >>> import numpy as np
    >>> from rt_core.geometry import Material, PointLight, Sphere
    >>> from rt_core.rays import Ray
    >>> from rt_core.scene import Scene
    >>> from rt_core.tracer import trace
    >>> scene = Scene([Sphere(np.array([0.0, 0.0, -5.0]), 1.0, Material(np.array([1.0, 0.0, 0.0])))],
    ...               [PointLight(np.array([0.0, 5.0, 0.0]), np.ones(3))])
    >>> c = trace(scene, Ray(np.zeros(3), np.array([0.0, 0.0, -1.0])))
    >>> bool(c[0] > 0.0 and c[1] == 0.0)
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from rt_core.geometry import Intersection, MaterialType
from rt_core.rays import SHADOW_BIAS, Ray, inside_reflect, reflect, refract
from rt_core.scene import Scene
from rt_core.shading import fresnel, lambert

Color = NDArray[np.float64]

MAX_DEPTH = 10
REFLECTIVE_FALLOFF = 0.9


@dataclass(frozen=True)
class TraceConfig:
    max_depth: int = MAX_DEPTH
    bias: float = SHADOW_BIAS
    reflective_falloff: float = REFLECTIVE_FALLOFF


DEFAULT_CONFIG = TraceConfig()


def _black() -> Color:
    return np.zeros(3)


def _direct_light(scene: Scene, hit_point: NDArray[np.float64], hit: Intersection, config: TraceConfig) -> Color:
    color = _black()
    origin = hit_point + config.bias * hit.normal
    for light in scene.lights:
        to_light = light.origin - origin
        light_distance = float(np.linalg.norm(to_light))
        if light_distance == 0.0:
            continue
        shadow = Ray(origin, to_light)
        if scene.in_shadow(shadow) >= light_distance:
            color += lambert(hit.material, light.color, shadow.direction, hit.normal)
    return color


def _dielectric(scene: Scene, ray: Ray, hit_point: NDArray[np.float64], hit: Intersection, depth: int, config: TraceConfig) -> Color:
    ior = hit.material.ior
    kr = fresnel(ray.direction, hit.normal, ior)
    outside = float(np.dot(ray.direction, hit.normal)) < 0.0

    refraction_color = _black()
    if kr < 1.0:
        refraction_color = trace(scene, refract(ray, hit_point, hit.normal, ior, config.bias), depth + 1, config)

    if outside:
        reflection_ray = reflect(ray, hit_point, hit.normal, config.bias)
    else:
        reflection_ray = inside_reflect(ray, hit_point, hit.normal, config.bias)
    reflection_color = trace(scene, reflection_ray, depth + 1, config)
    return reflection_color * kr + refraction_color * (1.0 - kr)


def trace(scene: Scene, ray: Ray, depth: int = 0, config: Optional[TraceConfig] = None) -> Color:
    """Color seen along ``ray``; zero once ``depth`` reaches ``config.max_depth`` or on a miss."""

    cfg = config or DEFAULT_CONFIG
    if depth >= cfg.max_depth:
        return _black()

    hit = scene.intersect(ray)
    if not hit.hit:
        return _black()

    hit_point = ray.at(hit.distance)
    kind = hit.material.kind
    if kind is MaterialType.DIFFUSE:
        return _direct_light(scene, hit_point, hit, cfg)
    if kind is MaterialType.REFLECTIVE:
        bounce = reflect(ray, hit_point, hit.normal, cfg.bias)
        return trace(scene, bounce, depth + 1, cfg) * cfg.reflective_falloff
    if kind is MaterialType.REFRACTIVE:
        return _dielectric(scene, ray, hit_point, hit, depth, cfg)
    raise ValueError(f"Unhandled material type: {kind!r}")
