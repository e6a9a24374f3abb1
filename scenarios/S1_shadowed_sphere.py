"""S0 with an opaque sphere interposed between the red sphere and the light."""

from __future__ import annotations

import numpy as np

from rt_core.geometry import Sphere
from rt_core.render import render
from rt_core.scene import Scene
from scenarios.common import BLUE, GLASS, RED, default_camera, default_light, image_size

LIGHT = np.array([0.0, 5.0, 0.0])
FRONT_HIT = np.array([0.0, 0.0, -4.0])


def build_scene(blocker_radius: float = 0.5, transparent: bool = False) -> Scene:
    scene = Scene(camera=default_camera())
    scene.add(Sphere(np.array([0.0, 0.0, -5.0]), 1.0, RED))
    blocker_center = 0.5 * (FRONT_HIT + LIGHT)
    scene.add(Sphere(blocker_center, blocker_radius, GLASS if transparent else BLUE))
    scene.add(default_light(LIGHT))
    return scene


def build_sweep_params():
    return [
        {"case_id": "s1_blocked", "blocker_radius": 0.5, "transparent": False},
        {"case_id": "s1_glass_blocker", "blocker_radius": 0.5, "transparent": True},
    ]


def run_case(params):
    scene = build_scene(params["blocker_radius"], params.get("transparent", False))
    width, height = image_size(params)
    return scene, render(scene, width, height)
