"""Single red Lambertian sphere under one white point light."""

from __future__ import annotations

import numpy as np

from rt_core.geometry import Sphere
from rt_core.render import render
from rt_core.scene import Scene
from scenarios.common import RED, default_camera, default_light, image_size


def build_scene(light_origin=(0.0, 5.0, 0.0)) -> Scene:
    scene = Scene(camera=default_camera())
    scene.add(Sphere(np.array([0.0, 0.0, -5.0]), 1.0, RED))
    scene.add(default_light(light_origin))
    return scene


def build_sweep_params():
    return [
        {"case_id": "s0_front_light", "light_origin": [0.0, 5.0, 0.0]},
        {"case_id": "s0_top_light", "light_origin": [0.0, 5.0, -5.0]},
    ]


def run_case(params):
    scene = build_scene(params["light_origin"])
    width, height = image_size(params)
    return scene, render(scene, width, height)
