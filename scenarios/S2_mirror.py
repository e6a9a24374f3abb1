"""Mirror sphere above a diffuse floor, reflecting a red sphere."""

from __future__ import annotations

import numpy as np

from rt_core.geometry import Sphere
from rt_core.render import render
from rt_core.scene import Scene
from rt_core.tracer import TraceConfig
from scenarios.common import MIRROR, RED, default_camera, default_light, floor_quad, image_size


def build_scene() -> Scene:
    scene = Scene(camera=default_camera())
    scene.add(Sphere(np.array([0.0, 0.0, -6.0]), 1.0, MIRROR))
    scene.add(Sphere(np.array([-2.2, 0.0, -4.5]), 0.8, RED))
    for tri in floor_quad():
        scene.add(tri)
    scene.add(default_light((2.0, 6.0, 0.0)))
    return scene


def build_sweep_params():
    return [
        {"case_id": "s2_depth10", "max_depth": 10},
        {"case_id": "s2_depth1", "max_depth": 1},
    ]


def run_case(params):
    scene = build_scene()
    width, height = image_size(params)
    return scene, render(scene, width, height, TraceConfig(max_depth=params["max_depth"]))
