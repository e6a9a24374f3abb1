"""Floor made of two triangles with opposite winding, lit from above."""

from __future__ import annotations

import numpy as np

from rt_core.geometry import Sphere
from rt_core.render import render
from rt_core.scene import Scene
from scenarios.common import GREY, RED, default_camera, default_light, floor_quad, image_size


def build_scene(light_height: float = 6.0) -> Scene:
    scene = Scene(camera=default_camera().move_to(np.array([0.0, 1.0, 0.0])).look_towards(np.array([0.0, -1.0, -6.0])))
    for tri in floor_quad(material=GREY):
        scene.add(tri)
    scene.add(Sphere(np.array([0.0, 0.0, -6.0]), 1.0, RED))
    scene.add(default_light((0.0, light_height, -6.0)))
    return scene


def build_sweep_params():
    return [{"case_id": f"s4_h{h:g}", "light_height": h} for h in (4.0, 8.0)]


def run_case(params):
    scene = build_scene(params["light_height"])
    width, height = image_size(params)
    return scene, render(scene, width, height)
