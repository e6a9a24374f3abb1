"""Glass sphere in front of a diffuse backdrop."""

from __future__ import annotations

import numpy as np

from rt_core.geometry import Material, Sphere, Triangle
from rt_core.render import render
from rt_core.scene import Scene
from scenarios.common import BLUE, RED, default_camera, default_light, floor_quad, image_size


def build_scene(ior: float = 1.5) -> Scene:
    scene = Scene(camera=default_camera())
    scene.add(Sphere(np.array([0.0, 0.0, -4.0]), 1.0, Material(np.ones(3), "refractive", ior=ior)))
    wall_z = -10.0
    scene.add(Triangle(np.array([-8.0, -1.0, wall_z]), np.array([8.0, -1.0, wall_z]), np.array([0.0, 8.0, wall_z]), BLUE))
    scene.add(Sphere(np.array([1.5, 0.0, -8.0]), 1.0, RED))
    for tri in floor_quad():
        scene.add(tri)
    scene.add(default_light((0.0, 6.0, -2.0)))
    return scene


def build_sweep_params():
    return [{"case_id": f"s3_ior{ior}", "ior": ior} for ior in (1.0, 1.33, 1.5)]


def run_case(params):
    scene = build_scene(params["ior"])
    width, height = image_size(params)
    return scene, render(scene, width, height)
