"""Common scenario helpers."""

from __future__ import annotations

import numpy as np

from rt_core.camera import Camera
from rt_core.geometry import Material, PointLight, Triangle

RED = Material(np.array([1.0, 0.1, 0.1]), "diffuse")
GREY = Material(np.array([0.7, 0.7, 0.7]), "diffuse")
BLUE = Material(np.array([0.2, 0.3, 0.9]), "diffuse")
MIRROR = Material(np.array([1.0, 1.0, 1.0]), "reflective")
GLASS = Material(np.array([1.0, 1.0, 1.0]), "refractive", ior=1.5)

WHITE = np.array([1.0, 1.0, 1.0])


def default_camera() -> Camera:
    return Camera(np.zeros(3), np.array([0.0, 0.0, -1.0]), fov_deg=60.0)


def default_light(origin=(0.0, 5.0, 0.0), color=WHITE) -> PointLight:
    return PointLight(np.asarray(origin, dtype=float), np.asarray(color, dtype=float))


def floor_quad(y: float = -1.0, half: float = 6.0, z_near: float = 1.0, z_far: float = -12.0, material: Material = GREY):
    """Two triangles spanning a floor rectangle; the second is wound the other way round."""

    a = np.array([-half, y, z_near])
    b = np.array([half, y, z_near])
    c = np.array([half, y, z_far])
    d = np.array([-half, y, z_far])
    return [Triangle(a, b, c, material), Triangle(a, d, c, material)]


def image_size(params) -> tuple[int, int]:
    return int(params.get("width", 32)), int(params.get("height", 24))
