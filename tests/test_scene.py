import math

import numpy as np
import pytest

from rt_core.camera import Camera
from rt_core.geometry import MISS, Material, PointLight, Sphere, Triangle
from rt_core.rays import Ray
from rt_core.scene import Scene

RED = Material(np.array([1.0, 0.0, 0.0]))
BLUE = Material(np.array([0.0, 0.0, 1.0]))
GLASS = Material(np.ones(3), "refractive", ior=1.5)

FORWARD = Ray(np.zeros(3), np.array([0.0, 0.0, -1.0]))


def test_nearest_hit_wins_regardless_of_insertion_order():
    far = Sphere(np.array([0.0, 0.0, -10.0]), 1.0, BLUE)
    near = Sphere(np.array([0.0, 0.0, -5.0]), 1.0, RED)
    hit = Scene([far, near]).intersect(FORWARD)
    assert hit.material is RED
    assert np.isclose(hit.distance, 4.0)


def test_exact_ties_keep_first_inserted_geometry():
    a = Sphere(np.array([0.0, 0.0, -5.0]), 1.0, RED)
    b = Sphere(np.array([0.0, 0.0, -5.0]), 1.0, BLUE)
    assert Scene([a, b]).intersect(FORWARD).material is RED
    assert Scene([b, a]).intersect(FORWARD).material is BLUE


def test_geometry_behind_ray_is_ignored():
    behind = Sphere(np.array([0.0, 0.0, 5.0]), 1.0, RED)
    tri = Triangle(np.array([-1.0, -1.0, 3.0]), np.array([1.0, -1.0, 3.0]), np.array([0.0, 1.0, 3.0]), BLUE)
    hit = Scene([behind, tri]).intersect(FORWARD)
    assert hit is MISS
    assert math.isinf(hit.distance)


def test_empty_scene_reports_miss():
    assert Scene().intersect(FORWARD) is MISS
    assert math.isinf(Scene().in_shadow(FORWARD))


def test_in_shadow_skips_refractive_geometry():
    glass = Sphere(np.array([0.0, 0.0, -3.0]), 1.0, GLASS)
    wall = Triangle(np.array([-5.0, -5.0, -8.0]), np.array([5.0, -5.0, -8.0]), np.array([0.0, 5.0, -8.0]), BLUE)
    scene = Scene([glass, wall])
    assert np.isclose(scene.in_shadow(FORWARD), 8.0)
    assert scene.intersect(FORWARD).material is GLASS
    assert math.isinf(Scene([glass]).in_shadow(FORWARD))


def test_add_dispatches_on_type_and_preserves_order():
    scene = Scene()
    s1 = Sphere(np.array([0.0, 0.0, -5.0]), 1.0, RED)
    s2 = Sphere(np.array([0.0, 0.0, -9.0]), 1.0, BLUE)
    light = PointLight(np.array([0.0, 5.0, 0.0]), np.ones(3))
    scene.add(s1)
    scene.add(light)
    scene.add(s2)
    assert len(scene.geometries) == 2
    assert scene.geometries[0] is s1 and scene.geometries[1] is s2
    assert len(scene.lights) == 1 and scene.lights[0] is light
    with pytest.raises(TypeError):
        scene.add("not a shape")
    with pytest.raises(TypeError):
        scene.add_light(s1)


def test_scene_owns_a_default_camera():
    assert isinstance(Scene().camera, Camera)
    cam = Camera(np.array([0.0, 1.0, 0.0]))
    assert Scene(camera=cam).camera is cam
