import numpy as np
import pytest

from rt_core.geometry import MISS, Material, MaterialType, Sphere, Triangle
from rt_core.rays import Ray

RED = Material(np.array([1.0, 0.0, 0.0]), "diffuse")


def _right_triangle(reverse: bool = False) -> Triangle:
    v1 = np.array([0.0, 0.0, 0.0])
    v2 = np.array([1.0, 0.0, 0.0])
    v3 = np.array([0.0, 1.0, 0.0])
    return Triangle(v1, v3, v2, RED) if reverse else Triangle(v1, v2, v3, RED)


def _down_at(u: float, v: float) -> Ray:
    return Ray(np.array([u, v, 1.0]), np.array([0.0, 0.0, -1.0]))


@pytest.mark.parametrize("x_offset", [1.0, 1.5, 3.0])
def test_sphere_tangent_or_missing_rays_report_miss(x_offset):
    s = Sphere(np.array([0.0, 0.0, -5.0]), 1.0, RED)
    hit = s.intersect(Ray(np.array([x_offset, 0.0, 0.0]), np.array([0.0, 0.0, -1.0])))
    assert hit is MISS
    assert not hit.hit
    assert hit.material is None


def test_sphere_through_center_distance_is_analytic():
    s = Sphere(np.array([1.0, 2.0, -7.0]), 1.5, RED)
    origin = np.array([0.0, 0.0, 0.0])
    to_center = s.origin - origin
    hit = s.intersect(Ray(origin, to_center))
    expected = np.linalg.norm(to_center) - 1.5
    assert hit.hit
    assert np.isclose(hit.distance, expected, rtol=1e-9, atol=0.0)
    assert hit.material is RED


def test_sphere_normal_is_evaluated_at_hit_point():
    s = Sphere(np.array([0.0, 0.0, -5.0]), 1.0, RED)
    ray = Ray(np.array([0.5, 0.0, 0.0]), np.array([0.0, 0.0, -1.0]))
    hit = s.intersect(ray)
    point = ray.at(hit.distance)
    assert np.isclose(np.linalg.norm(point - s.origin), 1.0, rtol=1e-12)
    assert np.allclose(hit.normal, point - s.origin, rtol=1e-12, atol=1e-12)
    assert np.isclose(np.linalg.norm(hit.normal), 1.0)


def test_sphere_reports_exit_when_ray_starts_inside():
    s = Sphere(np.array([0.0, 0.0, -5.0]), 1.0, RED)
    hit = s.intersect(Ray(np.array([0.0, 0.0, -5.0]), np.array([0.0, 0.0, -1.0])))
    assert np.isclose(hit.distance, 1.0)
    assert np.allclose(hit.normal, [0.0, 0.0, -1.0])


def test_sphere_behind_origin_has_non_positive_distance():
    s = Sphere(np.array([0.0, 0.0, 5.0]), 1.0, RED)
    hit = s.intersect(Ray(np.zeros(3), np.array([0.0, 0.0, -1.0])))
    assert hit.distance <= 0.0
    assert not hit.hit


@pytest.mark.parametrize("u,v", [(0.25, 0.25), (0.9, 0.05), (0.0, 0.0), (0.5, 0.5)])
def test_triangle_hits_inside_barycentric_region(u, v):
    hit = _right_triangle().intersect(_down_at(u, v))
    assert hit.hit
    assert np.isclose(hit.distance, 1.0, rtol=1e-12)


@pytest.mark.parametrize("u,v", [(-0.1, 0.5), (0.5, -0.1), (0.6, 0.6), (1.2, 0.0)])
def test_triangle_misses_outside_barycentric_region(u, v):
    assert _right_triangle().intersect(_down_at(u, v)) is MISS


def test_triangle_parallel_ray_misses():
    ray = Ray(np.array([0.2, 0.2, 0.0]), np.array([1.0, 0.0, 0.0]))
    assert _right_triangle().intersect(ray) is MISS


def test_triangle_normal_independent_of_winding():
    ray = _down_at(0.25, 0.25)
    n_a = _right_triangle().intersect(ray).normal
    n_b = _right_triangle(reverse=True).intersect(ray).normal
    assert np.allclose(n_a, n_b)
    assert np.allclose(n_a, [0.0, 0.0, 1.0])

    from_below = Ray(np.array([0.25, 0.25, -1.0]), np.array([0.0, 0.0, 1.0]))
    assert np.allclose(_right_triangle().intersect(from_below).normal, [0.0, 0.0, -1.0])


def test_material_accepts_kind_strings():
    assert Material(np.ones(3), "refractive", ior=1.5).kind is MaterialType.REFRACTIVE
    assert Material(np.ones(3), MaterialType.REFLECTIVE).kind is MaterialType.REFLECTIVE


def test_invalid_construction_is_rejected():
    with pytest.raises(ValueError):
        Material(np.ones(3), "metallic")
    with pytest.raises(ValueError):
        Material(np.ones(3), "refractive", ior=0.0)
    with pytest.raises(ValueError):
        Sphere(np.zeros(3), 0.0, RED)
    with pytest.raises(ValueError):
        Triangle(np.zeros(3), np.array([1.0, 0.0, 0.0]), np.array([2.0, 0.0, 0.0]), RED)
