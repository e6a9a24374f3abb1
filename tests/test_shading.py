import numpy as np
import pytest

from rt_core.geometry import Material
from rt_core.rays import refract_direction
from rt_core.shading import fresnel, fresnel_coefficients, lambert

N = np.array([0.0, 0.0, 1.0])


def _dir(theta_rad: float, inside: bool = False) -> np.ndarray:
    return np.array([np.sin(theta_rad), 0.0, np.cos(theta_rad) if inside else -np.cos(theta_rad)])


def test_normal_incidence_matches_closed_form():
    for ior in (1.33, 1.5, 2.4):
        expected = ((ior - 1.0) / (ior + 1.0)) ** 2
        assert np.isclose(fresnel(_dir(0.0), N, ior), expected, rtol=1e-12)
        assert np.isclose(fresnel(_dir(0.0, inside=True), N, ior), expected, rtol=1e-12)


@pytest.mark.parametrize("ior", [1.0, 1.2, 1.5, 2.4])
def test_kr_stays_in_unit_interval(ior):
    for theta in np.linspace(0.0, np.deg2rad(89.0), 40):
        for inside in (False, True):
            kr = fresnel(_dir(theta, inside), N, ior)
            assert 0.0 <= kr <= 1.0


def test_kr_is_one_beyond_critical_angle():
    critical = np.arcsin(1.0 / 1.5)
    assert fresnel(_dir(critical + 0.05, inside=True), N, 1.5) == 1.0
    assert fresnel(_dir(critical - 0.05, inside=True), N, 1.5) < 1.0
    with pytest.raises(ValueError):
        fresnel_coefficients(np.cos(critical + 0.05), 1.5, 1.0)


@pytest.mark.parametrize("theta_deg", [5.0, 25.0, 50.0, 75.0])
def test_kr_symmetric_between_entering_and_exiting(theta_deg):
    d_in = _dir(np.deg2rad(theta_deg))
    t = refract_direction(d_in, N, 1.5)
    # The transmitted ray reversed is an exiting ray at the refracted angle.
    d_out = -t
    assert np.isclose(fresnel(d_in, N, 1.5), fresnel(d_out, N, 1.5), rtol=1e-9, atol=1e-12)


def test_kr_grows_towards_grazing():
    values = [fresnel(_dir(np.deg2rad(a)), N, 1.5) for a in (0.0, 40.0, 70.0, 85.0)]
    assert values == sorted(values)


def test_lambert_clamps_back_facing_light():
    m = Material(np.array([1.0, 0.5, 0.0]))
    light = np.array([2.0, 2.0, 2.0])
    assert np.allclose(lambert(m, light, N, N), [2.0, 1.0, 0.0])
    assert np.allclose(lambert(m, light, -N, N), 0.0)
    oblique = np.array([0.0, np.sin(np.pi / 3), np.cos(np.pi / 3)])
    assert np.allclose(lambert(m, light, oblique, N), [1.0, 0.5, 0.0])
