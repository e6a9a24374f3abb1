"""Shading terms: Lambertian diffuse and dielectric Fresnel reflectance.

Example:
    >>> import numpy as np
    >>> from rt_core.shading import fresnel
    >>> kr = fresnel(np.array([0.0, 0.0, -1.0]), np.array([0.0, 0.0, 1.0]), 1.5)
    >>> round(kr, 4)
    0.04
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from rt_core.geometry import Material

Vector = NDArray[np.float64]
Color = NDArray[np.float64]


def lambert(material: Material, light_color: Color, light_dir: Vector, normal: Vector) -> Color:
    """Diffuse albedo times light color times the clamped cosine."""

    cos_t = max(0.0, float(np.dot(light_dir, normal)))
    return np.asarray(light_color, dtype=float) * material.color * cos_t


def fresnel_coefficients(cos_i: float, eta_i: float, eta_t: float) -> Tuple[float, float]:
    """Amplitude reflection coefficients (r_s, r_p) for real refractive indices.

    cos_i is the cosine of the incidence angle in the eta_i medium, in [0, 1].
    Raises ValueError when no transmitted wave exists (total internal reflection).
    """

    sin_t = eta_i / eta_t * np.sqrt(max(0.0, 1.0 - cos_i * cos_i))
    if sin_t >= 1.0:
        raise ValueError("Total internal reflection: no transmitted wave")
    cos_t = np.sqrt(max(0.0, 1.0 - sin_t * sin_t))
    r_s = (eta_i * cos_i - eta_t * cos_t) / (eta_i * cos_i + eta_t * cos_t)
    r_p = (eta_t * cos_i - eta_i * cos_t) / (eta_t * cos_i + eta_i * cos_t)
    return float(r_s), float(r_p)


def fresnel(direction: Vector, normal: Vector, ior: float) -> float:
    """Unpolarized reflectance kr in [0, 1] at a dielectric boundary.

    Rays with d.n < 0 enter the ``ior`` medium, rays with d.n > 0 leave it.
    kr is 1 at or beyond the critical angle.
    """

    d = np.asarray(direction, dtype=float)
    n = np.asarray(normal, dtype=float)
    cos_i = float(np.clip(np.dot(d, n) / (np.linalg.norm(d) * np.linalg.norm(n)), -1.0, 1.0))
    eta_i, eta_t = 1.0, float(ior)
    if cos_i > 0.0:
        eta_i, eta_t = eta_t, eta_i
    try:
        r_s, r_p = fresnel_coefficients(abs(cos_i), eta_i, eta_t)
    except ValueError:
        return 1.0
    kr = 0.5 * (r_s * r_s + r_p * r_p)
    return float(np.clip(kr, 0.0, 1.0))
