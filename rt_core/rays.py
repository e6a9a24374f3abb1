"""Ray container and reflection/refraction helpers.

Directions are unit length: ``Ray`` normalizes on construction and every
helper here returns a unit direction.

Example:
    >>> import numpy as np
    >>> from rt_core.rays import reflect_direction
    >>> d = np.array([1.0, -1.0, 0.0]) / np.sqrt(2)
    >>> n = np.array([0.0, 1.0, 0.0])
    >>> np.allclose(reflect_direction(d, n), np.array([1.0, 1.0, 0.0]) / np.sqrt(2))
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

Vector = NDArray[np.float64]

SHADOW_BIAS = 1e-4


def _unit(v: Vector) -> Vector:
    vv = np.asarray(v, dtype=float)
    n = np.linalg.norm(vv)
    if n == 0:
        raise ValueError("Cannot normalize zero vector")
    return vv / n


@dataclass(frozen=True)
class Ray:
    origin: Vector
    direction: Vector

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", np.asarray(self.origin, dtype=float))
        object.__setattr__(self, "direction", _unit(self.direction))

    def at(self, t: float) -> Vector:
        return self.origin + t * self.direction


def reflect_direction(direction: Vector, normal: Vector) -> Vector:
    """Specular reflection direction with unit normal."""

    d = _unit(direction)
    n = _unit(normal)
    r = d - 2.0 * np.dot(d, n) * n
    return r / np.linalg.norm(r)


def refract_direction(direction: Vector, normal: Vector, ior: float) -> Optional[Vector]:
    """Snell refraction across a boundary with index ``ior`` on the far side of ``normal``.

    ``normal`` may point either way; a ray with ``d.n > 0`` is treated as
    leaving the medium. Returns None on total internal reflection.
    """

    d = _unit(direction)
    n = _unit(normal)
    cos_i = float(np.clip(np.dot(d, n), -1.0, 1.0))
    eta_i, eta_t = 1.0, float(ior)
    if cos_i < 0.0:
        cos_i = -cos_i
    else:
        eta_i, eta_t = eta_t, eta_i
        n = -n
    eta = eta_i / eta_t
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    if k < 0.0:
        return None
    t = eta * d + (eta * cos_i - np.sqrt(k)) * n
    return t / np.linalg.norm(t)


def reflect(ray: Ray, point: Vector, normal: Vector, bias: float = SHADOW_BIAS) -> Ray:
    """Mirror ray leaving ``point``, origin pushed along ``normal``."""

    return Ray(np.asarray(point, dtype=float) + bias * _unit(normal), reflect_direction(ray.direction, normal))


def inside_reflect(ray: Ray, point: Vector, normal: Vector, bias: float = SHADOW_BIAS) -> Ray:
    """Mirror ray for a ray travelling inside a dielectric; origin pushed along ``-normal``."""

    return Ray(np.asarray(point, dtype=float) - bias * _unit(normal), reflect_direction(ray.direction, normal))


def refract(ray: Ray, point: Vector, normal: Vector, ior: float, bias: float = SHADOW_BIAS) -> Ray:
    """Transmitted ray, or the incident-side mirror ray on total internal reflection."""

    p = np.asarray(point, dtype=float)
    n = _unit(normal)
    outside = float(np.dot(ray.direction, n)) < 0.0
    t = refract_direction(ray.direction, n, ior)
    if t is None:
        return reflect(ray, p, n, bias) if outside else inside_reflect(ray, p, n, bias)
    origin = p - bias * n if outside else p + bias * n
    return Ray(origin, t)
