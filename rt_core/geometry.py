"""Geometry primitives, materials and intersection records.

Every primitive reports a miss with the same sentinel: ``MISS`` has an
infinite distance, a zero normal and no material. Hit distances are signed;
the scene aggregate discards anything ``<= 0``.

Example:
    >>> import numpy as np
    >>> from rt_core.geometry import Material, Sphere
    >>> from rt_core.rays import Ray
    >>> s = Sphere(np.array([0.0, 0.0, -5.0]), 1.0, Material(np.array([1.0, 0.0, 0.0])))
    >>> hit = s.intersect(Ray(np.zeros(3), np.array([0.0, 0.0, -1.0])))
    >>> float(hit.distance)
    4.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
import math
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from rt_core.rays import Ray

Vector = NDArray[np.float64]
Color = NDArray[np.float64]

DISCRIMINANT_EPS = 1e-8
DETERMINANT_EPS = 1e-8


class MaterialType(Enum):
    DIFFUSE = "diffuse"
    REFLECTIVE = "reflective"
    REFRACTIVE = "refractive"


def normalize(v: Vector) -> Vector:
    vv = np.asarray(v, dtype=float)
    n = np.linalg.norm(vv)
    if n == 0:
        raise ValueError("Cannot normalize zero vector")
    return vv / n


@dataclass(frozen=True)
class Material:
    """Surface appearance.

    color: diffuse albedo (RGB, linear).
    kind: MaterialType or its string value ("diffuse", "reflective", "refractive").
    ior: index of refraction, only read for refractive surfaces.
    """

    color: Color = field(default_factory=lambda: np.ones(3))
    kind: MaterialType = MaterialType.DIFFUSE
    ior: float = 1.0

    def __post_init__(self) -> None:
        try:
            kind = MaterialType(self.kind)
        except ValueError:
            raise ValueError(f"Unknown material type: {self.kind!r}") from None
        if not self.ior > 0.0:
            raise ValueError("ior must be > 0")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "color", np.asarray(self.color, dtype=float))


@dataclass(frozen=True)
class Intersection:
    distance: float
    normal: Vector
    material: Optional[Material]

    @property
    def hit(self) -> bool:
        return math.isfinite(self.distance) and self.distance > 0.0


MISS = Intersection(math.inf, np.zeros(3), None)


class Geometry(ABC):
    """Anything a ray can hit."""

    material: Material

    @abstractmethod
    def intersect(self, ray: Ray) -> Intersection:
        ...


@dataclass(frozen=True)
class Sphere(Geometry):
    origin: Vector
    radius: float
    material: Material = Material()

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError("radius must be > 0")
        object.__setattr__(self, "origin", np.asarray(self.origin, dtype=float))

    def intersect(self, ray: Ray) -> Intersection:
        """Closest root of |o + t d - c|^2 = r^2 for a unit direction.

        Rays starting inside the sphere report the exit root instead of the
        (negative) entry root.
        """

        a = ray.origin - self.origin
        b = float(np.dot(a, ray.direction))
        c = float(np.dot(a, a)) - self.radius * self.radius
        d = b * b - c
        if d <= DISCRIMINANT_EPS:
            return MISS
        root = math.sqrt(d)
        t = -b - root
        if t <= 0.0:
            t = -b + root
        normal = normalize(ray.at(t) - self.origin)
        return Intersection(t, normal, self.material)


@dataclass(frozen=True)
class Triangle(Geometry):
    v1: Vector
    v2: Vector
    v3: Vector
    material: Material = Material()

    def __post_init__(self) -> None:
        for name in ("v1", "v2", "v3"):
            object.__setattr__(self, name, np.asarray(getattr(self, name), dtype=float))
        if np.linalg.norm(np.cross(self.v2 - self.v1, self.v3 - self.v1)) == 0.0:
            raise ValueError("Degenerate triangle (zero area)")

    def plane_normal(self) -> Vector:
        return normalize(np.cross(self.v2 - self.v1, self.v3 - self.v1))

    def intersect(self, ray: Ray) -> Intersection:
        """Moller-Trumbore; the normal faces the incoming ray."""

        e1 = self.v2 - self.v1
        e2 = self.v3 - self.v1
        pvec = np.cross(ray.direction, e2)
        det = float(np.dot(e1, pvec))
        if abs(det) < DETERMINANT_EPS:
            return MISS
        inv_det = 1.0 / det
        tvec = ray.origin - self.v1
        u = float(np.dot(tvec, pvec)) * inv_det
        if u < 0.0 or u > 1.0:
            return MISS
        qvec = np.cross(tvec, e1)
        v = float(np.dot(ray.direction, qvec)) * inv_det
        if v < 0.0 or u + v > 1.0:
            return MISS
        t = float(np.dot(e2, qvec)) * inv_det
        n = self.plane_normal()
        if np.dot(n, ray.direction) > 0.0:
            n = -n
        return Intersection(t, n, self.material)


@dataclass(frozen=True)
class PointLight:
    origin: Vector
    color: Color = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", np.asarray(self.origin, dtype=float))
        object.__setattr__(self, "color", np.asarray(self.color, dtype=float))
