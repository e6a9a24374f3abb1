"""Pinhole camera producing one normalized primary ray per pixel center.

Example:
    >>> import numpy as np
    >>> from rt_core.camera import Camera
    >>> cam = Camera(np.zeros(3), np.array([0.0, 0.0, -1.0]))
    >>> r = cam.primary_ray(1, 1, 3, 3)
    >>> np.allclose(r.direction, [0.0, 0.0, -1.0])
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import math

import numpy as np
from numpy.typing import NDArray

from rt_core.rays import Ray

Vector = NDArray[np.float64]


def _normalize(v: NDArray) -> NDArray:
    n = np.linalg.norm(v)
    if n == 0:
        raise ValueError("Cannot normalize zero vector")
    return v / n


@dataclass(frozen=True)
class Camera:
    position: Vector = field(default_factory=lambda: np.zeros(3))
    direction: Vector = field(default_factory=lambda: np.array([0.0, 0.0, -1.0]))
    up: Vector = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    fov_deg: float = 60.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", np.asarray(self.position, dtype=float))
        object.__setattr__(self, "direction", _normalize(np.asarray(self.direction, dtype=float)))
        object.__setattr__(self, "up", _normalize(np.asarray(self.up, dtype=float)))
        if not 0.0 < self.fov_deg < 180.0:
            raise ValueError("fov_deg must be in (0, 180)")
        if np.linalg.norm(np.cross(self.direction, self.up)) < 1e-9:
            raise ValueError("direction and up must not be parallel")

    def move_to(self, position: Vector) -> "Camera":
        return replace(self, position=np.asarray(position, dtype=float))

    def look_towards(self, target: Vector) -> "Camera":
        return replace(self, direction=np.asarray(target, dtype=float) - self.position)

    def basis(self) -> tuple[Vector, Vector, Vector]:
        """(right, up, forward) orthonormal frame."""

        forward = self.direction
        right = _normalize(np.cross(forward, self.up))
        true_up = np.cross(right, forward)
        return right, true_up, forward

    def primary_ray(self, px: float, py: float, width: int, height: int) -> Ray:
        """Ray through the center of pixel (px, py); py grows downwards."""

        if width <= 0 or height <= 0:
            raise ValueError("image size must be positive")
        right, up, forward = self.basis()
        scale = math.tan(math.radians(self.fov_deg) / 2.0)
        aspect = width / height
        x = (2.0 * (px + 0.5) / width - 1.0) * aspect * scale
        y = (1.0 - 2.0 * (py + 0.5) / height) * scale
        return Ray(self.position, forward + x * right + y * up)

    def __str__(self) -> str:
        p = ", ".join(f"{v:g}" for v in self.position)
        d = ", ".join(f"{v:g}" for v in self.direction)
        return f"Camera(position=({p}), direction=({d}), fov={self.fov_deg:g})"
