"""Scene aggregate: geometry, point lights and the camera.

The scene is built once and then only read while tracing, so the same scene
can be shared by any number of concurrent ``trace`` calls.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from rt_core.camera import Camera
from rt_core.geometry import MISS, Geometry, Intersection, MaterialType, PointLight
from rt_core.rays import Ray


class Scene:
    def __init__(
        self,
        geometries: Iterable[Geometry] = (),
        lights: Iterable[PointLight] = (),
        camera: Optional[Camera] = None,
    ) -> None:
        self._geometries: List[Geometry] = []
        self._lights: List[PointLight] = []
        self.camera = camera if camera is not None else Camera()
        for g in geometries:
            self.add_geometry(g)
        for light in lights:
            self.add_light(light)

    @property
    def geometries(self) -> Tuple[Geometry, ...]:
        return tuple(self._geometries)

    @property
    def lights(self) -> Tuple[PointLight, ...]:
        return tuple(self._lights)

    def add_geometry(self, geometry: Geometry) -> None:
        if not isinstance(geometry, Geometry):
            raise TypeError(f"Expected Geometry, got {type(geometry).__name__}")
        self._geometries.append(geometry)

    def add_light(self, light: PointLight) -> None:
        if not isinstance(light, PointLight):
            raise TypeError(f"Expected PointLight, got {type(light).__name__}")
        self._lights.append(light)

    def add(self, item: Union[Geometry, PointLight]) -> None:
        if isinstance(item, PointLight):
            self.add_light(item)
        else:
            self.add_geometry(item)

    def intersect(self, ray: Ray) -> Intersection:
        """Nearest hit with distance > 0; the earliest added geometry wins exact ties."""

        closest = MISS
        for g in self._geometries:
            hit = g.intersect(ray)
            if hit.distance > 0.0 and hit.distance < closest.distance:
                closest = hit
        return closest

    def in_shadow(self, ray: Ray) -> float:
        """Distance to the nearest occluder, ignoring refractive geometry; inf if none."""

        distance = math.inf
        for g in self._geometries:
            hit = g.intersect(ray)
            if hit.distance <= 0.0:
                continue
            if hit.material is not None and hit.material.kind is MaterialType.REFRACTIVE:
                continue
            distance = min(distance, hit.distance)
        return distance

    def trace(self, ray: Ray, depth: int = 0, config=None) -> np.ndarray:
        from rt_core.tracer import trace

        return trace(self, ray, depth, config)
