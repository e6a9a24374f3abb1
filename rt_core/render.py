"""Primary-ray driver: one traced sample per pixel center."""

from __future__ import annotations

import logging
from typing import Optional

from rt_core.image import Image
from rt_core.scene import Scene
from rt_core.tracer import TraceConfig, trace

logger = logging.getLogger(__name__)


def render(scene: Scene, width: int, height: int, config: Optional[TraceConfig] = None) -> Image:
    """Trace every pixel of a ``width`` x ``height`` image through ``scene.camera``."""

    image = Image(width, height)
    camera = scene.camera
    logger.debug("rendering %dx%d with %s", width, height, camera)
    for y in range(height):
        for x in range(width):
            image.set_pixel(x, y, trace(scene, camera.primary_ray(x, y, width, height), 0, config))
    logger.debug("rendered %d pixels, peak value %.4f", width * height, float(image.pixels.max()))
    return image
