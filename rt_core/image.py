"""Linear HDR pixel buffer filled by the renderer.

Example:
    >>> import numpy as np
    >>> from rt_core.image import Image
    >>> img = Image(2, 1)
    >>> img.set_pixel(1, 0, np.array([2.0, 0.5, -1.0]))
    >>> img.normalized_pixel_data()[0, 1].tolist()
    [255, 127, 0, 255]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray


@dataclass
class Image:
    width: int
    height: int
    pixels: Optional[NDArray[np.float64]] = None  # (H, W, 3), unclamped

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("image size must be positive")
        if self.pixels is None:
            self.pixels = np.zeros((self.height, self.width, 3), dtype=np.float64)
        else:
            self.pixels = np.asarray(self.pixels, dtype=np.float64)
            if self.pixels.shape != (self.height, self.width, 3):
                raise ValueError(f"pixels shape {self.pixels.shape} != {(self.height, self.width, 3)}")

    @classmethod
    def from_array(cls, pixels: NDArray[np.float64]) -> "Image":
        arr = np.asarray(pixels, dtype=np.float64)
        return cls(width=arr.shape[1], height=arr.shape[0], pixels=arr)

    def set_pixel(self, x: int, y: int, color: NDArray[np.float64]) -> None:
        self.pixels[y, x] = color

    def pixel(self, x: int, y: int) -> NDArray[np.float64]:
        return self.pixels[y, x]

    def clamped(self) -> NDArray[np.float64]:
        return np.clip(self.pixels, 0.0, 1.0)

    def luminance(self) -> NDArray[np.float64]:
        """Rec. 709 relative luminance of the linear buffer."""

        return self.pixels @ np.array([0.2126, 0.7152, 0.0722])

    def normalized_pixel_data(self) -> NDArray[np.uint8]:
        """(H, W, 4) RGBA bytes, colors clamped to [0, 1] then scaled to [0, 255], opaque alpha."""

        rgba = np.empty((self.height, self.width, 4), dtype=np.uint8)
        rgba[..., :3] = (self.clamped() * 255.0).astype(np.uint8)
        rgba[..., 3] = 255
        return rgba
