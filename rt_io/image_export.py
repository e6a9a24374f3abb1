"""Image encoders: binary Netpbm (P6), Farbfeld and PNG.

All encoders take the clamped 8-bit view of the HDR buffer
(``Image.normalized_pixel_data``).

Example:
    >>> import numpy as np
    >>> from rt_core.image import Image
    >>> from rt_io.image_export import encode_netpbm
    >>> encode_netpbm(Image(1, 1, np.ones((1, 1, 3))))
    b'P6 1 1 255 \\xff\\xff\\xff'
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Union

import matplotlib.pyplot as plt
import numpy as np

from rt_core.image import Image

FARBFELD_MAGIC = b"farbfeld"

PathLike = Union[str, Path]


def encode_netpbm(image: Image) -> bytes:
    """8-bit binary PPM without alpha."""

    rgb = image.normalized_pixel_data()[..., :3]
    header = f"P6 {image.width} {image.height} 255 ".encode("ascii")
    return header + rgb.tobytes()


def encode_farbfeld(image: Image) -> bytes:
    """Farbfeld: magic, big-endian uint32 width/height, big-endian uint16 RGBA (8-bit value << 8)."""

    rgba16 = (image.normalized_pixel_data().astype(np.uint16) << 8).astype(">u2")
    size = np.array([image.width, image.height], dtype=">u4")
    return FARBFELD_MAGIC + size.tobytes() + rgba16.tobytes()


def save_netpbm(image: Image, file: PathLike) -> None:
    Path(file).write_bytes(encode_netpbm(image))


def save_farbfeld(image: Image, file: PathLike) -> None:
    Path(file).write_bytes(encode_farbfeld(image))


def save_png(image: Image, file: PathLike) -> None:
    plt.imsave(str(file), image.normalized_pixel_data(), format="png")


EXPORTERS: Dict[str, Callable[[Image, PathLike], None]] = {
    "png": save_png,
    "ppm": save_netpbm,
    "ff": save_farbfeld,
}


def save_image(image: Image, file: PathLike) -> str:
    """Pick the encoder from the file extension and write ``image``."""

    ext = Path(file).suffix.lower().lstrip(".")
    exporter = EXPORTERS.get(ext)
    if exporter is None:
        raise ValueError(f"Invalid format for '{file}'!")
    exporter(image, file)
    return str(file)
