"""Render preview and diagnostic plotting helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence
import warnings

import matplotlib.pyplot as plt
import numpy as np

from rt_core.image import Image


def _save(fig: plt.Figure, outdir: str, name: str) -> str:
    Path(outdir).mkdir(parents=True, exist_ok=True)
    png = Path(outdir) / f"{name}.png"
    pdf = Path(outdir) / f"{name}.pdf"
    fig.savefig(png, dpi=150, bbox_inches="tight")
    try:
        fig.savefig(pdf, bbox_inches="tight")
    except PermissionError:
        warnings.warn(
            f"Could not write '{pdf}' (permission denied). Saved PNG only.",
            RuntimeWarning,
            stacklevel=2,
        )
    plt.close(fig)
    return str(png)


def preview(image: Image, outdir: str, title: str = "") -> str:
    fig, ax = plt.subplots()
    ax.imshow(image.clamped(), interpolation="nearest")
    ax.set_axis_off()
    ax.set_title(f"preview {title}".strip())
    return _save(fig, outdir, "preview")


def luminance_hist(image: Image, outdir: str, bins: int = 32) -> str:
    fig, ax = plt.subplots()
    lum = image.luminance().ravel()
    ax.hist(lum, bins=bins)
    ax.axvline(1.0, color="k", linestyle="--", linewidth=0.8)
    ax.set_xlabel("relative luminance (linear)")
    ax.set_ylabel("pixels")
    ax.set_title("luminance histogram")
    return _save(fig, outdir, "luminance")


def channel_profile(image: Image, outdir: str, row: int | None = None) -> str:
    """RGB values along one scanline (center row by default)."""

    y = image.height // 2 if row is None else int(row)
    fig, ax = plt.subplots()
    x = np.arange(image.width)
    for c, name in enumerate(("r", "g", "b")):
        ax.plot(x, image.pixels[y, :, c], color=name, label=name)
    ax.legend()
    ax.set_xlabel("x [px]")
    ax.set_title(f"scanline y={y}")
    return _save(fig, outdir, "profile")


def mean_luminance_trend(names: Sequence[str], values: Sequence[float], outdir: str) -> str:
    fig, ax = plt.subplots()
    ax.plot(names, values, "o-")
    ax.tick_params(axis="x", rotation=45)
    ax.set_title("mean luminance per case")
    return _save(fig, outdir, "mean_luminance")
