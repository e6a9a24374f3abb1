"""Scenario sweep runner + image export + auto plot + validation report."""

from __future__ import annotations

from importlib import import_module
import logging
from pathlib import Path
from typing import Dict, List

import numpy as np

from plots import render_plots
from rt_io.hdf5_io import RenderData, save_render_hdf5
from rt_io.image_export import save_image

logger = logging.getLogger(__name__)

SCENARIO_MODULES = {
    "S0": "scenarios.S0_diffuse_sphere",
    "S1": "scenarios.S1_shadowed_sphere",
    "S2": "scenarios.S2_mirror",
    "S3": "scenarios.S3_glass",
    "S4": "scenarios.S4_triangle_floor",
}

IMAGE_FORMATS = ("png", "ppm", "ff")


def run_all(
    out_h5: str = "artifacts/renders.h5",
    out_dir: str = "artifacts/renders",
    width: int = 32,
    height: int = 24,
    scenario_ids: List[str] | None = None,
) -> str:
    payload: Dict[str, Dict[str, RenderData]] = {}
    report_lines: List[str] = [
        "# Render Report",
        "",
        "- luminance: Rec. 709 weights on the linear (unclamped) buffer",
        f"- resolution: {width}x{height}, one primary ray per pixel",
        "",
    ]
    mean_lum: Dict[str, float] = {}
    peak: Dict[str, float] = {}
    failures: List[str] = []

    for sid, mod_name in SCENARIO_MODULES.items():
        if scenario_ids is not None and sid not in scenario_ids:
            continue
        mod = import_module(mod_name)
        payload[sid] = {}
        report_lines.append(f"## {sid}")
        for p in mod.build_sweep_params():
            params = dict(p, width=width, height=height)
            case_id = params["case_id"]
            logger.info("rendering %s:%s", sid, case_id)
            scene, image = mod.run_case(params)
            payload[sid][case_id] = RenderData(params=params, pixels=image.pixels)

            case_dir = Path(out_dir) / sid / case_id
            case_dir.mkdir(parents=True, exist_ok=True)
            for ext in IMAGE_FORMATS:
                save_image(image, case_dir / f"{case_id}.{ext}")
            render_plots.preview(image, str(case_dir), title=case_id)
            render_plots.luminance_hist(image, str(case_dir))
            render_plots.channel_profile(image, str(case_dir))

            lum = image.luminance()
            key = f"{sid}:{case_id}"
            mean_lum[key] = float(np.mean(lum))
            peak[key] = float(np.max(image.pixels))
            lit = float(np.mean(lum > 0.0))
            report_lines.append(
                f"- case `{case_id}`: geometries={len(scene.geometries)}, lights={len(scene.lights)}, "
                f"mean_lum={mean_lum[key]:.4f}, peak={peak[key]:.4f}, lit_fraction={lit:.3f}"
            )
            report_lines.append(f"  - camera: {scene.camera}")
            report_lines.append("  - images: " + ", ".join(f"[{ext}]({case_dir}/{case_id}.{ext})" for ext in IMAGE_FORMATS))
            if not np.all(np.isfinite(image.pixels)):
                failures.append(f"{key} contains non-finite pixels")
        report_lines.append("")

    # Interposing an opaque blocker can only remove light.
    if "S0:s0_front_light" in mean_lum and "S1:s1_blocked" in mean_lum:
        if mean_lum["S1:s1_blocked"] > mean_lum["S0:s0_front_light"] + 1e-12:
            failures.append(
                f"S1 blocked mean luminance {mean_lum['S1:s1_blocked']:.4f} exceeds unblocked "
                f"{mean_lum['S0:s0_front_light']:.4f}"
            )
    # One white light, albedo <= 1, mirror falloff < 1: nothing may exceed the light.
    for key in ("S2:s2_depth10", "S2:s2_depth1"):
        if key in peak and peak[key] > 1.0 + 1e-9:
            failures.append(f"{key} peak {peak[key]:.4f} exceeds light intensity 1.0")
    if "S2:s2_depth1" in mean_lum and "S2:s2_depth10" in mean_lum:
        if mean_lum["S2:s2_depth1"] > mean_lum["S2:s2_depth10"] + 1e-12:
            failures.append("S2 depth-1 render is brighter than depth-10 render")

    Path(out_h5).parent.mkdir(parents=True, exist_ok=True)
    save_render_hdf5(out_h5, payload)
    if mean_lum:
        render_plots.mean_luminance_trend(list(mean_lum), list(mean_lum.values()), out_dir)

    report_lines.append("## Failure Checks")
    if failures:
        for msg in failures:
            report_lines.append(f"- FAIL: {msg}")
    else:
        report_lines.append("- PASS: No automatic failure checks triggered.")

    report_path = Path(out_dir).parent / "report.md"
    report_path.write_text("\n".join(report_lines), encoding="utf-8")
    logger.info("report written to %s", report_path)
    return str(report_path)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print(run_all())
