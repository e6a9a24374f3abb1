"""HDF5 schema for linear (unclamped) render outputs.

The schema stores multiple scenarios and multiple sweep cases per scenario.

Structure:
    /
      meta                       (attrs: created_at, tone, max_depth)
      scenarios/{scenario_id}/cases/{case_id}/
          params_json            (scalar utf-8 JSON)
          pixels                 (H,W,3) float64, linear RGB

Example:
    >>> import numpy as np
    >>> payload = {"S0": {"case0": {"params": {"width": 2}, "pixels": np.zeros((1, 2, 3))}}}
    >>> save_render_hdf5("/tmp/rt_example.h5", payload)
    >>> loaded, meta = load_render_hdf5("/tmp/rt_example.h5")
    >>> loaded["S0"]["case0"].pixels.shape, meta.tone
    ((1, 2, 3), 'linear')
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import json
from typing import Any, Dict, Mapping, Tuple

import h5py
import numpy as np

from rt_core.tracer import MAX_DEPTH


@dataclass
class RenderData:
    params: Dict[str, Any]
    pixels: np.ndarray


@dataclass
class Hdf5Meta:
    created_at: str
    tone: str
    max_depth: int


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (np.integer, np.floating)):
        return obj.item()
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    raise TypeError(f"Unsupported JSON type: {type(obj)}")


def save_render_hdf5(
    filepath: str,
    scenarios: Mapping[str, Mapping[str, RenderData | Mapping[str, Any]]],
    tone: str = "linear",
    max_depth: int = MAX_DEPTH,
) -> None:
    """Save renders to HDF5 using a fixed schema contract."""

    with h5py.File(filepath, "w") as h5:
        meta = h5.create_group("meta")
        meta.attrs["created_at"] = datetime.now(timezone.utc).isoformat()
        meta.attrs["tone"] = tone
        meta.attrs["max_depth"] = int(max_depth)

        g_scenarios = h5.create_group("scenarios")
        for scenario_id, cases in scenarios.items():
            g_cases = g_scenarios.create_group(str(scenario_id)).create_group("cases")
            for case_id, case in cases.items():
                case_obj = case if isinstance(case, RenderData) else RenderData(params=dict(case["params"]), pixels=case["pixels"])
                pixels = np.asarray(case_obj.pixels, dtype=np.float64)
                if pixels.ndim != 3 or pixels.shape[2] != 3:
                    raise ValueError(f"{scenario_id}/{case_id}: pixels must be (H,W,3), got {pixels.shape}")
                g_case = g_cases.create_group(str(case_id))
                g_case.create_dataset("params_json", data=json.dumps(case_obj.params, default=_json_default))
                g_case.create_dataset("pixels", data=pixels, compression="gzip")


def load_render_hdf5(filepath: str) -> Tuple[Dict[str, Dict[str, RenderData]], Hdf5Meta]:
    """Load render HDF5 and reconstruct cases."""

    scenarios: Dict[str, Dict[str, RenderData]] = {}
    with h5py.File(filepath, "r") as h5:
        meta = Hdf5Meta(
            created_at=str(h5["meta"].attrs.get("created_at", "")),
            tone=str(h5["meta"].attrs.get("tone", "linear")),
            max_depth=int(h5["meta"].attrs.get("max_depth", MAX_DEPTH)),
        )
        for scenario_id, g_scenario in h5["scenarios"].items():
            scenarios[scenario_id] = {}
            for case_id, g_case in g_scenario["cases"].items():
                raw = g_case["params_json"][()]
                params = json.loads(raw.decode() if isinstance(raw, bytes) else raw)
                pixels = np.asarray(g_case["pixels"][()], dtype=np.float64)
                scenarios[scenario_id][case_id] = RenderData(params=params, pixels=pixels)

    return scenarios, meta


def self_test_roundtrip(filepath: str, atol: float = 0.0) -> bool:
    """Write->read equivalence self-test, including values outside [0, 1]."""

    rng = np.random.default_rng(7)
    pixels = rng.uniform(-0.5, 4.0, size=(8, 12, 3))
    payload = {"selftest": {"case0": RenderData(params={"seed": 7, "width": 12, "height": 8}, pixels=pixels)}}
    save_render_hdf5(filepath, payload)
    scenarios, meta = load_render_hdf5(filepath)
    back = scenarios["selftest"]["case0"]
    return bool(
        np.allclose(back.pixels, pixels, atol=atol, rtol=0.0)
        and back.params == {"seed": 7, "width": 12, "height": 8}
        and meta.tone == "linear"
    )
