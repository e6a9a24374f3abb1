"""Render every scenario and store images, HDF5 and a markdown report.

Usage:
    python -m scripts.render_all --out artifacts/report.md --width 64 --height 48
"""

from __future__ import annotations

import argparse
import logging
import shutil
from pathlib import Path

from scenarios.runner import SCENARIO_MODULES, run_all


def main() -> None:
    parser = argparse.ArgumentParser(description="Render scenario sweeps and write a report.")
    parser.add_argument("--out", default="artifacts/report.md", help="Output markdown report path")
    parser.add_argument("--h5", default="artifacts/renders.h5", help="Output HDF5 path for linear renders")
    parser.add_argument("--render-dir", default="artifacts/renders", help="Directory for images and plots")
    parser.add_argument("--width", type=int, default=32)
    parser.add_argument("--height", type=int, default=24)
    parser.add_argument("--scenario", action="append", choices=sorted(SCENARIO_MODULES), help="Render only these scenarios")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-case progress")
    args = parser.parse_args()

    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    generated = Path(run_all(args.h5, args.render_dir, args.width, args.height, args.scenario))
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if generated.resolve() != out_path.resolve():
        shutil.copyfile(generated, out_path)
    print(out_path)


if __name__ == "__main__":
    main()
