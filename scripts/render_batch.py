"""
Render every job listed in a YAML config.

Run:
    python scripts/render_batch.py --config configs/render.yaml

Options:
    --outdir    Override the config's output directory
    --fast      Use the vectorized numpy path
    --only      Render only the named job (repeatable)
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mandel.config import load_render_config, parse_render_jobs
from mandel.image import ImageSinkError, write_png
from mandel.render import colorize_counts, count_array, image_field


def render_job(job, outdir: Path, fast: bool = False) -> Path:
    out_path = job.outfile(outdir)
    if fast:
        pixels = colorize_counts(count_array(job.viewport, job.width, job.height, job.max_iters),
                                 job.max_iters)
    else:
        pixels = image_field(job.viewport, job.width, job.height, job.max_iters).to_list()
    write_png(out_path, job.width, job.height, pixels)
    return out_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render Mandelbrot views from a YAML config")
    parser.add_argument("--config", required=True, help="Path to render YAML config")
    parser.add_argument("--outdir", default=None)
    parser.add_argument("--fast", action="store_true")
    parser.add_argument("--only", action="append", default=None)
    args = parser.parse_args(argv)

    cfg = load_render_config(args.config)
    jobs = parse_render_jobs(cfg)
    if args.only:
        jobs = [j for j in jobs if j.name in args.only]

    outdir = Path(args.outdir or cfg.get("outdir", "figures"))
    outdir.mkdir(parents=True, exist_ok=True)

    print(f"[run] {len(jobs)} job(s) -> {outdir}")
    failures = 0
    for job in jobs:
        v = job.viewport
        print(f"[run] {job.name}: {job.width}x{job.height}, max_iters={job.max_iters}, "
              f"view=({v.left}, {v.bottom}, h={v.height})")
        try:
            path = render_job(job, outdir, fast=args.fast)
        except ImageSinkError as e:
            print(f"[run] {job.name} failed: {e}", file=sys.stderr)
            failures += 1
            continue
        print(f"[run] saved {path}")

    print("[run] done.")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
