"""
Render job configuration.

A YAML file lists render jobs plus shared defaults:

    outdir: figures
    defaults:
      width: 512
      height: 512
      max_iters: 256
    jobs:
      - name: full
        view_left: -2.0
        view_bottom: -2.0
        view_height: 4.0

Each job may override any default.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import yaml

from mandel.render import Viewport

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
DEFAULT_MAX_ITERS = 4096


@dataclass
class RenderJob:
    name: str
    viewport: Viewport
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    max_iters: int = DEFAULT_MAX_ITERS

    def outfile(self, outdir: str | Path) -> Path:
        return Path(outdir) / f"{self.name}.png"


def _as_int(raw) -> int:
    # YAML gives bools for true/false and floats for 512.9; neither is a pixel count
    if isinstance(raw, bool):
        raise TypeError(f"expected an integer, got {raw!r}")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"expected an integer, got {raw!r}")
    return int(raw)


def _field(job: dict, defaults: dict, key: str, cast, fallback=None):
    raw = job.get(key, defaults.get(key, fallback))
    if raw is None:
        raise ValueError(f"Render job {job.get('name', '?')!r} is missing '{key}'")
    try:
        val = cast(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Render job {job.get('name', '?')!r}: bad value for '{key}': {raw!r}") from e
    if cast is _as_int and val < 0:
        raise ValueError(f"Render job {job.get('name', '?')!r}: '{key}' must be >= 0")
    return val


def parse_render_jobs(cfg: dict) -> List[RenderJob]:
    defaults = cfg.get("defaults", {}) or {}
    jobs = []
    for i, job in enumerate(cfg.get("jobs", []) or []):
        name = str(job.get("name", f"job_{i}"))
        job = dict(job, name=name)
        view = Viewport(
            left=_field(job, defaults, "view_left", float),
            bottom=_field(job, defaults, "view_bottom", float),
            height=_field(job, defaults, "view_height", float),
        )
        jobs.append(
            RenderJob(
                name=name,
                viewport=view,
                width=_field(job, defaults, "width", _as_int, DEFAULT_WIDTH),
                height=_field(job, defaults, "height", _as_int, DEFAULT_HEIGHT),
                max_iters=_field(job, defaults, "max_iters", _as_int, DEFAULT_MAX_ITERS),
            )
        )
    return jobs


def load_render_config(path: str | Path) -> dict:
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return cfg


def load_render_jobs(path: str | Path) -> List[RenderJob]:
    return parse_render_jobs(load_render_config(path))
