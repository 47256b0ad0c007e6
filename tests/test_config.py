import sys
from pathlib import Path

import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from mandel.config import DEFAULT_MAX_ITERS, load_render_jobs, parse_render_jobs
from mandel.render import Viewport


def _write(tmp_path, cfg):
    path = tmp_path / "render.yaml"
    path.write_text(yaml.safe_dump(cfg))
    return path


def test_defaults_merge_into_jobs(tmp_path):
    path = _write(tmp_path, {
        "defaults": {"width": 64, "height": 32, "max_iters": 100},
        "jobs": [
            {"name": "a", "view_left": -2, "view_bottom": -1, "view_height": 2},
            {"name": "b", "view_left": 0, "view_bottom": 0, "view_height": 1, "max_iters": 7},
        ],
    })
    jobs = load_render_jobs(path)

    assert [j.name for j in jobs] == ["a", "b"]
    assert jobs[0].viewport == Viewport(-2.0, -1.0, 2.0)
    assert (jobs[0].width, jobs[0].height, jobs[0].max_iters) == (64, 32, 100)
    assert jobs[1].max_iters == 7
    assert jobs[1].outfile(tmp_path) == tmp_path / "b.png"


def test_builtin_defaults_and_names():
    jobs = parse_render_jobs({"jobs": [{"view_left": 0, "view_bottom": 0, "view_height": 1}]})
    assert jobs[0].name == "job_0"
    assert jobs[0].max_iters == DEFAULT_MAX_ITERS


def test_missing_view_field():
    with pytest.raises(ValueError, match="view_height"):
        parse_render_jobs({"jobs": [{"name": "x", "view_left": 0, "view_bottom": 0}]})


def test_bad_value():
    with pytest.raises(ValueError, match="width"):
        parse_render_jobs({"jobs": [{"name": "x", "width": "wide", "view_left": 0,
                                     "view_bottom": 0, "view_height": 1}]})
    with pytest.raises(ValueError, match="max_iters"):
        parse_render_jobs({"jobs": [{"name": "x", "max_iters": -3, "view_left": 0,
                                     "view_bottom": 0, "view_height": 1}]})


def test_shipped_config_parses():
    jobs = load_render_jobs(ROOT / "configs" / "render.yaml")
    assert len(jobs) >= 1
    assert all(j.width > 0 and j.height > 0 for j in jobs)


@pytest.mark.parametrize("raw", [512.9, True, "12.5"])
def test_non_integral_sizes_rejected(raw):
    with pytest.raises(ValueError, match="width"):
        parse_render_jobs({"jobs": [{"name": "x", "width": raw, "view_left": 0,
                                     "view_bottom": 0, "view_height": 1}]})


def test_integral_float_size_accepted():
    jobs = parse_render_jobs({"jobs": [{"name": "x", "width": 512.0, "view_left": 0,
                                        "view_bottom": 0, "view_height": 1}]})
    assert jobs[0].width == 512
