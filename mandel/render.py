from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from mandel.collection import Collection
from mandel.kernel import iterate, iterate_grid


@dataclass(frozen=True)
class Color:
    red: int = 0
    green: int = 0
    blue: int = 0


BLACK = Color()


@dataclass(frozen=True)
class Viewport:
    """Region of the complex plane; pixels are square so only the height is given."""

    left: float
    bottom: float
    height: float

    @property
    def top(self) -> float:
        return self.bottom + self.height


def color_for_count(count: int, max_iters: int) -> Color:
    """
    Points that never escaped are black. Everything else packs the count
    into RGB: bits 16-23 red, 8-15 green, 0-7 blue.
    """
    if count == max_iters:
        return BLACK
    return Color((count >> 16) & 0xFF, (count >> 8) & 0xFF, count & 0xFF)


def _pixel_fn(view: Viewport, width: int, height: int, max_iters: int):
    scale = view.height / height
    top = view.top
    left = view.left

    def _count(idx: int) -> int:
        row = idx // width
        col = idx % width
        # row 0 is the top of the image
        y = top - row * scale
        x = left + col * scale
        return iterate(x, y, max_iters)

    return _count


def count_field(view: Viewport, width: int, height: int, max_iters: int) -> Collection[int]:
    """Escape counts for every pixel, row-major."""
    if width == 0 or height == 0:
        return Collection(0, lambda idx: 0)
    return Collection(width * height, _pixel_fn(view, width, height, max_iters))


def image_field(view: Viewport, width: int, height: int, max_iters: int) -> Collection[Color]:
    """
    Render the viewport into a width x height raster of Colors.

    Built as a generated Collection of counts mapped through color_for_count.
    """
    counts = count_field(view, width, height, max_iters)
    return counts.map(lambda n: color_for_count(n, max_iters))


# -----------------------------
# numpy path (same pixels, vectorized)
# -----------------------------

def count_array(view: Viewport, width: int, height: int, max_iters: int) -> np.ndarray:
    """Counts as a (height, width) array, identical to count_field."""
    if width == 0 or height == 0:
        return np.zeros((height, width), dtype=np.int64)

    scale = view.height / height
    rows = np.arange(height, dtype=np.float64)
    cols = np.arange(width, dtype=np.float64)
    ys = view.top - rows * scale
    xs = view.left + cols * scale
    return iterate_grid(xs[None, :], ys[:, None], max_iters)


def colorize_counts(counts: np.ndarray, max_iters: int) -> np.ndarray:
    """Array form of color_for_count -> uint8 (..., 3)."""
    counts = np.asarray(counts, dtype=np.int64)
    r = (counts >> 16) & 0xFF
    g = (counts >> 8) & 0xFF
    b = counts & 0xFF
    rgb = np.stack([r, g, b], axis=-1).astype(np.uint8)
    rgb[counts == max_iters] = 0
    return rgb


def colors_to_array(colors: Sequence[Color], width: int, height: int) -> np.ndarray:
    """Pack a row-major Color sequence into a (height, width, 3) uint8 array."""
    if len(colors) != width * height:
        raise ValueError(
            f"Image size mismatch: expected {width * height} pixels, got {len(colors)}"
        )
    flat = np.array(
        [(c.red & 0xFF, c.green & 0xFF, c.blue & 0xFF) for c in colors],
        dtype=np.uint8,
    )
    return flat.reshape((height, width, 3))
