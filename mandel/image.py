"""
PNG image sink.

write_png(path, width, height, pixels) encodes a row-major sequence of
Colors (or a ready (height, width, 3) uint8 array) as an 8-bit RGB PNG with
Pillow. Failures are raised as ImageSinkError carrying one of the error
codes below; nothing is retried.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from mandel.render import colors_to_array

NO_ERROR = 0
PNG_ALLOC_WRITE_STRUCT_FAIL = -1
PNG_ALLOC_INFO_STRUCT_FAIL = -2
PNG_ENCODER_FAIL = -3
PNG_FILE_OPEN_FAIL = -4
PNG_MAKE_ROWS_FAIL = -5
PNG_MAKE_ROW_FAIL = -6
DATA_ROW_ALLOCATION_FAIL = -7

ERROR_MESSAGES = {
    NO_ERROR: "No error",
    PNG_ALLOC_WRITE_STRUCT_FAIL: "Could not allocate PNG write struct",
    PNG_ALLOC_INFO_STRUCT_FAIL: "Could not allocate PNG info struct",
    PNG_ENCODER_FAIL: "An error occurred during PNG creation",
    PNG_FILE_OPEN_FAIL: "Could not open file for writing",
    PNG_MAKE_ROWS_FAIL: "Could not allocate memory for row pointers",
    PNG_MAKE_ROW_FAIL: "Could not allocate memory for row",
    DATA_ROW_ALLOCATION_FAIL: "Could not allocate memory for row in image data",
}


class ImageSinkError(Exception):
    def __init__(self, code: int, detail: str | None = None):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.detail = detail
        text = self.message if not detail else f"{self.message}: {detail}"
        super().__init__(text)


def write_png(path, width: int, height: int, pixels) -> None:
    """
    Write pixels to path as PNG.

    pixels: sequence of Color with len == width * height, or an already
    packed uint8 array of shape (height, width, 3).
    """
    path = Path(path)

    if isinstance(pixels, np.ndarray):
        if pixels.shape != (height, width, 3):
            raise ValueError(
                f"Image size mismatch: expected {(height, width, 3)}, got {pixels.shape}"
            )
        rgb = np.ascontiguousarray(pixels, dtype=np.uint8)
    else:
        try:
            rgb = colors_to_array(pixels, width, height)
        except MemoryError as e:
            raise ImageSinkError(DATA_ROW_ALLOCATION_FAIL, str(e)) from e

    try:
        fh = open(path, "wb")
    except OSError as e:
        raise ImageSinkError(PNG_FILE_OPEN_FAIL, f"{path} ({e.strerror})") from e

    try:
        with fh:
            im = Image.fromarray(rgb)
            im.save(fh, format="PNG")
    except MemoryError as e:
        path.unlink(missing_ok=True)
        raise ImageSinkError(PNG_MAKE_ROWS_FAIL, str(e)) from e
    except (OSError, ValueError, SystemError) as e:
        # don't leave a truncated PNG behind
        path.unlink(missing_ok=True)
        raise ImageSinkError(PNG_ENCODER_FAIL, str(e)) from e
