import argparse
import os
import sys

# Ensure repository root is on sys.path so `from mandel...` works when running
# this script directly (e.g. `python scripts/make_image.py`).
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mandel.image import ImageSinkError, write_png
from mandel.render import Viewport, colorize_counts, count_array, image_field

POSITIONALS = ["outfile", "width", "height", "max_iters", "view_left", "view_bottom", "view_height"]


def usage(name: str) -> str:
    return "\n".join([
        f"Usage: {name} <outfile> <width> <height> <max_iters> <view_left> <view_bottom> <view_height>",
        "  outfile     - PNG output file to write results to",
        "  width       - Width of the output image in pixels",
        "  height      - Height of the output image in pixels",
        "  max_iters   - Maximum number of iterations for the Mandelbrot calculation",
        "  view_left   - The leftmost coordinate of the view in the complex plane",
        "  view_bottom - The bottommost coordinate of the view in the complex plane",
        "  view_height - The height of the view in the complex plane",
        f"Example: {name} mandelbrot.png 1024 1024 4096 -2.0 -2.0 4.0",
    ])


def _non_negative_int(s: str) -> int:
    val = int(s)
    if val < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {s}")
    return val


def build_parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, usage=usage(prog))
    parser.add_argument("outfile", type=str)
    parser.add_argument("width", type=_non_negative_int)
    parser.add_argument("height", type=_non_negative_int)
    parser.add_argument("max_iters", type=_non_negative_int)
    parser.add_argument("view_left", type=float)
    parser.add_argument("view_bottom", type=float)
    parser.add_argument("view_height", type=float)
    parser.add_argument("--fast", action="store_true",
                        help="render with the vectorized numpy path (same pixels)")
    return parser


def main(argv=None, prog="make_image.py"):
    if argv is None:
        argv = sys.argv[1:]

    positionals = [a for a in argv if not a.startswith("--")]
    if len(positionals) != len(POSITIONALS):
        print(usage(prog))
        return 1

    args = build_parser(prog).parse_args(argv)
    view = Viewport(args.view_left, args.view_bottom, args.view_height)

    print(f"[run] {args.width}x{args.height}, max_iters={args.max_iters}, "
          f"view=({view.left}, {view.bottom}, h={view.height}), saving to {args.outfile}")

    if args.fast:
        pixels = colorize_counts(count_array(view, args.width, args.height, args.max_iters),
                                 args.max_iters)
    else:
        pixels = image_field(view, args.width, args.height, args.max_iters).to_list()

    try:
        write_png(args.outfile, args.width, args.height, pixels)
    except ImageSinkError as e:
        print(str(e), file=sys.stderr)
        return e.code

    print(f"Successfully created PNG file: {args.outfile}")
    return 0


if __name__ == "__main__":
    sys.exit(main(prog=os.path.basename(sys.argv[0])))
