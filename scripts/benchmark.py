"""
Time Collection generation, zip-multiply and reduce-sum for a list of sizes.

Run:
    python scripts/benchmark.py results.csv 1000 10000 100000

Options:
    --plot PATH   also save a log-log timing plot
    --seed N      seed for the uniform sample generator
"""

from __future__ import annotations

import argparse
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mandel.perf import plot_results, run_all, write_results


def usage(name: str) -> str:
    return "\n".join([
        f"Usage: {name} outfile size0 size1 size2 ... sizeN",
        "  outfile - CSV output file to write results to",
        "  size<n> - Size of test sample to assess",
        f"Example: {name} results.csv 1000 10000 100000",
    ])


def _size(s: str) -> int:
    val = int(s)
    if val < 0:
        raise argparse.ArgumentTypeError(f"size must be >= 0, got {s}")
    return val


def main(argv=None, prog="benchmark.py"):
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(prog=prog, usage=usage(prog))
    parser.add_argument("outfile", type=str, nargs="?")
    parser.add_argument("sizes", type=_size, nargs="*")
    parser.add_argument("--plot", type=str, default=None)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    if args.outfile is None or not args.sizes:
        print(usage(prog))
        return 1

    print(f"[bench] sizes={args.sizes}, seed={args.seed}")
    results = run_all(args.sizes, seed=args.seed)

    try:
        write_results(args.outfile, results)
    except OSError as e:
        print(f"Error opening file: {args.outfile} ({e})")
        return 1
    print(f"[bench] wrote {len(results)} rows to {args.outfile}")

    if args.plot:
        plot_results(results, args.plot)
        print(f"[bench] plot saved to {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main(prog=os.path.basename(sys.argv[0])))
