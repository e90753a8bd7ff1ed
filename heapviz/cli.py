"""Command-line front end: visualize a tracer JSON file."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .api import load_trace_file, visualize_step
from .config import LayoutConfig
from .trace_stats import count_shapes
from . import constants


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heapviz",
        description="Classify and lay out heap snapshots from a program trace",
    )
    parser.add_argument("file", help="Tracer JSON file ({\"steps\": [...]})")
    parser.add_argument("--step", "-s", type=int, default=None,
                        help="Zero-based step to render (default: all steps)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the graph layout's initial placement")
    parser.add_argument("--iterations", "-n", type=int,
                        default=constants.FORCE_ITERATIONS,
                        help=f"Force layout iterations (default: {constants.FORCE_ITERATIONS})")
    parser.add_argument("--stats", action="store_true",
                        help="Only print shape frequencies across the trace")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log classification and layout details")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        trace = load_trace_file(args.file)
    except (OSError, ValueError) as e:
        print(f"heapviz: {e}", file=sys.stderr)
        return 1

    if args.stats:
        print(json.dumps(count_shapes(trace), indent=2))
        return 0

    config = LayoutConfig(iterations=args.iterations, seed=args.seed)
    if args.step is None:
        indices = range(len(trace.steps))
    elif 0 <= args.step < len(trace.steps):
        indices = range(args.step, args.step + 1)
    else:
        print(f"heapviz: step {args.step} out of range (trace has {len(trace.steps)} steps)",
              file=sys.stderr)
        return 1

    rendered = [
        {"step": i, **visualize_step(trace.steps[i], config).to_dict()}
        for i in indices
    ]
    print(json.dumps(rendered if args.step is None else rendered[0], indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
