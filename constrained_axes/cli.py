from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from constrained_axes.config import dump_layout, load_layout
from constrained_axes.constraints import enforce_axis_constraints


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="constrained-axes")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    enforce = sub.add_parser("enforce", help="Apply scale constraints to a layout file and print the result.")
    enforce.add_argument("layout", type=Path)
    enforce.add_argument("--passes", type=int, default=1, help="Enforcement calls within one layout pass.")
    enforce.add_argument("--indent", type=int, default=2)

    check = sub.add_parser("check", help="Report per-group scale residuals; exit 1 if any group is unsatisfied.")
    check.add_argument("layout", type=Path)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    layout = load_layout(args.layout)
    if args.command == "enforce":
        if args.passes < 1:
            parser.error("--passes must be >= 1")
        layout.start_pass()
        for _ in range(args.passes):
            enforce_axis_constraints(layout)
        out = dump_layout(layout)
        out["satisfied"] = layout.is_satisfied()
        print(json.dumps(out, indent=args.indent))
        return 0

    residuals = layout.constraint_residuals()
    satisfied = layout.is_satisfied()
    print(json.dumps({"residuals": residuals, "satisfied": satisfied}))
    return 0 if satisfied else 1
