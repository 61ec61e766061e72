# cut_planner/cli.py
# Command-line front end:
# - job from JSON (--spec), CSV parts list (--parts-csv), a built-in example
#   (--example) or plain text (--parts 54x2,43.5x4 --stock 72,96)
# - any registered solver, plan or min-stock only
# - optional comparison against a second solver with timed trials
# - optional CSV/JSON export and PNG plot
#
# Run:
#   python -m cut_planner --example mini_garden --solver exact_packed
#   python -m cut_planner --parts 60x2,10x4 --stock 72,96 --compare exact

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from .config import DEFAULTS, make_spec, parse_lengths_text, parse_parts_text
from .errors import CutPlannerError
from .io_csv import read_parts_csv
from .io_json import load_spec_json
from .logger import get_logger, set_debug
from .run import compare, run_solver
from .sample_data import example_names, get_example
from .solvers import make_solver, solver_names
from .types import Spec
from .utils import format_duration, timer

log = get_logger()


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="1D cutting-stock planner (minimize total stock length)")

    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--spec", type=str, help="Path to job JSON (parts/stock_lengths/end_trim/blade_width)")
    src.add_argument("--example", type=str, choices=example_names(), help="Use a built-in example spec")
    src.add_argument("--parts", type=str, help="Parts as text, e.g. 54x2,43.5x4")
    src.add_argument("--parts-csv", type=str, help="Path to parts CSV (length,quantity)")

    p.add_argument("--stock", type=str, default="", help="Stock lengths, e.g. 72,96 (with --parts/--parts-csv)")
    p.add_argument("--trim", type=float, default=DEFAULTS.default_end_trim, help="End trim per stock end")
    p.add_argument("--kerf", type=float, default=DEFAULTS.default_blade_width, help="Blade width per cut")

    p.add_argument("--solver", type=str, default="exact_packed", choices=solver_names(), help="Solver to run")
    p.add_argument("--min-stock", action="store_true", help="Only compute the minimal total stock length")
    p.add_argument("--compare", type=str, default="", choices=[""] + solver_names(), help="Benchmark solver to compare against")
    p.add_argument("--trials", type=int, default=DEFAULTS.default_trials, help="Timed trials for --compare")
    p.add_argument("--require-equal", action="store_true", help="Skip trials if the results differ")

    p.add_argument("--out", type=str, default="", help="Output directory for CSV + JSON exports (optional)")
    p.add_argument("--prefix", type=str, default="plan", help="Export filename prefix")
    p.add_argument("--png", type=str, default="", help="Save plot as PNG file (optional)")
    p.add_argument("--no-validate", action="store_true", help="Do not validate the plan")
    p.add_argument("--debug", action="store_true", help="Print solver diagnostics")
    return p


def load_spec(args: argparse.Namespace) -> Spec:
    if args.spec:
        path = Path(args.spec)
        if not path.exists():
            raise SystemExit(f"Spec JSON not found: {path}")
        return load_spec_json(path)
    if args.example:
        return get_example(args.example)

    if not args.stock:
        raise SystemExit("--stock is required with --parts/--parts-csv")
    parts = parse_parts_text(args.parts) if args.parts else read_parts_csv(Path(args.parts_csv))
    if not parts:
        raise SystemExit("No parts found.")
    return make_spec(parts, parse_lengths_text(args.stock), end_trim=args.trim, blade_width=args.kerf)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    if args.debug:
        set_debug(True)

    try:
        spec = load_spec(args)
        print(f"Parts: {', '.join(str(p) for p in spec.parts)}")
        print(f"Stock: {', '.join(f'{s:g}' for s in spec.stock_lengths)}  trim={spec.end_trim:g}  kerf={spec.blade_width:g}")

        if args.compare:
            dut = make_solver(args.solver, spec)
            bench = make_solver(args.compare, spec)
            if args.min_stock:
                res = compare(dut.min_stock, bench.min_stock, trials=args.trials, require_equality=args.require_equal)
            else:
                res = compare(dut.solve, bench.solve, trials=args.trials, require_equality=args.require_equal)
            print(f"\n=== {args.solver} ===\n{res.dut_result}")
            print(f"\n=== {args.compare} ===\n{res.benchmark_result}")
            return 0 if res.equal or not args.require_equal else 1

        if args.min_stock:
            with timer("min_stock") as t:
                value = make_solver(args.solver, spec).min_stock()
            print(f"MinStock: {value:g}")
            print(f"Time: {format_duration(t['seconds'])}")
            return 0

        result = run_solver(
            spec,
            args.solver,
            validate=not args.no_validate,
            out_dir=args.out.strip() or None,
            export_prefix=args.prefix,
            png_path=args.png.strip() or None,
        )
    except (CutPlannerError, ValueError) as e:
        # Bad input or a plan that failed validation
        log.error(str(e))
        return 2

    print(result.plan)
    usage = ", ".join(f"{n} x {length:g}" for length, n in result.metrics.stock_usage.items())
    print(f"Buy: {usage}")
    print(f"Time: {format_duration(result.seconds)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
