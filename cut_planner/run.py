# cut_planner/run.py
# High-level convenience runner that ties together:
# - solver (picked by name)
# - validation
# - metrics + timing
# - optional CSV/JSON export and PNG plot
# and a comparison harness that runs two solvers on the same spec, checks
# they agree, and times repeated trials.
#
# Example:
#   from cut_planner.run import run_solver, compare
#   res = run_solver(spec, "exact_packed", out_dir="out")
#   cmp = compare(make_solver("greedy_plus", spec).solve, make_solver("exact", spec).solve)

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from .config import DEFAULTS
from .io_csv import export_all
from .logger import get_logger
from .metrics import PlanMetrics, compute_plan_metrics
from .solvers import make_solver
from .types import FullPlan, Spec
from .utils import format_duration, save_plan_json, timer
from .validate import raise_on_errors, validate_plan

log = get_logger()


@dataclass(frozen=True)
class RunResult:
    plan: FullPlan
    metrics: PlanMetrics
    seconds: float


def run_solver(
    spec: Spec,
    solver: str = "exact",
    *,
    validate: bool = True,
    out_dir: Optional[str | Path] = None,
    export_prefix: str = "plan",
    png_path: Optional[str] = None,
) -> RunResult:
    """
    Solve the spec end-to-end with the named solver.
    """
    s = make_solver(solver, spec)
    with timer(solver) as t:
        plan = s.solve()

    if validate:
        raise_on_errors(validate_plan(plan))

    res = RunResult(plan=plan, metrics=compute_plan_metrics(plan), seconds=t["seconds"])
    log.info(f"{solver}: {plan.num_pieces()} pieces, stock {plan.total_stock:g} in {format_duration(res.seconds)}")

    if out_dir is not None:
        outp = Path(out_dir)
        export_all(plan, out_dir=outp, prefix=export_prefix)
        save_plan_json(plan, outp / f"{export_prefix}.json")
        log.info(f"Exported CSV + JSON to: {outp}")

    if png_path:
        from .plotting import save_plan_png
        save_plan_png(plan, png_path)
        log.info(f"Plot saved to: {png_path}")

    return res


def _results_equal(a: Any, b: Any) -> bool:
    if isinstance(a, float) and isinstance(b, float):
        return math.isclose(a, b, rel_tol=1e-9, abs_tol=1e-9)
    return a == b


@dataclass(frozen=True)
class Comparison:
    equal: bool
    dut_result: Any
    benchmark_result: Any
    trials: int
    dut_seconds: float        # average per trial
    benchmark_seconds: float  # average per trial

    @property
    def savings_seconds(self) -> float:
        return self.benchmark_seconds - self.dut_seconds

    @property
    def savings_fraction(self) -> float:
        if self.benchmark_seconds <= 0:
            return 0.0
        return self.savings_seconds / self.benchmark_seconds


def compare(
    dut: Callable[[], Any],
    benchmark: Callable[[], Any],
    trials: int = DEFAULTS.default_trials,
    require_equality: bool = False,
) -> Comparison:
    """
    Compare the result and speed of a solver call (dut) against a benchmark call.

    One untimed warm-up run of each, then `trials` timed runs. With
    require_equality=True and differing results, no trials are run.
    """
    log.info("Warming up...")
    benchmark_result = benchmark()
    dut_result = dut()

    equal = _results_equal(dut_result, benchmark_result)
    if equal:
        log.info("SUCCESS: dut and benchmark returned equivalent results.")
    elif require_equality:
        log.error("dut and benchmark did not return equivalent results.")
        return Comparison(equal, dut_result, benchmark_result, 0, 0.0, 0.0)
    else:
        log.warn("dut and benchmark did not return equivalent results.")

    dut_total = 0.0
    bench_total = 0.0
    for i in range(trials):
        with timer("benchmark") as tb:
            benchmark()
        with timer("dut") as td:
            dut()
        bench_total += tb["seconds"]
        dut_total += td["seconds"]
        log.info(
            f"Trial {i + 1} of {trials}: benchmark {format_duration(tb['seconds'])}, "
            f"dut {format_duration(td['seconds'])}"
        )

    n = max(1, trials)
    res = Comparison(equal, dut_result, benchmark_result, trials, dut_total / n, bench_total / n)
    if trials:
        log.info(
            f"Benchmark average: {format_duration(res.benchmark_seconds)}, "
            f"dut average: {format_duration(res.dut_seconds)}, "
            f"savings: {res.savings_fraction * 100:.2f}%"
        )
    return res
