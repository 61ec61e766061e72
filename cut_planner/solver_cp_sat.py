# cut_planner/solver_cp_sat.py
# CP-SAT (OR-Tools) model of the same cutting problem, used to cross-check the
# branch-and-bound solvers and as an alternative backend for larger jobs.
#
# Variables:
#   x[i][j]  part instance i is cut from slot j
#   y[j][s]  slot j is a piece of stock s (at most one stock per slot)
# Constraints:
#   every part on exactly one slot
#   sum_i (L_i + kerf) * x[i][j] <= sum_s (C_s + kerf) * y[j][s]
#     (the extra kerf on the right: the first cut on a piece costs none)
#   used slots are contiguous from 0, part i only in slots 0..i (symmetry breaking)
# Objective:
#   minimize total stock length
#
# Lengths are scaled to integers (DEFAULTS.cp_sat_scale) and rounded.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ortools.sat.python import cp_model

from .config import DEFAULTS
from .errors import SolverTimeout
from .logger import get_logger
from .solver_base import Solver, check_feasible
from .types import CutPlan, FullPlan, Spec, expand_parts

log = get_logger()


@dataclass(frozen=True)
class CpSatParams:
    time_limit_s: float = DEFAULTS.cp_sat_time_limit_s
    scale: int = DEFAULTS.cp_sat_scale
    workers: int = DEFAULTS.cp_sat_workers
    max_pieces: Optional[int] = None   # slots in the model; None = one per part


class CpSatSolver(Solver):
    name = "cp_sat"

    def __init__(self, spec: Spec, params: Optional[CpSatParams] = None):
        super().__init__(spec)
        self.params = params or CpSatParams()
        self.stock_lengths: List[float] = sorted(set(spec.stock_lengths))
        self.part_lengths: List[float] = expand_parts(spec.parts)
        self.proven_optimal = False

    def _scaled(self, v: float) -> int:
        return int(round(v * self.params.scale))

    def solve(self) -> FullPlan:
        check_feasible(self.spec)
        n = len(self.part_lengths)
        if n == 0:
            self.proven_optimal = True
            return FullPlan(self.spec, ())

        spec = self.spec
        kerf = self._scaled(spec.blade_width)
        lengths = [self._scaled(v) for v in self.part_lengths]
        stocks = [self._scaled(v) for v in self.stock_lengths]
        caps = [self._scaled(spec.usable_length(v)) for v in self.stock_lengths]
        m = max(1, min(n, self.params.max_pieces or n))
        ns = len(stocks)

        model = cp_model.CpModel()

        x = [[model.NewBoolVar(f"x[{i},{j}]") for j in range(m)] for i in range(n)]
        y = [[model.NewBoolVar(f"y[{j},{s}]") for s in range(ns)] for j in range(m)]
        used = [model.NewBoolVar(f"used[{j}]") for j in range(m)]

        for i in range(n):
            model.Add(sum(x[i][j] for j in range(m)) == 1)
            for j in range(i + 1, m):
                model.Add(x[i][j] == 0)

        for j in range(m):
            model.Add(sum(y[j][s] for s in range(ns)) == used[j])
            model.Add(
                sum((lengths[i] + kerf) * x[i][j] for i in range(n))
                <= sum((caps[s] + kerf) * y[j][s] for s in range(ns))
            )

        for j in range(m - 1):
            model.Add(used[j] >= used[j + 1])

        model.Minimize(sum(stocks[s] * y[j][s] for j in range(m) for s in range(ns)))

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = float(self.params.time_limit_s)
        solver.parameters.num_workers = int(self.params.workers)
        status = solver.Solve(model)

        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            raise SolverTimeout(
                f"CP-SAT found no plan within {self.params.time_limit_s:g}s "
                f"(status {solver.StatusName(status)})"
            )

        self.proven_optimal = status == cp_model.OPTIMAL
        if not self.proven_optimal:
            log.warn("CP-SAT stopped at the time limit; plan is feasible but not proven minimal")

        plans: List[CutPlan] = []
        for j in range(m):
            chosen = [s for s in range(ns) if solver.Value(y[j][s])]
            if not chosen:
                continue
            cuts = tuple(self.part_lengths[i] for i in range(n) if solver.Value(x[i][j]))
            plans.append(CutPlan(self.stock_lengths[chosen[0]], cuts))

        log.debug(f"cp_sat: status={solver.StatusName(status)} wall={solver.WallTime():.3f}s")
        return FullPlan(spec, plans)

    def min_stock(self) -> float:
        return self.solve().total_stock
