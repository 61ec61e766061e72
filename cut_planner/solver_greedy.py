# cut_planner/solver_greedy.py
# Greedy heuristics (fast, deterministic, NOT optimal):
# - GreedySolver: always cut from the longest stock, fill each piece first-fit
#   with parts from longest to shortest before opening the next piece.
# - shrink_stock: post-pass swapping every piece for the shortest stock that
#   still holds its cuts (cuts are never moved or reordered).
# - GreedyPlusSolver: GreedySolver followed by shrink_stock.
#
# Counter-example for optimality (sample_data "greed_counter"):
#   parts 5x2, 3x4 on 12" stock, trim 0.25, kerf 0.125
#   greedy: [5 5] [3 3 3] [3]  -> 36
#   exact:  [5 3 3] [5 3 3]    -> 24

from __future__ import annotations

from typing import List, Sequence

from .solver_base import Solver, check_feasible
from .types import CutPlan, FullPlan, Spec, fits


class GreedySolver(Solver):
    name = "greedy"

    def __init__(self, spec: Spec):
        super().__init__(spec)
        self.longest_stock = max(spec.stock_lengths)
        self._parts = sorted(spec.parts)

    def min_stock(self) -> float:
        # Not a lower bound: just what this heuristic achieves.
        return self.solve().total_stock

    def solve(self) -> FullPlan:
        check_feasible(self.spec)
        kerf = self.spec.blade_width

        lengths = [p.length for p in self._parts]
        quantities = [p.quantity for p in self._parts]
        cut_plans: List[CutPlan] = []

        while lengths:
            plan = CutPlan(self.longest_stock)
            # One extra kerf up front: the first part does not need a cut before it
            room = self.spec.usable_length(self.longest_stock) + kerf

            i = 0
            while i < len(lengths):
                need = lengths[i] + kerf
                if fits(room, need):
                    plan = plan.add_cut(lengths[i])
                    room -= need
                    quantities[i] -= 1
                    if quantities[i] <= 0:
                        del lengths[i]
                        del quantities[i]
                else:
                    i += 1

            cut_plans.append(plan)

        return FullPlan(self.spec, cut_plans)


def shrink_stock(plan: FullPlan, stock_lengths: Sequence[float]) -> FullPlan:
    """
    Replace each piece's stock with the shortest catalogue length that still
    accommodates its cuts. Pieces that no shorter stock can hold are kept as-is.
    """
    spec = plan.spec
    ordered = sorted(set(stock_lengths))
    out: List[CutPlan] = []
    for cp in plan.cut_plans:
        best = cp
        for stock in ordered:
            if stock >= cp.stock_length:
                break
            candidate = cp.change_stock(stock)
            if fits(candidate.remaining(spec.end_trim, spec.blade_width), 0.0):
                best = candidate
                break
        out.append(best)
    return FullPlan(spec, out)


class GreedyPlusSolver(Solver):
    name = "greedy_plus"

    def __init__(self, spec: Spec):
        super().__init__(spec)
        self._greedy = GreedySolver(spec)

    def solve(self) -> FullPlan:
        return shrink_stock(self._greedy.solve(), self.spec.stock_lengths)

    def min_stock(self) -> float:
        return self.solve().total_stock
