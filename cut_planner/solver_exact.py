# cut_planner/solver_exact.py
# Exact branch-and-bound solver (depth-first, provably minimal total stock).
#
# Parts are placed one instance at a time, longest first, because long parts
# have the fewest feasible placements and cut the tree down fastest.
# For each part we branch over:
#   1) reuse: every open piece with room for the part plus one kerf
#   2) open:  every stock length whose usable length holds the part,
#             tried shortest first
# Pruning:
#   - reuse dominance: a reuse branch that finishes without opening any new
#     piece cannot be beaten, return it at once
#   - monotone bound: stop opening stock once committed + candidate stock
#     reaches the best total found at this level (longer stock only costs more)
#
# Search state lives in one _Workspace per call, mutated before recursing and
# restored afterwards. Results handed back up are fresh tuples, never views of
# the workspace.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import InfeasibleSpec
from .logger import get_logger
from .solver_base import Solver, check_feasible, ensure_recursion_limit
from .types import CutPlan, FullPlan, Spec, expand_parts, fits

log = get_logger()


@dataclass
class _Workspace:
    """Open pieces: remaining usable length and the cuts made so far (same index)."""
    partials: List[float] = field(default_factory=list)
    plans: List[CutPlan] = field(default_factory=list)

    def committed_stock(self) -> float:
        return sum(cp.stock_length for cp in self.plans)


def _total_stock(plans: Tuple[CutPlan, ...]) -> float:
    return sum(cp.stock_length for cp in plans)


class ExactSolver(Solver):
    name = "exact"

    def __init__(self, spec: Spec):
        super().__init__(spec)
        self.stock_lengths: List[float] = sorted(set(spec.stock_lengths))
        self.capacities: List[float] = [spec.usable_length(s) for s in self.stock_lengths]
        self.part_lengths: List[float] = expand_parts(spec.parts)
        self.nodes_explored = 0

    # ----------------------------
    # Public API
    # ----------------------------

    def solve(self) -> FullPlan:
        check_feasible(self.spec)
        if not self.part_lengths:
            return FullPlan(self.spec, ())
        ensure_recursion_limit(len(self.part_lengths))

        self.nodes_explored = 0
        plans = self._solve(0, _Workspace())
        log.debug(f"exact solve: {len(self.part_lengths)} parts, {self.nodes_explored} nodes")
        return FullPlan(self.spec, plans)

    def min_stock(self) -> float:
        check_feasible(self.spec)
        if not self.part_lengths:
            return 0.0
        ensure_recursion_limit(len(self.part_lengths))

        self.nodes_explored = 0
        best = self._min_stock(0, [])
        log.debug(f"exact min_stock: {len(self.part_lengths)} parts, {self.nodes_explored} nodes")
        return best

    # ----------------------------
    # Search helpers
    # ----------------------------

    def _smallest_fitting_stock(self, length: float) -> int:
        for i, cap in enumerate(self.capacities):
            if fits(cap, length):
                return i
        raise InfeasibleSpec(f"Part of length {length:g} does not fit any stock", max_usable=self.capacities[-1])

    def _solve(self, idx: int, ws: _Workspace) -> Tuple[CutPlan, ...]:
        self.nodes_explored += 1
        length = self.part_lengths[idx]
        need = length + self.spec.blade_width
        idx += 1

        # Last part: first open piece with room wins, else the smallest stock that fits
        if idx == len(self.part_lengths):
            for i, rem in enumerate(ws.partials):
                if fits(rem, need):
                    out = list(ws.plans)
                    out[i] = out[i].add_cut(length)
                    return tuple(out)
            s = self._smallest_fitting_stock(length)
            return tuple(ws.plans) + (CutPlan(self.stock_lengths[s], (length,)),)

        best: Optional[Tuple[CutPlan, ...]] = None
        best_stock = math.inf
        n_open = len(ws.partials)

        for i in range(n_open):
            rem = ws.partials[i]
            if not fits(rem, need):
                continue
            prev = ws.plans[i]
            ws.plans[i] = prev.add_cut(length)
            ws.partials[i] = rem - need
            result = self._solve(idx, ws)
            ws.plans[i] = prev
            ws.partials[i] = rem

            if len(result) == n_open:
                # Finished without buying more stock: nothing can do better
                return result

            total = _total_stock(result)
            if total < best_stock:
                best_stock = total
                best = result

        committed = ws.committed_stock()
        for stock, cap in zip(self.stock_lengths, self.capacities):
            if best_stock <= committed + stock:
                break
            if not fits(cap, length):
                continue
            ws.plans.append(CutPlan(stock, (length,)))
            ws.partials.append(cap - length)
            result = self._solve(idx, ws)
            ws.plans.pop()
            ws.partials.pop()

            total = _total_stock(result)
            if total < best_stock:
                best_stock = total
                best = result

        return best

    def _min_stock(self, idx: int, partials: List[float]) -> float:
        """Additional stock needed for the remaining parts given the open pieces."""
        self.nodes_explored += 1
        length = self.part_lengths[idx]
        need = length + self.spec.blade_width
        idx += 1

        if idx == len(self.part_lengths):
            for rem in partials:
                if fits(rem, need):
                    return 0.0
            return self.stock_lengths[self._smallest_fitting_stock(length)]

        best = math.inf

        for i in range(len(partials)):
            rem = partials[i]
            if not fits(rem, need):
                continue
            partials[i] = rem - need
            result = self._min_stock(idx, partials)
            partials[i] = rem

            if result == 0:
                return 0.0
            best = min(best, result)

        for stock, cap in zip(self.stock_lengths, self.capacities):
            if best <= stock:
                break
            if not fits(cap, length):
                continue
            partials.append(cap - length)
            result = stock + self._min_stock(idx, partials)
            partials.pop()
            best = min(best, result)

        return best
