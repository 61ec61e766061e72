# cut_planner/solver_basic.py
# Reference solver: exhaustive recursion with no pruning and no ordering tricks.
# Only min_stock() is provided; it exists to cross-check the optimized solvers
# on small inputs (it is exponential in the number of part instances).

from __future__ import annotations

import math
from typing import List

from .errors import NotSupportedOperation
from .solver_base import Solver, check_feasible, ensure_recursion_limit
from .types import FullPlan, Spec, fits


class BasicSolver(Solver):
    name = "basic"

    def __init__(self, spec: Spec):
        super().__init__(spec)
        # Parts in the order the caller gave them, one entry per instance
        self._lengths: List[float] = [p.length for p in spec.parts for _ in range(p.quantity)]

    def solve(self) -> FullPlan:
        raise NotSupportedOperation("BasicSolver only implements min_stock()")

    def min_stock(self) -> float:
        check_feasible(self.spec)
        if not self._lengths:
            return 0.0
        ensure_recursion_limit(len(self._lengths))
        return self._min_stock(0, [])

    def _min_stock(self, idx: int, partials: List[float]) -> float:
        """Additional stock needed for parts[idx:] given the open pieces' remaining capacity."""
        if idx >= len(self._lengths):
            return 0.0

        length = self._lengths[idx]
        kerf = self.spec.blade_width
        best = math.inf

        for i, rem in enumerate(partials):
            if fits(rem, length + kerf):
                nxt = list(partials)
                nxt[i] = rem - length - kerf
                best = min(best, self._min_stock(idx + 1, nxt))

        for stock in sorted(set(self.spec.stock_lengths)):
            usable = self.spec.usable_length(stock)
            if fits(usable, length):
                best = min(best, stock + self._min_stock(idx + 1, partials + [usable - length]))

        return best
