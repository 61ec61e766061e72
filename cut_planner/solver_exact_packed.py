# cut_planner/solver_exact_packed.py
# Exact branch-and-bound over PackedPiece state.
#
# Same branching order and pruning as solver_exact.ExactSolver; only the state
# changes: each open piece is an immutable PackedPiece (stock index + part-table
# indices) instead of a CutPlan plus a float, so a branch is one tuple rebuild
# and pieces are decoded into CutPlans only once, for the winning plan.
#
# Specs beyond the packed limits (see packed.PackedTables) are handed to
# ExactSolver unchanged; callers cannot tell the difference.

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from .errors import UnsupportedEncoding
from .logger import get_logger
from .packed import PackedPiece, PackedTables
from .solver_base import Solver, check_feasible, ensure_recursion_limit
from .solver_exact import ExactSolver
from .types import FullPlan, Spec, fits

log = get_logger()


class PackedExactSolver(Solver):
    name = "exact_packed"

    def __init__(self, spec: Spec):
        super().__init__(spec)
        self._fallback = ExactSolver(spec)
        self.tables: Optional[PackedTables] = None
        self.unsupported_reason: Optional[str] = None
        try:
            self.tables = PackedTables(spec)
        except UnsupportedEncoding as e:
            self.unsupported_reason = str(e)
        self._indices: List[int] = self.tables.expand() if self.tables is not None else []
        self.nodes_explored = 0

    @property
    def uses_packed_state(self) -> bool:
        return self.tables is not None

    def solve(self) -> FullPlan:
        check_feasible(self.spec)
        if self.tables is None:
            log.debug(f"packed encoding unavailable ({self.unsupported_reason}); using exact solver")
            return self._fallback.solve()
        if not self._indices:
            return FullPlan(self.spec, ())
        ensure_recursion_limit(len(self._indices))

        self.nodes_explored = 0
        pieces = self._search(0, [])
        log.debug(f"packed solve: {len(self._indices)} parts, {self.nodes_explored} nodes")
        return FullPlan(self.spec, self.tables.decode_all(pieces))

    def min_stock(self) -> float:
        if self.tables is None:
            check_feasible(self.spec)
            log.debug(f"packed encoding unavailable ({self.unsupported_reason}); using exact solver")
            return self._fallback.min_stock()
        return self.solve().total_stock

    def _search(self, idx: int, partials: List[PackedPiece]) -> Tuple[PackedPiece, ...]:
        self.nodes_explored += 1
        tables = self.tables
        part = self._indices[idx]
        length = tables.part_lengths[part]
        need = length + tables.blade_width
        idx += 1

        if idx == len(self._indices):
            for i, piece in enumerate(partials):
                if fits(tables.remaining(piece), need):
                    out = list(partials)
                    out[i] = piece.add_cut(part)
                    return tuple(out)
            for s, cap in enumerate(tables.capacities):
                if fits(cap, length):
                    return tuple(partials) + (PackedPiece.open(s, part),)

        best: Optional[Tuple[PackedPiece, ...]] = None
        best_stock = math.inf
        n_open = len(partials)

        for i in range(n_open):
            piece = partials[i]
            if not fits(tables.remaining(piece), need):
                continue
            partials[i] = piece.add_cut(part)
            result = self._search(idx, partials)
            partials[i] = piece

            if len(result) == n_open:
                return result

            total = tables.total_stock(result)
            if total < best_stock:
                best_stock = total
                best = result

        committed = tables.total_stock(partials)
        for s, (stock, cap) in enumerate(zip(tables.stock_lengths, tables.capacities)):
            if best_stock <= committed + stock:
                break
            if not fits(cap, length):
                continue
            partials.append(PackedPiece.open(s, part))
            result = self._search(idx, partials)
            partials.pop()

            total = tables.total_stock(result)
            if total < best_stock:
                best_stock = total
                best = result

        return best
