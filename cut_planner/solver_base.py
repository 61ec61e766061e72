# cut_planner/solver_base.py
# The solver contract shared by every algorithm:
#   solve()     -> FullPlan assigning every part instance to a stock piece
#   min_stock() -> minimal total stock length (or the heuristic's own total)
# Both are pure functions of the Spec held by the solver.

from __future__ import annotations

import sys
from abc import ABC, abstractmethod

from .config import DEFAULTS
from .errors import InfeasibleSpec
from .types import FullPlan, Spec


def check_feasible(spec: Spec) -> None:
    """Raise InfeasibleSpec if some part is longer than every usable stock length."""
    bad = spec.infeasible_parts()
    if bad:
        cap = spec.max_usable_length
        raise InfeasibleSpec(
            f"Part of length {bad[0].length:g} does not fit any stock "
            f"(longest usable length is {cap:g} after end trim)",
            part=bad[0],
            max_usable=cap,
        )


def ensure_recursion_limit(depth: int) -> None:
    """Depth-first search recurses once per part; make room for long part lists."""
    needed = depth + DEFAULTS.recursion_headroom
    if sys.getrecursionlimit() < needed:
        sys.setrecursionlimit(needed)


class Solver(ABC):
    """
    Something which can plan the stock and cuts for a Spec.

    Instances hold only read-only tables built from the spec, so calls may be
    repeated, but concurrent calls on the same instance are not supported.
    """

    name = "base"

    def __init__(self, spec: Spec):
        self.spec = spec

    @abstractmethod
    def solve(self) -> FullPlan:
        ...

    @abstractmethod
    def min_stock(self) -> float:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(parts={len(self.spec.parts)}, stocks={len(self.spec.stock_lengths)})"
