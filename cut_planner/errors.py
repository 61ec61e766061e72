# cut_planner/errors.py
# Exception types raised by the solvers.
# All of them are deterministic functions of the input Spec (no retryable class).

from __future__ import annotations

from typing import Optional


class CutPlannerError(Exception):
    """Base class for all cut_planner errors."""


class InfeasibleSpec(CutPlannerError, ValueError):
    """Some part is longer than the usable length of every stock in the catalogue."""

    def __init__(self, message: str, part=None, max_usable: Optional[float] = None):
        super().__init__(message)
        self.part = part
        self.max_usable = max_usable


class UnsupportedEncoding(CutPlannerError, ValueError):
    """A packed piece cannot hold the requested stock index, part index or cut count."""


class NotSupportedOperation(CutPlannerError, NotImplementedError):
    """The solver does not implement this operation."""


class SolverTimeout(CutPlannerError, RuntimeError):
    """CP-SAT stopped without a feasible assignment."""
