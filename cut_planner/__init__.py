# cut_planner/__init__.py
"""
Cut Planner: one-dimensional cutting-stock planning (lumber, bars, pipes).

Given part lengths with quantities, a catalogue of stock lengths, an end trim
and a blade width (kerf), plan which stock to buy and where every part is cut
from, minimizing the total stock length.

Solvers:
- ExactSolver        depth-first branch-and-bound, provably minimal
- PackedExactSolver  same search over compact PackedPiece state
- GreedySolver       fast first-fit on the longest stock (not optimal)
- GreedyPlusSolver   greedy + shortest-stock swap per piece
- BasicSolver        exhaustive min_stock() for cross-checking
- CpSatSolver        OR-Tools CP-SAT model of the same problem
"""

from .types import (
    Part,
    Spec,
    CutPlan,
    FullPlan,
    expand_parts,
)

from .errors import (
    CutPlannerError,
    InfeasibleSpec,
    UnsupportedEncoding,
    NotSupportedOperation,
    SolverTimeout,
)

from .solver_base import Solver, check_feasible
from .solver_basic import BasicSolver
from .solver_greedy import GreedySolver, GreedyPlusSolver, shrink_stock
from .solver_exact import ExactSolver
from .solver_exact_packed import PackedExactSolver
from .solver_cp_sat import CpSatParams, CpSatSolver
from .solvers import SOLVERS, make_solver, solver_names

from .metrics import PlanMetrics, compute_plan_metrics
from .validate import ValidationIssue, validate_plan, raise_on_errors

__all__ = [
    # types
    "Part",
    "Spec",
    "CutPlan",
    "FullPlan",
    "expand_parts",
    # errors
    "CutPlannerError",
    "InfeasibleSpec",
    "UnsupportedEncoding",
    "NotSupportedOperation",
    "SolverTimeout",
    # solvers
    "Solver",
    "check_feasible",
    "BasicSolver",
    "GreedySolver",
    "GreedyPlusSolver",
    "shrink_stock",
    "ExactSolver",
    "PackedExactSolver",
    "CpSatParams",
    "CpSatSolver",
    "SOLVERS",
    "make_solver",
    "solver_names",
    # metrics / validation
    "PlanMetrics",
    "compute_plan_metrics",
    "ValidationIssue",
    "validate_plan",
    "raise_on_errors",
]
