# cut_planner/solvers.py
# Name -> solver class registry used by the runner and the CLI.

from __future__ import annotations

from typing import Dict, List, Type

from .solver_base import Solver
from .solver_basic import BasicSolver
from .solver_cp_sat import CpSatSolver
from .solver_exact import ExactSolver
from .solver_exact_packed import PackedExactSolver
from .solver_greedy import GreedyPlusSolver, GreedySolver
from .types import Spec

SOLVERS: Dict[str, Type[Solver]] = {
    cls.name: cls
    for cls in (BasicSolver, GreedySolver, GreedyPlusSolver, ExactSolver, PackedExactSolver, CpSatSolver)
}


def solver_names() -> List[str]:
    return sorted(SOLVERS)


def make_solver(name: str, spec: Spec, **kwargs) -> Solver:
    try:
        cls = SOLVERS[name]
    except KeyError:
        raise ValueError(f"Unknown solver {name!r}; choose one of {', '.join(solver_names())}") from None
    return cls(spec, **kwargs)
