# cut_planner/validate.py
# Validation utilities:
# - every piece uses a catalogue stock length
# - every piece has non-negative remaining length (trim + kerf included)
# - every part is cut exactly `quantity` times, and nothing else is cut
#
# Useful both during development and to sanity-check solver output.

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Optional

from .config import DEFAULTS
from .types import CutPlan, FullPlan, Spec


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    piece_index: Optional[int] = None


def validate_cut_plan(spec: Spec, cp: CutPlan, index: int, tol: float = DEFAULTS.capacity_tolerance) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if cp.stock_length not in spec.stock_lengths:
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=f"Stock length {cp.stock_length:g} is not in the catalogue {list(spec.stock_lengths)}",
                piece_index=index,
            )
        )
    if not cp.cuts:
        issues.append(ValidationIssue(level="WARN", message="Piece has no cuts", piece_index=index))
    rem = cp.remaining(spec.end_trim, spec.blade_width)
    if rem < -tol:
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=f"Piece over capacity: {cp.describe(spec.end_trim, spec.blade_width)}",
                piece_index=index,
            )
        )
    return issues


def validate_completeness(plan: FullPlan) -> List[ValidationIssue]:
    """Compare the multiset of cut lengths with the parts the spec asks for."""
    issues: List[ValidationIssue] = []
    wanted: Counter = Counter()
    for p in plan.spec.parts:
        wanted[p.length] += p.quantity
    got = Counter(plan.all_cuts())

    for length in sorted(set(wanted) | set(got), reverse=True):
        if wanted[length] != got[length]:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Part {length:g}: required {wanted[length]}, planned {got[length]}",
                )
            )
    return issues


def validate_plan(plan: FullPlan, tol: float = DEFAULTS.capacity_tolerance) -> List[ValidationIssue]:
    """
    Validate an entire plan.
    Returns a list of issues (empty if OK).
    """
    issues: List[ValidationIssue] = []
    for i, cp in enumerate(plan.cut_plans):
        issues.extend(validate_cut_plan(plan.spec, cp, i, tol))
    issues.extend(validate_completeness(plan))
    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(f"[{e.level}] piece={e.piece_index} :: {e.message}" for e in errs)
        raise ValueError("Validation failed:\n" + msg)
