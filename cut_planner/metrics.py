# cut_planner/metrics.py
# Metrics for a cutting plan:
# - stock bought, part length delivered, waste and waste fraction
# - waste split into end trim, kerf and leftover offcuts
# - how many pieces of each stock length to buy
#
# These metrics are solver-agnostic: they work for any FullPlan.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .types import CutPlan, FullPlan


@dataclass(frozen=True)
class PlanMetrics:
    total_stock: float
    total_part_length: float
    pieces: int
    trim_loss: float
    kerf_loss: float
    offcut: float
    stock_usage: Dict[float, int] = field(default_factory=dict)

    @property
    def total_waste(self) -> float:
        return self.total_stock - self.total_part_length

    @property
    def waste_fraction(self) -> float:
        if self.total_stock <= 0:
            return 0.0
        return self.total_waste / self.total_stock


def compute_kerf_loss(cp: CutPlan, blade_width: float) -> float:
    """One kerf between each pair of adjacent cuts."""
    return blade_width * max(0, len(cp.cuts) - 1)


def compute_stock_usage(cut_plans: List[CutPlan]) -> Dict[float, int]:
    """Shopping list: stock length -> number of pieces, shortest first."""
    usage: Dict[float, int] = {}
    for cp in sorted(cut_plans, key=lambda c: c.stock_length):
        usage[cp.stock_length] = usage.get(cp.stock_length, 0) + 1
    return usage


def compute_plan_metrics(plan: FullPlan) -> PlanMetrics:
    spec = plan.spec
    trim = 0.0
    kerf = 0.0
    offcut = 0.0
    for cp in plan.cut_plans:
        trim += 2 * spec.end_trim
        kerf += compute_kerf_loss(cp, spec.blade_width)
        offcut += cp.remaining(spec.end_trim, spec.blade_width)

    return PlanMetrics(
        total_stock=plan.total_stock,
        total_part_length=plan.total_part_length,
        pieces=len(plan.cut_plans),
        trim_loss=trim,
        kerf_loss=kerf,
        offcut=offcut,
        stock_usage=compute_stock_usage(list(plan.cut_plans)),
    )
