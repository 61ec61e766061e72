# cut_planner/utils.py
# Small utilities used across the project:
# - timing context manager + human-readable durations
# - simple JSON export for plans (pieces + cuts + metrics)
#
# Keeps dependencies minimal (stdlib only).

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

from .metrics import compute_plan_metrics
from .types import FullPlan, Spec


@contextmanager
def timer(label: str = "timer") -> Iterator[Dict[str, float]]:
    """
    Usage:
      with timer("solve") as t:
          ...
      print(t["seconds"])
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["seconds"] = time.perf_counter() - t0


def format_duration(seconds: float) -> str:
    """Round a duration to roughly 3-4 significant figures with a sensible unit."""
    if seconds < 1e-4:
        return f"{seconds * 1e6:.1f} us"
    if seconds < 1:
        return f"{seconds * 1e3:.3f} ms"
    if seconds < 60:
        return f"{seconds:.3f} seconds"
    if seconds < 3600:
        minutes, rest = divmod(seconds, 60)
        return f"{int(minutes)} min {rest:.1f} seconds"
    hours, rest = divmod(seconds, 3600)
    return f"{int(hours)} hours {rest / 60:.1f} min"


def spec_to_dict(spec: Spec) -> Dict[str, Any]:
    return {
        "parts": [{"length": p.length, "quantity": p.quantity} for p in spec.parts],
        "stock_lengths": list(spec.stock_lengths),
        "end_trim": spec.end_trim,
        "blade_width": spec.blade_width,
    }


def plan_to_dict(plan: FullPlan) -> Dict[str, Any]:
    """
    Convert FullPlan to a JSON-friendly dict.
    Keeps only essential fields + metrics.
    """
    spec = plan.spec
    m = compute_plan_metrics(plan)
    return {
        "spec": spec_to_dict(spec),
        "pieces": [
            {
                "piece_index": i,
                "stock_length": cp.stock_length,
                "cuts": list(cp.cuts),
                "remaining": cp.remaining(spec.end_trim, spec.blade_width),
            }
            for i, cp in enumerate(plan.cut_plans)
        ],
        "totals": {
            "total_stock": m.total_stock,
            "total_part_length": m.total_part_length,
            "total_waste": m.total_waste,
            "waste_fraction": m.waste_fraction,
            "trim_loss": m.trim_loss,
            "kerf_loss": m.kerf_loss,
            "offcut": m.offcut,
            "stock_usage": [{"stock_length": k, "count": v} for k, v in m.stock_usage.items()],
        },
    }


def save_plan_json(plan: FullPlan, path: str | Path, *, indent: int = 2) -> None:
    """Save plan (pieces+cuts+metrics) into JSON for debugging/integration."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(plan_to_dict(plan), f, ensure_ascii=False, indent=indent)
