# cut_planner/io_csv.py
# CSV import/export helpers:
# - read a parts list (length,quantity)
# - export the cut list per piece (for the saw operator)
# - export a per-piece summary (for buying stock)

from __future__ import annotations

import csv
from pathlib import Path
from typing import List

from .types import FullPlan, Part


def read_parts_csv(path: str | Path) -> List[Part]:
    """
    CSV parts format (header required):
      length,quantity
    'qty' is accepted for quantity, which defaults to 1.
    """
    path = Path(path)
    parts: List[Part] = []
    with path.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if "length" not in (reader.fieldnames or []):
            raise ValueError("CSV must contain a 'length' column")
        for row in reader:
            raw = (row.get("length") or "").strip()
            if not raw:
                continue
            qty = row.get("quantity") or row.get("qty") or "1"
            parts.append(Part(length=float(raw), quantity=int(float(qty))))
    return parts


def export_cut_plans_csv(plan: FullPlan, path: str | Path) -> None:
    """
    One row per cut, in cutting order within each piece.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = ["piece_index", "stock_length", "cut_index", "length"]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for i, cp in enumerate(plan.cut_plans):
            for k, length in enumerate(cp.cuts):
                w.writerow(
                    {
                        "piece_index": i,
                        "stock_length": cp.stock_length,
                        "cut_index": k,
                        "length": length,
                    }
                )


def export_summary_csv(plan: FullPlan, path: str | Path) -> None:
    """
    One-row-per-piece summary.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    spec = plan.spec

    fieldnames = ["piece_index", "stock_length", "num_cuts", "cut_length", "remaining"]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for i, cp in enumerate(plan.cut_plans):
            w.writerow(
                {
                    "piece_index": i,
                    "stock_length": cp.stock_length,
                    "num_cuts": len(cp.cuts),
                    "cut_length": sum(cp.cuts),
                    "remaining": cp.remaining(spec.end_trim, spec.blade_width),
                }
            )


def export_all(plan: FullPlan, out_dir: str | Path, prefix: str = "plan") -> None:
    """
    Export cut list and per-piece summary into out_dir.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    export_cut_plans_csv(plan, out_dir / f"{prefix}_cuts.csv")
    export_summary_csv(plan, out_dir / f"{prefix}_summary.csv")
