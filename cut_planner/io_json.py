# cut_planner/io_json.py
# Load a cutting job from JSON into a Spec.
#
# Expected JSON shape:
# {
#   "parts": [{"length": 54, "quantity": 2}, {"length": 43.5, "qty": 4}],
#   "stock_lengths": [72, 96],
#   "end_trim": 0.25,
#   "blade_width": 0.125
# }
# "end_trim"/"blade_width" may be omitted (config DEFAULTS are used).

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from .config import make_spec
from .types import Part, Spec
from .utils import spec_to_dict


def spec_from_dict(data: Dict[str, Any]) -> Spec:
    items = data.get("parts") or []
    if not items:
        raise ValueError("JSON missing 'parts'.")
    stocks = data.get("stock_lengths") or data.get("stocks") or []
    if not stocks:
        raise ValueError("JSON missing 'stock_lengths' (need at least one stock length).")

    parts: List[Part] = []
    for it in items:
        if "length" not in it:
            raise ValueError(f"Part missing length: {it}")
        qty = it.get("quantity", it.get("qty", it.get("count", 1)))
        parts.append(Part(length=float(it["length"]), quantity=int(qty)))

    return make_spec(
        parts,
        [float(s) for s in stocks],
        end_trim=data.get("end_trim"),
        blade_width=data.get("blade_width"),
    )


def load_spec_json(path: str | Path) -> Spec:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return spec_from_dict(data)


def save_spec_json(spec: Spec, path: str | Path, *, indent: int = 2) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(spec_to_dict(spec), f, ensure_ascii=False, indent=indent)
