# cut_planner/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (kerf, trim defaults, encoding limits) in one place.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .types import CAPACITY_TOLERANCE, Part, Spec


@dataclass(frozen=True)
class Defaults:
    # Typical lumber-yard numbers (inches): trim a quarter off each end,
    # an 1/8" circular saw blade
    default_end_trim: float = 0.25
    default_blade_width: float = 0.125

    # Packed piece layout: 4-bit stock index, 4-bit count, 14 x 4-bit cut slots
    packed_field_bits: int = 4
    packed_word_bits: int = 64
    packed_max_stock_lengths: int = 16
    packed_max_part_lengths: int = 16
    packed_max_cuts: int = 14

    # Comparison harness
    default_trials: int = 10

    # CP-SAT cross-check
    cp_sat_time_limit_s: float = 30.0
    cp_sat_scale: int = 1000   # lengths are rounded to 1/scale units
    cp_sat_workers: int = 8

    # Depth-first search recurses once per part instance
    recursion_headroom: int = 200

    # Tolerance when validating floating point capacities
    capacity_tolerance: float = CAPACITY_TOLERANCE


DEFAULTS = Defaults()


def make_spec(
    parts: Iterable[Part],
    stock_lengths: Sequence[float],
    *,
    end_trim: Optional[float] = None,
    blade_width: Optional[float] = None,
) -> Spec:
    """
    Convenience factory filling trim and kerf from DEFAULTS.
    """
    return Spec(
        parts=tuple(parts),
        stock_lengths=tuple(float(s) for s in stock_lengths),
        end_trim=float(end_trim if end_trim is not None else DEFAULTS.default_end_trim),
        blade_width=float(blade_width if blade_width is not None else DEFAULTS.default_blade_width),
    )


def parse_lengths_text(text: str) -> List[float]:
    """
    Parse '72,96,120' -> [72.0, 96.0, 120.0]
    """
    vals = [v.strip() for v in text.split(",") if v.strip() != ""]
    if not vals:
        raise ValueError("lengths text must be like '72,96,120'")
    return [float(v) for v in vals]


def parse_parts_text(text: str) -> List[Part]:
    """
    Parse '54x2,43.5x4,9.75' -> [Part(54, 2), Part(43.5, 4), Part(9.75, 1)]
    ('*' is accepted in place of 'x'.)
    """
    parts: List[Part] = []
    for item in text.split(","):
        s = item.strip().lower().replace("*", "x")
        if not s:
            continue
        if "x" in s:
            a, b = s.split("x", 1)
            parts.append(Part(length=float(a), quantity=int(float(b))))
        else:
            parts.append(Part(length=float(s), quantity=1))
    if not parts:
        raise ValueError("parts text must be like '54x2,43.5x4'")
    return parts
