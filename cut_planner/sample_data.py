# cut_planner/sample_data.py
# Example specifications (real lumber jobs + contrived edge cases) and a seeded
# random generator for quick benchmarking and cross-checking solvers.
# Lengths are in inches.

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .types import Part, Spec


EXAMPLES: Dict[str, Spec] = {
    # Parts for a mini garden house
    "mini_garden": Spec(
        parts=(Part(54, 2), Part(43.5, 4), Part(22, 4), Part(48, 3), Part(9.75, 8)),
        stock_lengths=(6 * 12, 8 * 12),
        end_trim=0.25,
        blade_width=0.125,
    ),
    # 2x4 parts for a climbing wall
    "climbing_wall_2x4": Spec(
        parts=(Part(42.75, 6), Part(44.5, 6), Part(112, 2), Part(55.5, 1), Part(35.25, 1)),
        stock_lengths=(8 * 12, 10 * 12, 12 * 12),
        end_trim=0.25,
        blade_width=0.125,
    ),
    # 4x4 parts for the same climbing wall
    "climbing_wall_4x4": Spec(
        parts=(Part(75, 2), Part(70, 2), Part(106, 5), Part(42.75, 4), Part(44.5, 4)),
        stock_lengths=(8 * 12, 10 * 12, 12 * 12),
        end_trim=0.25,
        blade_width=0.125,
    ),
    "readme": Spec(
        parts=(Part(60, 2), Part(10, 4)),
        stock_lengths=(6 * 12, 8 * 12),
        end_trim=0.25,
        blade_width=0.125,
    ),
    # The greedy heuristic is provably not optimal here
    "greed_counter": Spec(
        parts=(Part(5, 2), Part(3, 4)),
        stock_lengths=(12,),
        end_trim=0.25,
        blade_width=0.125,
    ),
    # Some parts are longer than some stock lengths
    "oversized_parts": Spec(
        parts=(Part(5, 2), Part(3, 2)),
        stock_lengths=(6, 4, 2),
        end_trim=0.25,
        blade_width=0.125,
    ),
    # Only correct if kerf is charged between cuts, not per cut
    "blade_width_test": Spec(
        parts=(Part(10, 1), Part(1, 3)),
        stock_lengths=(10.5, 10, 3.625),
        end_trim=0.25,
        blade_width=0.125,
    ),
}


def example_names() -> List[str]:
    return sorted(EXAMPLES)


def get_example(name: str) -> Spec:
    try:
        return EXAMPLES[name]
    except KeyError:
        raise ValueError(f"Unknown example {name!r}; choose one of {', '.join(example_names())}") from None


@dataclass(frozen=True)
class RandomSpecConfig:
    seed: int = 123
    n_unique: int = 4
    qty_range: Tuple[int, int] = (1, 3)

    # part lengths are drawn on a grid of `step` (e.g. 0.25 or 0.1)
    length_range: Tuple[float, float] = (6.0, 60.0)
    step: float = 0.25

    stock_lengths: Tuple[float, ...] = (72.0, 96.0, 120.0)
    end_trim: float = 0.25
    blade_width: float = 0.125


def generate_random_spec(cfg: RandomSpecConfig) -> Spec:
    """
    Generate a feasible Spec: part lengths never exceed the longest usable stock.
    """
    rnd = random.Random(cfg.seed)
    cap = max(cfg.stock_lengths) - 2 * cfg.end_trim
    lo, hi = cfg.length_range
    hi = min(hi, cap)
    steps = int(round((hi - lo) / cfg.step, 6))

    parts: List[Part] = []
    for _ in range(cfg.n_unique):
        length = round(lo + rnd.randint(0, steps) * cfg.step, 6)
        qty = rnd.randint(*cfg.qty_range)
        parts.append(Part(length=length, quantity=qty))

    return Spec(
        parts=tuple(parts),
        stock_lengths=cfg.stock_lengths,
        end_trim=cfg.end_trim,
        blade_width=cfg.blade_width,
    )
