# cut_planner/types.py
# Core data structures for 1D cutting-stock planning (lumber, bars, pipes).
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

# Slack allowed when a sum of decimal lengths lands exactly on a capacity:
# 4.6 + 0.1 + 3.3 must fit in 8.0 whichever order the floats are added in.
CAPACITY_TOLERANCE = 1e-9


def fits(room: float, need: float) -> bool:
    """The one capacity rule every solver uses: does `need` fit in `room`?"""
    return room >= need - CAPACITY_TOLERANCE


# ----------------------------
# Inputs
# ----------------------------

@dataclass(frozen=True)
class Part:
    """A required part length and how many copies of it the design needs."""
    length: float
    quantity: int = 1

    def __post_init__(self):
        if not self.length > 0:
            raise ValueError(f"Part length must be > 0, got {self.length}")
        if int(self.quantity) != self.quantity or self.quantity <= 0:
            raise ValueError(f"Part quantity must be an integer >= 1, got {self.quantity}")
        object.__setattr__(self, "quantity", int(self.quantity))

    def __lt__(self, other: "Part") -> bool:
        # Longest first: sorted(parts) yields descending length.
        if not isinstance(other, Part):
            return NotImplemented
        return self.length > other.length

    def __str__(self) -> str:
        return f"{self.length:g}x{self.quantity}"


@dataclass(frozen=True)
class Spec:
    """
    A design specification: the parts to make and the stock they can be cut from.

    end_trim is removed from BOTH ends of every raw stock piece,
    blade_width is lost between each pair of adjacent cuts.
    Feasibility is not enforced here; solvers report it as InfeasibleSpec.
    """
    parts: Tuple[Part, ...]
    stock_lengths: Tuple[float, ...]
    end_trim: float = 0.0
    blade_width: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "parts", tuple(self.parts))
        object.__setattr__(self, "stock_lengths", tuple(float(s) for s in self.stock_lengths))
        if not self.stock_lengths:
            raise ValueError("Spec needs at least one stock length")
        for s in self.stock_lengths:
            if not s > 0:
                raise ValueError(f"Stock lengths must be > 0, got {s}")
        if self.end_trim < 0:
            raise ValueError(f"end_trim must be >= 0, got {self.end_trim}")
        if self.blade_width < 0:
            raise ValueError(f"blade_width must be >= 0, got {self.blade_width}")
        for p in self.parts:
            if not isinstance(p, Part):
                raise ValueError(f"Spec.parts must contain Part objects, got {p!r}")

    def usable_length(self, stock_length: float) -> float:
        return stock_length - 2 * self.end_trim

    @property
    def max_usable_length(self) -> float:
        return self.usable_length(max(self.stock_lengths))

    def infeasible_parts(self) -> List[Part]:
        """Parts that no stock length can hold even on its own."""
        cap = self.max_usable_length
        return [p for p in self.parts if not fits(cap, p.length)]

    def is_feasible(self) -> bool:
        return not self.infeasible_parts()

    @property
    def part_count(self) -> int:
        return sum(p.quantity for p in self.parts)

    @property
    def total_part_length(self) -> float:
        return sum(p.length * p.quantity for p in self.parts)


def expand_parts(parts: Iterable[Part]) -> List[float]:
    """Expand quantities into one length per instance, longest first (stable order)."""
    out: List[float] = []
    for p in sorted(parts):
        out.extend([p.length] * p.quantity)
    return out


# ----------------------------
# Outputs / plan objects
# ----------------------------

@dataclass(frozen=True)
class CutPlan:
    """
    The cuts made on one piece of stock, in the order they were added.
    Immutable: every "mutator" returns a new CutPlan.
    """
    stock_length: float
    cuts: Tuple[float, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "cuts", tuple(self.cuts))

    def add_cut(self, length: float) -> "CutPlan":
        return CutPlan(self.stock_length, self.cuts + (length,))

    def add_cuts(self, lengths: Iterable[float]) -> "CutPlan":
        return CutPlan(self.stock_length, self.cuts + tuple(lengths))

    def change_stock(self, stock_length: float) -> "CutPlan":
        return CutPlan(stock_length, self.cuts)

    def remaining(self, end_trim: float, blade_width: float) -> float:
        """
        Usable stock left over; kerf is charged once per adjacent pair of cuts.
        Rounding noise within CAPACITY_TOLERANCE of an exact fit reads as 0.
        """
        if not self.cuts:
            return self.stock_length - 2 * end_trim
        rem = self.stock_length - 2 * end_trim - sum(self.cuts) - blade_width * (len(self.cuts) - 1)
        if -CAPACITY_TOLERANCE < rem < 0:
            return 0.0
        return rem

    def describe(self, end_trim: float, blade_width: float) -> str:
        head = f"{self.stock_length:g}:"
        body = "".join(f" {c:g}" for c in self.cuts)
        return f"{head}{body} ({self.remaining(end_trim, blade_width):g} remaining)"

    def __str__(self) -> str:
        return f"{self.stock_length:g}:" + "".join(f" {c:g}" for c in self.cuts)


@dataclass(frozen=True, eq=False)
class FullPlan:
    """All stock and cuts needed to satisfy a Spec."""
    spec: Spec
    cut_plans: Tuple[CutPlan, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "cut_plans", tuple(self.cut_plans))

    @property
    def total_stock(self) -> float:
        return sum(cp.stock_length for cp in self.cut_plans)

    @property
    def total_part_length(self) -> float:
        return self.spec.total_part_length

    @property
    def total_waste(self) -> float:
        return self.total_stock - self.total_part_length

    @property
    def waste_fraction(self) -> float:
        total = self.total_stock
        if total <= 0:
            return 0.0
        return self.total_waste / total

    def num_pieces(self) -> int:
        return len(self.cut_plans)

    def all_cuts(self) -> List[float]:
        return [c for cp in self.cut_plans for c in cp.cuts]

    # Plans compare by what they cost, not by how the cuts are laid out.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FullPlan):
            return NotImplemented
        return self.spec == other.spec and math.isclose(
            self.total_stock, other.total_stock, rel_tol=1e-9, abs_tol=1e-9
        )

    def __hash__(self) -> int:
        return hash(self.spec)

    def __str__(self) -> str:
        lines = [
            f"Total Stock: {self.total_stock:g}, Total Part Length: {self.total_part_length:g}, "
            f"Total Waste: {self.total_waste:g}, Waste Percentage: {self.waste_fraction * 100:.2f}%"
        ]
        for cp in self.cut_plans:
            lines.append(cp.describe(self.spec.end_trim, self.spec.blade_width))
        return "\n".join(lines)
