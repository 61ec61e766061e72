# cut_planner/packed.py
# Compact, immutable state for one stock piece during the exact search.
#
# A PackedPiece is a fixed-capacity record:
#   stock_index : index into the ascending stock table        (0..15)
#   cuts        : part-table indices in the order they were cut (0..15 each, at most 14)
#
# to_int()/from_int() map it onto one 64-bit word:
#   bits 0-3   stock index
#   bits 4-7   cut count
#   bits 8-63  14 x 4-bit cut fields, the most recent cut in bits 8-11
# The word is what the limits are sized for; the search itself works on the
# record so the codec can be tested on its own.

from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple, Sequence, Tuple

from .config import DEFAULTS
from .errors import UnsupportedEncoding
from .types import CutPlan, Spec, fits

FIELD_BITS = DEFAULTS.packed_field_bits
FIELD_MASK = (1 << FIELD_BITS) - 1
MAX_INDEX = FIELD_MASK
MAX_CUTS = DEFAULTS.packed_max_cuts
CUTS_SHIFT = 2 * FIELD_BITS
WORD_MASK = (1 << DEFAULTS.packed_word_bits) - 1


def _check_index(kind: str, index: int) -> None:
    if not 0 <= index <= MAX_INDEX:
        raise UnsupportedEncoding(f"{kind} index {index} does not fit in {FIELD_BITS} bits")


class PackedPiece(NamedTuple):
    stock_index: int
    cuts: Tuple[int, ...] = ()

    @classmethod
    def open(cls, stock_index: int, part_index: int) -> "PackedPiece":
        """A fresh piece of stock with its first cut."""
        _check_index("stock", stock_index)
        _check_index("part", part_index)
        return cls(stock_index, (part_index,))

    @property
    def count(self) -> int:
        return len(self.cuts)

    def add_cut(self, part_index: int) -> "PackedPiece":
        if len(self.cuts) >= MAX_CUTS:
            raise UnsupportedEncoding(f"a packed piece holds at most {MAX_CUTS} cuts")
        _check_index("part", part_index)
        return PackedPiece(self.stock_index, self.cuts + (part_index,))

    def to_int(self) -> int:
        _check_index("stock", self.stock_index)
        if len(self.cuts) > MAX_CUTS:
            raise UnsupportedEncoding(f"a packed piece holds at most {MAX_CUTS} cuts")
        word = self.stock_index | (len(self.cuts) << FIELD_BITS)
        shift = CUTS_SHIFT
        for part_index in reversed(self.cuts):
            _check_index("part", part_index)
            word |= part_index << shift
            shift += FIELD_BITS
        return word

    @classmethod
    def from_int(cls, word: int) -> "PackedPiece":
        if not 0 <= word <= WORD_MASK:
            raise UnsupportedEncoding(f"packed word {word:#x} is not a {DEFAULTS.packed_word_bits}-bit value")
        stock_index = word & FIELD_MASK
        count = (word >> FIELD_BITS) & FIELD_MASK
        if count > MAX_CUTS:
            raise UnsupportedEncoding(f"packed word {word:#x} claims {count} cuts")
        if word >> (CUTS_SHIFT + count * FIELD_BITS):
            raise UnsupportedEncoding(f"packed word {word:#x} has data beyond its {count} cuts")
        newest_first = [(word >> (CUTS_SHIFT + k * FIELD_BITS)) & FIELD_MASK for k in range(count)]
        return cls(stock_index, tuple(reversed(newest_first)))


class PackedTables:
    """
    Lookup tables shared by every PackedPiece of one spec.

    Raises UnsupportedEncoding if the spec exceeds the packed limits:
    more than 16 distinct stock lengths, more than 16 distinct part lengths, or a
    longest stock over 14x the shortest part (a piece could need > 14 cuts).
    """

    def __init__(self, spec: Spec):
        self.spec = spec
        self.blade_width = spec.blade_width
        self.stock_lengths: List[float] = sorted(set(spec.stock_lengths))
        self.capacities: List[float] = [spec.usable_length(s) for s in self.stock_lengths]

        # Distinct part lengths, longest first
        self.part_lengths: List[float] = sorted({p.length for p in spec.parts}, reverse=True)
        self.part_index: Dict[float, int] = {length: i for i, length in enumerate(self.part_lengths)}

        if len(self.stock_lengths) > DEFAULTS.packed_max_stock_lengths:
            raise UnsupportedEncoding(f"{len(self.stock_lengths)} distinct stock lengths (max {DEFAULTS.packed_max_stock_lengths})")
        if len(self.part_lengths) > DEFAULTS.packed_max_part_lengths:
            raise UnsupportedEncoding(f"{len(self.part_lengths)} distinct part lengths (max {DEFAULTS.packed_max_part_lengths})")
        if self.part_lengths and self.part_lengths[-1] * MAX_CUTS < self.stock_lengths[-1]:
            raise UnsupportedEncoding(
                f"stock {self.stock_lengths[-1]:g} could hold more than {MAX_CUTS} cuts "
                f"of {self.part_lengths[-1]:g}"
            )

    def expand(self) -> List[int]:
        """One part-table index per part instance, longest first."""
        out: List[int] = []
        for p in sorted(self.spec.parts):
            out.extend([self.part_index[p.length]] * p.quantity)
        return out

    def remaining(self, piece: PackedPiece) -> float:
        """Usable length left on the piece, kerf charged between adjacent cuts."""
        rem = self.capacities[piece.stock_index] + self.blade_width
        for i in piece.cuts:
            rem -= self.part_lengths[i] + self.blade_width
        return rem

    def stock_length(self, piece: PackedPiece) -> float:
        return self.stock_lengths[piece.stock_index]

    def total_stock(self, pieces: Iterable[PackedPiece]) -> float:
        return sum(self.stock_lengths[p.stock_index] for p in pieces)

    def decode(self, piece: PackedPiece) -> CutPlan:
        return CutPlan(self.stock_lengths[piece.stock_index], tuple(self.part_lengths[i] for i in piece.cuts))

    def decode_all(self, pieces: Sequence[PackedPiece]) -> List[CutPlan]:
        return [self.decode(p) for p in pieces]
