# cut_planner/test_packed.py
# PackedPiece record / 64-bit word codec and the lookup tables, tested apart
# from the search.

from __future__ import annotations

import pytest

from cut_planner.errors import UnsupportedEncoding
from cut_planner.packed import MAX_CUTS, PackedPiece, PackedTables
from cut_planner.sample_data import get_example
from cut_planner.solver_exact_packed import PackedExactSolver
from cut_planner.types import CutPlan, Part, Spec


def test_word_layout() -> None:
    piece = PackedPiece.open(2, 1).add_cut(3)
    assert piece.count == 2
    # stock 2 | count 2 | newest cut (3) in the lowest cut field | older cut (1) above it
    assert piece.to_int() == 0x1322
    assert PackedPiece.from_int(0x1322) == piece


def test_empty_and_full_pieces_survive_the_word() -> None:
    assert PackedPiece(5).to_int() == 0x05
    assert PackedPiece.from_int(0x05) == PackedPiece(5, ())

    piece = PackedPiece.open(15, 15)
    for k in range(MAX_CUTS - 1):
        piece = piece.add_cut(k)
    word = piece.to_int()
    assert word < 2 ** 64
    assert PackedPiece.from_int(word) == piece


def test_limits_raise_unsupported_encoding() -> None:
    with pytest.raises(UnsupportedEncoding):
        PackedPiece.open(16, 0)
    with pytest.raises(UnsupportedEncoding):
        PackedPiece.open(0, 16)

    piece = PackedPiece.open(0, 0)
    for _ in range(MAX_CUTS - 1):
        piece = piece.add_cut(0)
    with pytest.raises(UnsupportedEncoding):
        piece.add_cut(0)

    with pytest.raises(UnsupportedEncoding):
        PackedPiece.from_int(0xF0)          # 15 cuts claimed
    with pytest.raises(UnsupportedEncoding):
        PackedPiece.from_int(0x1_0010)      # data beyond the single cut
    with pytest.raises(UnsupportedEncoding):
        PackedPiece.from_int(-1)


def test_tables_remaining_and_decode() -> None:
    tables = PackedTables(get_example("readme"))
    assert tables.stock_lengths == [72, 96]
    assert tables.part_lengths == [60, 10]
    assert tables.expand() == [0, 0, 1, 1, 1, 1]

    piece = PackedPiece.open(1, 0)
    assert tables.remaining(piece) == 35.5
    piece = piece.add_cut(1)
    assert tables.remaining(piece) == 25.375
    assert tables.decode(piece) == CutPlan(96, (60, 10))
    assert tables.total_stock([piece, PackedPiece.open(0, 1)]) == 168


def test_tables_deduplicate_part_lengths() -> None:
    spec = Spec(parts=(Part(10, 1), Part(20, 2), Part(10, 3)), stock_lengths=(100,))
    tables = PackedTables(spec)
    assert tables.part_lengths == [20, 10]
    assert tables.expand() == [0, 0, 1, 1, 1, 1]


def test_tables_reject_specs_beyond_limits() -> None:
    many_stocks = Spec(parts=(Part(10, 1),), stock_lengths=tuple(100 + i for i in range(17)))
    with pytest.raises(UnsupportedEncoding):
        PackedTables(many_stocks)

    many_parts = Spec(parts=tuple(Part(10 + i, 1) for i in range(17)), stock_lengths=(100,))
    with pytest.raises(UnsupportedEncoding):
        PackedTables(many_parts)

    # 15 > 14 * 1: a piece could need more than 14 cuts
    short_parts = Spec(parts=(Part(1, 1),), stock_lengths=(15,))
    with pytest.raises(UnsupportedEncoding):
        PackedTables(short_parts)

    PackedTables(Spec(parts=(Part(1, 1),), stock_lengths=(14,)))


def test_stock_limit_counts_distinct_lengths() -> None:
    spec = Spec(parts=(Part(10, 1),), stock_lengths=(100.0,) * 17 + (120.0,))
    tables = PackedTables(spec)
    assert tables.stock_lengths == [100, 120]
    assert PackedExactSolver(spec).uses_packed_state
