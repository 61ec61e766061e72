# cut_planner/test_solvers.py
# Solver behaviour on the example specs plus cross-checks between solvers on
# small random specs:
# - completeness and capacity of every returned plan
# - exact <= greedy, exact == packed exact == exhaustive reference
# - greedy-plus only ever shortens stock, never moves cuts
# - infeasible specs fail with InfeasibleSpec from solve() and min_stock()

from __future__ import annotations

from collections import Counter

import pytest

from cut_planner.errors import InfeasibleSpec, NotSupportedOperation
from cut_planner.sample_data import RandomSpecConfig, generate_random_spec, get_example
from cut_planner.solver_basic import BasicSolver
from cut_planner.solver_cp_sat import CpSatParams, CpSatSolver
from cut_planner.solver_exact import ExactSolver
from cut_planner.solver_exact_packed import PackedExactSolver
from cut_planner.solver_greedy import GreedyPlusSolver, GreedySolver, shrink_stock
from cut_planner.solvers import make_solver, solver_names
from cut_planner.types import CutPlan, FullPlan, Part, Spec
from cut_planner.validate import raise_on_errors, validate_plan

SMALL_EXAMPLES = ["readme", "greed_counter", "oversized_parts", "blade_width_test"]
PLANNING_SOLVERS = [GreedySolver, GreedyPlusSolver, ExactSolver, PackedExactSolver]

# name -> (exact, greedy, greedy_plus) total stock
EXPECTED = {
    "readme": (168, 192, 168),
    "greed_counter": (24, 36, 36),
    "oversized_parts": (20, 24, 20),
    "blade_width_test": (17.75, 21, 20.5),
}


def _random_specs():
    for seed in range(6):
        yield generate_random_spec(
            RandomSpecConfig(seed=seed, n_unique=3, qty_range=(1, 2), length_range=(10.0, 60.0))
        )


def _assert_complete_and_within_capacity(plan: FullPlan) -> None:
    spec = plan.spec
    wanted = Counter()
    for p in spec.parts:
        wanted[p.length] += p.quantity
    assert Counter(plan.all_cuts()) == wanted
    for cp in plan.cut_plans:
        assert cp.remaining(spec.end_trim, spec.blade_width) >= 0
        assert cp.stock_length in spec.stock_lengths


@pytest.mark.parametrize("name", SMALL_EXAMPLES)
@pytest.mark.parametrize("solver_cls", PLANNING_SOLVERS)
def test_plans_are_complete_and_fit(name: str, solver_cls) -> None:
    plan = solver_cls(get_example(name)).solve()
    _assert_complete_and_within_capacity(plan)
    raise_on_errors(validate_plan(plan))


@pytest.mark.parametrize("name", SMALL_EXAMPLES)
def test_expected_totals(name: str) -> None:
    spec = get_example(name)
    exact, greedy, greedy_plus = EXPECTED[name]

    assert ExactSolver(spec).solve().total_stock == pytest.approx(exact)
    assert ExactSolver(spec).min_stock() == pytest.approx(exact)
    assert PackedExactSolver(spec).solve().total_stock == pytest.approx(exact)
    assert BasicSolver(spec).min_stock() == pytest.approx(exact)
    assert GreedySolver(spec).solve().total_stock == pytest.approx(greedy)
    assert GreedySolver(spec).min_stock() == pytest.approx(greedy)
    assert GreedyPlusSolver(spec).solve().total_stock == pytest.approx(greedy_plus)


def test_greedy_counter_example() -> None:
    spec = get_example("greed_counter")
    greedy = GreedySolver(spec).solve()
    exact = ExactSolver(spec).solve()

    assert [cp.cuts for cp in greedy.cut_plans] == [(5, 5), (3, 3, 3), (3,)]
    assert ExactSolver(spec).min_stock() < greedy.total_stock
    assert sorted(cp.cuts for cp in exact.cut_plans) == [(5, 3, 3), (5, 3, 3)]


def test_kerf_is_charged_between_cuts_only() -> None:
    spec = get_example("blade_width_test")
    plan = ExactSolver(spec).solve()

    # 1 + 1 fits in 3.625 only if two cuts cost one kerf: 0.5 + 2 + 0.125 <= 3.625
    assert sorted(cp.stock_length for cp in plan.cut_plans) == [3.625, 3.625, 10.5]
    for cp in plan.cut_plans:
        assert cp.remaining(spec.end_trim, spec.blade_width) >= 0


def test_last_part_uses_the_stock_that_fits() -> None:
    # The only part fits none of the shorter stock lengths
    spec = Spec(parts=(Part(50, 1),), stock_lengths=(20, 30, 60, 80))
    for solver_cls in (ExactSolver, PackedExactSolver):
        plan = solver_cls(spec).solve()
        assert [cp.stock_length for cp in plan.cut_plans] == [60]
    assert ExactSolver(spec).min_stock() == 60


def test_determinism() -> None:
    spec = get_example("readme")
    for solver_cls in PLANNING_SOLVERS:
        solver = solver_cls(spec)
        a = solver.solve()
        b = solver.solve()
        assert a.cut_plans == b.cut_plans
        assert solver.min_stock() == solver.min_stock()


@pytest.mark.parametrize("solver_cls", PLANNING_SOLVERS + [BasicSolver])
def test_infeasible_spec_is_reported(solver_cls) -> None:
    spec = Spec(parts=(Part(100, 1),), stock_lengths=(10,), end_trim=0, blade_width=0)
    solver = solver_cls(spec)
    with pytest.raises(InfeasibleSpec) as exc:
        solver.min_stock()
    assert exc.value.part == Part(100, 1)
    if solver_cls is not BasicSolver:
        with pytest.raises(InfeasibleSpec):
            solver.solve()


def test_basic_solver_does_not_plan() -> None:
    with pytest.raises(NotSupportedOperation):
        BasicSolver(get_example("readme")).solve()


def test_empty_spec() -> None:
    spec = Spec(parts=(), stock_lengths=(10,))
    for solver_cls in PLANNING_SOLVERS:
        plan = solver_cls(spec).solve()
        assert plan.cut_plans == ()
        assert solver_cls(spec).min_stock() == 0
    assert BasicSolver(spec).min_stock() == 0


def test_packed_solver_falls_back_silently() -> None:
    # Shortest part * 14 < longest stock: beyond the packed encoding
    spec = Spec(parts=(Part(1, 3), Part(9, 2)), stock_lengths=(20, 30), end_trim=0.25, blade_width=0.125)
    packed = PackedExactSolver(spec)
    assert not packed.uses_packed_state

    exact = ExactSolver(spec)
    assert packed.solve() == exact.solve()
    assert [cp.cuts for cp in packed.solve().cut_plans] == [cp.cuts for cp in exact.solve().cut_plans]
    assert packed.min_stock() == exact.min_stock()


def test_cross_implementation_equivalence() -> None:
    for spec in _random_specs():
        exact = ExactSolver(spec)
        packed = PackedExactSolver(spec)
        assert packed.uses_packed_state

        exact_plan = exact.solve()
        packed_plan = packed.solve()
        _assert_complete_and_within_capacity(exact_plan)
        _assert_complete_and_within_capacity(packed_plan)

        assert packed_plan.total_stock == pytest.approx(exact_plan.total_stock)
        assert exact.min_stock() == pytest.approx(exact_plan.total_stock)
        assert BasicSolver(spec).min_stock() == pytest.approx(exact_plan.total_stock)


def test_exact_never_worse_than_greedy() -> None:
    for spec in list(_random_specs()) + [get_example(n) for n in SMALL_EXAMPLES]:
        best = ExactSolver(spec).min_stock()
        assert best <= GreedySolver(spec).solve().total_stock + 1e-9
        assert best <= GreedyPlusSolver(spec).solve().total_stock + 1e-9


def test_greedy_plus_keeps_cuts_and_never_costs_more() -> None:
    for spec in list(_random_specs()) + [get_example(n) for n in SMALL_EXAMPLES]:
        greedy = GreedySolver(spec).solve()
        plus = GreedyPlusSolver(spec).solve()
        assert plus.total_stock <= greedy.total_stock
        assert [cp.cuts for cp in plus.cut_plans] == [cp.cuts for cp in greedy.cut_plans]
        _assert_complete_and_within_capacity(plus)


def test_shrink_stock_picks_shortest_fitting_length() -> None:
    spec = get_example("readme")
    plan = FullPlan(spec, [CutPlan(96, (60, 10)), CutPlan(96, (10,)), CutPlan(96, (60, 10, 10, 10))])
    shrunk = shrink_stock(plan, spec.stock_lengths)
    assert [cp.stock_length for cp in shrunk.cut_plans] == [72, 72, 96]
    # the input plan is untouched
    assert [cp.stock_length for cp in plan.cut_plans] == [96, 96, 96]


def test_cp_sat_agrees_with_exact() -> None:
    for name in ("readme", "blade_width_test"):
        spec = get_example(name)
        solver = CpSatSolver(spec, CpSatParams(time_limit_s=20.0, workers=4))
        plan = solver.solve()
        _assert_complete_and_within_capacity(plan)
        assert solver.proven_optimal
        assert plan.total_stock == pytest.approx(ExactSolver(spec).min_stock())


def test_registry() -> None:
    assert solver_names() == ["basic", "cp_sat", "exact", "exact_packed", "greedy", "greedy_plus"]
    spec = get_example("readme")
    assert isinstance(make_solver("exact_packed", spec), PackedExactSolver)
    with pytest.raises(ValueError):
        make_solver("simulated_annealing", spec)


# Decimal lengths whose sums land exactly on a usable length: the float
# arithmetic never hits 0 exactly, so every solver must treat it as a fit.
DECIMAL_SPECS = [
    (Spec(parts=(Part(4.6, 3), Part(3.3, 1)), stock_lengths=(6.9, 8.2), end_trim=0.1, blade_width=0.1), 22.0),
    (Spec(parts=(Part(4.9, 1), Part(4.8, 1)), stock_lengths=(8.8, 10.1), end_trim=0.1, blade_width=0.2), 10.1),
]


def _decimal_random_specs():
    for seed in range(8):
        yield generate_random_spec(
            RandomSpecConfig(
                seed=seed,
                n_unique=3,
                qty_range=(1, 2),
                length_range=(1.0, 5.0),
                step=0.1,
                stock_lengths=(6.9, 8.2, 10.1),
                end_trim=0.1,
                blade_width=0.1,
            )
        )


@pytest.mark.parametrize("spec,expected", DECIMAL_SPECS)
def test_exact_fit_with_decimal_lengths(spec: Spec, expected: float) -> None:
    packed = PackedExactSolver(spec)
    assert packed.uses_packed_state

    assert ExactSolver(spec).solve().total_stock == pytest.approx(expected)
    assert ExactSolver(spec).min_stock() == pytest.approx(expected)
    assert packed.solve().total_stock == pytest.approx(expected)
    assert BasicSolver(spec).min_stock() == pytest.approx(expected)

    for solver_cls in PLANNING_SOLVERS:
        plan = solver_cls(spec).solve()
        _assert_complete_and_within_capacity(plan)
        raise_on_errors(validate_plan(plan))


def test_decimal_random_specs_agree() -> None:
    for spec in _decimal_random_specs():
        packed = PackedExactSolver(spec)
        assert packed.uses_packed_state

        exact_total = ExactSolver(spec).solve().total_stock
        assert packed.solve().total_stock == pytest.approx(exact_total)
        assert ExactSolver(spec).min_stock() == pytest.approx(exact_total)
        assert BasicSolver(spec).min_stock() == pytest.approx(exact_total)

        for solver_cls in PLANNING_SOLVERS:
            _assert_complete_and_within_capacity(solver_cls(spec).solve())


def test_duplicate_stock_lengths_are_searched_once() -> None:
    spec = Spec(parts=(Part(10, 2),), stock_lengths=(30, 30, 12, 12), end_trim=0, blade_width=0)
    assert ExactSolver(spec).stock_lengths == [12, 30]
    assert ExactSolver(spec).solve().total_stock == 24
    assert PackedExactSolver(spec).solve().total_stock == 24
    assert BasicSolver(spec).min_stock() == 24
