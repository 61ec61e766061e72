# cut_planner/test_cli.py
# End-to-end: CLI, runner, comparison harness and plotting.

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from cut_planner.cli import main
from cut_planner.plotting import PlotStyle, plot_plan, save_plan_png
from cut_planner.run import compare, run_solver
from cut_planner.sample_data import get_example
from cut_planner.solver_exact import ExactSolver
from cut_planner.solver_greedy import GreedySolver
from cut_planner.types import FullPlan


def test_cli_solves_example(capsys) -> None:
    assert main(["--example", "readme", "--solver", "exact"]) == 0
    out = capsys.readouterr().out
    assert "Total Stock: 168" in out
    assert "Buy: 1 x 72, 1 x 96" in out


def test_cli_min_stock_from_text(capsys) -> None:
    assert main(["--parts", "5x2,3x4", "--stock", "12", "--min-stock"]) == 0
    assert "MinStock: 24" in capsys.readouterr().out


def test_cli_reports_infeasible_spec(capsys) -> None:
    assert main(["--parts", "100", "--stock", "10", "--trim", "0", "--kerf", "0"]) == 2
    assert "does not fit any stock" in capsys.readouterr().err


def test_cli_compare_and_export(tmp_path, capsys) -> None:
    code = main(["--example", "greed_counter", "--solver", "greedy", "--compare", "exact", "--trials", "1"])
    assert code == 0
    out = capsys.readouterr().out
    assert "=== greedy ===" in out and "=== exact ===" in out

    assert main(["--example", "readme", "--out", str(tmp_path), "--png", str(tmp_path / "plan.png")]) == 0
    assert (tmp_path / "plan_cuts.csv").exists()
    assert (tmp_path / "plan.json").exists()
    assert (tmp_path / "plan.png").exists()


def test_cli_require_equal_fails_on_mismatch() -> None:
    argv = ["--example", "greed_counter", "--solver", "greedy", "--compare", "exact", "--require-equal"]
    assert main(argv) == 1


def test_run_solver_returns_metrics() -> None:
    res = run_solver(get_example("blade_width_test"), "exact_packed")
    assert res.plan.total_stock == pytest.approx(17.75)
    assert res.metrics.pieces == 3
    assert res.seconds >= 0


def test_compare_harness() -> None:
    spec = get_example("greed_counter")
    same = compare(ExactSolver(spec).solve, ExactSolver(spec).solve, trials=2)
    assert same.equal
    assert same.trials == 2
    assert isinstance(same.dut_result, FullPlan)

    differ = compare(GreedySolver(spec).min_stock, ExactSolver(spec).min_stock, trials=3, require_equality=True)
    assert not differ.equal
    assert differ.trials == 0
    assert differ.dut_result == 36 and differ.benchmark_result == 24


def test_plotting(tmp_path) -> None:
    plan = ExactSolver(get_example("readme")).solve()
    fig = plot_plan(plan, style=PlotStyle(show_grid=True))
    assert len(fig.axes) == 1
    assert len(fig.axes[0].get_yticklabels()) == plan.num_pieces()

    save_plan_png(plan, str(tmp_path / "readme.png"))
    assert (tmp_path / "readme.png").stat().st_size > 0

    with pytest.raises(ValueError):
        plot_plan(FullPlan(plan.spec, ()))


def test_cli_reports_bad_input(tmp_path, capsys) -> None:
    assert main(["--parts", "54xtwo", "--stock", "72"]) == 2
    assert "[CUT] ERROR" in capsys.readouterr().err

    bad = tmp_path / "job.json"
    bad.write_text("{not json", encoding="utf-8")
    assert main(["--spec", str(bad)]) == 2
    assert "[CUT] ERROR" in capsys.readouterr().err
