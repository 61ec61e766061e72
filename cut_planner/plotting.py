# cut_planner/plotting.py
# Minimal matplotlib visualization: every stock piece as one horizontal bar,
# with end trim, parts, kerf gaps and the leftover offcut drawn in order.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .types import CutPlan, FullPlan


@dataclass(frozen=True)
class PlotStyle:
    show_labels: bool = True
    show_trim: bool = True
    show_grid: bool = False
    font_size: int = 7
    bar_height: float = 0.6
    trim_color: Tuple[float, float, float] = (0.55, 0.55, 0.55)
    offcut_color: Tuple[float, float, float] = (0.92, 0.92, 0.92)


def _hash_color(key: str) -> Tuple[float, float, float]:
    """Deterministic pastel-ish color from a string."""
    h = 2166136261
    for ch in key.encode("utf-8"):
        h ^= ch
        h *= 16777619
        h &= 0xFFFFFFFF
    # map to [0.3..0.9] range for readability
    r = 0.3 + ((h >> 0) & 0xFF) / 255 * 0.6
    g = 0.3 + ((h >> 8) & 0xFF) / 255 * 0.6
    b = 0.3 + ((h >> 16) & 0xFF) / 255 * 0.6
    return (r, g, b)


def _piece_label(cp: CutPlan, end_trim: float, blade_width: float) -> str:
    return f"{cp.stock_length:g} ({cp.remaining(end_trim, blade_width):g} left)"


def _draw_piece(ax, row: int, cp: CutPlan, end_trim: float, blade_width: float, style: PlotStyle) -> None:
    y = row - style.bar_height / 2
    hgt = style.bar_height

    ax.add_patch(Rectangle((0, y), cp.stock_length, hgt, facecolor=style.offcut_color, edgecolor="black", linewidth=0.8))

    x = 0.0
    if style.show_trim and end_trim > 0:
        ax.add_patch(Rectangle((0, y), end_trim, hgt, facecolor=style.trim_color, linewidth=0))
        ax.add_patch(Rectangle((cp.stock_length - end_trim, y), end_trim, hgt, facecolor=style.trim_color, linewidth=0))
    x += end_trim

    for k, length in enumerate(cp.cuts):
        if k > 0:
            x += blade_width
        ax.add_patch(
            Rectangle((x, y), length, hgt, facecolor=_hash_color(f"{length:g}"), edgecolor="black", linewidth=0.6)
        )
        if style.show_labels:
            ax.text(x + length / 2, row, f"{length:g}", ha="center", va="center", fontsize=style.font_size)
        x += length


def plot_plan(
    plan: FullPlan,
    style: Optional[PlotStyle] = None,
    figsize: Optional[Tuple[float, float]] = None,
) -> plt.Figure:
    """
    Draw all pieces of the plan in one matplotlib figure, one bar per piece.
    """
    style = style or PlotStyle()

    n = len(plan.cut_plans)
    if n == 0:
        raise ValueError("Plan has no pieces to plot")

    if figsize is None:
        figsize = (10, 0.6 * n + 1.5)

    fig, ax = plt.subplots(figsize=figsize)
    spec = plan.spec
    labels: List[str] = []

    for row, cp in enumerate(plan.cut_plans):
        _draw_piece(ax, row, cp, spec.end_trim, spec.blade_width, style)
        labels.append(_piece_label(cp, spec.end_trim, spec.blade_width))

    longest = max(cp.stock_length for cp in plan.cut_plans)
    ax.set_xlim(0, longest * 1.02)
    ax.set_ylim(n - 0.5, -0.5)
    ax.set_yticks(range(n))
    ax.set_yticklabels(labels, fontsize=style.font_size + 1)
    ax.set_title(
        f"Stock {plan.total_stock:g} | parts {plan.total_part_length:g} | "
        f"waste {plan.waste_fraction * 100:.2f}%",
        fontsize=10,
    )
    if style.show_grid:
        ax.grid(True, axis="x", linewidth=0.3)
    else:
        ax.grid(False)

    fig.tight_layout()
    return fig


def show_plan(plan: FullPlan, style: Optional[PlotStyle] = None) -> None:
    """Convenience wrapper: plot and show."""
    plot_plan(plan, style=style)
    plt.show()


def save_plan_png(
    plan: FullPlan,
    path: str,
    style: Optional[PlotStyle] = None,
    dpi: int = 200,
) -> None:
    """Save figure to PNG."""
    fig = plot_plan(plan, style=style)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
