from __future__ import annotations

"""
Growth chart builders.

Read-only helpers that turn a `CalculationResult` into presentation objects:
- `results_to_dataframe`: tabular view used by the Streamlit table and CLI output
- `build_growth_figure`: interactive Plotly bar chart for the Streamlit app
- `save_growth_bar_chart`: static PNG under `output/plots/` for the CLI `--visualize` flag

Populations span many orders of magnitude, so every chart uses a
logarithmic y-axis with exponent tick labels.

Usage:
    from viz.plots import build_growth_figure
    fig = build_growth_figure(result)
"""

import math
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import plotly.graph_objects as go

from src.growth_calculator import CalculationResult, POPULATION_UNIT, format_population
from src.io_paths import PLOTS_DIR

BAR_COLOR = "#22d3ee"
GRID_COLOR = "#334155"
AXIS_COLOR = "#94a3b8"
SERIES_NAME = "Populaatio"


def results_to_dataframe(result: CalculationResult) -> pd.DataFrame:
    """One row per checkpoint: minutes, label, population and its display text."""
    rows = [
        {
            "Aika (min)": p.time_minutes,
            "Aika": p.time_label,
            SERIES_NAME: p.population,
            "Näyttö": format_population(p.population),
        }
        for p in result.chart_points
    ]
    return pd.DataFrame(rows, columns=["Aika (min)", "Aika", SERIES_NAME, "Näyttö"])


def _finite_populations(result: CalculationResult) -> list[float]:
    return [p.population for p in result.chart_points if math.isfinite(p.population)]


def build_growth_figure(result: CalculationResult) -> go.Figure:
    """Plotly bar chart of population per checkpoint label.

    Overflowed (infinite) values are left out of the bars because a log axis
    cannot place them; their label stays on the x-axis.
    """
    labels = [p.time_label for p in result.chart_points]
    values = [p.population if math.isfinite(p.population) else None for p in result.chart_points]
    hover = [format_population(p.population) for p in result.chart_points]

    fig = go.Figure(
        data=[
            go.Bar(
                x=labels,
                y=values,
                name=SERIES_NAME,
                marker_color=BAR_COLOR,
                customdata=hover,
                hovertemplate="%{x}<br>" + SERIES_NAME + ": %{customdata}<extra></extra>",
            )
        ]
    )
    fig.update_layout(
        template="plotly_dark",
        showlegend=True,
        margin=dict(t=20, r=20, l=30, b=20),
        height=384,
        legend=dict(font=dict(color="#cbd5e1")),
    )
    fig.update_xaxes(color=AXIS_COLOR, gridcolor=GRID_COLOR, type="category")
    fig.update_yaxes(
        type="log",
        color=AXIS_COLOR,
        gridcolor=GRID_COLOR,
        griddash="dash",
        exponentformat="e",
        tickformat=".0e",
    )
    return fig


def _ensure_plots_dir(plots_dir: Path) -> Path:
    plots_dir.mkdir(parents=True, exist_ok=True)
    return plots_dir


def save_growth_bar_chart(result: CalculationResult, plots_dir: Path = PLOTS_DIR) -> Path:
    """Save a log-scale bar chart PNG and return its path.

    The file name carries the doubling time so repeated runs with different
    inputs do not overwrite each other.
    """
    labels = [p.time_label for p in result.chart_points]
    values = [p.population if math.isfinite(p.population) else float("nan") for p in result.chart_points]
    doubling_label = result.milestones[1].value.replace(" ", "")

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.bar(range(len(labels)), values, color=BAR_COLOR, label=SERIES_NAME)
    if _finite_populations(result):
        ax.set_yscale("log")
    ax.set_xticks(list(range(len(labels))))
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_ylabel(f"{SERIES_NAME} ({POPULATION_UNIT})")
    ax.set_title(f"Bakteerikasvu, kaksinkertaistumisaika {result.milestones[1].value}")
    ax.grid(True, axis="y", alpha=0.3, linestyle="--")
    ax.legend(loc="upper left")

    out_path = _ensure_plots_dir(Path(plots_dir)) / f"growth_{doubling_label}.png"
    fig.savefig(out_path, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return out_path


__all__ = [
    "results_to_dataframe",
    "build_growth_figure",
    "save_growth_bar_chart",
]
