"""Visualization module for lvmass.

Provides plotting functions for:
- Stage mass-property history (mass, CoM, MoIs and tank levels vs time)
- Dry mass breakdown by component

All plots use matplotlib with a consistent, professional style.
"""

import matplotlib.pyplot as plt
import numpy as np
import polars as pl
from beartype import beartype
from matplotlib.figure import Figure

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "primary": "#2E86AB",  # Steel blue
    "secondary": "#A23B72",  # Berry
    "accent": "#F18F01",  # Orange
    "neutral": "#454545",  # Dark gray
    "grid": "#CCCCCC",  # Grid lines
    "text": "#333333",  # Text color
}

DEFAULT_FIGSIZE = (12.0, 8.0)

_AXIS_COLORS = {"x": COLORS["primary"], "y": COLORS["secondary"], "z": COLORS["accent"]}


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
            "font.size": 11,
            "axes.titlesize": 13,
            "axes.labelsize": 12,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "xtick.color": COLORS["text"],
            "ytick.color": COLORS["text"],
            "legend.fontsize": 10,
            "grid.alpha": 0.5,
        }
    )


# =============================================================================
# Mass History
# =============================================================================


@beartype
def plot_mass_history(
    history: pl.DataFrame,
    title: str = "Stage Mass Properties",
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot a stage's mass-property history.

    Args:
        history: Output of Stage.history()
        title: Figure title
        figsize: Figure size

    Returns:
        matplotlib Figure with four subplots
    """
    required = {"time", "mass", "com_x", "moi_x", "moi_y", "moi_z"}
    missing = required - set(history.columns)
    if missing:
        raise ValueError(f"History is missing columns: {sorted(missing)}")

    _setup_style()
    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    ax_mass, ax_com, ax_moi, ax_level = axes.flat
    t = history["time"].to_numpy()

    ax_mass.plot(t, history["mass"].to_numpy() / 1000.0, color=COLORS["primary"], linewidth=2)
    ax_mass.set_ylabel("Mass (t)")
    ax_mass.set_title("Mass")

    ax_com.plot(t, history["com_x"].to_numpy(), color=COLORS["secondary"], linewidth=2)
    ax_com.set_ylabel("X (m)")
    ax_com.set_title("Center of Mass")

    for axis in "xyz":
        ax_moi.plot(
            t, history[f"moi_{axis}"].to_numpy() / 1000.0,
            color=_AXIS_COLORS[axis], linewidth=2, label=f"J{axis}",
        )
    ax_moi.set_ylabel("MoI (t·m²)")
    ax_moi.set_title("Moments of Inertia")
    ax_moi.legend()

    level_cols = [c for c in history.columns if c.endswith("_level")]
    for col in level_cols:
        ax_level.plot(t, history[col].to_numpy(), linewidth=2, label=col.removesuffix("_level"))
    ax_level.set_ylabel("Level (m)")
    ax_level.set_title("Propellant Levels")
    if level_cols:
        ax_level.legend()

    for ax in axes.flat:
        ax.grid(True, alpha=0.3)
    for ax in axes[1]:
        ax.set_xlabel("Time (s)")

    fig.suptitle(title, fontsize=14, fontweight="bold")
    fig.tight_layout()
    return fig


# =============================================================================
# Mass Breakdown
# =============================================================================


@beartype
def plot_mass_breakdown(
    masses: dict[str, float | int],
    title: str = "Dry Mass Breakdown",
) -> Figure:
    """Horizontal bar chart of component masses, largest first.

    Args:
        masses: Component names to masses in kg
        title: Plot title

    Returns:
        matplotlib Figure
    """
    if not masses:
        raise ValueError("No masses to plot")

    _setup_style()
    items = sorted(masses.items(), key=lambda kv: kv[1], reverse=True)
    labels = [name for name, _ in items]
    values = [m for _, m in items]
    total = sum(values)

    fig, ax = plt.subplots(figsize=(10, 0.5 * len(labels) + 2))
    y_pos = np.arange(len(labels))
    bars = ax.barh(y_pos, values, color=COLORS["primary"], edgecolor=COLORS["neutral"])
    ax.set_yticks(y_pos)
    ax.set_yticklabels(labels)
    ax.invert_yaxis()
    ax.set_xlabel("Mass (kg)")
    ax.grid(True, alpha=0.3, axis="x")

    for bar, val in zip(bars, values):
        ax.text(bar.get_width() + total * 0.01, bar.get_y() + bar.get_height() / 2,
                f"{val:,.0f} kg", va="center", fontsize=9)
    ax.set_xlim(0, max(values) * 1.2)

    ax.set_title(f"{title} (total {total:,.0f} kg)", fontweight="bold")
    fig.tight_layout()
    return fig
