"""Tests for the plotting module."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import polars as pl  # noqa: E402
import pytest  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from lvmass.plotting import plot_mass_breakdown, plot_mass_history  # noqa: E402


@pytest.fixture
def history() -> pl.DataFrame:
    t = np.linspace(0.0, 100.0, 11)
    return pl.DataFrame({
        "time": t,
        "mass": 40000.0 - 300.0 * t,
        "com_x": 10.0 + 0.02 * t,
        "com_y": np.zeros_like(t),
        "com_z": np.zeros_like(t),
        "moi_x": 5000.0 - 20.0 * t,
        "moi_y": 8e5 - 3000.0 * t,
        "moi_z": 8e5 - 3000.0 * t,
        "lox_level": 6.0 - 0.05 * t,
    })


class TestPlotMassHistory:
    """Test the mass history figure."""

    def test_returns_figure(self, history: pl.DataFrame) -> None:
        fig = plot_mass_history(history)
        assert isinstance(fig, Figure)
        assert len(fig.axes) == 4
        plt.close(fig)

    def test_one_line_per_tank(self, history: pl.DataFrame) -> None:
        df = history.with_columns((pl.col("lox_level") * 0.5).alias("fuel_level"))
        fig = plot_mass_history(df, title="Two tanks")
        assert len(fig.axes[3].get_lines()) == 2
        plt.close(fig)

    def test_missing_columns_raise(self, history: pl.DataFrame) -> None:
        with pytest.raises(ValueError, match="missing columns"):
            plot_mass_history(history.drop("moi_x"))


class TestPlotMassBreakdown:
    """Test the mass breakdown chart."""

    def test_returns_figure(self) -> None:
        fig = plot_mass_breakdown({"Engine": 1090.0, "Tail": 420, "Nose": 130.5})
        assert isinstance(fig, Figure)
        plt.close(fig)

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="No masses"):
            plot_mass_breakdown({})
