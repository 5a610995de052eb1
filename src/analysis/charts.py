"""
Charts embedded in the report.

Every builder draws one figure and returns it as PNG bytes, so the caller
decides where it lands (local directory or S3 via StorageAdapter):

- co2_by_gdp_group_boxplot.png   CO2 per capita, highest vs lowest GDP group
- continent_co2_intervals.png    mean CO2 per capita by continent with CI bars
- gdp_vs_co2_regression.png      scatter with the OLS line
- regression_residuals.png       fitted values vs residuals
"""

from __future__ import annotations

import io

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402

from .econ_environment_statistics import GdpGroups, RegressionResult  # noqa: E402

BOXPLOT_PNG_NAME = "co2_by_gdp_group_boxplot.png"
INTERVALS_PNG_NAME = "continent_co2_intervals.png"
REGRESSION_PNG_NAME = "gdp_vs_co2_regression.png"
RESIDUALS_PNG_NAME = "regression_residuals.png"


def _figure_to_png(fig: plt.Figure) -> bytes:
    buf = io.BytesIO()
    fig.tight_layout()
    fig.savefig(buf, format="png", dpi=150)
    plt.close(fig)
    return buf.getvalue()


def build_gdp_group_boxplot(groups: GdpGroups) -> bytes:
    fig, ax = plt.subplots(figsize=(7, 5))
    ax.boxplot(
        [
            groups.highest["co2_per_capita"].to_numpy(),
            groups.lowest["co2_per_capita"].to_numpy(),
        ],
    )
    ax.set_xticks([1, 2], labels=[f"Highest GDP ({groups.size})", f"Lowest GDP ({groups.size})"])
    ax.set_ylabel("CO2 tons per capita")
    ax.set_title(f"CO2 per capita by GDP group - {groups.year}")
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    return _figure_to_png(fig)


def build_continent_interval_chart(intervals: pd.DataFrame) -> bytes:
    """Bar per continent at the mean, error bars spanning [lower, upper]."""
    fig, ax = plt.subplots(figsize=(9, 5))
    means = intervals["mean"].to_numpy(dtype=float)
    errors = np.vstack(
        [
            means - intervals["lower"].to_numpy(dtype=float),
            intervals["upper"].to_numpy(dtype=float) - means,
        ],
    )
    ax.bar(
        intervals["continent"].astype(str).tolist(),
        means,
        yerr=errors,
        capsize=6,
        color="steelblue",
        alpha=0.8,
    )
    if not intervals.empty:
        level = float(intervals["confidence"].iloc[0])
        ax.set_title(f"Mean CO2 per capita by continent ({level:.0%} CI)")
    ax.set_ylabel("CO2 tons per capita")
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    return _figure_to_png(fig)


def build_regression_scatter(
    regression: RegressionResult,
    *,
    annotate_outliers: bool = True,
    outliers_top_n: int = 5,
) -> bytes:
    fitted = regression.fitted
    x = fitted["gdp_per_capita"].to_numpy(dtype=float)
    y = fitted["co2_per_capita"].to_numpy(dtype=float)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.scatter(x, y, alpha=0.6, edgecolors="none", color="teal")

    x_line = np.linspace(np.nanmin(x), np.nanmax(x), 200)
    ax.plot(
        x_line,
        regression.predict(x_line),
        color="crimson",
        linewidth=2,
        label=f"Linear fit (R²={regression.r_squared:.2f})",
    )

    if annotate_outliers and outliers_top_n > 0 and "country" in fitted.columns:
        top_idx = np.argsort(-np.abs(fitted["residual"].to_numpy(dtype=float)))[:outliers_top_n]
        for i in top_idx:
            label = f"{fitted.iloc[i]['country']} {int(fitted.iloc[i]['year'])}"
            ax.annotate(
                label,
                (x[i], y[i]),
                textcoords="offset points",
                xytext=(5, 5),
                fontsize=8,
                alpha=0.8,
            )

    ax.set_xlabel("GDP per capita (USD)")
    ax.set_ylabel("CO2 tons per capita")
    ax.set_title("GDP vs CO2 per capita")
    ax.legend(frameon=False)
    ax.grid(True, linestyle="--", alpha=0.3)
    return _figure_to_png(fig)


def build_residual_plot(regression: RegressionResult) -> bytes:
    fitted = regression.fitted
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.scatter(
        fitted["fitted_co2_per_capita"].to_numpy(dtype=float),
        fitted["residual"].to_numpy(dtype=float),
        alpha=0.6,
        edgecolors="none",
    )
    ax.axhline(0.0, color="crimson", linewidth=1)
    ax.set_xlabel("Fitted CO2 tons per capita")
    ax.set_ylabel("Residual (observed - fitted)")
    ax.set_title("Regression residuals")
    ax.grid(True, linestyle="--", alpha=0.3)
    return _figure_to_png(fig)


__all__ = [
    "BOXPLOT_PNG_NAME",
    "INTERVALS_PNG_NAME",
    "REGRESSION_PNG_NAME",
    "RESIDUALS_PNG_NAME",
    "build_gdp_group_boxplot",
    "build_continent_interval_chart",
    "build_regression_scatter",
    "build_residual_plot",
]
