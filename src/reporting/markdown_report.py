"""
Narrative Markdown rendering of the report.

The document references the charts by file name; they are written next to
`report.md` by the pipeline.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Mapping, Optional

import pandas as pd

from analysis import (
    BOXPLOT_PNG_NAME,
    INTERVALS_PNG_NAME,
    REGRESSION_PNG_NAME,
    RESIDUALS_PNG_NAME,
)
from .results import ReportResults

REPORT_MD_NAME = "report.md"

DEFAULT_CHARTS = {
    "boxplot": BOXPLOT_PNG_NAME,
    "intervals": INTERVALS_PNG_NAME,
    "regression": REGRESSION_PNG_NAME,
    "residuals": RESIDUALS_PNG_NAME,
}


def _format_value(value: object, decimals: int) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "—"
        return f"{value:,.{decimals}f}"
    if value is None or value is pd.NA:
        return "—"
    return str(value)


def markdown_table(
    df: pd.DataFrame,
    *,
    columns: Optional[Iterable[str]] = None,
    headers: Optional[Iterable[str]] = None,
    decimals: int = 3,
) -> str:
    """Render a small DataFrame as a GitHub-flavoured Markdown table."""
    cols = list(columns) if columns is not None else list(df.columns)
    head = list(headers) if headers is not None else cols
    if len(head) != len(cols):
        raise ValueError("headers and columns must have the same length")

    lines = [
        "| " + " | ".join(head) + " |",
        "|" + "|".join("---" for _ in head) + "|",
    ]
    for row in df[cols].itertuples(index=False):
        cells = [_format_value(v.item() if hasattr(v, "item") else v, decimals) for v in row]
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines)


def _data_section(results: ReportResults) -> List[str]:
    first, last = results.years
    enriched = results.enriched
    missing_population = int(enriched["population"].isna().sum())
    return [
        "## Data",
        "",
        (
            f"World Bank indicators for {first}–{last}: GDP per capita (current US$), "
            "CO2 emissions per capita (metric tons) and total population, joined with a "
            "country/continent reference table."
        ),
        "",
        f"- Country-years with both GDP and CO2 per capita: **{results.indicator_rows}**",
        f"- Rows excluded as aggregates or unknown codes: **{results.excluded_rows}**",
        f"- Rows analysed: **{len(enriched)}** covering **{results.country_count}** countries",
        f"- Rows without population (null totals): **{missing_population}**",
        "",
        (
            "Country-years lacking either indicator were dropped during cleaning, so a "
            "country can be absent from some years of the analysis."
        ),
        "",
    ]


def _t_test_section(results: ReportResults, chart: str) -> List[str]:
    t = results.t_test
    groups = results.groups
    return [
        "## CO2 emissions of high- and low-GDP countries",
        "",
        (
            f"For {groups.year}, the {groups.size} countries with the highest GDP per capita "
            f"are compared to the {groups.size} with the lowest. A two-sample t-test assuming "
            "equal variances tests whether their mean CO2 per capita differs."
        ),
        "",
        f"- Mean CO2 per capita, highest-GDP group: **{t.mean_high:.3f}** t",
        f"- Mean CO2 per capita, lowest-GDP group: **{t.mean_low:.3f}** t",
        f"- t = **{t.statistic:.4f}**, df = {t.df}, p-value = **{t.p_value:.4g}**",
        "",
        f"At α = {t.alpha:g} we **{t.decision}**.",
        "",
        f"![CO2 per capita by GDP group]({chart})",
        "",
    ]


def _intervals_section(results: ReportResults, chart: str) -> List[str]:
    intervals = results.continent_intervals
    level = float(intervals["confidence"].iloc[0]) if not intervals.empty else float("nan")
    return [
        "## CO2 per capita by continent",
        "",
        f"{level:.0%} t-based confidence intervals for the mean CO2 per capita of each continent.",
        "",
        markdown_table(
            intervals,
            columns=["continent", "n", "mean", "lower", "upper"],
            headers=["Continent", "n", "Mean", "Lower", "Upper"],
        ),
        "",
        f"![Mean CO2 per capita by continent]({chart})",
        "",
    ]


def _summary_section(results: ReportResults, top_n: int) -> List[str]:
    top = results.country_summary.sort_values(
        "mean_co2_per_capita",
        ascending=False,
        kind="mergesort",
    ).head(top_n)
    return [
        "## Country averages",
        "",
        f"Top {len(top)} countries by mean CO2 per capita across the available years.",
        "",
        markdown_table(
            top,
            columns=["country", "mean_gdp_per_capita", "mean_co2_per_capita"],
            headers=["Country", "Mean GDP per capita", "Mean CO2 per capita"],
            decimals=2,
        ),
        "",
    ]


def _regression_section(results: ReportResults, scatter: str, residuals: str) -> List[str]:
    reg = results.regression
    return [
        "## Regression of CO2 on GDP per capita",
        "",
        (
            f"Ordinary least squares over all {reg.n} country-years: "
            f"`co2_per_capita = {reg.intercept:.4f} + {reg.slope:.6e} × gdp_per_capita`, "
            f"R² = **{reg.r_squared:.3f}**."
        ),
        "",
        f"![GDP vs CO2 per capita]({scatter})",
        "",
        f"Residuals sum to {reg.residual_sum:.2e}; the residual plot shows their spread across fitted values.",
        "",
        f"![Regression residuals]({residuals})",
        "",
    ]


def render_markdown_report(
    results: ReportResults,
    *,
    charts: Optional[Mapping[str, str]] = None,
    title: str = "GDP, population and CO2 emissions per capita",
    top_n: int = 10,
) -> str:
    charts = {**DEFAULT_CHARTS, **(charts or {})}
    first, last = results.years
    lines: List[str] = [f"# {title} ({first}–{last})", ""]
    lines += _data_section(results)
    lines += _t_test_section(results, charts["boxplot"])
    lines += _intervals_section(results, charts["intervals"])
    lines += _summary_section(results, top_n)
    lines += _regression_section(results, charts["regression"], charts["residuals"])
    return "\n".join(lines).rstrip() + "\n"


__all__ = ["REPORT_MD_NAME", "markdown_table", "render_markdown_report"]
