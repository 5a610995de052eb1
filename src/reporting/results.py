from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pandas as pd

from analysis import (
    GdpGroups,
    RegressionResult,
    TTestResult,
    compare_co2_by_gdp_group,
    continent_confidence_intervals,
    fit_co2_on_gdp,
    summarize_countries,
)
from transformations import build_enriched_country_year_dataframe


@dataclass(frozen=True, eq=False)
class ReportResults:
    """Everything the narrative and the charts are drawn from."""

    years: Tuple[int, int]
    indicator_rows: int
    enriched: pd.DataFrame
    country_summary: pd.DataFrame
    groups: GdpGroups
    t_test: TTestResult
    continent_intervals: pd.DataFrame
    regression: RegressionResult

    @property
    def country_count(self) -> int:
        return int(self.enriched["country_code"].nunique())

    @property
    def excluded_rows(self) -> int:
        return self.indicator_rows - len(self.enriched)


def compute_report_results(
    indicators_df: pd.DataFrame,
    population_df: pd.DataFrame,
    continents_df: pd.DataFrame,
    *,
    years: Tuple[int, int],
    test_year: int,
    group_size: int,
    alpha: float,
    confidence: float,
) -> ReportResults:
    """Join the cleaned sources and run the four analyses."""
    enriched = build_enriched_country_year_dataframe(indicators_df, population_df, continents_df)
    if enriched.empty:
        raise ValueError("No rows left after joining indicators with the country reference")

    groups, t_test = compare_co2_by_gdp_group(
        enriched,
        year=test_year,
        size=group_size,
        alpha=alpha,
    )
    return ReportResults(
        years=years,
        indicator_rows=len(indicators_df),
        enriched=enriched,
        country_summary=summarize_countries(enriched),
        groups=groups,
        t_test=t_test,
        continent_intervals=continent_confidence_intervals(
            enriched,
            confidence=confidence,
            years=years,
        ),
        regression=fit_co2_on_gdp(enriched),
    )


__all__ = ["ReportResults", "compute_report_results"]
