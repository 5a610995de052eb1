"""
Statistics over the enriched country-year table.

Four independent analyses feed the report:

- Two-sample test: CO2 per capita of the highest-GDP countries vs the
  lowest-GDP countries in one year (pooled-variance t-test, two-sided).
- Per-continent t-based confidence interval for mean CO2 per capita.
- Per-country means of GDP and CO2 per capita across the available years.
- OLS fit of co2_per_capita on gdp_per_capita over every row (all years and
  countries pooled), with fitted values and residuals.

Undefined statistics (a group or continent with fewer than two
observations, two zero-variance samples, a constant predictor) raise
ValueError instead of producing NaN-filled output.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy import stats

DEFAULT_TEST_YEAR = 2018
DEFAULT_GROUP_SIZE = 100
DEFAULT_ALPHA = 0.05
DEFAULT_CONFIDENCE = 0.95

INTERVAL_COLUMNS = ["continent", "n", "mean", "std", "lower", "upper", "confidence"]
SUMMARY_COLUMNS = ["country", "mean_gdp_per_capita", "mean_co2_per_capita"]


@dataclass(frozen=True, eq=False)
class GdpGroups:
    """Highest- and lowest-GDP subsets of one year, disjoint and equal-sized."""

    year: int
    size: int
    highest: pd.DataFrame
    lowest: pd.DataFrame


@dataclass(frozen=True)
class TTestResult:
    statistic: float
    p_value: float
    df: int
    alpha: float
    n_high: int
    n_low: int
    mean_high: float
    mean_low: float

    @property
    def reject_null(self) -> bool:
        return self.p_value < self.alpha

    @property
    def decision(self) -> str:
        if self.reject_null:
            return "reject the null hypothesis of equal means"
        return "fail to reject the null hypothesis of equal means"


@dataclass(frozen=True)
class ConfidenceInterval:
    n: int
    mean: float
    std: float
    lower: float
    upper: float
    confidence: float

    @property
    def half_width(self) -> float:
        return (self.upper - self.lower) / 2.0


@dataclass(frozen=True, eq=False)
class RegressionResult:
    intercept: float
    slope: float
    r_squared: float
    n: int
    fitted: pd.DataFrame

    def predict(self, gdp_per_capita: float | np.ndarray) -> float | np.ndarray:
        return self.intercept + self.slope * gdp_per_capita

    @property
    def residual_sum(self) -> float:
        return float(self.fitted["residual"].sum())


def select_gdp_groups(
    df: pd.DataFrame,
    *,
    year: int = DEFAULT_TEST_YEAR,
    size: int = DEFAULT_GROUP_SIZE,
) -> GdpGroups:
    """
    Pick the `size` rows with the largest gdp_per_capita and the `size` rows
    with the smallest gdp_per_capita among the rest, for one year.

    Ties are broken by input order. When the year holds fewer than
    2 * size rows, both groups shrink to half of the available rows so they
    stay disjoint and equal-sized.
    """
    rows = df[df["year"] == year].dropna(subset=["gdp_per_capita", "co2_per_capita"])
    rows = rows.reset_index(drop=True)

    n = min(size, len(rows) // 2)
    if n < 2:
        raise ValueError(
            f"Year {year} has {len(rows)} usable rows; at least 4 are needed for two groups of 2",
        )
    if n < size:
        print(f"[analysis] only {len(rows)} rows in {year}; using groups of {n} instead of {size}")

    highest = rows.nlargest(n, "gdp_per_capita", keep="first")
    lowest = rows.drop(index=highest.index).nsmallest(n, "gdp_per_capita", keep="first")
    return GdpGroups(
        year=year,
        size=n,
        highest=highest.reset_index(drop=True),
        lowest=lowest.reset_index(drop=True),
    )


def two_sample_t_test(
    sample_a: Iterable[float],
    sample_b: Iterable[float],
    *,
    alpha: float = DEFAULT_ALPHA,
) -> TTestResult:
    """
    Two-sided two-sample t-test assuming equal variances (pooled standard
    error, df = n1 + n2 - 2).
    """
    a = np.asarray(list(sample_a), dtype=float)
    b = np.asarray(list(sample_b), dtype=float)
    if len(a) < 2 or len(b) < 2:
        raise ValueError(
            f"Both samples need at least 2 observations (got {len(a)} and {len(b)})",
        )
    if np.ptp(a) == 0 and np.ptp(b) == 0:
        raise ValueError("t-test is undefined: both samples have zero variance")

    result = stats.ttest_ind(a, b, equal_var=True, alternative="two-sided")
    return TTestResult(
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        df=len(a) + len(b) - 2,
        alpha=alpha,
        n_high=len(a),
        n_low=len(b),
        mean_high=float(a.mean()),
        mean_low=float(b.mean()),
    )


def compare_co2_by_gdp_group(
    df: pd.DataFrame,
    *,
    year: int = DEFAULT_TEST_YEAR,
    size: int = DEFAULT_GROUP_SIZE,
    alpha: float = DEFAULT_ALPHA,
) -> Tuple[GdpGroups, TTestResult]:
    """Select the GDP groups of `year` and compare their CO2 per capita."""
    groups = select_gdp_groups(df, year=year, size=size)
    result = two_sample_t_test(
        groups.highest["co2_per_capita"],
        groups.lowest["co2_per_capita"],
        alpha=alpha,
    )
    return groups, result


def mean_confidence_interval(
    values: Iterable[float],
    *,
    confidence: float = DEFAULT_CONFIDENCE,
) -> ConfidenceInterval:
    """
    One-sample t interval for the mean: x̄ ± t(n-1, (1+confidence)/2) * s/√n,
    with s the sample standard deviation (ddof=1).
    """
    sample = np.asarray(list(values), dtype=float)
    sample = sample[~np.isnan(sample)]
    n = len(sample)
    if n < 2:
        raise ValueError(f"A confidence interval needs at least 2 observations, got {n}")

    mean = float(sample.mean())
    std = float(sample.std(ddof=1))
    t_crit = float(stats.t.ppf((1.0 + confidence) / 2.0, n - 1))
    half_width = t_crit * std / math.sqrt(n)
    return ConfidenceInterval(
        n=n,
        mean=mean,
        std=std,
        lower=mean - half_width,
        upper=mean + half_width,
        confidence=confidence,
    )


def continent_confidence_intervals(
    df: pd.DataFrame,
    *,
    confidence: float = DEFAULT_CONFIDENCE,
    years: Optional[Tuple[int, int]] = None,
    value_column: str = "co2_per_capita",
) -> pd.DataFrame:
    """
    Confidence interval of the mean of `value_column` for every continent.

    `years` optionally restricts the rows to an inclusive (first, last)
    range. A continent with fewer than two observations raises ValueError.
    """
    rows = df
    if years is not None:
        first, last = years
        rows = rows[(rows["year"] >= first) & (rows["year"] <= last)]

    records: List[dict] = []
    for continent, group in rows.groupby("continent", sort=True):
        try:
            interval = mean_confidence_interval(group[value_column], confidence=confidence)
        except ValueError as exc:
            raise ValueError(f"Continent {continent!r}: {exc}") from exc
        records.append(
            {
                "continent": str(continent),
                "n": interval.n,
                "mean": interval.mean,
                "std": interval.std,
                "lower": interval.lower,
                "upper": interval.upper,
                "confidence": interval.confidence,
            },
        )

    return pd.DataFrame(records, columns=INTERVAL_COLUMNS)


def summarize_countries(df: pd.DataFrame) -> pd.DataFrame:
    """Mean GDP and CO2 per capita per country, one row per country."""
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    summary = (
        df.groupby("country", sort=True)
        .agg(
            mean_gdp_per_capita=("gdp_per_capita", "mean"),
            mean_co2_per_capita=("co2_per_capita", "mean"),
        )
        .reset_index()
    )
    summary["country"] = summary["country"].astype("string")
    return summary[SUMMARY_COLUMNS]


def fit_co2_on_gdp(df: pd.DataFrame) -> RegressionResult:
    """
    Ordinary least squares fit co2_per_capita = intercept + slope * gdp_per_capita
    over every row. The returned `fitted` frame is a copy of the input rows
    with `fitted_co2_per_capita` and `residual` (observed - fitted) added.
    """
    rows = df.dropna(subset=["gdp_per_capita", "co2_per_capita"])
    x = rows["gdp_per_capita"].to_numpy(dtype=float)
    y = rows["co2_per_capita"].to_numpy(dtype=float)

    if len(x) < 2:
        raise ValueError(f"Regression needs at least 2 observations, got {len(x)}")
    if np.ptp(x) == 0:
        raise ValueError("Regression is undefined: gdp_per_capita is constant")

    slope, intercept = np.polyfit(x, y, 1)
    fitted_values = intercept + slope * x
    residuals = y - fitted_values

    ss_res = float(np.sum(residuals ** 2))
    ss_tot = float(np.sum((y - y.mean()) ** 2))
    r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else float("nan")

    fitted = rows.reset_index(drop=True).assign(
        fitted_co2_per_capita=fitted_values,
        residual=residuals,
    )
    return RegressionResult(
        intercept=float(intercept),
        slope=float(slope),
        r_squared=r_squared,
        n=len(x),
        fitted=fitted,
    )


__all__ = [
    "DEFAULT_TEST_YEAR",
    "DEFAULT_GROUP_SIZE",
    "DEFAULT_ALPHA",
    "DEFAULT_CONFIDENCE",
    "GdpGroups",
    "TTestResult",
    "ConfidenceInterval",
    "RegressionResult",
    "select_gdp_groups",
    "two_sample_t_test",
    "compare_co2_by_gdp_group",
    "mean_confidence_interval",
    "continent_confidence_intervals",
    "summarize_countries",
    "fit_co2_on_gdp",
]
