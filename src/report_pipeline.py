"""
Report entrypoint for the GDP x population x CO2 analysis.

Runs, in order:

1. Cleaning of the CO2/GDP indicator export
2. Cleaning of the population export
3. Loading of the country/continent reference
4. Join + statistics (t-test, continent intervals, country means, regression)
5. Charts (box plot, interval bars, regression scatter, residuals)
6. Tables (CSV) and the narrative report.md

Intended usage (local):

    PYTHONPATH=src python -m report_pipeline

Every option defaults from the environment (see `settings`), for example:

    PYTHONPATH=src python -m report_pipeline --input-dir data --test-year 2018
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from adapters import LocalStorageAdapter, StorageAdapter
from analysis import (
    BOXPLOT_PNG_NAME,
    INTERVALS_PNG_NAME,
    REGRESSION_PNG_NAME,
    RESIDUALS_PNG_NAME,
    build_continent_interval_chart,
    build_gdp_group_boxplot,
    build_regression_scatter,
    build_residual_plot,
)
from reporting import REPORT_MD_NAME, ReportResults, compute_report_results, render_markdown_report
from settings import ReportSettings
from transformations import (
    load_country_continents,
    load_indicator_dataframe,
    load_population_dataframe,
)

ENRICHED_CSV_NAME = "enriched_country_year.csv"
SUMMARY_CSV_NAME = "country_summary.csv"
INTERVALS_CSV_NAME = "continent_intervals.csv"
RESIDUALS_CSV_NAME = "regression_residuals.csv"
GDP_GROUPS_CSV_NAME = "gdp_groups.csv"


def _write_tables(
    storage: StorageAdapter,
    settings: ReportSettings,
    results: ReportResults,
) -> List[str]:
    groups = results.groups
    gdp_groups = pd.concat(
        [
            groups.highest.assign(gdp_group="highest"),
            groups.lowest.assign(gdp_group="lowest"),
        ],
        ignore_index=True,
    )
    tables = {
        ENRICHED_CSV_NAME: results.enriched,
        SUMMARY_CSV_NAME: results.country_summary,
        INTERVALS_CSV_NAME: results.continent_intervals,
        RESIDUALS_CSV_NAME: results.regression.fitted,
        GDP_GROUPS_CSV_NAME: gdp_groups,
    }
    return [storage.write_csv(df, settings.output_key(name)) for name, df in tables.items()]


def _write_charts(
    storage: StorageAdapter,
    settings: ReportSettings,
    results: ReportResults,
) -> List[str]:
    charts = {
        BOXPLOT_PNG_NAME: build_gdp_group_boxplot(results.groups),
        INTERVALS_PNG_NAME: build_continent_interval_chart(results.continent_intervals),
        REGRESSION_PNG_NAME: build_regression_scatter(results.regression),
        RESIDUALS_PNG_NAME: build_residual_plot(results.regression),
    }
    return [storage.write_raw(settings.output_key(name), png) for name, png in charts.items()]


def run_report(
    storage: StorageAdapter,
    settings: ReportSettings,
    *,
    step_prefix: str = "",
) -> Dict[str, List[str]]:
    """
    Run the whole report against `storage`.

    Returns
    -------
    artefacts:
        Dictionary mapping step names to the locations written.
    """
    artefacts: Dict[str, List[str]] = {}
    prefix = f"{step_prefix} " if step_prefix else ""
    years = settings.years

    print(f"[{prefix}1/6] Cleaning CO2/GDP indicators ({settings.indicators_file})...")
    indicators = load_indicator_dataframe(
        storage,
        settings.input_key(settings.indicators_file),
        years=years,
    )
    print(f"      {len(indicators)} country-year rows with both indicators.")

    print(f"[{prefix}2/6] Cleaning population ({settings.population_file})...")
    population = load_population_dataframe(
        storage,
        settings.input_key(settings.population_file),
        years=years,
    )
    print(f"      {len(population)} country-year population rows.")

    print(f"[{prefix}3/6] Loading country/continent reference ({settings.continents_file})...")
    continents = load_country_continents(storage, settings.input_key(settings.continents_file))
    print(f"      {len(continents)} recognised countries.")

    print(f"[{prefix}4/6] Joining and computing statistics...")
    results = compute_report_results(
        indicators,
        population,
        continents,
        years=(settings.min_year, settings.max_year),
        test_year=settings.test_year,
        group_size=settings.group_size,
        alpha=settings.alpha,
        confidence=settings.confidence,
    )
    print(
        f"      t = {results.t_test.statistic:.4f}, p = {results.t_test.p_value:.4g}; "
        f"slope = {results.regression.slope:.3e}, R² = {results.regression.r_squared:.3f}",
    )

    print(f"[{prefix}5/6] Drawing charts...")
    artefacts["charts"] = _write_charts(storage, settings, results)

    print(f"[{prefix}6/6] Writing tables and {REPORT_MD_NAME}...")
    artefacts["tables"] = _write_tables(storage, settings, results)
    report_md = render_markdown_report(results)
    artefacts["report"] = [
        storage.write_raw(settings.output_key(REPORT_MD_NAME), report_md.encode("utf-8")),
    ]

    print(f"\nReport generated: {artefacts['report'][0]}")
    return artefacts


def run_local_report(
    settings: Optional[ReportSettings] = None,
    *,
    root_dir: Path | str = ".",
) -> Dict[str, List[str]]:
    """Run the report against the local filesystem rooted at `root_dir`."""
    settings = settings or ReportSettings.from_env()
    return run_report(LocalStorageAdapter(root_dir), settings)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Generate the GDP x population x CO2 statistical report.",
    )
    parser.add_argument("--input-dir", type=str, default=None, help="Directory holding the source CSVs.")
    parser.add_argument("--output-dir", type=str, default=None, help="Directory for report artefacts.")
    parser.add_argument("--min-year", type=int, default=None, help="First year kept (inclusive).")
    parser.add_argument("--max-year", type=int, default=None, help="Last year kept (inclusive).")
    parser.add_argument("--test-year", type=int, default=None, help="Year used by the two-sample test.")
    parser.add_argument(
        "--group-size",
        type=int,
        default=None,
        help="Number of countries in each of the highest/lowest GDP groups.",
    )

    args = parser.parse_args()
    base_settings = ReportSettings.from_env()
    run_local_report(
        base_settings.with_overrides(
            input_dir=args.input_dir,
            output_dir=args.output_dir,
            min_year=args.min_year,
            max_year=args.max_year,
            test_year=args.test_year,
            group_size=args.group_size,
        ),
    )


__all__ = [
    "ENRICHED_CSV_NAME",
    "SUMMARY_CSV_NAME",
    "INTERVALS_CSV_NAME",
    "RESIDUALS_CSV_NAME",
    "GDP_GROUPS_CSV_NAME",
    "run_report",
    "run_local_report",
]
