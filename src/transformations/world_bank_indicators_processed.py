"""
Cleaning of the World Bank DataBank exports (CO2/GDP indicators and
population) into tidy country-year tables.

The DataBank CSV layout is wide: one row per (country, series) and one
column per year, headed either "2018 [YR2018]" or plain "2018". Missing
observations are written as "..". This module:

- renames the year columns to 4-digit year strings and keeps the configured
  window (2015-2022 by default);
- melts them into one row per (country, country_code, indicator, year);
- turns ".." (and anything else that is not a number) into NaN;
- pivots the indicator dimension back into the named columns
  `gdp_per_capita` and `co2_per_capita`;
- drops every country-year lacking either indicator.

Dropping is destructive: a country with no CO2 figure for 2019 has no 2019
row at all in the analysis. The dropped-row count is printed so the report
run shows how much data was lost.

Resulting schemas:

    indicators:  country, country_code, year, gdp_per_capita, co2_per_capita
    population:  country, country_code, year, population
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

import pandas as pd

from adapters import StorageAdapter
from catalog import (
    INDICATOR_COLUMNS,
    INDICATOR_NAME_COLUMNS,
    INDICATORS_DATASET,
    MISSING_VALUE_MARKER,
    POPULATION_CODE,
    POPULATION_DATASET,
    Dataset,
)

DEFAULT_YEARS = range(2015, 2023)

INDICATOR_VALUE_COLUMNS = ["gdp_per_capita", "co2_per_capita"]
INDICATOR_OUTPUT_COLUMNS = ["country", "country_code", "year", *INDICATOR_VALUE_COLUMNS]
POPULATION_OUTPUT_COLUMNS = ["country", "country_code", "year", "population"]

_KEY_RENAMES = {
    "Country Name": "country",
    "Country Code": "country_code",
    "Series Name": "series_name",
    "Series Code": "series_code",
}

_YEAR_COLUMN_RE = re.compile(r"^(\d{4})(?:\s*\[YR(\d{4})\])?$")


def _year_from_column(name: str) -> Optional[str]:
    match = _YEAR_COLUMN_RE.match(str(name).strip())
    if match is None:
        return None
    return match.group(1)


def rename_year_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rename DataBank year headers ("2018 [YR2018]") to "2018".

    Non-year columns are only stripped of surrounding whitespace.
    """
    renames = {}
    for col in df.columns:
        year = _year_from_column(col)
        renames[col] = year if year is not None else str(col).strip()
    return df.rename(columns=renames)


def select_year_columns(df: pd.DataFrame, years: Iterable[int]) -> List[str]:
    """
    Return the year columns of `df` (already renamed) inside `years`, in
    ascending order. Raises ValueError when none of them is present.
    """
    wanted = {str(int(y)) for y in years}
    present = sorted(col for col in df.columns if col in wanted)
    if not present:
        raise ValueError(
            f"No year columns for {min(wanted)}-{max(wanted)} found; columns were {list(df.columns)}",
        )
    return present


def coerce_numeric(values: pd.Series) -> pd.Series:
    """Parse strings to float; the ".." marker and unparsable text become NaN."""
    text = values.astype(str).str.strip()
    text = text.where(text != MISSING_VALUE_MARKER)
    return pd.to_numeric(text, errors="coerce").astype("float64")


def melt_year_columns(
    df: pd.DataFrame,
    *,
    id_vars: List[str],
    years: Iterable[int],
    value_name: str = "value",
) -> pd.DataFrame:
    """
    Wide-to-long on the year columns: one row per id_vars + year, the value
    coerced to float.
    """
    year_cols = select_year_columns(df, years)
    long_df = df.melt(
        id_vars=id_vars,
        value_vars=year_cols,
        var_name="year",
        value_name=value_name,
    )
    long_df["year"] = long_df["year"].astype("int64")
    long_df[value_name] = coerce_numeric(long_df[value_name])
    return long_df


def _prepare_databank_frame(raw_df: pd.DataFrame, dataset: Dataset) -> pd.DataFrame:
    df = rename_year_columns(raw_df)
    dataset.require_columns(df.columns)
    df = df.rename(columns={k: v for k, v in _KEY_RENAMES.items() if k in df.columns})

    df["country"] = df["country"].astype("string").str.strip()
    # upper-cased like the continent reference so the join matches on code
    df["country_code"] = df["country_code"].astype("string").str.strip().str.upper()

    # DataBank appends footer lines ("Data from database: ...") without a code.
    has_code = df["country_code"].notna() & (df["country_code"] != "")
    return df[has_code].copy()


def _resolve_indicator(df: pd.DataFrame) -> pd.Series:
    by_code = df["series_code"].astype("string").str.strip().map(INDICATOR_COLUMNS)
    by_name = df["series_name"].astype("string").str.strip().map(INDICATOR_NAME_COLUMNS)
    return by_code.fillna(by_name)


def build_indicator_dataframe(
    raw_df: pd.DataFrame,
    *,
    years: Iterable[int] = DEFAULT_YEARS,
) -> pd.DataFrame:
    """
    Clean the CO2/GDP DataBank export into one row per (country, year) with
    both `gdp_per_capita` and `co2_per_capita` present.
    """
    years = list(years)
    df = _prepare_databank_frame(raw_df, INDICATORS_DATASET)

    df["indicator"] = _resolve_indicator(df)
    unknown = int(df["indicator"].isna().sum())
    if unknown:
        print(f"[cleaning] ignoring {unknown} rows with series other than GDP/CO2 per capita")
    df = df[df["indicator"].notna()]

    long_df = melt_year_columns(
        df[["country", "country_code", "indicator", *[c for c in df.columns if _year_from_column(c)]]],
        id_vars=["country", "country_code", "indicator"],
        years=years,
    )

    # first() skips NaN, so the newer CO2 series fills gaps left by the older one.
    wide = (
        long_df.groupby(["country", "country_code", "year", "indicator"], sort=True)["value"]
        .first()
        .unstack("indicator")
        .reindex(columns=INDICATOR_VALUE_COLUMNS)
        .reset_index()
    )
    wide.columns.name = None

    complete = wide[INDICATOR_VALUE_COLUMNS].notna().all(axis=1)
    dropped = int((~complete).sum())
    if dropped:
        print(
            f"[cleaning] dropped {dropped} country-year rows missing GDP or CO2 per capita "
            f"({int(complete.sum())} kept)",
        )

    result = wide[complete][INDICATOR_OUTPUT_COLUMNS].reset_index(drop=True)
    result["country"] = result["country"].astype("string")
    result["country_code"] = result["country_code"].astype("string")
    result["year"] = result["year"].astype("int64")
    for col in INDICATOR_VALUE_COLUMNS:
        result[col] = result[col].astype("float64")
    return result


def build_population_dataframe(
    raw_df: pd.DataFrame,
    *,
    years: Iterable[int] = DEFAULT_YEARS,
) -> pd.DataFrame:
    """
    Clean the population DataBank export into one row per (country, year).

    Missing population stays NaN; those rows are kept so the join can still
    attach them (with null totals). Duplicate (country, year) pairs keep the
    first occurrence.
    """
    years = list(years)
    df = _prepare_databank_frame(raw_df, POPULATION_DATASET)

    if "series_code" in df.columns:
        codes = df["series_code"].astype("string").str.strip().fillna("")
        df = df[(codes == "") | (codes == POPULATION_CODE)]

    year_cols = [c for c in df.columns if _year_from_column(c)]
    long_df = melt_year_columns(
        df[["country", "country_code", *year_cols]],
        id_vars=["country", "country_code"],
        years=years,
        value_name="population",
    )
    long_df = long_df.drop_duplicates(subset=["country", "year"], keep="first")

    result = long_df[POPULATION_OUTPUT_COLUMNS].reset_index(drop=True)
    result["country"] = result["country"].astype("string")
    result["country_code"] = result["country_code"].astype("string")
    return result


def load_indicator_dataframe(
    storage: StorageAdapter,
    key: str,
    *,
    years: Iterable[int] = DEFAULT_YEARS,
) -> pd.DataFrame:
    return build_indicator_dataframe(storage.read_csv(key), years=years)


def load_population_dataframe(
    storage: StorageAdapter,
    key: str,
    *,
    years: Iterable[int] = DEFAULT_YEARS,
) -> pd.DataFrame:
    return build_population_dataframe(storage.read_csv(key), years=years)


__all__ = [
    "DEFAULT_YEARS",
    "INDICATOR_OUTPUT_COLUMNS",
    "POPULATION_OUTPUT_COLUMNS",
    "rename_year_columns",
    "select_year_columns",
    "coerce_numeric",
    "melt_year_columns",
    "build_indicator_dataframe",
    "build_population_dataframe",
    "load_indicator_dataframe",
    "load_population_dataframe",
]
