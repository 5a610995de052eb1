"""
Enriched dataset: indicators + population + continent by country-year.

- Left join of population onto the cleaned indicators on (country, year),
  exact match on the country name; unmatched rows keep a null population.
- Restriction to country codes present in the continent reference, which
  removes DataBank aggregates.
- Continent attached by country_code (the reference holds one row per code).
- Derived totals:
    total_gdp = population * gdp_per_capita
    total_co2 = population * co2_per_capita
  Both are null when population is null.

Schema:
    country, country_code, continent, year, population,
    gdp_per_capita, total_gdp, co2_per_capita, total_co2
"""

from __future__ import annotations

import pandas as pd

ENRICHED_COLUMNS = [
    "country",
    "country_code",
    "continent",
    "year",
    "population",
    "gdp_per_capita",
    "total_gdp",
    "co2_per_capita",
    "total_co2",
]


def build_enriched_country_year_dataframe(
    indicators_df: pd.DataFrame,
    population_df: pd.DataFrame,
    continents_df: pd.DataFrame,
) -> pd.DataFrame:
    """
    Join the three cleaned tables. Inputs are left untouched.
    """
    if indicators_df.empty:
        return pd.DataFrame(columns=ENRICHED_COLUMNS)

    indicators = indicators_df.astype({"country": "string", "country_code": "string", "year": "int64"})
    population = population_df[["country", "year", "population"]].astype(
        {"country": "string", "year": "int64", "population": "float64"},
    )
    population = population.drop_duplicates(subset=["country", "year"], keep="first")
    joined = indicators.merge(population, on=["country", "year"], how="left")

    reference = continents_df[["country_code", "continent"]].astype("string").drop_duplicates(
        subset=["country_code"],
        keep="first",
    )
    is_country = joined["country_code"].isin(reference["country_code"])
    excluded = int((~is_country).sum())
    if excluded:
        print(f"[joining] excluded {excluded} rows whose code is not a recognised country (aggregates)")
    joined = joined[is_country]

    joined = joined.merge(reference, on="country_code", how="left")

    missing_population = int(joined["population"].isna().sum())
    if missing_population:
        print(f"[joining] {missing_population} rows without population; their totals stay null")

    joined["total_gdp"] = joined["population"] * joined["gdp_per_capita"]
    joined["total_co2"] = joined["population"] * joined["co2_per_capita"]

    return joined[ENRICHED_COLUMNS].reset_index(drop=True)


__all__ = ["ENRICHED_COLUMNS", "build_enriched_country_year_dataframe"]
