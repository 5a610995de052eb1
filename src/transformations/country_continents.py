"""
Country -> continent reference
------------------------------

Static reference table of sovereign countries. Its `Abbreviation` column is
the ISO3 code used both to filter out DataBank aggregates ("World",
"Euro area", income groups...) and to attach a continent to each row.

Schema final:
    country:       string
    country_code:  string (ISO3, unique)
    continent:     string, one of CONTINENTS
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from adapters import StorageAdapter
from catalog import CONTINENTS_DATASET

CONTINENTS = ("Africa", "Asia", "Australia", "Europe", "N. America", "S. America")

_CONTINENT_ALIASES = {
    "africa": "Africa",
    "asia": "Asia",
    "australia": "Australia",
    "oceania": "Australia",
    "australia/oceania": "Australia",
    "europe": "Europe",
    "n. america": "N. America",
    "north america": "N. America",
    "s. america": "S. America",
    "south america": "S. America",
}


def normalize_continent(label: Optional[str]) -> str:
    """
    Map a continent label to one of CONTINENTS.

    Raises ValueError for empty or unknown labels.
    """
    key = " ".join(str(label or "").split()).lower()
    try:
        return _CONTINENT_ALIASES[key]
    except KeyError:
        raise ValueError(
            f"Unknown continent label {label!r}; expected one of {list(CONTINENTS)}",
        ) from None


def build_country_continents_dataframe(raw_df: pd.DataFrame) -> pd.DataFrame:
    """
    Clean the reference table.

    - Renames Country/Abbreviation/Continent to country/country_code/continent.
    - Drops rows without an abbreviation.
    - Keeps the first row per country_code.
    """
    df = raw_df.rename(columns=lambda c: str(c).strip())
    CONTINENTS_DATASET.require_columns(df.columns)

    df = df.rename(
        columns={"Country": "country", "Abbreviation": "country_code", "Continent": "continent"},
    )[["country", "country_code", "continent"]].copy()

    df["country"] = df["country"].astype("string").str.strip()
    df["country_code"] = df["country_code"].astype("string").str.strip().str.upper()
    df = df[df["country_code"].notna() & (df["country_code"] != "")]

    duplicates = int(df.duplicated(subset=["country_code"]).sum())
    if duplicates:
        print(f"[reference] {duplicates} duplicated country codes; keeping the first row of each")
    df = df.drop_duplicates(subset=["country_code"], keep="first")

    df["continent"] = df["continent"].map(normalize_continent).astype("string")
    return df.reset_index(drop=True)


def load_country_continents(storage: StorageAdapter, key: str) -> pd.DataFrame:
    return build_country_continents_dataframe(storage.read_csv(key))


__all__ = [
    "CONTINENTS",
    "normalize_continent",
    "build_country_continents_dataframe",
    "load_country_continents",
]
