"""
Transformations layer
----------------------

Turns the raw DataBank exports and the continent reference into the tidy
tables the statistics run on: cleaned indicators, population, country
reference and the enriched country-year table.
"""

from .world_bank_indicators_processed import (  # noqa: F401
    DEFAULT_YEARS,
    build_indicator_dataframe,
    build_population_dataframe,
    coerce_numeric,
    load_indicator_dataframe,
    load_population_dataframe,
    melt_year_columns,
    rename_year_columns,
)
from .country_continents import (  # noqa: F401
    CONTINENTS,
    build_country_continents_dataframe,
    load_country_continents,
    normalize_continent,
)
from .enriched_country_year import (  # noqa: F401
    ENRICHED_COLUMNS,
    build_enriched_country_year_dataframe,
)

__all__ = [
    "DEFAULT_YEARS",
    "CONTINENTS",
    "ENRICHED_COLUMNS",
    "rename_year_columns",
    "melt_year_columns",
    "coerce_numeric",
    "build_indicator_dataframe",
    "build_population_dataframe",
    "build_country_continents_dataframe",
    "build_enriched_country_year_dataframe",
    "load_indicator_dataframe",
    "load_population_dataframe",
    "load_country_continents",
    "normalize_continent",
]
