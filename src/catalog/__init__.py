"""
Source catalog
--------------

Declarative description of the three inputs of the report (indicator
export, population export, continent reference): the headers each one must
carry and the World Bank series codes the cleaner recognises.
"""

from .models import Dataset  # noqa: F401
from .sources import (  # noqa: F401
    CO2_PER_CAPITA_CODES,
    CONTINENTS_DATASET,
    GDP_PER_CAPITA_CODE,
    INDICATOR_COLUMNS,
    INDICATOR_NAME_COLUMNS,
    INDICATORS_DATASET,
    MISSING_VALUE_MARKER,
    POPULATION_CODE,
    POPULATION_DATASET,
)

__all__ = [
    "Dataset",
    "CO2_PER_CAPITA_CODES",
    "CONTINENTS_DATASET",
    "GDP_PER_CAPITA_CODE",
    "INDICATOR_COLUMNS",
    "INDICATOR_NAME_COLUMNS",
    "INDICATORS_DATASET",
    "MISSING_VALUE_MARKER",
    "POPULATION_CODE",
    "POPULATION_DATASET",
]
