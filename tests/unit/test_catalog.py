"""Unit tests for the source declarations."""

import pytest

from catalog import (
    CONTINENTS_DATASET,
    INDICATOR_COLUMNS,
    INDICATORS_DATASET,
    POPULATION_DATASET,
)


@pytest.mark.unit
class TestIndicatorCodes:

    def test_both_co2_series_map_to_one_column(self):
        assert INDICATOR_COLUMNS["EN.ATM.CO2E.PC"] == "co2_per_capita"
        assert INDICATOR_COLUMNS["EN.GHG.CO2.PC.CE.AR5"] == "co2_per_capita"
        assert INDICATOR_COLUMNS["NY.GDP.PCAP.CD"] == "gdp_per_capita"


@pytest.mark.unit
class TestRequireColumns:

    def test_headers_are_compared_stripped(self):
        CONTINENTS_DATASET.require_columns([" Country", "Abbreviation ", "Continent"])

    def test_population_needs_only_the_country_keys(self):
        assert POPULATION_DATASET.missing_columns(["Country Name", "Country Code"]) == []

    def test_missing_columns_are_named(self):
        present = ["Country Name", "Country Code", "2018 [YR2018]"]

        assert INDICATORS_DATASET.missing_columns(present) == ["Series Name", "Series Code"]
        with pytest.raises(ValueError, match="Series Name"):
            INDICATORS_DATASET.require_columns(present)
