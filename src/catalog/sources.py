from __future__ import annotations

from .models import Dataset

GDP_PER_CAPITA_CODE = "NY.GDP.PCAP.CD"
CO2_PER_CAPITA_CODES = ("EN.ATM.CO2E.PC", "EN.GHG.CO2.PC.CE.AR5")
POPULATION_CODE = "SP.POP.TOTL"

# Series code -> canonical column produced by the cleaner.
INDICATOR_COLUMNS = {
    GDP_PER_CAPITA_CODE: "gdp_per_capita",
    **{code: "co2_per_capita" for code in CO2_PER_CAPITA_CODES},
}

# Used only when an export carries no "Series Code" values.
INDICATOR_NAME_COLUMNS = {
    "GDP per capita (current US$)": "gdp_per_capita",
    "CO2 emissions (metric tons per capita)": "co2_per_capita",
    "Carbon dioxide (CO2) emissions excluding LULUCF per capita (t CO2e/capita)": "co2_per_capita",
}

# DataBank placeholder for "no data".
MISSING_VALUE_MARKER = ".."

INDICATORS_DATASET = Dataset(
    id="co2_gdp_indicators",
    name="World Bank WDI - CO2 and GDP per capita",
    required_columns=("Country Name", "Country Code", "Series Name", "Series Code"),
)

POPULATION_DATASET = Dataset(
    id="population",
    name="World Bank WDI - Population, total",
    required_columns=("Country Name", "Country Code"),
)

CONTINENTS_DATASET = Dataset(
    id="countries_continents",
    name="Country to continent reference",
    required_columns=("Country", "Abbreviation", "Continent"),
)
