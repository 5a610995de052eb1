"""Pytest configuration and shared fixtures for the report tests.

This module provides fixtures for:
- DataBank-shaped raw exports (indicators, population) as string frames
- The country/continent reference table
- A synthetic enriched country-year table for the statistics
- A local storage root populated with the three source CSVs
- A moto-backed S3 client for the cloud entrypoint
"""

from typing import Dict, List

import boto3
import numpy as np
import pandas as pd
import pytest
from moto import mock_aws

from adapters import LocalStorageAdapter


YEARS = list(range(2015, 2023))


def _databank_row(name: str, code: str, series_name: str, series_code: str, values: List[str]) -> Dict[str, str]:
    row = {
        "Country Name": name,
        "Country Code": code,
        "Series Name": series_name,
        "Series Code": series_code,
        "2014 [YR2014]": "1",
    }
    for year, value in zip(YEARS, values):
        row[f"{year} [YR{year}]"] = value
    return row


# ============================================================================
# Raw source fixtures
# ============================================================================

@pytest.fixture
def raw_indicators() -> pd.DataFrame:
    """CO2/GDP DataBank export with a gap, an aggregate and a footer line."""
    gdp, co2 = "GDP per capita (current US$)", "CO2 emissions (metric tons per capita)"
    rows = [
        _databank_row("Germany", "DEU", gdp, "NY.GDP.PCAP.CD",
                      ["41000", "42000", "44000", "47000", "46000", "46500", "51000", "48700"]),
        _databank_row("Germany", "DEU", co2, "EN.ATM.CO2E.PC",
                      ["9.0", "8.9", "8.7", "8.4", "7.9", "7.3", "7.6", ".."]),
        _databank_row("Nigeria", "NGA", gdp, "NY.GDP.PCAP.CD",
                      ["2700", "2200", "1900", "2000", "2200", "2100", "2000", "2100"]),
        _databank_row("Nigeria", "NGA", co2, "EN.ATM.CO2E.PC",
                      ["0.6", "0.6", "0.5", "0.6", "0.6", "0.5", "0.6", "0.6"]),
        _databank_row("World", "WLD", gdp, "NY.GDP.PCAP.CD",
                      ["10200", "10300", "10800", "11300", "11400", "10900", "12200", "12700"]),
        _databank_row("World", "WLD", co2, "EN.ATM.CO2E.PC",
                      ["4.5", "4.5", "4.5", "4.6", "4.5", "4.3", "4.5", "4.5"]),
    ]
    df = pd.DataFrame(rows)
    footer = {col: "" for col in df.columns}
    footer["Country Name"] = "Data from database: World Development Indicators"
    return pd.concat([df, pd.DataFrame([footer])], ignore_index=True)


@pytest.fixture
def raw_population() -> pd.DataFrame:
    rows = [
        _databank_row("Germany", "DEU", "Population, total", "SP.POP.TOTL",
                      ["81700000", "82300000", "82700000", "82900000", "83100000", "83200000", "83200000", "83800000"]),
        _databank_row("Nigeria", "NGA", "Population, total", "SP.POP.TOTL",
                      ["181000000", "186000000", "191000000", "196000000", "201000000", "206000000", "211000000", ".."]),
        _databank_row("World", "WLD", "Population, total", "SP.POP.TOTL",
                      ["7400000000"] * 8),
    ]
    return pd.DataFrame(rows)


@pytest.fixture
def raw_continents() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Country": "Germany", "Abbreviation": "DEU", "Continent": "Europe"},
            {"Country": "Nigeria", "Abbreviation": "NGA", "Continent": "Africa"},
            {"Country": "Brazil", "Abbreviation": "BRA", "Continent": "South America"},
        ]
    )


# ============================================================================
# Enriched table fixtures
# ============================================================================

@pytest.fixture
def enriched_df() -> pd.DataFrame:
    """Synthetic enriched table: 12 countries over 2017-2019, three continents.

    GDP per capita grows with the country index, CO2 per capita follows GDP
    with a small deterministic wiggle so the regression is not exact.
    """
    continents = ["Africa", "Europe", "Asia"]
    rows = []
    for i in range(12):
        for year in (2017, 2018, 2019):
            gdp = 1000.0 * (i + 1) + 10.0 * (year - 2017)
            co2 = 0.5 + gdp / 2000.0 + (0.3 if (i + year) % 2 else -0.3)
            population = 1_000_000.0 * (i + 1)
            rows.append(
                {
                    "country": f"Country {i:02d}",
                    "country_code": f"C{i:02d}",
                    "continent": continents[i % 3],
                    "year": year,
                    "population": population,
                    "gdp_per_capita": gdp,
                    "total_gdp": gdp * population,
                    "co2_per_capita": co2,
                    "total_co2": co2 * population,
                }
            )
    return pd.DataFrame(rows)


# ============================================================================
# Storage fixtures
# ============================================================================

def _write_source_csvs(root, n_countries: int = 12) -> None:
    """Write three consistent source files with `n_countries` countries."""
    continents = ["Africa", "Asia", "Australia", "Europe", "N. America", "S. America"]
    rng = np.random.default_rng(7)
    indicator_rows, population_rows, reference_rows = [], [], []
    for i in range(n_countries):
        name, code = f"Country {i:02d}", f"C{i:02d}"
        gdp = [f"{1500.0 * (i + 1) + 25.0 * k:.1f}" for k in range(len(YEARS))]
        co2 = [f"{0.4 + (i + 1) * 0.8 + rng.normal(0, 0.3):.3f}" for _ in YEARS]
        indicator_rows.append(_databank_row(name, code, "GDP per capita (current US$)", "NY.GDP.PCAP.CD", gdp))
        indicator_rows.append(_databank_row(name, code, "CO2 emissions (metric tons per capita)", "EN.ATM.CO2E.PC", co2))
        population_rows.append(
            _databank_row(name, code, "Population, total", "SP.POP.TOTL", [str(1_000_000 * (i + 1))] * len(YEARS))
        )
        reference_rows.append({"Country": name, "Abbreviation": code, "Continent": continents[i % len(continents)]})

    indicator_rows.append(_databank_row("World", "WLD", "GDP per capita (current US$)", "NY.GDP.PCAP.CD", ["11000"] * 8))
    indicator_rows.append(_databank_row("World", "WLD", "CO2 emissions (metric tons per capita)", "EN.ATM.CO2E.PC", ["4.5"] * 8))

    data_dir = root / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(indicator_rows).to_csv(data_dir / "co2_gdp_indicators.csv", index=False)
    pd.DataFrame(population_rows).to_csv(data_dir / "population.csv", index=False)
    pd.DataFrame(reference_rows).to_csv(data_dir / "countries_continents.csv", index=False)


@pytest.fixture
def populated_storage(tmp_path) -> LocalStorageAdapter:
    """Local storage rooted at tmp_path with data/ holding the three sources."""
    _write_source_csvs(tmp_path)
    return LocalStorageAdapter(tmp_path)


# ============================================================================
# AWS S3 Mocking Fixtures
# ============================================================================

S3_TEST_BUCKET = "report-test-bucket"
S3_TEST_REGION = "us-east-1"


@pytest.fixture(scope="function")
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", S3_TEST_REGION)


@pytest.fixture(scope="function")
def s3_client(aws_credentials):
    """Mocked S3 client (moto)."""
    with mock_aws():
        yield boto3.client("s3", region_name=S3_TEST_REGION)


@pytest.fixture(scope="function")
def s3_bucket(s3_client) -> str:
    s3_client.create_bucket(Bucket=S3_TEST_BUCKET)
    return S3_TEST_BUCKET
