"""
Report configuration
--------------------

All knobs of the report run, resolved from environment variables (and a
local `.env`, when present). CLI flags in `report_pipeline` and the Lambda
event in `cloud_report` override individual values via `with_overrides`.

Environment variables
---------------------

- REPORT_INPUT_DIR          root holding the three source CSVs (default: "data")
- REPORT_OUTPUT_DIR         where report artefacts are written (default: "report")
- REPORT_INDICATORS_FILE    CO2/GDP DataBank export (default: "co2_gdp_indicators.csv")
- REPORT_POPULATION_FILE    population DataBank export (default: "population.csv")
- REPORT_CONTINENTS_FILE    country/continent reference (default: "countries_continents.csv")
- REPORT_MIN_YEAR / REPORT_MAX_YEAR   year window kept by the cleaner (2015 / 2022)
- REPORT_TEST_YEAR          year used by the two-sample test (2018)
- REPORT_GROUP_SIZE         size of the highest/lowest GDP groups (100)
- REPORT_ALPHA              significance level of the test (0.05)
- REPORT_CONFIDENCE         confidence level of the continent intervals (0.95)
- REPORT_S3_BUCKET          bucket used by the cloud entrypoint
- REPORT_S3_BASE_PREFIX     optional logical prefix under the bucket
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from env_loader import load_dotenv_if_present

INPUT_DIR_ENV = "REPORT_INPUT_DIR"
OUTPUT_DIR_ENV = "REPORT_OUTPUT_DIR"
INDICATORS_FILE_ENV = "REPORT_INDICATORS_FILE"
POPULATION_FILE_ENV = "REPORT_POPULATION_FILE"
CONTINENTS_FILE_ENV = "REPORT_CONTINENTS_FILE"
MIN_YEAR_ENV = "REPORT_MIN_YEAR"
MAX_YEAR_ENV = "REPORT_MAX_YEAR"
TEST_YEAR_ENV = "REPORT_TEST_YEAR"
GROUP_SIZE_ENV = "REPORT_GROUP_SIZE"
ALPHA_ENV = "REPORT_ALPHA"
CONFIDENCE_ENV = "REPORT_CONFIDENCE"
S3_BUCKET_ENV = "REPORT_S3_BUCKET"
S3_BASE_PREFIX_ENV = "REPORT_S3_BASE_PREFIX"


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name!r} must be an integer, got {raw!r}") from exc


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name!r} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class ReportSettings:
    input_dir: str = "data"
    output_dir: str = "report"
    indicators_file: str = "co2_gdp_indicators.csv"
    population_file: str = "population.csv"
    continents_file: str = "countries_continents.csv"
    min_year: int = 2015
    max_year: int = 2022
    test_year: int = 2018
    group_size: int = 100
    alpha: float = 0.05
    confidence: float = 0.95
    s3_bucket: Optional[str] = None
    s3_base_prefix: Optional[str] = None

    def __post_init__(self) -> None:
        if self.min_year > self.max_year:
            raise ValueError(
                f"min_year ({self.min_year}) must not be greater than max_year ({self.max_year})",
            )
        if self.group_size < 2:
            raise ValueError(f"group_size must be at least 2, got {self.group_size}")
        if not 0.0 < self.alpha < 1.0:
            raise ValueError(f"alpha must be in (0, 1), got {self.alpha}")
        if not 0.0 < self.confidence < 1.0:
            raise ValueError(f"confidence must be in (0, 1), got {self.confidence}")

    @property
    def years(self) -> range:
        return range(self.min_year, self.max_year + 1)

    def input_key(self, file_name: str) -> str:
        """Logical storage key of an input file, relative to the storage root."""
        base = self.input_dir.strip("/")
        return f"{base}/{file_name}" if base else file_name

    def output_key(self, file_name: str) -> str:
        base = self.output_dir.strip("/")
        return f"{base}/{file_name}" if base else file_name

    def with_overrides(self, **overrides: Any) -> "ReportSettings":
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        dotenv_path: Optional[str] = None,
    ) -> "ReportSettings":
        if environ is None:
            load_dotenv_if_present(dotenv_path)
            environ = os.environ

        defaults = cls()
        return cls(
            input_dir=environ.get(INPUT_DIR_ENV) or defaults.input_dir,
            output_dir=environ.get(OUTPUT_DIR_ENV) or defaults.output_dir,
            indicators_file=environ.get(INDICATORS_FILE_ENV) or defaults.indicators_file,
            population_file=environ.get(POPULATION_FILE_ENV) or defaults.population_file,
            continents_file=environ.get(CONTINENTS_FILE_ENV) or defaults.continents_file,
            min_year=_env_int(environ, MIN_YEAR_ENV, defaults.min_year),
            max_year=_env_int(environ, MAX_YEAR_ENV, defaults.max_year),
            test_year=_env_int(environ, TEST_YEAR_ENV, defaults.test_year),
            group_size=_env_int(environ, GROUP_SIZE_ENV, defaults.group_size),
            alpha=_env_float(environ, ALPHA_ENV, defaults.alpha),
            confidence=_env_float(environ, CONFIDENCE_ENV, defaults.confidence),
            s3_bucket=environ.get(S3_BUCKET_ENV) or None,
            s3_base_prefix=environ.get(S3_BASE_PREFIX_ENV) or None,
        )


__all__ = [
    "INPUT_DIR_ENV",
    "OUTPUT_DIR_ENV",
    "S3_BUCKET_ENV",
    "S3_BASE_PREFIX_ENV",
    "ReportSettings",
]
