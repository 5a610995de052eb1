"""Unit tests for report assembly and Markdown rendering."""

import pandas as pd
import pytest

from analysis import REGRESSION_PNG_NAME
from reporting import compute_report_results, markdown_table, render_markdown_report


@pytest.fixture
def results(enriched_df):
    indicators = enriched_df[["country", "country_code", "year", "gdp_per_capita", "co2_per_capita"]]
    population = enriched_df[["country", "country_code", "year", "population"]]
    continents = enriched_df[["country", "country_code", "continent"]].drop_duplicates("country_code")
    return compute_report_results(
        indicators,
        population,
        continents,
        years=(2017, 2019),
        test_year=2018,
        group_size=4,
        alpha=0.05,
        confidence=0.95,
    )


@pytest.mark.unit
class TestMarkdownTable:

    def test_header_separator_and_rows(self):
        df = pd.DataFrame({"name": ["A", "B"], "value": [1.23456, float("nan")]})
        table = markdown_table(df, headers=["Name", "Value"], decimals=2)

        lines = table.splitlines()
        assert lines[0] == "| Name | Value |"
        assert lines[1] == "|---|---|"
        assert lines[2] == "| A | 1.23 |"
        assert lines[3] == "| B | — |"

    def test_headers_must_match_columns(self):
        df = pd.DataFrame({"a": [1]})
        with pytest.raises(ValueError):
            markdown_table(df, headers=["A", "B"])


@pytest.mark.unit
class TestComputeReportResults:

    def test_all_analyses_are_present(self, results):
        assert results.groups.size == 4
        assert results.t_test.df == 6
        assert len(results.country_summary) == 12
        assert len(results.continent_intervals) == 3
        assert results.regression.n == 36
        assert results.country_count == 12
        assert results.excluded_rows == 0

    def test_no_recognised_country_is_an_error(self, enriched_df):
        indicators = enriched_df[["country", "country_code", "year", "gdp_per_capita", "co2_per_capita"]]
        population = enriched_df[["country", "country_code", "year", "population"]]
        continents = pd.DataFrame({"country": ["X"], "country_code": ["XXX"], "continent": ["Asia"]})
        with pytest.raises(ValueError, match="No rows left"):
            compute_report_results(
                indicators,
                population,
                continents,
                years=(2017, 2019),
                test_year=2018,
                group_size=4,
                alpha=0.05,
                confidence=0.95,
            )


@pytest.mark.unit
class TestRenderMarkdownReport:

    def test_sections_and_statistics(self, results):
        report = render_markdown_report(results)

        assert report.startswith("# GDP, population and CO2 emissions per capita (2017–2019)")
        for heading in (
            "## Data",
            "## CO2 emissions of high- and low-GDP countries",
            "## CO2 per capita by continent",
            "## Country averages",
            "## Regression of CO2 on GDP per capita",
        ):
            assert heading in report
        assert f"{results.t_test.statistic:.4f}" in report
        assert results.t_test.decision in report
        assert f"]({REGRESSION_PNG_NAME})" in report

    def test_continent_table_lists_every_continent(self, results):
        report = render_markdown_report(results)
        for continent in ("Africa", "Asia", "Europe"):
            assert f"| {continent} | 12 |" in report

    def test_chart_links_can_be_overridden(self, results):
        report = render_markdown_report(results, charts={"boxplot": "figures/box.png"})
        assert "](figures/box.png)" in report
