"""
Analysis layer
--------------

Statistics over the enriched country-year table and the charts drawn from
them:

- two-sample t-test of CO2 per capita, highest vs lowest GDP countries
- per-continent confidence intervals of mean CO2 per capita
- per-country GDP / CO2 means
- OLS regression of CO2 on GDP per capita with residuals
"""

from .econ_environment_statistics import (  # noqa: F401
    ConfidenceInterval,
    GdpGroups,
    RegressionResult,
    TTestResult,
    compare_co2_by_gdp_group,
    continent_confidence_intervals,
    fit_co2_on_gdp,
    mean_confidence_interval,
    select_gdp_groups,
    summarize_countries,
    two_sample_t_test,
)
from .charts import (  # noqa: F401
    BOXPLOT_PNG_NAME,
    INTERVALS_PNG_NAME,
    REGRESSION_PNG_NAME,
    RESIDUALS_PNG_NAME,
    build_continent_interval_chart,
    build_gdp_group_boxplot,
    build_regression_scatter,
    build_residual_plot,
)

__all__ = [
    "ConfidenceInterval",
    "GdpGroups",
    "RegressionResult",
    "TTestResult",
    "compare_co2_by_gdp_group",
    "continent_confidence_intervals",
    "fit_co2_on_gdp",
    "mean_confidence_interval",
    "select_gdp_groups",
    "summarize_countries",
    "two_sample_t_test",
    "BOXPLOT_PNG_NAME",
    "INTERVALS_PNG_NAME",
    "REGRESSION_PNG_NAME",
    "RESIDUALS_PNG_NAME",
    "build_continent_interval_chart",
    "build_gdp_group_boxplot",
    "build_regression_scatter",
    "build_residual_plot",
]
