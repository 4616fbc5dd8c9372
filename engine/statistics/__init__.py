"""
Statistical primitives: regression, descriptive statistics, anomaly detection, correlation, trend and seasonality tests.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.statistics.anomaly import detect_anomalies
from engine.statistics.correlation import calculate_correlation
from engine.statistics.descriptive import calculate_statistics, moving_average, percentile_rank
from engine.statistics.mann_kendall import MannKendallResult, mann_kendall
from engine.statistics.regression import LinearRegressionResult, approximate_p_value, linear_regression
from engine.statistics.seasonal import identify_seasonal_patterns
from engine.statistics.trend import analyze_trend, trend_from_values

__all__ = [
    "LinearRegressionResult",
    "MannKendallResult",
    "analyze_trend",
    "approximate_p_value",
    "calculate_correlation",
    "calculate_statistics",
    "detect_anomalies",
    "identify_seasonal_patterns",
    "linear_regression",
    "mann_kendall",
    "moving_average",
    "percentile_rank",
    "trend_from_values",
]
