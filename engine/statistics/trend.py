"""
Trend analysis for a single metric, classifying direction and significance from an ordinary least squares fit over the time-ordered values.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from api.requests import Sample
from api.responses import TrendAnalysis
from config import settings
from engine.enums import Metric, Significance, TrendDirection
from engine.statistics.regression import LinearRegressionResult, linear_regression
from engine.statistics.series import finite, metric_values


def _direction(slope: float) -> TrendDirection:
    if abs(slope) < settings.trend_stable_slope:
        return TrendDirection.stable
    return TrendDirection.up if slope > 0 else TrendDirection.down


def _significance(fit: LinearRegressionResult) -> Significance:
    if fit.is_significant and abs(fit.r_squared) > settings.trend_high_r2:
        return Significance.high
    if fit.is_significant and abs(fit.r_squared) > settings.trend_medium_r2:
        return Significance.medium
    return Significance.low


def trend_from_values(values: Sequence[float], time_period: str = "unknown") -> TrendAnalysis:
    vals = finite(values)
    n = len(vals)
    if n < settings.trend_min_points:
        return TrendAnalysis(
            direction=TrendDirection.stable,
            slope=0.0,
            confidence=0.0,
            significance=Significance.low,
            r_squared=0.0,
            data_points=n,
            time_period=time_period,
        )

    fit = linear_regression(vals)
    return TrendAnalysis(
        direction=_direction(fit.slope),
        slope=fit.slope,
        confidence=min(1.0, abs(fit.correlation)),
        significance=_significance(fit),
        r_squared=fit.r_squared,
        forecast=fit.slope * n + fit.intercept,
        data_points=n,
        time_period=time_period,
    )


def analyze_trend(
    samples: Iterable[Sample],
    metric: Union[Metric, str],
    time_period: str = "unknown",
) -> TrendAnalysis:
    return trend_from_values(metric_values(samples, metric), time_period)
