"""
Basic hour-of-day seasonality scan over a metric, reporting the hours that sit well above or below the daily mean.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable, List, Union

import numpy as np

from api.requests import Sample
from api.responses import SeasonalPattern, SeasonalPeriod
from config import settings
from engine.enums import Metric, PatternType
from engine.statistics.series import metric_points

_HOURS = 24


def identify_seasonal_patterns(
    samples: Iterable[Sample],
    metric: Union[Metric, str] = Metric.fps,
) -> List[SeasonalPattern]:
    """Empty hours count as zero in the daily mean, which biases sparse data toward detection."""
    metric = Metric.parse(metric)
    points = metric_points(samples, metric)
    n = len(points)
    if n < settings.seasonal_min_samples:
        return []

    sums = np.zeros(_HOURS)
    counts = np.zeros(_HOURS)
    for sample, value in points:
        hour = sample.timestamp.hour
        sums[hour] += value
        counts[hour] += 1
    hourly = np.divide(sums, counts, out=np.zeros(_HOURS), where=counts > 0)

    mean = float(hourly.mean())
    amplitude = float(hourly.std())
    if mean <= 0 or amplitude <= mean * settings.seasonal_min_relative_amplitude:
        return []

    def _period(hour: int) -> SeasonalPeriod:
        return SeasonalPeriod(
            label=f"{hour}:00",
            bucket=hour,
            average_value=float(hourly[hour]),
            frequency=float(counts[hour]) / n,
        )

    band = amplitude * settings.seasonal_peak_factor
    peaks = [_period(h) for h in range(_HOURS) if hourly[h] > mean + band]
    lows = [_period(h) for h in range(_HOURS) if hourly[h] < mean - band]

    return [SeasonalPattern(
        pattern_type=PatternType.daily,
        metric_type=metric,
        peak_periods=peaks,
        low_periods=lows,
        amplitude=amplitude,
        confidence=min(amplitude / mean, 1.0),
        seasonal_strength=amplitude / mean,
    )]
