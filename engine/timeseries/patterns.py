"""
Calendar-bucket seasonality detection (hour of day, day of week, week of month, month of year) with peak and low periods and the next expected occurrence of each.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from api.requests import Sample
from api.responses import SeasonalPattern, SeasonalPeriod
from config import settings
from engine.enums import Metric, PatternType
from engine.exceptions import InvalidParameterError
from engine.statistics.series import metric_points


def _week_of_month(ts: datetime) -> int:
    # days 22 and later all fold into the fourth week
    return min((ts.day - 1) // 7, 3)


def _next_hour(ts: datetime, bucket: int) -> Optional[datetime]:
    start = ts.replace(minute=0, second=0, microsecond=0)
    for step in range(1, 25):
        candidate = start + timedelta(hours=step)
        if candidate.hour == bucket:
            return candidate
    return None


def _next_weekday(ts: datetime, bucket: int) -> Optional[datetime]:
    start = ts.replace(hour=0, minute=0, second=0, microsecond=0)
    for step in range(1, 8):
        candidate = start + timedelta(days=step)
        if candidate.weekday() == bucket:
            return candidate
    return None


def _next_week_of_month(ts: datetime, bucket: int) -> Optional[datetime]:
    start = ts.replace(hour=0, minute=0, second=0, microsecond=0)
    for step in range(1, 63):
        candidate = start + timedelta(days=step)
        if candidate.day == 7 * bucket + 1:
            return candidate
    return None


def _next_month(ts: datetime, bucket: int) -> Optional[datetime]:
    year, month = ts.year, ts.month
    for _ in range(12):
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
        if month - 1 == bucket:
            return ts.replace(year=year, month=month, day=1, hour=0, minute=0, second=0, microsecond=0)
    return None


@dataclass(frozen=True)
class _Calendar:
    buckets: int
    bucket_of: Callable[[datetime], int]
    label: Callable[[int], str]
    next_start: Callable[[datetime, int], Optional[datetime]]


_CALENDARS: Dict[PatternType, _Calendar] = {
    PatternType.hourly: _Calendar(24, lambda ts: ts.hour, lambda b: f"{b:02d}:00", _next_hour),
    PatternType.daily: _Calendar(7, lambda ts: ts.weekday(), lambda b: calendar.day_name[b], _next_weekday),
    PatternType.weekly: _Calendar(4, _week_of_month, lambda b: f"Week {b + 1}", _next_week_of_month),
    PatternType.monthly: _Calendar(12, lambda ts: ts.month - 1, lambda b: calendar.month_name[b + 1], _next_month),
}


def _parse_pattern_type(value: Union[PatternType, str]) -> PatternType:
    if isinstance(value, PatternType):
        return value
    try:
        return PatternType(value)
    except ValueError:
        raise InvalidParameterError(f"unknown pattern type: {value!r}") from None


def _detect(
    pattern_type: PatternType,
    metric: Metric,
    points: List[Tuple[Sample, float]],
) -> Optional[SeasonalPattern]:
    cal = _CALENDARS[pattern_type]
    grouped: Dict[int, List[float]] = {}
    for sample, value in points:
        grouped.setdefault(cal.bucket_of(sample.timestamp), []).append(value)

    if len(grouped) < 2:
        return None

    buckets = sorted(grouped)
    means = np.array([np.mean(grouped[b]) for b in buckets])
    counts = np.array([len(grouped[b]) for b in buckets], dtype=float)

    mean = float(means.mean())
    amplitude = float(means.std())
    if mean <= 0 or amplitude / mean < settings.seasonal_min_relative_amplitude:
        return None

    n = len(points)
    values = np.array([v for _, v in points])
    total_variance = float(values.var())
    if total_variance > 0:
        between = float(np.sum(counts * (means - values.mean()) ** 2) / n)
        strength = min(1.0, max(0.0, between / total_variance))
    else:
        strength = 0.0

    band = amplitude * settings.seasonal_peak_factor
    peaks: List[SeasonalPeriod] = []
    lows: List[SeasonalPeriod] = []
    for bucket, bucket_mean, count in zip(buckets, means, counts):
        period = SeasonalPeriod(
            label=cal.label(bucket),
            bucket=bucket,
            average_value=float(bucket_mean),
            frequency=float(count) / n,
        )
        if bucket_mean > mean + band:
            peaks.append(period)
        elif bucket_mean < mean - band:
            lows.append(period)

    coverage = min(1.0, n / (cal.buckets * settings.seasonal_samples_per_bucket))
    relative = min(1.0, (amplitude / mean) / settings.seasonal_strength_scale)

    latest = max(sample.timestamp for sample, _ in points)
    next_peak = None
    next_low = None
    if peaks:
        next_peak = cal.next_start(latest, max(peaks, key=lambda p: p.average_value).bucket)
    if lows:
        next_low = cal.next_start(latest, min(lows, key=lambda p: p.average_value).bucket)

    return SeasonalPattern(
        pattern_type=pattern_type,
        metric_type=metric,
        peak_periods=peaks,
        low_periods=lows,
        amplitude=amplitude,
        confidence=(coverage + relative) / 2,
        seasonal_strength=strength,
        next_predicted_peak=next_peak,
        next_predicted_low=next_low,
    )


def detect_seasonal_patterns(
    samples: Iterable[Sample],
    pattern_types: Optional[Sequence[Union[PatternType, str]]] = None,
    metric: Union[Metric, str] = Metric.fps,
) -> List[SeasonalPattern]:
    metric = Metric.parse(metric)
    if pattern_types is None:
        pattern_types = list(PatternType)
    types = [_parse_pattern_type(t) for t in pattern_types]

    points = metric_points(samples, metric)
    if len(points) < settings.seasonal_min_samples:
        return []

    patterns: List[SeasonalPattern] = []
    for pattern_type in types:
        pattern = _detect(pattern_type, metric, points)
        if pattern is not None:
            patterns.append(pattern)
    return patterns
