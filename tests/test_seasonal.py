"""
Test cases for seasonality detection: the basic hour-of-day scan and calendar-bucket patterns with next peak and low predictions.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timedelta, timezone

import pytest

from api.requests import Sample
from engine.enums import Metric, PatternType
from engine.exceptions import InvalidParameterError
from engine.statistics.seasonal import identify_seasonal_patterns
from engine.timeseries.patterns import _week_of_month, detect_seasonal_patterns

# a Monday
BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def hourly_samples(days, busy_hours, busy_fps, quiet_fps):
    samples = []
    for d in range(days):
        for h in range(24):
            fps = busy_fps if h in busy_hours else quiet_fps
            samples.append(Sample(timestamp=BASE + timedelta(days=d, hours=h), fps=fps))
    return samples


def test_basic_scan_finds_daytime_peak():
    samples = hourly_samples(2, range(8, 20), 60, 30)
    patterns = identify_seasonal_patterns(samples)
    assert len(patterns) == 1
    p = patterns[0]
    assert p.pattern_type == PatternType.daily
    assert p.metric_type == Metric.fps
    assert p.amplitude == pytest.approx(15.0)
    assert p.confidence == pytest.approx(1 / 3)
    assert p.seasonal_strength == pytest.approx(1 / 3)
    assert p.peak_times == [f"{h}:00" for h in range(8, 20)]
    assert len(p.low_times) == 12
    assert p.peak_periods[0].frequency == pytest.approx(2 / 48)
    assert p.next_predicted_peak is None


def test_basic_scan_rejects_flat_series():
    assert identify_seasonal_patterns(hourly_samples(2, [], 60, 60)) == []


def test_basic_scan_needs_a_day_of_samples():
    assert identify_seasonal_patterns(hourly_samples(2, range(8, 20), 60, 30)[:23]) == []


def test_hourly_pattern_with_next_peak_and_low():
    samples = hourly_samples(3, range(9, 18), 60, 40)
    patterns = detect_seasonal_patterns(samples, ["hourly"])
    assert len(patterns) == 1
    p = patterns[0]
    assert p.pattern_type == PatternType.hourly
    assert p.peak_times == [f"{h:02d}:00" for h in range(9, 18)]
    assert "00:00" in p.low_times
    assert p.confidence == pytest.approx((0.6 + (p.amplitude / 47.5) / 0.5) / 2)
    assert p.seasonal_strength == pytest.approx(1.0)
    assert p.next_predicted_peak == datetime(2024, 1, 4, 9, tzinfo=timezone.utc)
    assert p.next_predicted_low == datetime(2024, 1, 4, 0, tzinfo=timezone.utc)


def test_weekend_dip_in_daily_pattern():
    samples = []
    for d in range(28):
        ts = BASE + timedelta(days=d, hours=12)
        samples.append(Sample(timestamp=ts, fps=30 if ts.weekday() >= 5 else 60))
    patterns = detect_seasonal_patterns(samples, [PatternType.daily])
    assert len(patterns) == 1
    p = patterns[0]
    assert p.low_times == ["Saturday", "Sunday"]
    assert p.peak_times == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
    # last sample is Sunday 28 Jan
    assert p.next_predicted_peak == datetime(2024, 1, 29, tzinfo=timezone.utc)
    assert p.next_predicted_low == datetime(2024, 2, 3, tzinfo=timezone.utc)


def test_all_pattern_types_by_default():
    samples = hourly_samples(3, range(9, 18), 60, 40)
    types = {p.pattern_type for p in detect_seasonal_patterns(samples)}
    assert PatternType.hourly in types
    # three consecutive weekdays each contain the same hourly mix
    assert PatternType.daily not in types
    # a single month has only one populated bucket
    assert PatternType.monthly not in types


def test_insufficient_samples():
    assert detect_seasonal_patterns(hourly_samples(1, range(9, 18), 60, 40)[:20]) == []


def test_unknown_pattern_type_raises():
    with pytest.raises(InvalidParameterError):
        detect_seasonal_patterns(hourly_samples(1, [], 60, 60), ["yearly"])


def test_week_of_month_folds_late_days():
    assert _week_of_month(datetime(2024, 1, 1)) == 0
    assert _week_of_month(datetime(2024, 1, 8)) == 1
    assert _week_of_month(datetime(2024, 1, 22)) == 3
    assert _week_of_month(datetime(2024, 1, 31)) == 3
