"""
Test cases for exponential smoothing, the weighted moving average and additive seasonal decomposition.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from api.requests import Sample
from config import settings
from engine.exceptions import InvalidParameterError
from engine.timeseries.decomposition import decompose_values, seasonal_decomposition
from engine.timeseries.smoothing import exponential_smoothing, weighted_moving_average

BASE = datetime(2024, 2, 1, tzinfo=timezone.utc)


def daily_samples(values):
    return [Sample(timestamp=BASE + timedelta(days=i), fps=v) for i, v in enumerate(values)]


def test_exponential_smoothing_with_forecast():
    assert exponential_smoothing([10, 20, 30], alpha=0.5) == pytest.approx([10, 15, 22.5])
    assert exponential_smoothing([10, 20, 30], alpha=0.5, forecast_periods=2) == pytest.approx(
        [10, 15, 22.5, 22.5, 22.5]
    )


def test_exponential_smoothing_default_alpha(monkeypatch):
    assert exponential_smoothing([10, 20]) == pytest.approx([10, 13])
    monkeypatch.setattr(settings, "smoothing_alpha", 1.0)
    assert exponential_smoothing([10, 20]) == pytest.approx([10, 20])


@pytest.mark.parametrize("alpha", [0.0, -0.2, 1.5])
def test_exponential_smoothing_rejects_alpha(alpha):
    with pytest.raises(InvalidParameterError):
        exponential_smoothing([1, 2, 3], alpha=alpha)


def test_exponential_smoothing_edge_inputs():
    assert exponential_smoothing([]) == []
    assert exponential_smoothing([10, math.nan, 20], alpha=0.5) == pytest.approx([10, 15])


def test_weighted_moving_average():
    res = weighted_moving_average([1, 2, 3, 4], 2)
    assert len(res) == 4
    assert res == pytest.approx([1.0, 5 / 3, 8 / 3, 11 / 3])


def test_weighted_moving_average_rejects_window():
    with pytest.raises(InvalidParameterError):
        weighted_moving_average([1, 2, 3], 0)


def test_decomposition_rejects_period():
    with pytest.raises(InvalidParameterError):
        seasonal_decomposition(daily_samples([1] * 20), period=0)


def test_decomposition_too_short_is_zero_filled():
    res = seasonal_decomposition(daily_samples(range(10)), period=7)
    assert res.trend == [0.0] * 10
    assert res.seasonal == [0.0] * 10
    assert res.residual == [0.0] * 10
    assert res.forecast == []
    assert res.trend_strength == 0.0
    assert res.seasonal_strength == 0.0


def test_decomposition_components_add_up():
    cycle = [5, -5, 3, -3, 0, 2, -2]
    values = [50 + 0.2 * i + cycle[i % 7] for i in range(35)]
    res = seasonal_decomposition(daily_samples(values), period=7)
    assert len(res.trend) == len(res.seasonal) == len(res.residual) == 35
    for v, t, s, r in zip(values, res.trend, res.seasonal, res.residual):
        assert t + s + r == pytest.approx(v)
    assert sum(res.seasonal[:7]) == pytest.approx(0.0, abs=1e-9)
    assert len(res.forecast) == 7
    assert 0.0 <= res.trend_strength <= 1.0
    assert 0.0 <= res.seasonal_strength <= 1.0
    assert res.seasonal_strength > 0.5


def test_decomposition_square_wave_is_strongly_seasonal():
    values = [50 + (20 if i % 7 < 3 else 0) for i in range(35)]
    res = seasonal_decomposition(daily_samples(values), period=7)
    assert res.seasonal_strength > 0.3


def test_decomposition_ignores_trailing_partial_cycle_for_phases():
    values = [10, 0, 0, 0, 0, 0, 0] * 2 + [100, 0, 0]
    res = decompose_values(values, period=7)
    detrended = np.asarray(values, dtype=float) - np.asarray(res.trend)
    phases = np.array([detrended[p:14:7].mean() for p in range(7)])
    phases -= phases.mean()
    assert res.seasonal[:7] == pytest.approx(phases.tolist())
    # the spike at index 14 only shows up in the residual
    assert res.seasonal[14] == pytest.approx(res.seasonal[0])
    assert res.residual[14] > 50
    for v, t, s, r in zip(values, res.trend, res.seasonal, res.residual):
        assert t + s + r == pytest.approx(v)


def test_decomposition_constant_series():
    res = seasonal_decomposition(daily_samples([42] * 14), period=7)
    assert res.forecast == pytest.approx([42] * 7)
    assert res.trend_strength == 0.0
    assert res.seasonal_strength == 0.0


def test_decomposition_forecast_capped():
    res = decompose_values([float(i % 30) for i in range(60)], period=30)
    assert len(res.forecast) == 14


def test_decomposition_sorts_samples():
    samples = daily_samples([10, 20, 30, 40] * 4)
    assert seasonal_decomposition(list(reversed(samples)), period=4) == seasonal_decomposition(samples, period=4)
