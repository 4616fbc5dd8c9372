"""
Test cases for least squares regression and the t-statistic p-value lookup, covering exact fits, flat series, short inputs and non-finite values.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import pytest

from config import settings
from engine.statistics.regression import LinearRegressionResult, approximate_p_value, linear_regression


def test_exact_linear_fit():
    res = linear_regression([2, 5, 8, 11, 14])
    assert res.slope == pytest.approx(3.0)
    assert res.intercept == pytest.approx(2.0)
    assert res.r_squared == pytest.approx(1.0)
    assert res.correlation == pytest.approx(1.0)
    assert res.p_value == 0.001
    assert res.is_significant


def test_decreasing_fit_has_negative_correlation():
    res = linear_regression([10, 8, 6, 4, 2])
    assert res.slope == pytest.approx(-2.0)
    assert res.correlation == pytest.approx(-1.0)


def test_flat_series_is_not_significant():
    res = linear_regression([5, 5, 5, 5])
    assert res.slope == 0.0
    assert res.r_squared == 0.0
    assert res.correlation == 0.0
    assert res.p_value == settings.p_value_floor
    assert not res.is_significant


def test_short_series_returns_zero_result():
    assert linear_regression([1, 2]) == LinearRegressionResult()
    assert linear_regression([]).p_value == 1.0


def test_min_points_configurable(monkeypatch):
    monkeypatch.setattr(settings, "regression_min_points", 5)
    assert linear_regression([1, 2, 3, 4]) == LinearRegressionResult()


def test_non_finite_values_dropped():
    res = linear_regression([1, math.nan, 2, math.inf, 3])
    assert res.slope == pytest.approx(1.0)
    assert math.isfinite(res.intercept)


def test_noisy_fit_outputs_are_finite():
    res = linear_regression([3, 1, 4, 1, 5, 9, 2, 6])
    for value in (res.slope, res.intercept, res.r_squared, res.correlation, res.p_value):
        assert math.isfinite(value)
    assert 0.0 <= res.r_squared <= 1.0


@pytest.mark.parametrize(
    "t_stat,expected",
    [(3.5, 0.001), (2.7, 0.01), (2.2, 0.05), (1.7, 0.1), (1.0, 0.2), (math.inf, 0.001)],
)
def test_p_value_lookup(t_stat, expected):
    assert approximate_p_value(t_stat, 10) == expected


def test_p_value_without_degrees_of_freedom():
    assert approximate_p_value(5.0, 0) == 1.0
