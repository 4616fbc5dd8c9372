"""
Test cases for descriptive statistics, percentile rank and the centred moving average.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import pytest

from api.responses import StatisticalResult
from engine.statistics.descriptive import calculate_statistics, moving_average, percentile_rank


def test_empty_input_is_all_zero():
    res = calculate_statistics([])
    assert res == StatisticalResult()
    assert res.outliers == []


def test_basic_statistics():
    res = calculate_statistics([1, 2, 3, 4, 5])
    assert res.mean == pytest.approx(3.0)
    assert res.median == pytest.approx(3.0)
    assert res.standard_deviation == pytest.approx(math.sqrt(2))
    assert res.min == 1.0
    assert res.max == 5.0
    assert res.percentile_25 == pytest.approx(2.0)
    assert res.percentile_75 == pytest.approx(4.0)
    assert res.percentile_90 == pytest.approx(4.6)
    assert res.percentile_95 == pytest.approx(4.8)
    assert res.outliers == []


def test_iqr_outliers():
    res = calculate_statistics([10, 12, 11, 13, 12, 11, 100])
    assert res.outliers == [100.0]


def test_non_finite_values_ignored():
    res = calculate_statistics([1, math.nan, 3, math.inf])
    assert res.mean == pytest.approx(2.0)
    assert res.max == 3.0


def test_percentile_rank_counts_strictly_lower():
    assert percentile_rank(3, [1, 2, 3, 4]) == pytest.approx(50.0)
    assert percentile_rank(10, [1, 2]) == pytest.approx(100.0)
    assert percentile_rank(0, [1, 2]) == pytest.approx(0.0)
    assert percentile_rank(1, []) == 0.0


def test_moving_average_centred_window():
    assert moving_average([1, 2, 3, 4, 5], 3) == pytest.approx([2.0, 2.0, 3.0, 4.0, 4.5])


@pytest.mark.parametrize("window", [0, -1, 6])
def test_moving_average_invalid_window_returns_input(window):
    assert moving_average([1, 2, 3, 4, 5], window) == [1.0, 2.0, 3.0, 4.0, 5.0]
