"""
Ordinary least squares regression over an implicitly indexed series, with a heuristic significance test based on a fixed t-statistic lookup table.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from config import settings
from engine.statistics.series import finite


@dataclass(frozen=True)
class LinearRegressionResult:
    slope: float = 0.0
    intercept: float = 0.0
    r_squared: float = 0.0
    correlation: float = 0.0
    p_value: float = 1.0
    is_significant: bool = False


def approximate_p_value(t_stat: float, degrees_of_freedom: int) -> float:
    """Map a t-statistic onto a coarse p-value bucket.

    This is a lookup, not a t-distribution CDF; ``is_significant`` flags
    derived from it are indicative only.
    """
    if degrees_of_freedom <= 0:
        return 1.0
    for cutoff, p_value in settings.p_value_table:
        if t_stat > cutoff:
            return p_value
    return settings.p_value_floor


def _t_statistic(slope: float, ss_res: float, n: int, sxx: float) -> float:
    standard_error = math.sqrt(ss_res / (n - 2)) / math.sqrt(sxx)
    if standard_error == 0:
        # exact fit: any non-zero slope is unambiguous
        return math.inf if slope != 0 else 0.0
    return abs(slope / standard_error)


def linear_regression(values: Sequence[float]) -> LinearRegressionResult:
    y = finite(values)
    n = len(y)
    if n < settings.regression_min_points:
        return LinearRegressionResult()

    x = np.arange(n, dtype=float)
    x_mean = float(x.mean())
    y_mean = float(y.mean())
    x_dev = x - x_mean

    sxx = float(np.sum(x_dev ** 2))
    slope = float(np.sum(x_dev * (y - y_mean)) / sxx) if sxx else 0.0
    intercept = y_mean - slope * x_mean

    predicted = slope * x + intercept
    ss_tot = float(np.sum((y - y_mean) ** 2))
    ss_res = float(np.sum((y - predicted) ** 2))
    r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0
    correlation = math.sqrt(abs(r_squared)) * float(np.sign(slope))

    p_value = approximate_p_value(_t_statistic(slope, ss_res, n, sxx), n - 2)
    is_significant = (
        p_value < settings.significance_p_value
        and abs(r_squared) > settings.significance_min_r2
    )

    return LinearRegressionResult(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        correlation=correlation,
        p_value=p_value,
        is_significant=is_significant,
    )
