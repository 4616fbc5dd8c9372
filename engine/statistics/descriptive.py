"""
Descriptive statistics for a numeric sample set: central tendency, spread, interpolated percentiles, IQR outliers, percentile rank and a centred moving average.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
from scipy.stats import percentileofscore

from api.responses import StatisticalResult
from config import settings
from engine.statistics.series import finite


def calculate_statistics(values: Sequence[float]) -> StatisticalResult:
    arr = finite(values)
    if arr.size == 0:
        return StatisticalResult()

    mean = float(arr.mean())
    std = float(arr.std())
    # numpy's default method is linear interpolation between order statistics
    p25, p50, p75, p90, p95 = (float(p) for p in np.percentile(arr, [25, 50, 75, 90, 95]))

    iqr = p75 - p25
    lower = p25 - settings.iqr_multiplier * iqr
    upper = p75 + settings.iqr_multiplier * iqr
    outliers = [float(v) for v in arr if v < lower or v > upper]

    return StatisticalResult(
        mean=mean,
        median=p50,
        standard_deviation=std,
        min=float(arr.min()),
        max=float(arr.max()),
        percentile_25=p25,
        percentile_75=p75,
        percentile_90=p90,
        percentile_95=p95,
        outliers=outliers,
    )


def percentile_rank(value: float, values: Sequence[float]) -> float:
    """Percentage of ``values`` strictly below ``value``."""
    arr = finite(values)
    if arr.size == 0:
        return 0.0
    return float(percentileofscore(arr, value, kind="strict"))


def moving_average(values: Sequence[float], window: int) -> List[float]:
    data = [float(v) for v in values]
    if window <= 0 or window > len(data):
        return data

    n = len(data)
    result: List[float] = []
    for i in range(n):
        start = max(0, i - window // 2)
        end = min(n, start + window)
        chunk = data[start:end]
        result.append(sum(chunk) / len(chunk))
    return result
