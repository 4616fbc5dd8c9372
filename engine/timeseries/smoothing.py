"""
Smoothing filters for metric series: single exponential smoothing with flat forecast, and a trailing linearly weighted moving average.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from config import settings
from engine.exceptions import InvalidParameterError
from engine.statistics.series import finite


def exponential_smoothing(
    values: Sequence[float],
    alpha: float | None = None,
    forecast_periods: int = 0,
) -> List[float]:
    if alpha is None:
        alpha = settings.smoothing_alpha
    if not 0 < alpha <= 1:
        raise InvalidParameterError(f"alpha must be in (0, 1], got {alpha}")
    if forecast_periods < 0:
        raise InvalidParameterError(f"forecast_periods must be >= 0, got {forecast_periods}")

    vals = finite(values)
    if vals.size == 0:
        return []

    smoothed = [float(vals[0])]
    for v in vals[1:]:
        smoothed.append(alpha * float(v) + (1 - alpha) * smoothed[-1])

    return smoothed + [smoothed[-1]] * forecast_periods


def weighted_moving_average(values: Sequence[float], window: int) -> List[float]:
    if window < 1:
        raise InvalidParameterError(f"window must be >= 1, got {window}")

    vals = finite(values)
    result: List[float] = []
    for i in range(len(vals)):
        chunk = vals[max(0, i - window + 1):i + 1]
        weights = np.arange(1, len(chunk) + 1, dtype=float)
        result.append(float(np.dot(chunk, weights) / weights.sum()))
    return result
