"""
Mann-Kendall monotonic trend test using the normal approximation without tie correction.

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
from engine.enums import MonotonicTrend
from engine.statistics.series import finite


@dataclass(frozen=True)
class MannKendallResult:
    tau: float = 0.0
    is_significant: bool = False
    trend: MonotonicTrend = MonotonicTrend.no_trend


def mann_kendall(values: Sequence[float]) -> MannKendallResult:
    """O(n^2) in time and memory; callers cap the series length."""
    arr = finite(values)
    n = len(arr)
    if n < settings.mann_kendall_min_points:
        return MannKendallResult()

    # signs[i, j] = sign(x_j - x_i); only pairs with j > i count
    signs = np.sign(arr[np.newaxis, :] - arr[:, np.newaxis])
    s = float(np.sum(np.triu(signs, k=1)))

    tau = s / (n * (n - 1) / 2)
    variance = n * (n - 1) * (2 * n + 5) / 18
    z = abs(s) / math.sqrt(variance)

    if abs(tau) < settings.mann_kendall_no_trend_tau:
        trend = MonotonicTrend.no_trend
    elif tau > 0:
        trend = MonotonicTrend.increasing
    else:
        trend = MonotonicTrend.decreasing

    return MannKendallResult(
        tau=tau,
        is_significant=z > settings.mann_kendall_z_critical,
        trend=trend,
    )
