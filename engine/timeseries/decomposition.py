"""
Additive seasonal decomposition of a metric series into trend, seasonal and residual components, with a one-cycle forecast and component strengths.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union

import numpy as np

from api.requests import Sample
from config import settings
from engine.enums import Metric
from engine.exceptions import InvalidParameterError
from engine.statistics.series import finite, metric_values


@dataclass(frozen=True)
class DecompositionResult:
    period: int
    trend: List[float] = field(default_factory=list)
    seasonal: List[float] = field(default_factory=list)
    residual: List[float] = field(default_factory=list)
    forecast: List[float] = field(default_factory=list)
    trend_strength: float = 0.0
    seasonal_strength: float = 0.0


def _centred_trend(values: np.ndarray, period: int) -> np.ndarray:
    n = len(values)
    trend = np.empty(n)
    for i in range(n):
        lo = max(0, i - period // 2)
        hi = min(n, lo + period)
        trend[i] = values[lo:hi].mean()
    return trend


def _strength(component: np.ndarray, total_variance: float) -> float:
    if total_variance == 0:
        return 0.0
    return float(min(1.0, max(0.0, component.var() / total_variance)))


def decompose_values(values: Sequence[float], period: int | None = None) -> DecompositionResult:
    if period is None:
        period = settings.decomposition_period
    if period < 1:
        raise InvalidParameterError(f"period must be >= 1, got {period}")

    vals = finite(values)
    n = len(vals)
    if n < 2 * period:
        zeros = [0.0] * n
        return DecompositionResult(period=period, trend=zeros, seasonal=list(zeros), residual=list(zeros))

    trend = _centred_trend(vals, period)
    detrended = vals - trend

    # phase means over full cycles only; residual still covers every point
    full = (n // period) * period
    phases = np.array([detrended[p:full:period].mean() for p in range(period)])
    phases -= phases.mean()

    seasonal = phases[np.arange(n) % period]
    residual = vals - trend - seasonal

    horizon = min(period, settings.decomposition_max_forecast)
    forecast = [float(trend[-1] + phases[(n + h) % period]) for h in range(horizon)]

    total_variance = float(vals.var())
    return DecompositionResult(
        period=period,
        trend=trend.tolist(),
        seasonal=seasonal.tolist(),
        residual=residual.tolist(),
        forecast=forecast,
        trend_strength=_strength(trend, total_variance),
        seasonal_strength=_strength(seasonal, total_variance),
    )


def seasonal_decomposition(
    samples: Iterable[Sample],
    period: int | None = None,
    metric: Union[Metric, str] = Metric.fps,
) -> DecompositionResult:
    return decompose_values(metric_values(samples, metric), period)
