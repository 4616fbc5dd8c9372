"""
Single-model score forecasts used as ensemble members: exponential smoothing over session scores and seasonal decomposition over raw fps samples.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

import numpy as np

from api.requests import RoutePerformance, Sample
from config import settings
from engine.enums import Metric, PredictionModel, ScoredMetric
from engine.exceptions import InvalidParameterError
from engine.prediction.horizon import check_horizon, clamp_score, session_score
from engine.statistics.series import metric_values
from engine.timeseries.decomposition import decompose_values
from engine.timeseries.smoothing import exponential_smoothing


@dataclass(frozen=True)
class PredictionResult:
    model: PredictionModel
    predicted_value: float
    confidence_interval: Tuple[float, float]


def _interval(predicted: float, margin: float) -> Tuple[float, float]:
    return clamp_score(predicted - margin), clamp_score(predicted + margin)


def predict_with_time_series_analysis(
    route: RoutePerformance,
    horizon_days: int,
    weights: Optional[Mapping[ScoredMetric, float]] = None,
) -> Optional[PredictionResult]:
    check_horizon(horizon_days)
    sessions = route.ordered_sessions()
    if not sessions:
        return None

    scores = [session_score(s, weights) for s in sessions]
    # short horizons track recent sessions more closely
    alpha = max(settings.prediction_min_alpha, 1.0 / horizon_days)
    smoothed = exponential_smoothing(scores, alpha=alpha)
    predicted = clamp_score(smoothed[-1])

    recent = np.asarray(scores[-settings.prediction_recent_window:])
    margin = min(settings.prediction_max_margin, settings.prediction_z_95 * float(recent.std()))

    return PredictionResult(
        model=PredictionModel.exponential_smoothing,
        predicted_value=predicted,
        confidence_interval=_interval(predicted, margin),
    )


def predict_with_seasonal_decomposition(
    route: RoutePerformance,
    samples: Sequence[Sample],
    period: int | None = None,
    horizon_days: int | None = None,
) -> Optional[PredictionResult]:
    """Forecast from the fps seasonal cycle of ``samples``.

    ``route`` only identifies the series; the forecast is always the next
    point of the decomposed cycle, so ``horizon_days`` is validated but
    does not move the estimate.
    """
    if period is None:
        period = settings.decomposition_period
    if period < 1:
        raise InvalidParameterError(f"period must be >= 1, got {period}")
    if horizon_days is not None:
        check_horizon(horizon_days)

    values = metric_values(samples, Metric.fps)
    if len(values) < 2 * period:
        return None

    decomposition = decompose_values(values, period)
    if not decomposition.forecast:
        return None

    predicted = clamp_score(decomposition.forecast[0] / settings.prediction_fps_reference * 100)
    strength = (decomposition.seasonal_strength + decomposition.trend_strength) / 2
    margin = min(
        settings.prediction_max_margin,
        settings.prediction_seasonal_base_margin / max(strength, 1.0 / 6),
    )

    return PredictionResult(
        model=PredictionModel.seasonal_decomposition,
        predicted_value=predicted,
        confidence_interval=_interval(predicted, margin),
    )
