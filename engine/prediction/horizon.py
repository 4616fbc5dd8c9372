"""
Composite per-session performance score and linear extrapolation of that score over elapsed days to a future horizon.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

import numpy as np

from api.requests import RouteSession
from config import DEFAULT_SCORING_WEIGHTS, settings
from engine.enums import ScoredMetric
from engine.exceptions import InvalidParameterError
from engine.statistics.series import ordered

INSUFFICIENT_DATA = "insufficient_data"
LINEAR_REGRESSION = "linear_regression"


@dataclass(frozen=True)
class HorizonPrediction:
    predicted_score: float
    confidence_interval: Tuple[float, float]
    model: str
    r_squared: float = 0.0
    slope: float = 0.0


def clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def check_horizon(horizon_days: int) -> None:
    if horizon_days < 1:
        raise InvalidParameterError(f"horizon_days must be >= 1, got {horizon_days}")


def session_score(
    session: RouteSession,
    weights: Optional[Mapping[ScoredMetric, float]] = None,
) -> float:
    if weights is None:
        weights = {ScoredMetric.parse(k): v for k, v in DEFAULT_SCORING_WEIGHTS.items()}

    parts = {
        ScoredMetric.fps: min(100.0, session.avg_fps / settings.prediction_fps_reference * 100),
        ScoredMetric.memory: max(0.0, 100.0 - session.avg_memory / settings.prediction_memory_reference * 100),
        ScoredMetric.cpu: max(0.0, 100.0 - session.avg_cpu),
    }
    total = sum(weights.get(m, 0.0) for m in parts)
    if total <= 0:
        return sum(parts.values()) / len(parts)
    return sum(parts[m] * weights.get(m, 0.0) for m in parts) / total


def _elapsed_days(sessions: Sequence[RouteSession]) -> np.ndarray:
    first = sessions[0].timestamp
    return np.array([(s.timestamp - first).total_seconds() / 86400 for s in sessions])


def predict_for_horizon(
    sessions: Sequence[RouteSession],
    horizon_days: int,
    weights: Optional[Mapping[ScoredMetric, float]] = None,
) -> HorizonPrediction:
    check_horizon(horizon_days)
    series = ordered(sessions)
    n = len(series)
    if n == 0:
        neutral = settings.prediction_neutral_score
        margin = settings.prediction_neutral_margin
        return HorizonPrediction(neutral, (neutral - margin, neutral + margin), INSUFFICIENT_DATA)

    x = _elapsed_days(series)
    y = np.array([session_score(s, weights) for s in series])

    if n == 1:
        # a single point fits perfectly and says nothing about direction
        slope, intercept, r_squared = 0.0, float(y[0]), 1.0
        standard_error = settings.prediction_single_point_error
    else:
        x_dev = x - x.mean()
        sxx = float(np.sum(x_dev ** 2))
        slope = float(np.sum(x_dev * (y - y.mean())) / sxx) if sxx else 0.0
        intercept = float(y.mean() - slope * x.mean())
        ss_res = float(np.sum((y - (slope * x + intercept)) ** 2))
        ss_tot = float(np.sum((y - y.mean()) ** 2))
        r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0
        if n == 2:
            standard_error = settings.prediction_two_point_error
        else:
            standard_error = math.sqrt(ss_res / (n - 2))

    raw = slope * (float(x.max()) + horizon_days) + intercept
    margin = settings.prediction_z_95 * standard_error
    return HorizonPrediction(
        predicted_score=clamp_score(raw),
        confidence_interval=(clamp_score(raw - margin), clamp_score(raw + margin)),
        model=LINEAR_REGRESSION,
        r_squared=r_squared,
        slope=slope,
    )
