"""
Route performance prediction: per-horizon linear forecasts, a weighted ensemble over linear regression, exponential smoothing and seasonal decomposition, and the qualitative context attached to each prediction.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.requests import PerformanceSummary, RoutePerformance, RouteSession, Sample
from api.responses import PerformancePrediction, RouteForecast
from config import DEFAULT_ENSEMBLE_WEIGHTS, settings
from engine.enums import PredictionModel, PredictionState
from engine.prediction.factors import (
    estimate_forecast_accuracy,
    identify_contributing_factors,
    probability_of_issue,
    recommendation_priority,
    recommended_actions,
)
from engine.prediction.horizon import (
    INSUFFICIENT_DATA,
    HorizonPrediction,
    check_horizon,
    predict_for_horizon,
    session_score,
)
from engine.prediction.models import (
    PredictionResult,
    predict_with_seasonal_decomposition,
    predict_with_time_series_analysis,
)
from engine.scoring.benchmarks import ScoringConfig

log = logging.getLogger(__name__)


def _coerce_ensemble_weights(raw: Any) -> Dict[PredictionModel, float]:
    weights = {PredictionModel.parse(k): float(v) for k, v in DEFAULT_ENSEMBLE_WEIGHTS.items()}
    if not isinstance(raw, dict):
        return weights

    for key, value in raw.items():
        model = PredictionModel.parse(key)
        try:
            numeric = float(value)
        except (TypeError, ValueError):
            continue
        if not math.isfinite(numeric) or numeric < 0.0:
            continue
        weights[model] = numeric
    return weights


class PredictionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    ensemble_weights: Dict[PredictionModel, float] = Field(default_factory=lambda: _coerce_ensemble_weights(None))
    horizons: List[int] = Field(default_factory=lambda: list(settings.prediction_horizons))
    primary_horizon_days: int = Field(default_factory=lambda: settings.prediction_default_horizon_days, ge=1)
    seasonal_period: int = Field(default_factory=lambda: settings.decomposition_period, ge=1)
    issue_threshold: float = Field(default_factory=lambda: settings.prediction_issue_threshold)
    priority_high: float = Field(default_factory=lambda: settings.prediction_priority_high)
    priority_medium: float = Field(default_factory=lambda: settings.prediction_priority_medium)
    fps_factor: float = Field(default_factory=lambda: settings.prediction_fps_factor, gt=0.0)
    resource_factor: float = Field(default_factory=lambda: settings.prediction_resource_factor, gt=0.0)
    min_devices: int = Field(default_factory=lambda: settings.prediction_min_devices, ge=0)

    @field_validator("ensemble_weights", mode="before")
    @classmethod
    def _merge_weights(cls, raw: Any) -> Dict[PredictionModel, float]:
        return _coerce_ensemble_weights(raw)

    @field_validator("horizons")
    @classmethod
    def _positive_horizons(cls, value: List[int]) -> List[int]:
        if not value or any(h < 1 for h in value):
            raise ValueError("horizons must be a non-empty list of days >= 1")
        return value


def _horizon_label(horizon_days: int) -> str:
    return f"{horizon_days}d"


def _model_label(members: Sequence[PredictionModel]) -> str:
    if len(members) == 1:
        return members[0].value
    return f"ensemble({'+'.join(m.value for m in members)})"


class PredictionEngine:
    def __init__(
        self,
        config: PredictionConfig | None = None,
        scoring: ScoringConfig | None = None,
    ) -> None:
        self.config = config or PredictionConfig()
        self.scoring = scoring or ScoringConfig()

    def session_score(self, session: RouteSession) -> float:
        return session_score(session, self.scoring.weights)

    def predict_for_horizon(self, sessions: Sequence[RouteSession], horizon_days: int) -> HorizonPrediction:
        return predict_for_horizon(sessions, horizon_days, self.scoring.weights)

    def predict_with_time_series_analysis(
        self,
        route: RoutePerformance,
        horizon_days: int,
    ) -> Optional[PredictionResult]:
        return predict_with_time_series_analysis(route, horizon_days, self.scoring.weights)

    def predict_with_seasonal_decomposition(
        self,
        route: RoutePerformance,
        samples: Sequence[Sample],
        period: int | None = None,
        horizon_days: int | None = None,
    ) -> Optional[PredictionResult]:
        if period is None:
            period = self.config.seasonal_period
        if horizon_days is None:
            horizon_days = self.config.primary_horizon_days
        return predict_with_seasonal_decomposition(route, samples, period, horizon_days)

    def _run_member(
        self,
        model: PredictionModel,
        route: RoutePerformance,
        historical_samples: Optional[Sequence[Sample]],
        horizon_days: int,
    ) -> Optional[PredictionResult]:
        if model is PredictionModel.linear_regression:
            horizon = self.predict_for_horizon(route.sessions, horizon_days)
            if horizon.model == INSUFFICIENT_DATA:
                return None
            return PredictionResult(model, horizon.predicted_score, horizon.confidence_interval)
        if model is PredictionModel.exponential_smoothing:
            return self.predict_with_time_series_analysis(route, horizon_days)
        if not historical_samples:
            return None
        return self.predict_with_seasonal_decomposition(route, historical_samples, horizon_days=horizon_days)

    def _combine(self, members: List[PredictionResult]) -> Tuple[float, Tuple[float, float]]:
        weights = [self.config.ensemble_weights.get(m.model, 0.0) for m in members]
        total = sum(weights)
        if total <= 0:
            weights = [1.0] * len(members)
            total = float(len(members))
        predicted = sum(w * m.predicted_value for w, m in zip(weights, members)) / total
        # widest plausible range across members
        lo = min(m.confidence_interval[0] for m in members)
        hi = max(m.confidence_interval[1] for m in members)
        return predicted, (lo, hi)

    def predict_with_ensemble(
        self,
        route: RoutePerformance,
        baseline_averages: PerformanceSummary,
        historical_samples: Optional[Sequence[Sample]] = None,
        models: Optional[Sequence[Union[PredictionModel, str]]] = None,
        horizon_days: int | None = None,
    ) -> PerformancePrediction:
        if horizon_days is None:
            horizon_days = self.config.primary_horizon_days
        check_horizon(horizon_days)
        requested = [PredictionModel.parse(m) for m in (models if models is not None else list(PredictionModel))]

        survivors: List[PredictionResult] = []
        for model in requested:
            try:
                result = self._run_member(model, route, historical_samples, horizon_days)
            except Exception as exc:
                log.debug("ensemble %s: %s failed: %s", route.route_pattern, model.value, exc)
                continue
            if result is None or not result.predicted_value > 0:
                log.debug("ensemble %s: discarding %s without a usable prediction", route.route_pattern, model.value)
                continue
            survivors.append(result)

        if survivors:
            members = [s.model for s in survivors]
            predicted, interval = self._combine(survivors)
            model_used = _model_label(members)
            state = PredictionState.ensemble if len(survivors) > 1 else PredictionState.single_model
        else:
            log.debug("ensemble %s: no member succeeded, falling back to linear regression", route.route_pattern)
            fallback = self.predict_for_horizon(route.sessions, horizon_days)
            predicted, interval = fallback.predicted_score, fallback.confidence_interval
            if fallback.model == INSUFFICIENT_DATA:
                members = []
                model_used = INSUFFICIENT_DATA
                state = PredictionState.insufficient_data
            else:
                members = [PredictionModel.linear_regression]
                model_used = PredictionModel.linear_regression.value
                state = PredictionState.single_model

        return self._build_prediction(
            route,
            baseline_averages,
            horizon_days,
            predicted,
            interval,
            model_used,
            [m.value for m in members],
            state,
        )

    def predict_route_performance(
        self,
        route: RoutePerformance,
        app_averages: PerformanceSummary,
    ) -> RouteForecast:
        horizons: Dict[str, PerformancePrediction] = {}
        for days in sorted(set(self.config.horizons) | {self.config.primary_horizon_days}):
            forecast = self.predict_for_horizon(route.sessions, days)
            if forecast.model == INSUFFICIENT_DATA:
                members: List[str] = []
                state = PredictionState.insufficient_data
            else:
                members = [forecast.model]
                state = PredictionState.single_model
            horizons[_horizon_label(days)] = self._build_prediction(
                route,
                app_averages,
                days,
                forecast.predicted_score,
                forecast.confidence_interval,
                forecast.model,
                members,
                state,
            )

        return RouteForecast(
            route_pattern=route.route_pattern,
            primary=horizons[_horizon_label(self.config.primary_horizon_days)],
            horizons=horizons,
        )

    def _build_prediction(
        self,
        route: RoutePerformance,
        averages: PerformanceSummary,
        horizon_days: int,
        predicted: float,
        interval: Tuple[float, float],
        model_used: str,
        members: List[str],
        state: PredictionState,
    ) -> PerformancePrediction:
        cfg = self.config
        factors = identify_contributing_factors(
            route,
            averages,
            fps_factor=cfg.fps_factor,
            resource_factor=cfg.resource_factor,
            min_devices=cfg.min_devices,
        )
        label = _horizon_label(horizon_days)
        return PerformancePrediction(
            prediction_id=f"prediction_{route.route_pattern}_{label}",
            route_pattern=route.route_pattern,
            predicted_value=predicted,
            confidence_interval=interval,
            time_horizon=label,
            probability_of_issue=probability_of_issue(predicted, interval, cfg.issue_threshold),
            contributing_factors=factors,
            recommended_actions=recommended_actions(
                route.route_pattern,
                factors,
                predicted,
                issue_threshold=cfg.issue_threshold,
                urgent_threshold=cfg.priority_high,
            ),
            model_used=model_used,
            ensemble_members=members,
            state=state,
            recommendation_priority=recommendation_priority(
                predicted,
                route,
                high_threshold=cfg.priority_high,
                medium_threshold=cfg.priority_medium,
            ),
            forecast_accuracy=estimate_forecast_accuracy(route.sessions),
        )
