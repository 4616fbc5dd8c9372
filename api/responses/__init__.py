"""
Response models returned by the engine to the insights and recommendation layer.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_serializer

from engine.enums import (
    Grade,
    Metric,
    PatternType,
    PerformanceCategory,
    PredictionState,
    Priority,
    ScoreTrend,
    Severity,
    Significance,
    TrendDirection,
)


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    model_config = ConfigDict(frozen=True)

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class StatisticalResult(NpModel):

    mean: float = 0.0
    median: float = 0.0
    standard_deviation: float = 0.0
    min: float = 0.0
    max: float = 0.0
    percentile_25: float = 0.0
    percentile_75: float = 0.0
    percentile_90: float = 0.0
    percentile_95: float = 0.0
    outliers: List[float] = Field(default_factory=list)


class TrendAnalysis(NpModel):

    direction: TrendDirection
    slope: float
    confidence: float = Field(ge=0.0, le=1.0)
    significance: Significance
    r_squared: float
    forecast: Optional[float] = None
    data_points: int
    time_period: str


class AnomalyContext(NpModel):

    screen_name: str = ""
    percentile_rank: float = 0.0


class AnomalyDetection(NpModel):

    id: str
    metric_type: Metric
    value: float
    expected_value: float
    deviation: float
    z_score: float
    severity: Severity
    timestamp: datetime
    context: AnomalyContext


class CorrelationAnalysis(NpModel):

    metric_a: str
    metric_b: str
    correlation_coefficient: float
    p_value: float
    significance: str
    relationship: str
    strength: str


class SeasonalPeriod(NpModel):

    label: str
    bucket: int
    average_value: float
    frequency: float = Field(ge=0.0, le=1.0)


class SeasonalPattern(NpModel):

    pattern_type: PatternType
    metric_type: Metric
    peak_periods: List[SeasonalPeriod] = Field(default_factory=list)
    low_periods: List[SeasonalPeriod] = Field(default_factory=list)
    amplitude: float
    confidence: float = Field(ge=0.0, le=1.0)
    seasonal_strength: float
    next_predicted_peak: Optional[datetime] = None
    next_predicted_low: Optional[datetime] = None

    @property
    def peak_times(self) -> List[str]:
        return [p.label for p in self.peak_periods]

    @property
    def low_times(self) -> List[str]:
        return [p.label for p in self.low_periods]


class ScoreBreakdown(NpModel):

    fps: int
    cpu: int
    memory: int


class BaselineComparison(NpModel):

    fps_vs_baseline: float
    cpu_vs_baseline: float
    memory_vs_baseline: float


class PerformanceScore(NpModel):

    overall: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    grade: Grade
    trend: ScoreTrend
    category: PerformanceCategory
    baseline_comparison: Optional[BaselineComparison] = None


class ContributingFactor(NpModel):

    name: str
    weight: float = Field(ge=0.0, le=1.0)
    description: str


class PerformancePrediction(NpModel):

    prediction_id: str
    route_pattern: str
    metric_type: str = "performance_score"
    predicted_value: float
    confidence_interval: Tuple[float, float]
    time_horizon: str
    probability_of_issue: float = Field(ge=0.0, le=1.0)
    contributing_factors: List[ContributingFactor] = Field(default_factory=list)
    recommended_actions: List[str] = Field(default_factory=list)
    model_used: str
    ensemble_members: List[str] = Field(default_factory=list)
    state: PredictionState
    recommendation_priority: Priority = Priority.low
    forecast_accuracy: float = Field(default=0.0, ge=0.0, le=1.0)


class RouteForecast(NpModel):

    route_pattern: str
    primary: PerformancePrediction
    horizons: Dict[str, PerformancePrediction] = Field(default_factory=dict)
