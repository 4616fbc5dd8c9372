"""
Enumerations for metrics, severities, trend labels, grades, device tiers and prediction models

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from engine.exceptions import UnknownMetricError, UnknownModelError


class Severity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

    @classmethod
    def from_z_score(cls, z: float) -> Severity:
        from config import settings

        for threshold, label in settings.anomaly_severity_bands:
            if z > threshold:
                return cls(label)
        return cls.low


class Metric(str, Enum):
    fps = "fps"
    memory_usage = "memory_usage"
    cpu_usage = "cpu_usage"
    load_time = "load_time"

    @classmethod
    def parse(cls, value: Union[Metric, str]) -> Metric:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownMetricError(value) from None


class ScoredMetric(str, Enum):
    fps = "fps"
    memory = "memory"
    cpu = "cpu"

    @classmethod
    def parse(cls, value: Union[ScoredMetric, str]) -> ScoredMetric:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownMetricError(value) from None

    @property
    def lower_is_better(self) -> bool:
        return self is not ScoredMetric.fps

    @property
    def sample_field(self) -> Metric:
        return {
            ScoredMetric.fps: Metric.fps,
            ScoredMetric.memory: Metric.memory_usage,
            ScoredMetric.cpu: Metric.cpu_usage,
        }[self]


class TrendDirection(str, Enum):
    up = "up"
    down = "down"
    stable = "stable"


class Significance(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class MonotonicTrend(str, Enum):
    increasing = "increasing"
    decreasing = "decreasing"
    no_trend = "no_trend"


class PatternType(str, Enum):
    hourly = "hourly"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class ScoreTrend(str, Enum):
    improving = "improving"
    stable = "stable"
    declining = "declining"


class RouteTrend(str, Enum):
    improving = "improving"
    stable = "stable"
    degrading = "degrading"


class RiskLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @classmethod
    def from_score(cls, score: float) -> Grade:
        from config import settings

        for cutoff, label in settings.grade_cutoffs:
            if score >= cutoff:
                return cls(label)
        return cls.F


class PerformanceCategory(str, Enum):
    excellent = "excellent"
    good = "good"
    fair = "fair"
    poor = "poor"

    @classmethod
    def from_score(cls, score: float) -> PerformanceCategory:
        from config import settings

        for cutoff, label in settings.category_cutoffs:
            if score >= cutoff:
                return cls(label)
        return cls.poor


class BenchmarkClass(str, Enum):
    excellent = "excellent"
    good = "good"
    average = "average"
    poor = "poor"
    critical = "critical"


class DeviceTier(str, Enum):
    high_end = "high_end"
    mid_range = "mid_range"
    low_end = "low_end"


class PredictionModel(str, Enum):
    linear_regression = "linear_regression"
    exponential_smoothing = "exponential_smoothing"
    seasonal_decomposition = "seasonal_decomposition"

    @classmethod
    def parse(cls, value: Union[PredictionModel, str]) -> PredictionModel:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownModelError(value) from None


class PredictionState(str, Enum):
    insufficient_data = "insufficient_data"
    single_model = "single_model"
    ensemble = "ensemble"


class Priority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"
