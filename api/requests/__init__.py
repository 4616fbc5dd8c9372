"""
Input models supplied by callers: raw telemetry samples, metric summaries and per-route session aggregates.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from engine.enums import Metric, RiskLevel, RouteTrend


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _mean(values: Iterable[float]) -> float:
    vals = [v for v in values if v is not None and math.isfinite(v)]
    return sum(vals) / len(vals) if vals else 0.0


class Sample(BaseModel):
    """One telemetry observation.

    Missing, NaN and infinite readings are stored as ``None`` so every
    consumer sees either a finite float or nothing.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    fps: Optional[float] = None
    memory_usage: Optional[float] = None
    cpu_usage: Optional[float] = None
    load_time: Optional[float] = None
    screen_name: str = ""

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @field_validator("fps", "memory_usage", "cpu_usage", "load_time")
    @classmethod
    def _finite_non_negative(cls, value: Optional[float]) -> Optional[float]:
        if value is None or not math.isfinite(value):
            return None
        if value < 0:
            raise ValueError("metric readings must be >= 0")
        return value

    @field_validator("cpu_usage")
    @classmethod
    def _cpu_percentage(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value > 100:
            raise ValueError("cpu_usage is a percentage (0-100)")
        return value

    def value(self, metric: Union[Metric, str]) -> Optional[float]:
        return getattr(self, Metric.parse(metric).value)


class PerformanceSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    avg_fps: float = 0.0
    avg_memory: float = 0.0
    avg_cpu: float = 0.0

    @classmethod
    def from_samples(cls, samples: List[Sample]) -> PerformanceSummary:
        return cls(
            avg_fps=_mean(s.fps for s in samples),
            avg_memory=_mean(s.memory_usage for s in samples),
            avg_cpu=_mean(s.cpu_usage for s in samples),
        )


class RouteSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    avg_fps: float = Field(default=0.0, ge=0.0)
    avg_memory: float = Field(default=0.0, ge=0.0)
    avg_cpu: float = Field(default=0.0, ge=0.0)
    device_id: str = ""
    session_id: str = ""

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)


class RoutePerformance(BaseModel):
    model_config = ConfigDict(frozen=True)

    route_pattern: str
    route_name: str = ""
    sessions: List[RouteSession] = Field(default_factory=list)
    performance_trend: RouteTrend = RouteTrend.stable
    risk_level: RiskLevel = RiskLevel.low

    @property
    def avg_fps(self) -> float:
        return _mean(s.avg_fps for s in self.sessions)

    @property
    def avg_memory(self) -> float:
        return _mean(s.avg_memory for s in self.sessions)

    @property
    def avg_cpu(self) -> float:
        return _mean(s.avg_cpu for s in self.sessions)

    @property
    def unique_devices(self) -> int:
        return len({s.device_id for s in self.sessions if s.device_id})

    def ordered_sessions(self) -> List[RouteSession]:
        return sorted(self.sessions, key=lambda s: s.timestamp)


class AppAverages(PerformanceSummary):
    """Application-wide averages that route metrics are compared against."""
