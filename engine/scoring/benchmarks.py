"""
Scoring configuration: per-metric weights, benchmark thresholds and trend adjustment limits, merged onto the configured defaults.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from config import DEFAULT_BENCHMARKS, DEFAULT_SCORING_WEIGHTS, settings
from engine.enums import ScoredMetric


class Benchmark(BaseModel):
    """Anchor values that map to scores 100, 80, 60 and 40."""

    model_config = ConfigDict(frozen=True)

    excellent: float
    good: float
    average: float
    poor: float

    @model_validator(mode="after")
    def _monotonic(self) -> Benchmark:
        anchors = [self.excellent, self.good, self.average, self.poor]
        rising = all(a < b for a, b in zip(anchors, anchors[1:]))
        falling = all(a > b for a, b in zip(anchors, anchors[1:]))
        if not (rising or falling):
            raise ValueError("benchmark thresholds must be strictly monotonic")
        if self.poor <= 0:
            raise ValueError("poor threshold must be > 0")
        return self


def _default_benchmarks() -> Dict[ScoredMetric, Benchmark]:
    return {
        ScoredMetric.parse(name): Benchmark(excellent=e, good=g, average=a, poor=p)
        for name, (e, g, a, p) in DEFAULT_BENCHMARKS.items()
    }


def _coerce_weights(raw: Any) -> Dict[ScoredMetric, float]:
    weights = {ScoredMetric.parse(k): float(v) for k, v in DEFAULT_SCORING_WEIGHTS.items()}
    if not isinstance(raw, dict):
        return weights

    for key, value in raw.items():
        metric = ScoredMetric.parse(key)
        try:
            numeric = float(value)
        except (TypeError, ValueError):
            continue
        if not math.isfinite(numeric) or numeric < 0.0:
            continue
        weights[metric] = numeric
    return weights


def _coerce_benchmarks(raw: Any) -> Dict[ScoredMetric, Any]:
    benchmarks: Dict[ScoredMetric, Any] = dict(_default_benchmarks())
    if not isinstance(raw, dict):
        return benchmarks

    for key, value in raw.items():
        metric = ScoredMetric.parse(key)
        if isinstance(value, (tuple, list)):
            e, g, a, p = value
            value = {"excellent": e, "good": g, "average": a, "poor": p}
        benchmarks[metric] = value
    return benchmarks


class ScoringConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    weights: Dict[ScoredMetric, float] = Field(default_factory=lambda: _coerce_weights(None))
    benchmarks: Dict[ScoredMetric, Benchmark] = Field(default_factory=_default_benchmarks)
    trend_weight: float = Field(default_factory=lambda: settings.scoring_trend_weight, ge=0.0)
    max_trend_adjustment: float = Field(default_factory=lambda: settings.scoring_max_trend_adjustment, ge=0.0)

    @field_validator("weights", mode="before")
    @classmethod
    def _merge_weights(cls, raw: Any) -> Dict[ScoredMetric, float]:
        return _coerce_weights(raw)

    @field_validator("benchmarks", mode="before")
    @classmethod
    def _merge_benchmarks(cls, raw: Any) -> Dict[ScoredMetric, Any]:
        return _coerce_benchmarks(raw)
