"""
Pearson correlation between two equally sized metric series, labelled with relationship direction, strength band and an approximate significance.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from api.responses import CorrelationAnalysis
from config import settings
from engine.statistics.regression import approximate_p_value


def _neutral(metric_a: str, metric_b: str) -> CorrelationAnalysis:
    return CorrelationAnalysis(
        metric_a=metric_a,
        metric_b=metric_b,
        correlation_coefficient=0.0,
        p_value=1.0,
        significance="not_significant",
        relationship="none",
        strength="weak",
    )


def _relationship(r: float) -> str:
    if abs(r) < settings.correlation_none:
        return "none"
    return "positive" if r > 0 else "negative"


def _strength(r: float) -> str:
    if abs(r) > settings.correlation_strong:
        return "strong"
    if abs(r) > settings.correlation_moderate:
        return "moderate"
    return "weak"


def calculate_correlation(
    data_a: Sequence[float],
    data_b: Sequence[float],
    metric_a: str = "a",
    metric_b: str = "b",
) -> CorrelationAnalysis:
    if len(data_a) != len(data_b) or len(data_a) < settings.correlation_min_points:
        return _neutral(metric_a, metric_b)

    a = np.asarray(data_a, dtype=float)
    b = np.asarray(data_b, dtype=float)
    keep = np.isfinite(a) & np.isfinite(b)
    a, b = a[keep], b[keep]
    n = len(a)
    if n < settings.correlation_min_points:
        return _neutral(metric_a, metric_b)

    da = a - a.mean()
    db = b - b.mean()
    denominator = math.sqrt(float(np.sum(da ** 2)) * float(np.sum(db ** 2)))
    if denominator == 0:
        r = 0.0
    else:
        r = max(-1.0, min(1.0, float(np.sum(da * db)) / denominator))

    if abs(r) >= 1.0:
        t_stat = math.inf
    else:
        t_stat = abs(r) * math.sqrt((n - 2) / (1 - r ** 2))
    p_value = approximate_p_value(t_stat, n - 2)

    return CorrelationAnalysis(
        metric_a=metric_a,
        metric_b=metric_b,
        correlation_coefficient=r,
        p_value=p_value,
        significance="significant" if p_value < settings.significance_p_value else "not_significant",
        relationship=_relationship(r),
        strength=_strength(r),
    )
