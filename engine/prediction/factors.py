"""
Qualitative context for route predictions: contributing factors, recommended actions, recommendation priority, forecast accuracy and probability of issue.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from api.requests import PerformanceSummary, RoutePerformance, RouteSession
from api.responses import ContributingFactor
from config import settings
from engine.enums import Priority, RiskLevel, RouteTrend

STABLE_PATTERN = "Stable performance pattern"
URGENT_ACTION = "URGENT: Immediate intervention required - predicted severe degradation"


def _relative_gap(value: float, reference: float) -> float:
    if reference <= 0:
        return 1.0
    return min(1.0, abs(value - reference) / reference)


def identify_contributing_factors(
    route: RoutePerformance,
    app_averages: PerformanceSummary,
    fps_factor: float | None = None,
    resource_factor: float | None = None,
    min_devices: int | None = None,
) -> List[ContributingFactor]:
    if fps_factor is None:
        fps_factor = settings.prediction_fps_factor
    if resource_factor is None:
        resource_factor = settings.prediction_resource_factor
    if min_devices is None:
        min_devices = settings.prediction_min_devices

    factors: List[ContributingFactor] = []

    if route.avg_fps < app_averages.avg_fps * fps_factor:
        factors.append(ContributingFactor(
            name="Below average FPS performance",
            weight=_relative_gap(route.avg_fps, app_averages.avg_fps),
            description=f"Route averages {route.avg_fps:.1f} fps against an app average of {app_averages.avg_fps:.1f}",
        ))

    if route.avg_memory > app_averages.avg_memory * resource_factor:
        factors.append(ContributingFactor(
            name="High memory usage pattern",
            weight=_relative_gap(route.avg_memory, app_averages.avg_memory),
            description=f"Route averages {route.avg_memory:.1f} MB against an app average of {app_averages.avg_memory:.1f}",
        ))

    if route.avg_cpu > app_averages.avg_cpu * resource_factor:
        factors.append(ContributingFactor(
            name="Elevated CPU usage",
            weight=_relative_gap(route.avg_cpu, app_averages.avg_cpu),
            description=f"Route averages {route.avg_cpu:.1f}% CPU against an app average of {app_averages.avg_cpu:.1f}%",
        ))

    if route.performance_trend is RouteTrend.degrading:
        factors.append(ContributingFactor(
            name="Declining performance trend",
            weight=settings.prediction_trend_factor_weight,
            description="Recent sessions show a degrading performance trend",
        ))

    if route.unique_devices < min_devices:
        factors.append(ContributingFactor(
            name="Limited device diversity in data",
            weight=settings.prediction_device_factor_weight,
            description=f"Only {route.unique_devices} distinct device(s) reported sessions for this route",
        ))

    if not factors:
        return [ContributingFactor(name=STABLE_PATTERN, weight=0.0, description="No metric deviates from the app baseline")]
    return sorted(factors, key=lambda f: f.weight, reverse=True)


def recommended_actions(
    route_pattern: str,
    factors: Sequence[ContributingFactor],
    predicted_score: float,
    issue_threshold: float | None = None,
    urgent_threshold: float | None = None,
) -> List[str]:
    if issue_threshold is None:
        issue_threshold = settings.prediction_issue_threshold
    if urgent_threshold is None:
        urgent_threshold = settings.prediction_priority_high

    names = [f.name for f in factors if f.name != STABLE_PATTERN]
    if not names and predicted_score >= issue_threshold:
        return [f"Continue monitoring performance for route: {route_pattern}"]

    actions = [
        f"Optimize performance for route: {route_pattern}",
        "Review route-specific resource usage patterns",
        "Consider route-level caching or preloading strategies",
    ]
    for name in names:
        if "memory" in name:
            actions.append("Focus on memory optimization for this route")
        if "FPS" in name:
            actions.append("Optimize rendering performance for this route")
        if "CPU" in name:
            actions.append("Optimize CPU-intensive operations in this route")

    if predicted_score < urgent_threshold:
        actions.insert(0, URGENT_ACTION)
    return actions


def recommendation_priority(
    predicted_score: float,
    route: RoutePerformance,
    high_threshold: float | None = None,
    medium_threshold: float | None = None,
) -> Priority:
    if high_threshold is None:
        high_threshold = settings.prediction_priority_high
    if medium_threshold is None:
        medium_threshold = settings.prediction_priority_medium

    if predicted_score < high_threshold or route.risk_level is RiskLevel.high:
        return Priority.high
    if predicted_score < medium_threshold or route.performance_trend is RouteTrend.degrading:
        return Priority.medium
    return Priority.low


def estimate_forecast_accuracy(sessions: Sequence[RouteSession]) -> float:
    """Data-quality proxy for how far a forecast can be trusted.

    Not a backtest: it blends series consistency, sample count and the
    covered time span.
    """
    if len(sessions) < settings.prediction_accuracy_min_sessions:
        return settings.prediction_accuracy_floor

    series = sorted(sessions, key=lambda s: s.timestamp)
    fps_std = float(np.std([s.avg_fps for s in series]))
    memory_std = float(np.std([s.avg_memory for s in series]))
    consistency = (
        max(0.0, 1 - fps_std / settings.prediction_fps_spread)
        + max(0.0, 1 - memory_std / settings.prediction_memory_spread)
    ) / 2

    sample_size = min(1.0, len(series) / settings.prediction_accuracy_sample_target)
    span_days = (series[-1].timestamp - series[0].timestamp).total_seconds() / 86400
    time_span = min(1.0, span_days / settings.prediction_accuracy_span_days)

    return (consistency + sample_size + time_span) / 3


def probability_of_issue(
    predicted_score: float,
    interval: Tuple[float, float],
    threshold: float | None = None,
) -> float:
    """Share of the confidence interval that lies below ``threshold``."""
    if threshold is None:
        threshold = settings.prediction_issue_threshold
    lo, hi = interval
    if hi <= lo:
        return 1.0 if predicted_score < threshold else 0.0
    return max(0.0, min(1.0, (threshold - lo) / (hi - lo)))
