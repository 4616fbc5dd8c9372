"""
Test cases for prediction context: contributing factors, recommended actions, recommendation priority, forecast accuracy and probability of issue.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timedelta, timezone

import pytest

from api.requests import PerformanceSummary, RoutePerformance, RouteSession
from api.responses import ContributingFactor
from engine.enums import Priority, RiskLevel, RouteTrend
from engine.prediction.factors import (
    STABLE_PATTERN,
    estimate_forecast_accuracy,
    identify_contributing_factors,
    probability_of_issue,
    recommendation_priority,
    recommended_actions,
)

BASE = datetime(2024, 7, 1, tzinfo=timezone.utc)
APP = PerformanceSummary(avg_fps=60, avg_memory=200, avg_cpu=20)


def make_route(fps, memory, cpu, devices=("a", "b", "c"), trend=RouteTrend.stable, risk=RiskLevel.low):
    sessions = [
        RouteSession(timestamp=BASE + timedelta(days=i), avg_fps=fps, avg_memory=memory, avg_cpu=cpu, device_id=d)
        for i, d in enumerate(devices)
    ]
    return RoutePerformance(route_pattern="/feed", sessions=sessions, performance_trend=trend, risk_level=risk)


def test_stable_route_has_default_factor():
    factors = identify_contributing_factors(make_route(60, 200, 20), APP)
    assert [f.name for f in factors] == [STABLE_PATTERN]
    assert factors[0].weight == 0.0


def test_factors_ordered_by_weight():
    route = make_route(30, 300, 30, devices=("a", "b"), trend=RouteTrend.degrading)
    factors = identify_contributing_factors(route, APP)
    names = [f.name for f in factors]
    assert names == [
        "Below average FPS performance",
        "High memory usage pattern",
        "Elevated CPU usage",
        "Declining performance trend",
        "Limited device diversity in data",
    ]
    weights = [f.weight for f in factors]
    assert weights == sorted(weights, reverse=True)
    assert factors[0].weight == pytest.approx(0.5)
    assert factors[-1].weight == pytest.approx(0.2)


def test_factor_thresholds_are_configurable():
    route = make_route(50, 200, 20)
    assert [f.name for f in identify_contributing_factors(route, APP)] == [STABLE_PATTERN]
    factors = identify_contributing_factors(route, APP, fps_factor=0.9)
    assert factors[0].name == "Below average FPS performance"


def test_recommended_actions_for_factors():
    factors = [
        ContributingFactor(name="High memory usage pattern", weight=0.5, description=""),
        ContributingFactor(name="Below average FPS performance", weight=0.3, description=""),
    ]
    actions = recommended_actions("/feed", factors, 65)
    assert actions[0] == "Optimize performance for route: /feed"
    assert "Focus on memory optimization for this route" in actions
    assert "Optimize rendering performance for this route" in actions
    assert not any(a.startswith("URGENT") for a in actions)


def test_recommended_actions_urgent_below_threshold():
    actions = recommended_actions("/feed", [], 40)
    assert actions[0].startswith("URGENT")


def test_recommended_actions_healthy_route():
    stable = [ContributingFactor(name=STABLE_PATTERN, weight=0.0, description="")]
    assert recommended_actions("/feed", stable, 85) == ["Continue monitoring performance for route: /feed"]


@pytest.mark.parametrize(
    "score,trend,risk,expected",
    [
        (45, RouteTrend.stable, RiskLevel.low, Priority.high),
        (90, RouteTrend.stable, RiskLevel.high, Priority.high),
        (65, RouteTrend.stable, RiskLevel.low, Priority.medium),
        (90, RouteTrend.degrading, RiskLevel.low, Priority.medium),
        (90, RouteTrend.improving, RiskLevel.medium, Priority.low),
    ],
)
def test_recommendation_priority(score, trend, risk, expected):
    assert recommendation_priority(score, make_route(60, 200, 20, trend=trend, risk=risk)) == expected


def test_accuracy_floor_for_few_sessions():
    assert estimate_forecast_accuracy(make_route(60, 200, 20).sessions) == pytest.approx(0.6)


def test_accuracy_for_long_consistent_series():
    sessions = [
        RouteSession(timestamp=BASE + timedelta(days=30 * i / 19), avg_fps=55, avg_memory=150)
        for i in range(20)
    ]
    assert estimate_forecast_accuracy(sessions) == pytest.approx(1.0)


def test_accuracy_penalises_short_noisy_series():
    sessions = [
        RouteSession(timestamp=BASE + timedelta(hours=i), avg_fps=30 if i % 2 else 60, avg_memory=150)
        for i in range(10)
    ]
    # fps stddev 15 halves fps consistency; 10 of 20 samples; span well under a day
    expected = ((0.5 + 1.0) / 2 + 0.5 + (9 / 24) / 30) / 3
    assert estimate_forecast_accuracy(sessions) == pytest.approx(expected)


@pytest.mark.parametrize(
    "predicted,interval,expected",
    [(60, (30, 90), 0.5), (80, (70, 90), 0.0), (30, (10, 50), 1.0), (55, (55, 55), 1.0), (65, (65, 65), 0.0)],
)
def test_probability_of_issue(predicted, interval, expected):
    assert probability_of_issue(predicted, interval) == pytest.approx(expected)
