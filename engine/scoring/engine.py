"""
Performance scoring: piecewise-linear metric scores against benchmarks, a weighted 0-100 overall score with trend adjustment, baseline benchmarking and grading.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from api.requests import PerformanceSummary, Sample
from api.responses import BaselineComparison, PerformanceScore, ScoreBreakdown, TrendAnalysis
from config import settings
from engine.enums import (
    BenchmarkClass,
    Grade,
    PerformanceCategory,
    ScoredMetric,
    ScoreTrend,
    Significance,
    TrendDirection,
)
from engine.scoring.benchmarks import ScoringConfig
from engine.scoring.tier import TierAssessment, assess_tier
from engine.statistics.series import ordered
from engine.statistics.trend import analyze_trend


@dataclass(frozen=True)
class BaselineBenchmark:
    score: float
    deviation: float
    classification: BenchmarkClass


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def _interpolate(value: float, lo: float, hi: float, lo_score: float, hi_score: float) -> float:
    ratio = (value - lo) / (hi - lo)
    return lo_score + ratio * (hi_score - lo_score)


def _summary_value(summary: PerformanceSummary, metric: ScoredMetric) -> float:
    return {
        ScoredMetric.fps: summary.avg_fps,
        ScoredMetric.memory: summary.avg_memory,
        ScoredMetric.cpu: summary.avg_cpu,
    }[metric]


def _percentage_change(current: float, baseline: float) -> float:
    if baseline == 0 or not math.isfinite(current) or not math.isfinite(baseline):
        return 0.0
    return (current - baseline) / baseline * 100


def describe_time_period(samples: Sequence[Any]) -> str:
    """Human label for the span covered by timestamped records."""
    if not samples:
        return "unknown"
    stamps = [s.timestamp for s in samples]
    start: datetime = min(stamps)
    end: datetime = max(stamps)
    days = math.floor((end - start).total_seconds() / 86400)

    if days == 0:
        return "1 day"
    if days == 1:
        return "2 days"
    if days < 7:
        return f"{days + 1} days"
    if days < 30:
        return f"{days // 7} weeks"
    return f"{days // 30} months"


class ScoringEngine:
    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or ScoringConfig()

    def calculate_metric_score(self, value: Optional[float], metric: Union[ScoredMetric, str]) -> float:
        metric = ScoredMetric.parse(metric)
        if value is None or math.isnan(value) or value < 0:
            return 0.0

        b = self.config.benchmarks[metric]
        if metric.lower_is_better:
            if value <= b.excellent:
                return 100.0
            if value <= b.good:
                return _interpolate(value, b.excellent, b.good, 100, 80)
            if value <= b.average:
                return _interpolate(value, b.good, b.average, 80, 60)
            if value <= b.poor:
                return _interpolate(value, b.average, b.poor, 60, 40)
            return max(0.0, 40 - (value - b.poor) / b.poor * 40)

        if value >= b.excellent:
            return 100.0
        if value >= b.good:
            return _interpolate(value, b.good, b.excellent, 80, 100)
        if value >= b.average:
            return _interpolate(value, b.average, b.good, 60, 80)
        if value >= b.poor:
            return _interpolate(value, b.poor, b.average, 40, 60)
        return max(0.0, value / b.poor * 40)

    def analyze_trends(self, samples: Sequence[Sample]) -> Dict[ScoredMetric, TrendAnalysis]:
        period = describe_time_period(samples)
        series = ordered(samples)
        return {m: analyze_trend(series, m.sample_field, period) for m in ScoredMetric}

    def _trend_strength(self, trend: TrendAnalysis) -> float:
        multiplier = settings.significance_multipliers.get(trend.significance.value, 0.0)
        return min(1.0, abs(trend.confidence) * multiplier)

    def _trend_direction(self, trends: Mapping[ScoredMetric, TrendAnalysis]) -> ScoreTrend:
        improving = 0.0
        declining = 0.0
        for metric, trend in trends.items():
            if trend.significance is Significance.low or trend.direction is TrendDirection.stable:
                continue
            contribution = self.config.weights[metric] * self._trend_strength(trend)
            better = TrendDirection.down if metric.lower_is_better else TrendDirection.up
            if trend.direction is better:
                improving += contribution
            else:
                declining += contribution

        net = improving - declining
        if abs(net) < settings.scoring_stable_net:
            return ScoreTrend.stable
        return ScoreTrend.improving if net > 0 else ScoreTrend.declining

    def _trend_adjustment(self, trends: Mapping[ScoredMetric, TrendAnalysis], direction: ScoreTrend) -> float:
        if direction is ScoreTrend.stable:
            return 0.0
        magnitude = sum(
            abs(t.slope) * self.config.weights[m] * self._trend_strength(t)
            for m, t in trends.items()
        )
        adjustment = min(self.config.max_trend_adjustment, magnitude * self.config.trend_weight * 100)
        return adjustment if direction is ScoreTrend.improving else -adjustment

    def calculate_performance_score(
        self,
        summary: PerformanceSummary,
        trends: Optional[Sequence[Sample]] = None,
        baseline: Optional[Mapping[str, float]] = None,
    ) -> PerformanceScore:
        scores = {m: self.calculate_metric_score(_summary_value(summary, m), m) for m in ScoredMetric}
        overall = sum(scores[m] * self.config.weights[m] for m in ScoredMetric)

        direction = ScoreTrend.stable
        if trends is not None and len(trends) >= settings.scoring_trend_min_samples:
            analyses = self.analyze_trends(trends)
            direction = self._trend_direction(analyses)
            overall += self._trend_adjustment(analyses, direction)
        overall = _clamp(overall)

        comparison = None
        if baseline is not None:
            comparison = BaselineComparison(
                fps_vs_baseline=_percentage_change(summary.avg_fps, baseline.get("fps") or 0.0),
                cpu_vs_baseline=_percentage_change(summary.avg_cpu, baseline.get("cpu") or 0.0),
                memory_vs_baseline=_percentage_change(summary.avg_memory, baseline.get("memory") or 0.0),
            )

        return PerformanceScore(
            overall=round_half_up(overall),
            breakdown=ScoreBreakdown(
                fps=round_half_up(scores[ScoredMetric.fps]),
                cpu=round_half_up(scores[ScoredMetric.cpu]),
                memory=round_half_up(scores[ScoredMetric.memory]),
            ),
            grade=Grade.from_score(overall),
            trend=direction,
            category=PerformanceCategory.from_score(overall),
            baseline_comparison=comparison,
        )

    def benchmark_against_baseline(
        self,
        current: float,
        baseline: float,
        metric: Union[ScoredMetric, str],
    ) -> BaselineBenchmark:
        metric = ScoredMetric.parse(metric)
        if not (math.isfinite(current) and math.isfinite(baseline)):
            # no measurable deviation
            bands = {label: band_score for _, label, band_score in settings.baseline_bands}
            return BaselineBenchmark(
                score=bands.get(BenchmarkClass.average.value, settings.baseline_critical_score),
                deviation=0.0,
                classification=BenchmarkClass.average,
            )

        deviation = current - baseline
        pct = 0.0 if baseline == 0 else abs(deviation / baseline) * 100

        classification = BenchmarkClass.critical
        score = settings.baseline_critical_score
        for limit, label, band_score in settings.baseline_bands:
            if pct < limit:
                classification = BenchmarkClass(label)
                score = band_score
                break

        favourable = deviation < 0 if metric.lower_is_better else deviation > 0
        unfavourable = deviation > 0 if metric.lower_is_better else deviation < 0
        if favourable:
            score = _clamp(score + settings.baseline_direction_nudge)
        elif unfavourable:
            score = _clamp(score - settings.baseline_direction_nudge)

        return BaselineBenchmark(score=score, deviation=deviation, classification=classification)

    def calculate_performance_tier(self, summary: PerformanceSummary) -> TierAssessment:
        return assess_tier(summary)

    def describe_time_period(self, samples: Sequence[Any]) -> str:
        return describe_time_period(samples)
