"""
Heuristic device tier classification from average fps, memory and cpu readings.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from api.requests import PerformanceSummary
from config import settings
from engine.enums import DeviceTier


@dataclass(frozen=True)
class TierAssessment:
    tier: DeviceTier
    confidence: float
    reasoning: List[str] = field(default_factory=list)


def assess_tier(summary: PerformanceSummary) -> TierAssessment:
    """Guess the device class from how hard the app works on it.

    The thresholds are coarse and app-independent; treat the result as a
    hint for grouping, not as device identification.
    """
    reasoning: List[str] = []
    score = 0

    if summary.avg_fps > settings.tier_fps_high:
        score += 3
        reasoning.append("High average FPS indicates good GPU performance")
    elif summary.avg_fps > settings.tier_fps_mid:
        score += 2
        reasoning.append("Moderate FPS suggests mid-range performance")
    else:
        score += 1
        reasoning.append("Low FPS indicates limited graphics capability")

    if summary.avg_memory < settings.tier_memory_low:
        score += 2
        reasoning.append("Low memory usage suggests efficient device or good optimization")
    elif summary.avg_memory > settings.tier_memory_high:
        score -= 1
        reasoning.append("High memory usage may indicate lower-end device or memory pressure")

    if summary.avg_cpu < settings.tier_cpu_low:
        score += 2
        reasoning.append("Low CPU usage indicates efficient processing or powerful CPU")
    elif summary.avg_cpu > settings.tier_cpu_high:
        score -= 1
        reasoning.append("High CPU usage suggests device is working hard or limited CPU power")

    if score >= settings.tier_high_end_score:
        return TierAssessment(DeviceTier.high_end, min(0.9, score / 7), reasoning)
    if score >= settings.tier_mid_range_score:
        return TierAssessment(DeviceTier.mid_range, 0.7, reasoning)
    return TierAssessment(DeviceTier.low_end, min(0.8, (5 - score) / 5), reasoning)
