"""
Performance scoring, baseline benchmarking and device tier assessment.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.scoring.benchmarks import Benchmark, ScoringConfig
from engine.scoring.engine import BaselineBenchmark, ScoringEngine, describe_time_period
from engine.scoring.tier import TierAssessment, assess_tier

__all__ = [
    "BaselineBenchmark",
    "Benchmark",
    "ScoringConfig",
    "ScoringEngine",
    "TierAssessment",
    "assess_tier",
    "describe_time_period",
]
