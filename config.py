"""
Constants and configuration for the performance insights engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Dict, List, Tuple

from pydantic_settings import BaseSettings


# metric benchmarks: (excellent, good, average, poor)
DEFAULT_BENCHMARKS: Dict[str, Tuple[float, float, float, float]] = {
    "fps": (45.0, 35.0, 25.0, 15.0),
    "memory": (40.0, 80.0, 120.0, 200.0),
    "cpu": (10.0, 25.0, 45.0, 70.0),
}

DEFAULT_SCORING_WEIGHTS: Dict[str, float] = {
    "fps": 0.4,
    "memory": 0.3,
    "cpu": 0.3,
}

DEFAULT_ENSEMBLE_WEIGHTS: Dict[str, float] = {
    "linear_regression": 0.4,
    "exponential_smoothing": 0.4,
    "seasonal_decomposition": 0.2,
}


class Settings(BaseSettings):
    # regression and significance
    regression_min_points: int = 3
    significance_p_value: float = 0.05
    significance_min_r2: float = 0.1
    # (t-statistic cutoff, p-value) pairs, checked in order
    p_value_table: List[Tuple[float, float]] = [
        (3.0, 0.001),
        (2.5, 0.01),
        (2.0, 0.05),
        (1.5, 0.1),
    ]
    p_value_floor: float = 0.2

    # descriptive statistics
    iqr_multiplier: float = 1.5

    # anomaly detection
    anomaly_zscore_threshold: float = 2.5
    anomaly_min_samples: int = 5
    anomaly_severity_bands: List[Tuple[float, str]] = [
        (4.0, "critical"),
        (3.0, "high"),
        (2.5, "medium"),
    ]

    # correlation
    correlation_min_points: int = 3
    correlation_strong: float = 0.7
    correlation_moderate: float = 0.3
    correlation_none: float = 0.1

    # trend analysis
    trend_min_points: int = 5
    trend_stable_slope: float = 0.01
    trend_high_r2: float = 0.3
    trend_medium_r2: float = 0.1

    # mann-kendall
    mann_kendall_min_points: int = 4
    mann_kendall_z_critical: float = 1.96
    mann_kendall_no_trend_tau: float = 0.1

    # seasonal pattern detection
    seasonal_min_samples: int = 24
    seasonal_min_relative_amplitude: float = 0.1
    seasonal_peak_factor: float = 0.5
    seasonal_samples_per_bucket: int = 5
    seasonal_strength_scale: float = 0.5

    # time series analysis
    smoothing_alpha: float = 0.3
    decomposition_period: int = 7
    decomposition_max_forecast: int = 14

    # scoring
    scoring_trend_weight: float = 0.15
    scoring_max_trend_adjustment: float = 10.0
    scoring_trend_min_samples: int = 5
    scoring_stable_net: float = 0.1
    significance_multipliers: Dict[str, float] = {"high": 1.0, "medium": 0.7, "low": 0.3}
    grade_cutoffs: List[Tuple[float, str]] = [
        (90.0, "A"),
        (80.0, "B"),
        (70.0, "C"),
        (60.0, "D"),
    ]
    category_cutoffs: List[Tuple[float, str]] = [
        (85.0, "excellent"),
        (70.0, "good"),
        (50.0, "fair"),
    ]
    # (max abs % deviation, classification, score)
    baseline_bands: List[Tuple[float, str, float]] = [
        (5.0, "excellent", 95.0),
        (15.0, "good", 80.0),
        (30.0, "average", 65.0),
        (50.0, "poor", 40.0),
    ]
    baseline_critical_score: float = 20.0
    baseline_direction_nudge: float = 10.0

    # device tier heuristic
    tier_fps_high: float = 50.0
    tier_fps_mid: float = 30.0
    tier_memory_low: float = 300.0
    tier_memory_high: float = 600.0
    tier_cpu_low: float = 30.0
    tier_cpu_high: float = 60.0
    tier_high_end_score: int = 6
    tier_mid_range_score: int = 4

    # prediction
    prediction_neutral_score: float = 50.0
    prediction_neutral_margin: float = 20.0
    prediction_single_point_error: float = 25.0
    prediction_two_point_error: float = 20.0
    prediction_z_95: float = 1.96
    prediction_fps_reference: float = 60.0
    prediction_memory_reference: float = 1000.0
    prediction_min_alpha: float = 0.1
    prediction_recent_window: int = 10
    prediction_max_margin: float = 30.0
    prediction_seasonal_base_margin: float = 5.0
    prediction_default_horizon_days: int = 7
    prediction_horizons: List[int] = [1, 7, 30]
    prediction_issue_threshold: float = 60.0
    prediction_priority_high: float = 50.0
    prediction_priority_medium: float = 70.0
    prediction_fps_factor: float = 0.8
    prediction_resource_factor: float = 1.2
    prediction_min_devices: int = 3
    prediction_accuracy_min_sessions: int = 5
    prediction_accuracy_floor: float = 0.6
    prediction_accuracy_sample_target: int = 20
    prediction_accuracy_span_days: float = 30.0
    prediction_fps_spread: float = 30.0
    prediction_memory_spread: float = 200.0
    prediction_trend_factor_weight: float = 0.5
    prediction_device_factor_weight: float = 0.2

    model_config = {
        "env_prefix": "PERFINSIGHTS_",
        "extra": "ignore",
    }


settings = Settings()
