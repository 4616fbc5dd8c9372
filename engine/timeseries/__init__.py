"""
Time series analysis: smoothing, seasonal decomposition and calendar seasonality.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.timeseries.decomposition import DecompositionResult, decompose_values, seasonal_decomposition
from engine.timeseries.patterns import detect_seasonal_patterns
from engine.timeseries.smoothing import exponential_smoothing, weighted_moving_average

__all__ = [
    "DecompositionResult",
    "decompose_values",
    "detect_seasonal_patterns",
    "exponential_smoothing",
    "seasonal_decomposition",
    "weighted_moving_average",
]
