"""
Route performance prediction: horizon forecasts, single models and the weighted ensemble.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.prediction.engine import PredictionConfig, PredictionEngine
from engine.prediction.horizon import HorizonPrediction, predict_for_horizon, session_score
from engine.prediction.models import (
    PredictionResult,
    predict_with_seasonal_decomposition,
    predict_with_time_series_analysis,
)

__all__ = [
    "HorizonPrediction",
    "PredictionConfig",
    "PredictionEngine",
    "PredictionResult",
    "predict_for_horizon",
    "predict_with_seasonal_decomposition",
    "predict_with_time_series_analysis",
    "session_score",
]
