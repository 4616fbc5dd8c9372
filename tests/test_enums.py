"""
Test cases for enums used by the engine, including metric parsing, polarity, severity weights, grade cutoffs and prediction model names.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from config import settings
from engine.enums import Grade, Metric, PredictionModel, ScoredMetric, Severity
from engine.exceptions import EngineError, UnknownMetricError, UnknownModelError


def test_severity_bands_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "anomaly_severity_bands", [(2.0, "high")])
    assert Severity.from_z_score(2.5) == Severity.high
    assert Severity.from_z_score(2.0) == Severity.low


def test_metric_parse():
    assert Metric.parse("fps") is Metric.fps
    assert Metric.parse(Metric.load_time) is Metric.load_time
    with pytest.raises(UnknownMetricError):
        Metric.parse("gpu")


def test_scored_metric_polarity():
    assert not ScoredMetric.fps.lower_is_better
    assert ScoredMetric.memory.lower_is_better
    assert ScoredMetric.cpu.lower_is_better
    assert ScoredMetric.memory.sample_field is Metric.memory_usage
    assert ScoredMetric.cpu.sample_field is Metric.cpu_usage


def test_prediction_model_parse():
    assert PredictionModel.parse("seasonal_decomposition") is PredictionModel.seasonal_decomposition
    with pytest.raises(UnknownModelError):
        PredictionModel.parse("arima")


def test_error_hierarchy():
    assert issubclass(UnknownMetricError, KeyError)
    assert issubclass(UnknownModelError, ValueError)
    assert issubclass(UnknownMetricError, EngineError)


def test_grade_cutoffs_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "grade_cutoffs", [(50.0, "A"), (40.0, "B")])
    assert Grade.from_score(55) == Grade.A
    assert Grade.from_score(45) == Grade.B
    assert Grade.from_score(10) == Grade.F
