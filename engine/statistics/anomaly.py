"""
Z-score anomaly detection over a single metric of a sample sequence, flagging samples whose deviation from the population mean exceeds a configurable threshold.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable, List, Union

from api.requests import Sample
from api.responses import AnomalyContext, AnomalyDetection
from config import settings
from engine.enums import Metric, Severity
from engine.statistics.descriptive import calculate_statistics, percentile_rank
from engine.statistics.series import metric_points


def detect_anomalies(
    samples: Iterable[Sample],
    metric: Union[Metric, str],
    threshold: float | None = None,
) -> List[AnomalyDetection]:
    if threshold is None:
        threshold = settings.anomaly_zscore_threshold
    metric = Metric.parse(metric)

    points = metric_points(samples, metric)
    if len(points) < settings.anomaly_min_samples:
        return []

    values = [v for _, v in points]
    stats = calculate_statistics(values)
    if stats.standard_deviation == 0:
        return []

    anomalies: List[AnomalyDetection] = []
    for index, (sample, value) in enumerate(points):
        z = abs(value - stats.mean) / stats.standard_deviation
        if z <= threshold:
            continue
        anomalies.append(AnomalyDetection(
            id=f"anomaly_{metric.value}_{index}",
            metric_type=metric,
            value=value,
            expected_value=stats.mean,
            deviation=value - stats.mean,
            z_score=z,
            severity=Severity.from_z_score(z),
            timestamp=sample.timestamp,
            context=AnomalyContext(
                screen_name=sample.screen_name,
                percentile_rank=percentile_rank(value, values),
            ),
        ))

    return anomalies
