"""
Series extraction helpers that turn caller-supplied samples into time-ordered, finite metric values for the statistical primitives.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from api.requests import Sample
from engine.enums import Metric


def ordered(samples: Iterable[Sample]) -> List[Sample]:
    return sorted(samples, key=lambda s: s.timestamp)


def metric_points(
    samples: Iterable[Sample],
    metric: Union[Metric, str],
) -> List[Tuple[Sample, float]]:
    metric = Metric.parse(metric)
    points: List[Tuple[Sample, float]] = []
    for sample in ordered(samples):
        value = sample.value(metric)
        if value is None:
            continue
        points.append((sample, float(value)))
    return points


def metric_values(samples: Iterable[Sample], metric: Union[Metric, str]) -> List[float]:
    return [v for _, v in metric_points(samples, metric)]


def finite(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(list(values), dtype=float)
    return arr[np.isfinite(arr)]
