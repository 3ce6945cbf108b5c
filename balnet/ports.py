from __future__ import annotations

from typing import Protocol, runtime_checkable, Any
import numpy as np


@runtime_checkable
class Console(Protocol):
    def print(self, *args: Any, **kwargs: Any) -> Any: ...


@runtime_checkable
class Classifier(Protocol):
    def predict(self, x) -> np.ndarray: ...
    def predict_label(self, x) -> int: ...


@runtime_checkable
class MetricSink(Protocol):
    def log_metric(self, key: str, value: float, step: int | None = None) -> Any: ...
