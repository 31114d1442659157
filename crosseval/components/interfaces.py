from __future__ import annotations

from typing import Any, Callable, Iterator, Optional, Protocol, Sequence, Tuple

import numpy as np

from crosseval.components.data.loader import LabeledEvents
from crosseval.components.splitters.types import Split
from crosseval.contracts.results.fit import FitResult


class RecordSource(Protocol):
    """Anything split expressions can read fields from."""

    def get(self, name: str, default: Any = None) -> Any:
        ...

    def has_field(self, name: str) -> bool:
        ...


class Splitter(Protocol):
    num_folds: int

    def assign(self, events: LabeledEvents) -> np.ndarray:
        """Return the fold index of every event."""
        ...

    def split(self, events: LabeledEvents) -> Iterator[Split]:
        """Yield one :class:`Split` per fold, in fold order."""
        ...


class ClassifierTrainer(Protocol):
    def make_estimator(self, *, n_train: Optional[int] = None) -> Any:
        """Return a configured, unfitted estimator.

        ``n_train`` lets options expressed as a fraction of the training sample
        (minimum node size) be turned into absolute counts.
        """
        ...

    def fit(
        self,
        X_train: np.ndarray,
        y_train: np.ndarray,
        sample_weight: Optional[np.ndarray] = None,
    ) -> Any:
        """Build a fresh estimator, fit it and return it."""
        ...

    def predict_output(self, model: Any, X: np.ndarray) -> np.ndarray:
        """Per-event classifier output (signal probability) or regression value."""
        ...


class Evaluator(Protocol):
    metric_name: str

    def score(
        self,
        y_true: np.ndarray,
        y_output: np.ndarray,
        *,
        sample_weight: Optional[np.ndarray] = None,
    ) -> float:
        ...


class Histogram(Protocol):
    """Binned counts over fixed axes; binning itself is numpy's."""

    ndim: int

    def fill(self, coords: Sequence[float], weight: float = 1.0) -> None:
        ...

    def fill_many(self, points: np.ndarray, weights: Optional[np.ndarray] = None) -> None:
        ...

    @property
    def counts(self) -> np.ndarray:
        ...

    @property
    def errors(self) -> np.ndarray:
        ...

    @property
    def edges(self) -> Tuple[np.ndarray, ...]:
        ...

    def bin_centers(self) -> Tuple[np.ndarray, ...]:
        ...


FitFunction = Callable[..., np.ndarray]


class Fitter(Protocol):
    def fit(
        self,
        hist: Histogram,
        func: FitFunction,
        initial_params: Sequence[float],
    ) -> FitResult:
        ...
