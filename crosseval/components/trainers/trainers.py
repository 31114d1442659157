from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

import numpy as np

from crosseval.components.trainers.fitting import fit_model

EstimatorBuilder = Callable[..., Any]


@dataclass
class SklearnTrainer:
    """Builds a fresh estimator per fit and fits it with event weights.

    ``build`` is one of the builders in :mod:`crosseval.components.trainers.builders`
    bound to its method options.
    """

    build: EstimatorBuilder
    options: Any
    analysis_type: str = "Classification"
    seed: Optional[int] = None

    def make_estimator(self, *, n_train: Optional[int] = None) -> Any:
        return self.build(
            self.options,
            analysis_type=self.analysis_type,
            seed=self.seed,
            n_train=n_train,
        )

    def fit(
        self,
        X_train: np.ndarray,
        y_train: np.ndarray,
        sample_weight: Optional[np.ndarray] = None,
    ) -> Any:
        model = self.make_estimator(n_train=int(np.asarray(X_train).shape[0]))
        return fit_model(model, X_train, y_train, sample_weight=sample_weight)

    def predict_output(self, model: Any, X: np.ndarray) -> np.ndarray:
        return predict_output(model, X, analysis_type=self.analysis_type)


def predict_output(model: Any, X: np.ndarray, *, analysis_type: str = "Classification") -> np.ndarray:
    """Classifier output: signal-class probability (decision function as fallback)."""
    X = np.asarray(X, dtype=float)
    if analysis_type == "Regression":
        return np.asarray(model.predict(X), dtype=float).ravel()

    classes = list(getattr(model, "classes_", [0, 1]))
    if hasattr(model, "predict_proba"):
        proba = np.asarray(model.predict_proba(X), dtype=float)
        if 1 in classes:
            return proba[:, classes.index(1)]
        # a model trained on background only never predicts signal
        return np.zeros((X.shape[0],), dtype=float)
    if hasattr(model, "decision_function"):
        return np.asarray(model.decision_function(X), dtype=float).ravel()
    return np.asarray(model.predict(X), dtype=float).ravel()
