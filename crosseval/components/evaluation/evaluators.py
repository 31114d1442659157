from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from crosseval.components.evaluation.metrics import score as score_fn


@dataclass
class SklearnEvaluator:
    """Weighted scalar metric per fold (ROC AUC or a regression metric)."""

    metric_name: str = "roc_auc"

    def score(
        self,
        y_true: np.ndarray,
        y_output: np.ndarray,
        *,
        sample_weight: Optional[np.ndarray] = None,
    ) -> float:
        return score_fn(y_true, y_output, metric=self.metric_name, sample_weight=sample_weight)


def make_evaluator(analysis_type: str, metric: Optional[str] = None) -> SklearnEvaluator:
    """ROC AUC for classification, R² for regression unless ``metric`` overrides."""
    if metric is None:
        metric = "roc_auc" if analysis_type == "Classification" else "r2"
    return SklearnEvaluator(metric_name=metric)
