from __future__ import annotations

import warnings
from typing import Any, Dict, Optional

import numpy as np
from sklearn.metrics import (
    mean_absolute_error,
    mean_squared_error,
    r2_score,
    roc_auc_score,
    roc_curve,
)

from crosseval.components.data.loader import SIGNAL

# ROC curves in results are thinned to at most this many points
MAX_ROC_POINTS = 201


def _as_1d(a: Any) -> np.ndarray:
    return np.asarray(a).reshape(-1)


def _check_len(y_true: np.ndarray, other: np.ndarray, name: str) -> None:
    if y_true.shape[0] != other.shape[0]:
        raise ValueError(
            f"Length mismatch: y_true({y_true.shape[0]}) vs {name}({other.shape[0]})."
        )


def weighted_roc_auc(
    y_true: np.ndarray,
    y_score: np.ndarray,
    *,
    sample_weight: Optional[np.ndarray] = None,
) -> float:
    """Signal-vs-background ROC AUC; NaN (with a warning) if only one class is present."""
    y_true = _as_1d(y_true)
    y_score = _as_1d(y_score)
    _check_len(y_true, y_score, "y_score")
    if np.unique(y_true).size < 2:
        warnings.warn(
            "ROC AUC is undefined for a sample containing a single class.",
            UserWarning,
        )
        return float("nan")
    return float(roc_auc_score(y_true == SIGNAL, y_score, sample_weight=sample_weight))


def roc_curve_payload(
    y_true: np.ndarray,
    y_score: np.ndarray,
    *,
    sample_weight: Optional[np.ndarray] = None,
    max_points: int = MAX_ROC_POINTS,
) -> Optional[Dict[str, Any]]:
    """JSON-friendly ROC curve ``{fpr, tpr, auc}`` or None for a single-class sample."""
    y_true = _as_1d(y_true)
    y_score = _as_1d(y_score)
    _check_len(y_true, y_score, "y_score")
    if np.unique(y_true).size < 2:
        return None

    fpr, tpr, _ = roc_curve(y_true == SIGNAL, y_score, sample_weight=sample_weight)
    if fpr.size > max_points:
        keep = np.unique(np.linspace(0, fpr.size - 1, num=max_points).round().astype(int))
        fpr, tpr = fpr[keep], tpr[keep]
    auc_val = roc_auc_score(y_true == SIGNAL, y_score, sample_weight=sample_weight)
    return {
        "fpr": [float(x) for x in fpr.tolist()],
        "tpr": [float(x) for x in tpr.tolist()],
        "auc": float(auc_val),
    }


_REG_METRICS = {
    "r2": r2_score,
    "mse": mean_squared_error,
    "mae": mean_absolute_error,
}


def score(
    y_true: np.ndarray,
    y_output: np.ndarray,
    *,
    metric: str = "roc_auc",
    sample_weight: Optional[np.ndarray] = None,
) -> float:
    """Scalar fold metric: ``roc_auc`` for classification, ``r2``/``mse``/``mae`` for regression."""
    if metric == "roc_auc":
        return weighted_roc_auc(y_true, y_output, sample_weight=sample_weight)
    if metric not in _REG_METRICS:
        raise ValueError(f"Unknown metric '{metric}'. Supported: {['roc_auc', *_REG_METRICS]}")
    y_true = _as_1d(y_true).astype(float)
    y_output = _as_1d(y_output).astype(float)
    _check_len(y_true, y_output, "y_output")
    return float(_REG_METRICS[metric](y_true, y_output, sample_weight=sample_weight))
