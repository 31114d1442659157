from __future__ import annotations

import warnings
from typing import Any, Optional

import numpy as np
from sklearn.utils.validation import has_fit_parameter


def fit_model(
    model: Any,
    X_train: np.ndarray,
    y_train: np.ndarray,
    *,
    sample_weight: Optional[np.ndarray] = None,
) -> Any:
    """
    Fit a scikit-learn–style estimator on training data.

    Parameters
    ----------
    model : Any
        Estimator exposing `fit(X, y, **kwargs)`.
    X_train : array-like of shape (n_samples, n_features)
    y_train : array-like of shape (n_samples,)
    sample_weight : array-like of shape (n_samples,), optional
        Per-event weights. Passed through when the estimator accepts them;
        otherwise dropped with a warning unless they are all equal.

    Returns
    -------
    model : Any
        The same estimator, after fitting.

    Raises
    ------
    AttributeError
        If `model` does not have a `fit` method.
    ValueError
        If input shapes are inconsistent.
    """
    if not hasattr(model, "fit"):
        raise AttributeError("`model` has no `.fit(...)` method.")

    X_train = np.asarray(X_train)
    y_train = np.asarray(y_train).ravel()

    if X_train.ndim != 2:
        raise ValueError(f"X_train must be 2D; got {X_train.shape}.")
    if X_train.shape[0] != y_train.shape[0]:
        raise ValueError(
            f"X_train and y_train length mismatch: {X_train.shape[0]} vs {y_train.shape[0]}."
        )

    if sample_weight is None:
        model.fit(X_train, y_train)
        return model

    sample_weight = np.asarray(sample_weight, dtype=float).ravel()
    if sample_weight.shape[0] != y_train.shape[0]:
        raise ValueError("sample_weight must match the number of training samples.")

    if has_fit_parameter(model, "sample_weight"):
        model.fit(X_train, y_train, sample_weight=sample_weight)
        return model

    if sample_weight.size and not np.allclose(sample_weight, sample_weight[0]):
        warnings.warn(
            f"{type(model).__name__}.fit does not accept sample_weight; event weights are ignored.",
            UserWarning,
        )
    model.fit(X_train, y_train)
    return model
