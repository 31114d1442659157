from __future__ import annotations

"""Estimator builders for the bookable methods."""

import inspect
import math
from typing import Any, Dict, Optional

from sklearn.discriminant_analysis import LinearDiscriminantAnalysis
from sklearn.ensemble import (
    AdaBoostClassifier,
    AdaBoostRegressor,
    HistGradientBoostingClassifier,
    HistGradientBoostingRegressor,
)
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor

from crosseval.contracts.method_configs import BDTConfig, FisherConfig
from crosseval.core.errors import ConfigError

# histogram gradient boosting bins features into at most 255 bins
_MAX_BINS = 255


def _maybe_set_random_state(estimator_cls: type, kw: Dict[str, Any], seed: Optional[int]) -> None:
    if seed is None:
        return
    sig = inspect.signature(estimator_cls)
    if "random_state" in sig.parameters and "random_state" not in kw:
        kw["random_state"] = int(seed)


def min_leaf_count(fraction: float, n_train: Optional[int]) -> int:
    """Absolute minimum leaf size for a node-size fraction of the training sample."""
    if not n_train:
        return 20
    return max(1, int(math.ceil(float(fraction) * int(n_train))))


def build_bdt(
    cfg: BDTConfig,
    *,
    analysis_type: str,
    seed: Optional[int] = None,
    n_train: Optional[int] = None,
) -> Any:
    regression = analysis_type == "Regression"

    if cfg.boost_type == "Grad":
        cls = HistGradientBoostingRegressor if regression else HistGradientBoostingClassifier
        kw: Dict[str, Any] = {
            "max_iter": cfg.n_trees,
            "learning_rate": cfg.shrinkage,
            "max_depth": cfg.max_depth,
            "max_leaf_nodes": None,
            "min_samples_leaf": min_leaf_count(cfg.min_node_size, n_train),
            "max_bins": min(_MAX_BINS, cfg.n_cuts),
            "early_stopping": False,
        }
        _maybe_set_random_state(cls, kw, seed)
        return cls(**kw)

    tree_cls = DecisionTreeRegressor if regression else DecisionTreeClassifier
    base = tree_cls(max_depth=cfg.max_depth, min_samples_leaf=cfg.min_node_size)
    cls = AdaBoostRegressor if regression else AdaBoostClassifier
    kw = {
        "estimator": base,
        "n_estimators": cfg.n_trees,
        "learning_rate": cfg.ada_boost_beta,
    }
    _maybe_set_random_state(cls, kw, seed)
    return cls(**kw)


def build_fisher(
    cfg: FisherConfig,
    *,
    analysis_type: str,
    seed: Optional[int] = None,
    n_train: Optional[int] = None,
) -> Any:
    if analysis_type == "Regression":
        raise ConfigError("Fisher discriminant supports classification only.")
    if cfg.shrinkage is None:
        return LinearDiscriminantAnalysis(solver="svd")
    return LinearDiscriminantAnalysis(solver="lsqr", shrinkage=cfg.shrinkage)
