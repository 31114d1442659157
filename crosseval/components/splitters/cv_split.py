from __future__ import annotations

from typing import Iterator, Optional

import numpy as np
from sklearn.model_selection import KFold, StratifiedKFold

from crosseval.components.data.loader import LabeledEvents
from crosseval.components.splitters.types import Split
from crosseval.core.errors import ConfigError


def random_fold_ids(
    y: np.ndarray,
    n_splits: int,
    *,
    stratified: bool = True,
    random_state: Optional[int] = None,
) -> np.ndarray:
    """Fold id per row from a shuffled (optionally stratified) k-fold split."""
    y = np.asarray(y).ravel()
    splitter_cls = StratifiedKFold if stratified else KFold
    splitter = splitter_cls(n_splits=n_splits, shuffle=True, random_state=random_state)
    fold_ids = np.full((y.shape[0],), -1, dtype=np.int64)
    for fold, (_, test_idx) in enumerate(splitter.split(np.zeros((y.shape[0], 1)), y)):
        fold_ids[test_idx] = fold
    return fold_ids


def generate_folds(events: LabeledEvents, fold_ids: np.ndarray, n_splits: int) -> Iterator[Split]:
    """Yield one :class:`Split` per fold from a per-row fold id array.

    Raises :class:`ConfigError` when a fold receives no events: the split never
    maps anything to it, so it has nothing to be evaluated on.
    """
    fold_ids = np.asarray(fold_ids, dtype=np.int64).ravel()
    if fold_ids.shape[0] != events.n_events:
        raise ValueError(f"fold_ids length mismatch: {fold_ids.shape[0]} vs {events.n_events}")

    X, y, w = events.X, events.y, events.w
    for fold in range(n_splits):
        test_mask = fold_ids == fold
        idx_te = np.flatnonzero(test_mask)
        idx_tr = np.flatnonzero(~test_mask)
        if idx_te.size == 0:
            raise ConfigError(
                f"Fold {fold} received no events; check that the split expression "
                f"spreads events over all {n_splits} folds (e.g. end it with %int([NumFolds]))."
            )
        if idx_tr.size == 0:
            raise ConfigError(f"Fold {fold} holds every event; no events left for training.")
        yield Split(
            fold=fold,
            Xtr=X[idx_tr],
            Xte=X[idx_te],
            ytr=y[idx_tr],
            yte=y[idx_te],
            wtr=w[idx_tr],
            wte=w[idx_te],
            idx_tr=idx_tr,
            idx_te=idx_te,
        )
