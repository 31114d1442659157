from __future__ import annotations

import logging
import warnings
from typing import List, Sequence

import numpy as np
from joblib import Parallel, delayed

from crosseval.components.interfaces import ClassifierTrainer, Evaluator
from crosseval.components.splitters.types import Split

from .types import FoldOutcome

logger = logging.getLogger(__name__)


def train_fold(
    trainer: ClassifierTrainer,
    evaluator: Evaluator,
    split: Split,
    *,
    seed: int | None = None,
) -> FoldOutcome:
    """Fit on every other fold, score on ``split.fold``."""

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        model = trainer.fit(split.Xtr, split.ytr, sample_weight=split.wtr)
        y_output = trainer.predict_output(model, split.Xte)
        score = evaluator.score(split.yte, y_output, sample_weight=split.wte)

    return FoldOutcome(
        fold=split.fold,
        model=model,
        idx_te=np.asarray(split.idx_te, dtype=int),
        y_output=np.asarray(y_output, dtype=float),
        score=float(score),
        n_train=int(split.Xtr.shape[0]),
        n_test=int(split.Xte.shape[0]),
        seed=seed,
        messages=[f"{w.category.__name__}: {w.message}" for w in caught],
    )


def run_method_folds(
    *,
    trainers: Sequence[ClassifierTrainer],
    seeds: Sequence[int],
    evaluator: Evaluator,
    splits: Sequence[Split],
    num_workers: int = 1,
) -> List[FoldOutcome]:
    """Train one model per split; in parallel worker processes when ``num_workers > 1``.

    ``trainers[k]`` and ``seeds[k]`` belong to ``splits[k]``. Results come back in
    fold order whatever the execution order was.
    """
    if not (len(trainers) == len(seeds) == len(splits)):
        raise ValueError("trainers, seeds and splits must have the same length.")

    n_jobs = min(int(num_workers), len(splits))
    if n_jobs > 1:
        logger.debug("training %d folds on %d workers", len(splits), n_jobs)
        outcomes = Parallel(n_jobs=n_jobs)(
            delayed(train_fold)(t, evaluator, s, seed=seed)
            for t, s, seed in zip(trainers, splits, seeds)
        )
    else:
        outcomes = [
            train_fold(t, evaluator, s, seed=seed)
            for t, s, seed in zip(trainers, splits, seeds)
        ]
    return sorted(outcomes, key=lambda o: o.fold)
