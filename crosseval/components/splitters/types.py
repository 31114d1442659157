from __future__ import annotations

"""Splitter return contracts.

Splitters yield a *single, stable* fold payload shape so orchestrators never
guess tuple layouts.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Split:
    """A single train/test split (fold).

    Notes
    -----
    - ``fold`` is the fold index in ``[0, NumFolds)``; the test part holds the
      records assigned to that fold, the train part every other record.
    - ``idx_tr`` / ``idx_te`` are row indices into the *original* dataset and
      are used to pool out-of-fold predictions back into row order.
    """

    fold: int
    Xtr: np.ndarray
    Xte: np.ndarray
    ytr: np.ndarray
    yte: np.ndarray
    wtr: np.ndarray
    wte: np.ndarray
    idx_tr: np.ndarray
    idx_te: np.ndarray
