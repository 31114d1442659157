from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import numpy as np


@dataclass
class FoldOutcome:
    """One trained fold model and its out-of-fold output."""

    fold: int
    model: Any
    idx_te: np.ndarray
    y_output: np.ndarray
    score: float
    n_train: int
    n_test: int
    seed: Optional[int] = None
    # warnings raised while training/scoring; re-emitted by the parent process
    messages: List[str] = field(default_factory=list)


@dataclass
class MethodRunOutputs:
    folds: List[FoldOutcome] = field(default_factory=list)
    oof_output: Optional[np.ndarray] = None

    @property
    def scores(self) -> List[float]:
        return [f.score for f in self.folds]
