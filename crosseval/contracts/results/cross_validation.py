from __future__ import annotations

import math
from typing import Dict, List, Optional

from pydantic import Field

from crosseval.contracts.choices import AnalysisType

from .common import JSONDict, ResultModel, finite_values


class FoldResult(ResultModel):
    """Outcome of one fold: model trained on every other fold, scored on this one."""

    fold: int
    n_train: int
    n_test: int
    score: Optional[float] = None
    roc_auc: Optional[float] = None
    roc_curve: Optional[JSONDict] = None
    artifact_uid: Optional[str] = None


class CrossValidationResult(ResultModel):
    """Per-method cross-validation result.

    ``score`` is ROC AUC for classification and the configured regression metric
    otherwise. Folds whose score is undefined (e.g. a single-class test fold)
    carry ``None`` and are left out of the mean and standard deviation.
    """

    job_name: str
    method_name: str
    method_kind: str
    analysis_type: AnalysisType
    metric_name: str

    num_folds: int
    split_type: str
    split_expr: str

    folds: List[FoldResult] = Field(default_factory=list)
    mean_score: Optional[float] = None
    std_score: Optional[float] = None
    oof_score: Optional[float] = None
    oof_roc_curve: Optional[JSONDict] = None

    notes: List[str] = Field(default_factory=list)

    @property
    def fold_scores(self) -> List[Optional[float]]:
        return [f.score for f in self.folds]

    def get_roc_values(self) -> Dict[int, Optional[float]]:
        """``{fold: ROC AUC}`` for every fold."""
        return {f.fold: f.roc_auc for f in self.folds}

    def get_roc_average(self) -> float:
        vals = finite_values([f.roc_auc for f in self.folds])
        return float(sum(vals) / len(vals)) if vals else float("nan")

    def get_roc_standard_deviation(self) -> float:
        """Unbiased (n - 1) standard deviation of the per-fold ROC AUC."""
        vals = finite_values([f.roc_auc for f in self.folds])
        if len(vals) < 2:
            return 0.0 if vals else float("nan")
        avg = sum(vals) / len(vals)
        return math.sqrt(sum((v - avg) ** 2 for v in vals) / (len(vals) - 1))
