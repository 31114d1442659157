from __future__ import annotations

"""Metadata stored next to every persisted fold model.

The metadata records everything that must match when a stored model is applied
again: the fold layout (split type, expression, number of folds), the input
variables and the analysis type. It is a plain dict so it can be written as JSON
beside the joblib payload.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, TypedDict

import crosseval
from crosseval.contracts.cv_configs import CrossValidationConfig
from crosseval.contracts.method_configs import MethodSpec


class FoldArtifactMetaDict(TypedDict, total=False):
    uid: str
    created_at: str
    crosseval_version: str
    job_name: str
    method_name: str
    method_kind: str
    method_options: str
    fold: int
    analysis_type: str
    variables: List[str]
    split: Dict[str, Any]
    n_train: int
    score: Optional[float]


def fold_artifact_prefix(job_name: str, method_name: str) -> str:
    return f"{job_name}/{method_name}/fold"


def fold_artifact_uid(job_name: str, method_name: str, fold: int) -> str:
    return f"{fold_artifact_prefix(job_name, method_name)}{int(fold)}"


def build_fold_artifact_meta(
    *,
    job_name: str,
    spec: MethodSpec,
    cv: CrossValidationConfig,
    fold: int,
    variables: Sequence[str],
    n_train: int,
    score: Optional[float] = None,
) -> FoldArtifactMetaDict:
    return FoldArtifactMetaDict(
        uid=fold_artifact_uid(job_name, spec.name, fold),
        created_at=datetime.now(timezone.utc).isoformat(),
        crosseval_version=crosseval.__version__,
        job_name=job_name,
        method_name=spec.name,
        method_kind=spec.kind,
        method_options=spec.options.to_option_string(),
        fold=int(fold),
        analysis_type=cv.analysis_type,
        variables=list(variables),
        split=cv.split_signature(),
        n_train=int(n_train),
        score=score,
    )
