from __future__ import annotations

"""Applying cross-evaluated fold models to new events.

Every event is scored by the model of its own fold, i.e. the model that did not
see it during training. The fold is recomputed from the persisted split
expression, so the same event always meets the same model.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from crosseval.components.records import EventTable
from crosseval.components.splitters.fold_assigner import FoldAssigner
from crosseval.components.trainers.trainers import predict_output
from crosseval.contracts.cv_configs import CrossValidationConfig
from crosseval.core.errors import ArtifactError, ConfigError
from crosseval.io.artifacts.meta import fold_artifact_prefix
from crosseval.io.artifacts.serialization import load_model_artifact
from crosseval.io.artifacts.store import ArtifactStore
from crosseval.use_cases._deps import resolve_store

logger = logging.getLogger(__name__)


def _load_fold_models(
    store: ArtifactStore, job_name: str, method_name: str
) -> List[Tuple[Any, Dict[str, Any]]]:
    prefix = fold_artifact_prefix(job_name, method_name)
    uids = list(store.list_uids(prefix=prefix))
    if not uids:
        raise ArtifactError(f"No stored fold models for job {job_name!r}, method {method_name!r}.")
    loaded = []
    for uid in uids:
        payload, _ = store.load(uid)
        loaded.append(load_model_artifact(payload))
    return sorted(loaded, key=lambda mm: int(mm[1]["fold"]))


@dataclass
class CrossValidatedMethod:
    """The fold models of one booked method, ready to be applied.

    Build it with :meth:`from_store`. ``output_ensembling="Avg"`` averages the
    outputs of all fold models instead of picking the event's own fold model;
    that is the only option for randomly split jobs.
    """

    job_name: str
    method_name: str
    analysis_type: str
    variables: Tuple[str, ...]
    split: Dict[str, Any]
    models: List[Any]
    output_ensembling: str = "None"

    def __post_init__(self) -> None:
        n = int(self.split["num_folds"])
        if len(self.models) != n:
            raise ArtifactError(
                f"{self.method_name}: expected {n} fold model(s), found {len(self.models)}."
            )
        if self.split.get("split_type") == "Random" and self.output_ensembling != "Avg":
            raise ConfigError(
                "Randomly split fold models cannot be matched to events; apply them with OutputEnsembling=Avg."
            )
        self._assigner: Optional[FoldAssigner] = None
        if self.split.get("split_type") == "Deterministic":
            self._assigner = FoldAssigner(self.split["split_expr"], n)

    @classmethod
    def from_store(
        cls,
        job_name: str,
        method_name: str,
        *,
        store: Optional[ArtifactStore] = None,
        cv_config: Union[CrossValidationConfig, str, dict, None] = None,
    ) -> "CrossValidatedMethod":
        """Load the fold models of ``job_name``/``method_name``.

        When ``cv_config`` is given, its split type, expression and fold count
        must equal the ones the models were trained with, else :class:`ConfigError`.
        """
        loaded = _load_fold_models(resolve_store(store), job_name, method_name)
        metas = [meta for _, meta in loaded]
        first = metas[0]

        folds = [int(m["fold"]) for m in metas]
        if folds != list(range(len(folds))):
            raise ArtifactError(f"{method_name}: incomplete set of fold models {folds}.")
        for m in metas[1:]:
            if m["split"] != first["split"] or list(m["variables"]) != list(first["variables"]):
                raise ArtifactError(f"{method_name}: fold models were trained with different settings.")

        ensembling = "None"
        if cv_config is not None:
            cv = CrossValidationConfig.coerce(cv_config)
            if cv.split_signature() != first["split"]:
                raise ConfigError(
                    f"Cross-validation options {cv.split_signature()} do not match the ones "
                    f"the stored models were trained with {first['split']}."
                )
            if cv.analysis_type != first["analysis_type"]:
                raise ConfigError(
                    f"AnalysisType={cv.analysis_type} but the stored models are {first['analysis_type']}."
                )
            ensembling = cv.output_ensembling

        logger.info("%s/%s: loaded %d fold model(s)", job_name, method_name, len(loaded))
        return cls(
            job_name=job_name,
            method_name=method_name,
            analysis_type=str(first["analysis_type"]),
            variables=tuple(first["variables"]),
            split=dict(first["split"]),
            models=[model for model, _ in loaded],
            output_ensembling=ensembling,
        )

    @property
    def num_folds(self) -> int:
        return len(self.models)

    @property
    def assigner(self) -> Optional[FoldAssigner]:
        return self._assigner

    def _matrix(self, table: EventTable) -> np.ndarray:
        missing = [v for v in self.variables if not table.has_field(v)]
        if missing:
            raise ConfigError(f"Events are missing input variable(s) {missing}.")
        return table.to_matrix(self.variables)

    def assign_folds(self, table: EventTable) -> np.ndarray:
        if self._assigner is None:
            raise ConfigError("Randomly split models have no fold assignment for new events.")
        return self._assigner.assign_folds(table)

    def predict(self, table: EventTable) -> np.ndarray:
        """Output for every event in ``table``."""
        X = self._matrix(table)
        if self.output_ensembling == "Avg":
            outputs = [predict_output(m, X, analysis_type=self.analysis_type) for m in self.models]
            return np.mean(np.vstack(outputs), axis=0)

        folds = self.assign_folds(table)
        out = np.empty((X.shape[0],), dtype=float)
        for k, model in enumerate(self.models):
            mask = folds == k
            if np.any(mask):
                out[mask] = predict_output(model, X[mask], analysis_type=self.analysis_type)
        return out

    def predict_record(self, record: Mapping[str, Any]) -> float:
        """Output for a single event."""
        missing = [v for v in self.variables if v not in record]
        if missing:
            raise ConfigError(f"Record is missing input variable(s) {missing}.")
        x = np.asarray([[float(record[v]) for v in self.variables]], dtype=float)
        if self.output_ensembling == "Avg":
            return float(np.mean([predict_output(m, x, analysis_type=self.analysis_type)[0] for m in self.models]))
        if self._assigner is None:
            raise ConfigError("Randomly split models have no fold assignment for new events.")
        fold = self._assigner.assign_fold(record)
        return float(predict_output(self.models[fold], x, analysis_type=self.analysis_type)[0])


def load_cross_validated_methods(
    job_name: str,
    method_names: Sequence[str],
    *,
    store: Optional[ArtifactStore] = None,
    cv_config: Union[CrossValidationConfig, str, dict, None] = None,
) -> Dict[str, CrossValidatedMethod]:
    store = resolve_store(store)
    return {
        name: CrossValidatedMethod.from_store(job_name, name, store=store, cv_config=cv_config)
        for name in method_names
    }
