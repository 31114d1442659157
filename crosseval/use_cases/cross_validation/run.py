from __future__ import annotations

"""Cross evaluation (use-case).

Every booked method is trained once per fold: the fold-``k`` model sees all
events outside fold ``k`` and is scored on the events inside it. Fold ids are
computed once per event by the configured splitter and reused for training,
scoring and out-of-fold pooling.

Out-of-fold (OOF) outputs are pooled so that every event carries the output of
the one model that did not train on it; the pooled score is reported next to the
per-fold mean and standard deviation.
"""

import logging
import warnings
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from crosseval.components.data.loader import LabeledEvents
from crosseval.components.evaluation.evaluators import make_evaluator
from crosseval.components.evaluation.metrics import roc_curve_payload
from crosseval.contracts.cv_configs import CrossValidationConfig
from crosseval.contracts.method_configs import MethodSpec
from crosseval.contracts.results.common import finite_or_none
from crosseval.contracts.results.cross_validation import CrossValidationResult, FoldResult
from crosseval.core.errors import ConfigError
from crosseval.core.log import configure_logging
from crosseval.core.progress import ProgressCallback
from crosseval.io.artifacts.meta import build_fold_artifact_meta, fold_artifact_prefix
from crosseval.io.artifacts.serialization import save_model_artifact
from crosseval.io.artifacts.store import ArtifactStore
from crosseval.registries.methods import make_trainer
from crosseval.registries.splitters import make_splitter
from crosseval.runtime.random.rng import RngManager
from crosseval.use_cases._deps import resolve_seed, resolve_store

from .folds import run_method_folds
from .types import MethodRunOutputs

logger = logging.getLogger(__name__)


def _check_methods(methods: Sequence[MethodSpec]) -> List[MethodSpec]:
    specs = [m if isinstance(m, MethodSpec) else MethodSpec.model_validate(m) for m in methods]
    if not specs:
        raise ConfigError("No methods booked for cross evaluation.")
    seen: set[str] = set()
    for s in specs:
        if s.name in seen:
            raise ConfigError(f"Method name {s.name!r} is booked more than once.")
        seen.add(s.name)
    return specs


def _mean_std(scores: Sequence[float]) -> tuple[Optional[float], Optional[float]]:
    vals = np.asarray([s for s in scores if np.isfinite(s)], dtype=float)
    if vals.size == 0:
        return None, None
    std = float(np.std(vals, ddof=1)) if vals.size > 1 else 0.0
    return float(np.mean(vals)), std


def _persist_folds(
    *,
    store: ArtifactStore,
    job_name: str,
    spec: MethodSpec,
    cv: CrossValidationConfig,
    events: LabeledEvents,
    run: MethodRunOutputs,
) -> Dict[int, str]:
    uids: Dict[int, str] = {}
    for outcome in run.folds:
        meta = build_fold_artifact_meta(
            job_name=job_name,
            spec=spec,
            cv=cv,
            fold=outcome.fold,
            variables=events.variables,
            n_train=outcome.n_train,
            score=finite_or_none(outcome.score),
        )
        saved = save_model_artifact(outcome.model, meta)
        stored = store.save(meta["uid"], saved.content_bytes, meta=dict(meta))
        logger.debug("stored fold %d model as %s (%d bytes)", outcome.fold, stored.uid, saved.size)
        uids[outcome.fold] = stored.uid

    # fold models left over from an earlier run with more folds
    current = set(uids.values())
    for uid in list(store.list_uids(prefix=fold_artifact_prefix(job_name, spec.name))):
        if uid not in current:
            store.delete(uid)
            logger.debug("removed stale fold model %s", uid)
    return uids


def _evaluate_method(
    *,
    spec: MethodSpec,
    cv: CrossValidationConfig,
    events: LabeledEvents,
    splits: Sequence[Any],
    rngm: RngManager,
    job_name: str,
    store: Optional[ArtifactStore],
) -> CrossValidationResult:
    evaluator = make_evaluator(cv.analysis_type)
    seeds = rngm.fold_seeds(spec.name, cv.num_folds)
    trainers = [make_trainer(spec, analysis_type=cv.analysis_type, seed=s) for s in seeds]

    run = MethodRunOutputs(
        folds=run_method_folds(
            trainers=trainers,
            seeds=seeds,
            evaluator=evaluator,
            splits=splits,
            num_workers=cv.num_workers,
        )
    )

    notes: List[str] = []
    oof = np.full((events.n_events,), np.nan, dtype=float)
    for outcome in run.folds:
        oof[outcome.idx_te] = outcome.y_output
        for msg in outcome.messages:
            warnings.warn(f"{spec.name} fold {outcome.fold}: {msg}", UserWarning)
        if not np.isfinite(outcome.score):
            notes.append(
                f"Fold {outcome.fold}: {evaluator.metric_name} undefined "
                f"(test fold holds {outcome.n_test} event(s) of a single class); left out of mean/std."
            )
        logger.info(
            "%s fold %d: n_train=%d n_test=%d %s=%.4f",
            spec.name,
            outcome.fold,
            outcome.n_train,
            outcome.n_test,
            evaluator.metric_name,
            outcome.score,
        )
    run.oof_output = oof

    classification = cv.analysis_type == "Classification"
    with warnings.catch_warnings():
        # a single-class fold already produced its warning above
        warnings.simplefilter("ignore", UserWarning)
        oof_score = evaluator.score(events.y, oof, sample_weight=events.w)
        fold_curves = {
            o.fold: roc_curve_payload(events.y[o.idx_te], o.y_output, sample_weight=events.w[o.idx_te])
            for o in run.folds
        } if classification else {}
    oof_curve = roc_curve_payload(events.y, oof, sample_weight=events.w) if classification else None

    artifact_uids: Dict[int, str] = {}
    if cv.model_persistence:
        artifact_uids = _persist_folds(
            store=resolve_store(store),
            job_name=job_name,
            spec=spec,
            cv=cv,
            events=events,
            run=run,
        )

    folds = [
        FoldResult(
            fold=o.fold,
            n_train=o.n_train,
            n_test=o.n_test,
            score=finite_or_none(o.score),
            roc_auc=finite_or_none(o.score) if classification else None,
            roc_curve=fold_curves.get(o.fold),
            artifact_uid=artifact_uids.get(o.fold),
        )
        for o in run.folds
    ]
    mean_score, std_score = _mean_std(run.scores)
    logger.info(
        "%s: mean %s=%s std=%s (OOF %.4f)",
        spec.name,
        evaluator.metric_name,
        "nan" if mean_score is None else f"{mean_score:.4f}",
        "nan" if std_score is None else f"{std_score:.4f}",
        oof_score,
    )

    return CrossValidationResult(
        job_name=job_name,
        method_name=spec.name,
        method_kind=spec.kind,
        analysis_type=cv.analysis_type,
        metric_name=evaluator.metric_name,
        num_folds=cv.num_folds,
        split_type=str(cv.split_type),
        split_expr=cv.split_expr,
        folds=folds,
        mean_score=mean_score,
        std_score=std_score,
        oof_score=finite_or_none(oof_score),
        oof_roc_curve=oof_curve,
        notes=notes,
    )


def cross_evaluate(
    events: LabeledEvents,
    cv_config: CrossValidationConfig | str | dict,
    methods: Sequence[MethodSpec],
    *,
    job_name: str = "crosseval",
    store: Optional[ArtifactStore] = None,
    rng: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
) -> Dict[str, CrossValidationResult]:
    """Cross-evaluate every method in ``methods`` on ``events``.

    Returns ``{method name: CrossValidationResult}`` in booking order. Fold models
    are written to ``store`` (default: filesystem store) when
    ``ModelPersistence`` is on. ``rng`` seeds the per-fold models; it defaults to
    ``SplitSeed``.
    """
    cv = CrossValidationConfig.coerce(cv_config)
    configure_logging(verbose=cv.verbose, silent=cv.silent)
    specs = _check_methods(methods)

    if events.analysis_type != cv.analysis_type:
        raise ConfigError(
            f"AnalysisType={cv.analysis_type} but the data loader holds {events.analysis_type} trees."
        )
    if not job_name or "/" in job_name:
        raise ConfigError(f"Invalid job name {job_name!r}.")

    splitter = make_splitter(cv, fields=events.table.field_names)
    splits = list(splitter.split(events))
    logger.info(
        "%s: %d events, %d %s fold(s) [%s], test sizes %s",
        job_name,
        events.n_events,
        cv.num_folds,
        cv.split_type,
        cv.split_expr or f"seed {cv.split_seed}",
        [int(s.Xte.shape[0]) for s in splits],
    )

    rngm = RngManager(resolve_seed(rng, fallback=cv.split_seed))

    total = len(specs)
    if progress is not None:
        progress.init(total=total, label="cross evaluation")

    results: Dict[str, CrossValidationResult] = {}
    for i, spec in enumerate(specs, start=1):
        if progress is not None:
            progress.update(current=i - 1, label=spec.name)
        results[spec.name] = _evaluate_method(
            spec=spec,
            cv=cv,
            events=events,
            splits=splits,
            rngm=rngm,
            job_name=job_name,
            store=store,
        )
        if progress is not None:
            progress.update(current=i, label=spec.name)

    if progress is not None:
        progress.finalize(label="cross evaluation")
    return results
