"""Built-in fold splitter registrations."""

from __future__ import annotations

from typing import Iterable

from crosseval.components.splitters.fold_assigner import FoldAssigner
from crosseval.components.splitters.splitters import DeterministicSplitter, RandomSplitter
from crosseval.contracts.cv_configs import CrossValidationConfig
from crosseval.registries.splitters import register_splitter


@register_splitter("Deterministic")
def _deterministic(cfg: CrossValidationConfig, fields: Iterable[str]):
    return DeterministicSplitter(FoldAssigner(cfg.split_expr, cfg.num_folds, fields=fields))


@register_splitter("Random")
def _random(cfg: CrossValidationConfig, fields: Iterable[str]):
    return RandomSplitter(
        num_folds=cfg.num_folds,
        seed=cfg.split_seed,
        stratified=cfg.analysis_type == "Classification",
    )
