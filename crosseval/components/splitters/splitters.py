from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from crosseval.components.data.loader import LabeledEvents
from crosseval.components.splitters.cv_split import generate_folds, random_fold_ids
from crosseval.components.splitters.fold_assigner import FoldAssigner
from crosseval.components.splitters.types import Split


@dataclass
class DeterministicSplitter:
    """Folds from a split expression; reproducible across runs and processes."""

    assigner: FoldAssigner

    @property
    def num_folds(self) -> int:
        return self.assigner.num_folds

    def assign(self, events: LabeledEvents) -> np.ndarray:
        return self.assigner.assign_folds(events.table)

    def split(self, events: LabeledEvents) -> Iterator[Split]:
        yield from generate_folds(events, self.assign(events), self.num_folds)


@dataclass
class RandomSplitter:
    """Seeded shuffled k-fold; stratified on the class for classification."""

    num_folds: int
    seed: int
    stratified: bool = True

    def assign(self, events: LabeledEvents) -> np.ndarray:
        return random_fold_ids(
            events.y,
            self.num_folds,
            stratified=self.stratified,
            random_state=self.seed,
        )

    def split(self, events: LabeledEvents) -> Iterator[Split]:
        yield from generate_folds(events, self.assign(events), self.num_folds)
