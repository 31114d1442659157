from __future__ import annotations

"""Event data loader.

Collects event tables for the signal and background classes (or for regression),
checks that every declared field exists, applies per-table weights and the
per-class weight normalisation, and returns a :class:`LabeledEvents` bundle.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from crosseval.components.records import EventTable
from crosseval.contracts.data_configs import DatasetConfig
from crosseval.core.errors import ConfigError

logger = logging.getLogger(__name__)

SIGNAL = 1
BACKGROUND = 0


@dataclass(frozen=True)
class LabeledEvents:
    """Loaded dataset.

    - ``X``: ``(n, n_variables)`` float matrix, columns in declaration order.
    - ``y``: class labels (1 = signal, 0 = background) or regression targets.
    - ``w``: per-event weights after normalisation.
    - ``table``: variables + spectators, the fields split expressions may use.
    """

    X: np.ndarray
    y: np.ndarray
    w: np.ndarray
    table: EventTable
    variables: Tuple[str, ...]
    spectators: Tuple[str, ...]
    analysis_type: str = "Classification"

    @property
    def n_events(self) -> int:
        return int(self.X.shape[0])

    def class_counts(self) -> dict[int, int]:
        if self.analysis_type != "Classification":
            return {}
        labels, counts = np.unique(self.y, return_counts=True)
        return {int(k): int(c) for k, c in zip(labels, counts)}


@dataclass
class _Source:
    table: EventTable
    weight: float
    label: Optional[int]


@dataclass
class EventDataLoader:
    """Declare fields, attach tables, then :meth:`load`.

        loader = EventDataLoader(DatasetConfig(variables=["x", "y"], spectators=["eventID"]))
        loader.add_signal_tree(sig, 1.0)
        loader.add_background_tree(bkg, 1.0)
        events = loader.load()
    """

    cfg: DatasetConfig
    _sources: List[_Source] = field(default_factory=list)

    def add_signal_tree(self, table: EventTable, weight: float = 1.0) -> None:
        self._add(table, weight, SIGNAL)

    def add_background_tree(self, table: EventTable, weight: float = 1.0) -> None:
        self._add(table, weight, BACKGROUND)

    def add_regression_tree(self, table: EventTable, weight: float = 1.0) -> None:
        if not self.cfg.targets:
            raise ConfigError("Regression trees need at least one declared target.")
        self._add(table, weight, None)

    @property
    def analysis_type(self) -> str:
        labels = {s.label for s in self._sources}
        if labels == {None}:
            return "Regression"
        return "Classification"

    def _add(self, table: EventTable, weight: float, label: Optional[int]) -> None:
        if self._sources and (label is None) != (self._sources[0].label is None):
            raise ConfigError("Cannot mix classification and regression trees in one loader.")
        required = list(self.cfg.visible_fields)
        if label is None:
            required += list(self.cfg.targets)
        if self.cfg.weight_field:
            required.append(self.cfg.weight_field)
        missing = [n for n in required if not table.has_field(n)]
        if missing:
            raise ConfigError(
                f"Table is missing declared field(s) {missing}. Available: {list(table.field_names)}"
            )
        if not float(weight) > 0.0:
            raise ConfigError(f"Tree weight must be > 0; got {weight}.")
        self._sources.append(_Source(table=table, weight=float(weight), label=label))
        logger.debug(
            "added %s tree with %d events (weight %.3g)",
            {SIGNAL: "signal", BACKGROUND: "background", None: "regression"}[label],
            table.n_rows,
            weight,
        )

    def load(self) -> LabeledEvents:
        if not self._sources:
            raise ConfigError("No trees added to the data loader.")

        analysis_type = self.analysis_type
        if analysis_type == "Classification":
            present = {s.label for s in self._sources}
            if present != {SIGNAL, BACKGROUND}:
                raise ConfigError("Classification needs both signal and background trees.")

        visible = self.cfg.visible_fields
        tables, ys, ws = [], [], []
        for src in self._sources:
            t = src.table
            tables.append(EventTable({n: t.column(n) for n in visible}))
            if src.label is None:
                ys.append(t.column(self.cfg.targets[0]).astype(float))
            else:
                ys.append(np.full((t.n_rows,), src.label, dtype=int))
            w = np.full((t.n_rows,), src.weight, dtype=float)
            if self.cfg.weight_field:
                w = w * t.column(self.cfg.weight_field).astype(float)
            ws.append(w)

        table = EventTable.concat(tables)
        y = np.concatenate(ys)
        w = np.concatenate(ws)
        if analysis_type == "Classification":
            w = normalize_weights(y, w, self.cfg.norm_mode)

        X = table.to_matrix(self.cfg.variables)
        logger.info(
            "%s: loaded %d events (%s) with %d variable(s), %d spectator(s)",
            self.cfg.name,
            X.shape[0],
            analysis_type,
            len(self.cfg.variables),
            len(self.cfg.spectators),
        )
        return LabeledEvents(
            X=X,
            y=y,
            w=w,
            table=table,
            variables=tuple(self.cfg.variables),
            spectators=tuple(self.cfg.spectators),
            analysis_type=analysis_type,
        )


def normalize_weights(y: np.ndarray, w: np.ndarray, mode: str) -> np.ndarray:
    """Rescale per-class weights.

    - ``None``: unchanged.
    - ``NumEvents``: each class sums to its own number of events.
    - ``EqualNumEvents``: each class sums to the number of signal events.
    """
    w = np.asarray(w, dtype=float).copy()
    if mode == "None":
        return w
    n_signal = int(np.sum(y == SIGNAL))
    for label in (SIGNAL, BACKGROUND):
        mask = y == label
        total = float(np.sum(w[mask]))
        if total <= 0.0:
            continue
        target = float(np.sum(mask)) if mode == "NumEvents" else float(n_signal)
        w[mask] *= target / total
    return w
