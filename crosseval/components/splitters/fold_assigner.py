from __future__ import annotations

"""Deterministic fold assignment from a split expression.

A :class:`FoldAssigner` maps every record to exactly one fold by evaluating a
formula over the record's fields, typically a spectator such as an event
number::

    assigner = FoldAssigner("int(fabs([eventID]))%int([NumFolds])", 2)
    assigner.assign_fold(Record(eventID=5))   # -> 1

The result depends only on the expression, the fold count and the record, so
an event keeps its fold across re-runs and across processes. No split table has
to be persisted for models to be re-applied later.
"""

from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

import numpy as np

from crosseval.components.expressions import NUM_FOLDS_NAMES, Node, evaluate_finite, parse
from crosseval.components.records import EventTable
from crosseval.core.errors import ConfigError


def _validate_num_folds(num_folds: Any) -> int:
    if isinstance(num_folds, bool) or not isinstance(num_folds, (int, np.integer)):
        raise ConfigError(f"NumFolds must be an integer; got {num_folds!r}.")
    if int(num_folds) <= 0:
        raise ConfigError(f"NumFolds must be > 0; got {int(num_folds)}.")
    return int(num_folds)


def _to_fold(values: np.ndarray, num_folds: int) -> np.ndarray:
    """Truncate toward zero, then reduce modulo ``num_folds`` into ``[0, num_folds)``."""
    r = np.fmod(np.trunc(values), float(num_folds))
    r = np.where(r < 0, r + num_folds, r)
    return r.astype(np.int64)


class FoldAssigner:
    """Pure, thread-safe record -> fold mapping.

    Parameters
    ----------
    split_expr
        Formula in the split-expression language, e.g.
        ``"int(fabs([eventID]))%int([NumFolds])"``.
    num_folds
        Number of folds; must be a positive integer.
    fields
        Optional field names of the records that will be assigned. When given,
        identifiers that are neither a field nor ``NumFolds``/``numFolds`` are
        rejected here instead of at evaluation time.

    Raises
    ------
    ConfigError
        Non-positive fold count, malformed expression, unknown function, or an
        identifier missing from ``fields``.
    """

    __slots__ = ("_split_expr", "_num_folds", "_ast", "_fields")

    def __init__(
        self,
        split_expr: str,
        num_folds: int,
        *,
        fields: Optional[Iterable[str]] = None,
    ):
        self._num_folds = _validate_num_folds(num_folds)
        self._split_expr = split_expr
        self._ast: Node = parse(split_expr)
        self._fields: Optional[FrozenSet[str]] = None

        if fields is not None:
            known = frozenset(fields)
            unknown = sorted(self._ast.referenced_fields() - known - NUM_FOLDS_NAMES)
            if unknown:
                raise ConfigError(
                    f"Split expression {split_expr!r} references unknown field(s) {unknown}. "
                    f"Available: {sorted(known)}"
                )
            self._fields = known

    @property
    def split_expr(self) -> str:
        return self._split_expr

    @property
    def num_folds(self) -> int:
        return self._num_folds

    @property
    def expression(self) -> Node:
        return self._ast

    @property
    def referenced_fields(self) -> FrozenSet[str]:
        return self._ast.referenced_fields()

    def assign_fold(self, record: Mapping[str, Any]) -> int:
        """Return the fold of one record.

        Raises :class:`EvaluationError` if a referenced field is missing or the
        expression value is not finite.
        """
        value = evaluate_finite(self._ast, record, self._num_folds)
        if value.ndim != 0:
            raise ConfigError("assign_fold expects a single record; use assign_folds for tables.")
        return int(_to_fold(value, self._num_folds))

    def assign_folds(self, table: EventTable) -> np.ndarray:
        """Vectorised :meth:`assign_fold` over every row of ``table``."""
        values = evaluate_finite(self._ast, table.columns(), self._num_folds)
        if values.ndim == 0:
            values = np.full((table.n_rows,), float(values))
        return _to_fold(values, self._num_folds)

    def fold_members(self, table: EventTable, fold: int) -> np.ndarray:
        """Row indices of ``table`` assigned to ``fold``."""
        if not 0 <= int(fold) < self._num_folds:
            raise ConfigError(f"Fold {fold} out of range [0, {self._num_folds}).")
        return np.flatnonzero(self.assign_folds(table) == int(fold))

    def signature(self) -> Dict[str, Any]:
        """The configuration that must match between training and application."""
        return {"split_expr": self._split_expr, "num_folds": self._num_folds}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FoldAssigner):
            return NotImplemented
        return self.signature() == other.signature()

    def __hash__(self) -> int:
        return hash((self._split_expr, self._num_folds))

    def __repr__(self) -> str:
        return f"FoldAssigner(split_expr={self._split_expr!r}, num_folds={self._num_folds})"


def assign_fold(split_expr: str, num_folds: int, record: Mapping[str, Any]) -> int:
    """One-shot helper: configure and assign in a single call."""
    return FoldAssigner(split_expr, num_folds).assign_fold(record)


__all__ = ["FoldAssigner", "assign_fold"]
