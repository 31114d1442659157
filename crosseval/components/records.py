from __future__ import annotations

"""Record and record-source types.

A :class:`Record` is one event: an immutable, ordered mapping from field name to
a numeric value. An :class:`EventTable` is the columnar source records are read
from; split expressions are evaluated against either.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Union

import numpy as np

Number = Union[int, float]


def _as_number(name: str, value: Any) -> Number:
    if isinstance(value, (bool, np.bool_)):
        return int(value)
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return float(value)
    raise TypeError(f"Field {name!r} must be numeric; got {type(value).__name__}.")


class Record(Mapping):
    """Immutable ordered mapping ``field name -> number``."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        items: Dict[str, Number] = {}
        for source in (fields or {}, kwargs):
            for k, v in source.items():
                items[str(k)] = _as_number(str(k), v)
        self._fields = MappingProxyType(items)

    def __getitem__(self, name: str) -> Number:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __hash__(self) -> int:
        return hash(tuple(self._fields.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._fields.items())
        return f"Record({inner})"

    def has_field(self, name: str) -> bool:
        return name in self._fields

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._fields)


class EventTable:
    """Columnar record source.

    Columns are 1D numpy arrays of equal length. Integer columns keep an integer
    dtype so identifiers such as ``eventID`` round-trip exactly.
    """

    def __init__(self, columns: Mapping[str, Any]):
        cols: Dict[str, np.ndarray] = {}
        n_rows: Optional[int] = None
        for name, values in columns.items():
            arr = np.asarray(values)
            if arr.ndim != 1:
                raise ValueError(f"Column {name!r} must be 1D; got shape {arr.shape}.")
            if arr.dtype.kind not in "biuf":
                raise TypeError(f"Column {name!r} must be numeric; got dtype {arr.dtype}.")
            if n_rows is None:
                n_rows = int(arr.shape[0])
            elif int(arr.shape[0]) != n_rows:
                raise ValueError(
                    f"Column length mismatch: {name!r} has {arr.shape[0]} rows, expected {n_rows}."
                )
            cols[str(name)] = arr
        self._columns = cols
        self._n_rows = int(n_rows or 0)

    @property
    def n_rows(self) -> int:
        return self._n_rows

    def __len__(self) -> int:
        return self._n_rows

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._columns)

    def has_field(self, name: str) -> bool:
        return name in self._columns

    def column(self, name: str) -> np.ndarray:
        if name not in self._columns:
            raise KeyError(f"EventTable has no field {name!r}. Available: {list(self._columns)}")
        return self._columns[name]

    def columns(self) -> Dict[str, np.ndarray]:
        return dict(self._columns)

    def record(self, i: int) -> Record:
        return Record({k: v[i].item() for k, v in self._columns.items()})

    def __iter__(self) -> Iterator[Record]:
        for i in range(self._n_rows):
            yield self.record(i)

    def take(self, indices: Union[Sequence[int], np.ndarray]) -> "EventTable":
        idx = np.asarray(indices, dtype=int)
        return EventTable({k: v[idx] for k, v in self._columns.items()})

    def with_column(self, name: str, values: Any) -> "EventTable":
        cols = dict(self._columns)
        cols[name] = values
        return EventTable(cols)

    def to_matrix(self, names: Sequence[str], dtype: Any = float) -> np.ndarray:
        """Stack the named columns into an ``(n_rows, len(names))`` array."""
        if not names:
            return np.empty((self._n_rows, 0), dtype=dtype)
        return np.column_stack([self.column(n).astype(dtype) for n in names])

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "EventTable":
        rows = list(records)
        if not rows:
            return cls({})
        names = list(rows[0].keys())
        for r in rows[1:]:
            if list(r.keys()) != names:
                raise ValueError("All records must share the same ordered field names.")
        return cls({n: np.asarray([r[n] for r in rows]) for n in names})

    @classmethod
    def concat(cls, tables: Sequence["EventTable"]) -> "EventTable":
        tables = [t for t in tables if t.n_rows > 0 or t.field_names]
        if not tables:
            return cls({})
        names = tables[0].field_names
        for t in tables[1:]:
            if set(t.field_names) != set(names):
                raise ValueError(
                    f"Cannot concatenate tables with different fields: {names} vs {t.field_names}"
                )
        return cls({n: np.concatenate([t.column(n) for t in tables]) for n in names})

    def __repr__(self) -> str:
        return f"EventTable(n_rows={self._n_rows}, fields={list(self._columns)})"
