from __future__ import annotations

"""Event table readers and writers.

``.npz``: one array per field (``np.savez(path, x=..., eventID=...)``).
``.csv`` / ``.tsv`` / ``.txt``: a header row naming the fields, numeric cells.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from crosseval.components.records import EventTable

logger = logging.getLogger(__name__)

_TEXT_SUFFIXES = {".csv": ",", ".tsv": "\t", ".txt": r"\s+"}


def _select(columns: dict, fields: Optional[Sequence[str]], path: Path) -> dict:
    if fields is None:
        return columns
    missing = [f for f in fields if f not in columns]
    if missing:
        raise KeyError(f"Field(s) {missing} not found in {path.name}. Available: {list(columns)}")
    return {f: columns[f] for f in fields}


def load_npz_table(file_path: Union[str, Path], *, fields: Optional[Sequence[str]] = None) -> EventTable:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"NPZ file not found: {path}")
    with np.load(path.as_posix(), allow_pickle=False) as data:
        columns = {k: np.asarray(data[k]) for k in data.files}
    return EventTable(_select(columns, fields, path))


def load_delimited_table(
    file_path: Union[str, Path],
    *,
    fields: Optional[Sequence[str]] = None,
    delimiter: Optional[str] = None,
    encoding: Optional[str] = None,
) -> EventTable:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Table file not found: {path}")

    sep = delimiter or _TEXT_SUFFIXES.get(path.suffix.lower(), ",")
    df = pd.read_csv(path.as_posix(), sep=sep, header=0, encoding=encoding or "utf-8", engine="python")
    df.columns = [str(c).strip() for c in df.columns]

    df_num = df.apply(pd.to_numeric, errors="coerce")
    if df_num.isna().to_numpy().any():
        n_bad = int(df_num.isna().to_numpy().sum())
        raise ValueError(
            f"{path.name}: found {n_bad} non-numeric/missing cells after parsing. "
            "Clean the file or export as purely numeric values."
        )

    columns = {c: df_num[c].to_numpy() for c in df_num.columns}
    return EventTable(_select(columns, fields, path))


def read_event_table(file_path: Union[str, Path], *, fields: Optional[Sequence[str]] = None) -> EventTable:
    """Read an :class:`EventTable`, choosing the reader from the file extension."""
    path = Path(file_path)
    ext = path.suffix.lower()
    if ext == ".npz":
        table = load_npz_table(path, fields=fields)
    elif ext in _TEXT_SUFFIXES:
        table = load_delimited_table(path, fields=fields)
    else:
        raise ValueError(f"Unsupported event table format: {ext!r} ({path.name})")
    logger.debug("read %d events with fields %s from %s", table.n_rows, list(table.field_names), path)
    return table


def write_event_table(table: EventTable, file_path: Union[str, Path]) -> Path:
    """Write ``table`` as ``.npz`` or ``.csv`` (by extension)."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ext = path.suffix.lower()
    if ext == ".npz":
        np.savez(path.as_posix(), **table.columns())
    elif ext == ".csv":
        pd.DataFrame(table.columns()).to_csv(path.as_posix(), index=False)
    else:
        raise ValueError(f"Unsupported event table format: {ext!r} ({path.name})")
    return path
