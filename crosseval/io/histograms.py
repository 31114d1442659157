from __future__ import annotations

"""Histogram files.

Histograms are written to ``.npz`` archives, several per file, each under its
own name: ``<name>/x_edges``, ``<name>/y_edges``, ``<name>/counts``,
``<name>/sumw2`` and ``<name>/stats`` (entries, outside weight).
"""

from pathlib import Path
from typing import Dict, Union

import numpy as np

from crosseval.components.histograms.hist2d import Histogram2D

_KEYS = ("x_edges", "y_edges", "counts", "sumw2", "stats")


def save_histograms(histograms: Dict[str, Histogram2D], file_path: Union[str, Path]) -> Path:
    """Write every histogram in ``histograms`` to one archive, keyed by name."""
    path = Path(file_path)
    if path.suffix.lower() != ".npz":
        path = path.with_suffix(".npz")
    path.parent.mkdir(parents=True, exist_ok=True)

    arrays: Dict[str, np.ndarray] = {}
    for name, hist in histograms.items():
        if not name or "/" in name:
            raise ValueError(f"Invalid histogram name {name!r}.")
        ex, ey = hist.edges
        arrays[f"{name}/x_edges"] = ex
        arrays[f"{name}/y_edges"] = ey
        arrays[f"{name}/counts"] = hist.counts
        arrays[f"{name}/sumw2"] = hist.sumw2
        arrays[f"{name}/stats"] = np.asarray([hist.entries, hist.outside_weight], dtype=float)
        arrays[f"{name}/title"] = np.asarray(hist.title)
    np.savez(path.as_posix(), **arrays)
    return path


def save_histogram(hist: Histogram2D, file_path: Union[str, Path], *, name: str = "") -> Path:
    return save_histograms({name or hist.name or "hist": hist}, file_path)


def list_histograms(file_path: Union[str, Path]) -> list[str]:
    with np.load(Path(file_path).as_posix(), allow_pickle=False) as data:
        return sorted({k.split("/", 1)[0] for k in data.files})


def load_histogram(file_path: Union[str, Path], name: str) -> Histogram2D:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Histogram file not found: {path}")
    with np.load(path.as_posix(), allow_pickle=False) as data:
        keys = [f"{name}/{k}" for k in _KEYS]
        missing = [k for k in keys if k not in data.files]
        if missing:
            available = sorted({k.split("/", 1)[0] for k in data.files})
            raise KeyError(f"Histogram {name!r} not found in {path.name}. Available: {available}")
        title_key = f"{name}/title"
        title = str(data[title_key]) if title_key in data.files else ""
        entries, outside = data[f"{name}/stats"].tolist()
        return Histogram2D.from_arrays(
            data[f"{name}/x_edges"],
            data[f"{name}/y_edges"],
            data[f"{name}/counts"],
            data[f"{name}/sumw2"],
            entries=int(entries),
            outside_weight=float(outside),
            name=name,
            title=title,
        )
