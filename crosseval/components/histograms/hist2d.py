from __future__ import annotations

"""Two-dimensional weighted histogram over fixed axes.

Binning is delegated to :func:`numpy.histogram2d`; this class only accumulates
contents, sum of squared weights and the number of fills. Bins are half-open,
so a point on the upper edge of an axis is overflow. Points outside the axis
ranges or with non-finite coordinates are not binned; their weight is kept in
:attr:`Histogram2D.outside_weight`.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from crosseval.contracts.hist_configs import AxisConfig


class Histogram2D:
    ndim = 2

    def __init__(self, x_axis: AxisConfig, y_axis: AxisConfig, *, name: str = "", title: str = ""):
        self.x_axis = x_axis
        self.y_axis = y_axis
        self.name = name
        self.title = title
        self._edges = (
            np.asarray(x_axis.bin_edges(), dtype=float),
            np.asarray(y_axis.bin_edges(), dtype=float),
        )
        shape = (self._edges[0].size - 1, self._edges[1].size - 1)
        self._counts = np.zeros(shape, dtype=float)
        self._sumw2 = np.zeros(shape, dtype=float)
        self._entries = 0
        self._outside = 0.0

    @property
    def shape(self) -> Tuple[int, int]:
        return self._counts.shape

    @property
    def edges(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._edges

    @property
    def counts(self) -> np.ndarray:
        return self._counts.copy()

    @property
    def sumw2(self) -> np.ndarray:
        return self._sumw2.copy()

    @property
    def errors(self) -> np.ndarray:
        return np.sqrt(self._sumw2)

    @property
    def entries(self) -> int:
        return self._entries

    @property
    def outside_weight(self) -> float:
        return self._outside

    def integral(self) -> float:
        return float(self._counts.sum())

    def bin_centers(self) -> Tuple[np.ndarray, np.ndarray]:
        ex, ey = self._edges
        return (ex[:-1] + ex[1:]) / 2.0, (ey[:-1] + ey[1:]) / 2.0

    def fill(self, coords: Sequence[float], weight: float = 1.0) -> None:
        """Fill one point ``(x, y)`` with ``weight``."""
        point = np.asarray(coords, dtype=float).reshape(1, -1)
        self.fill_many(point, np.asarray([weight], dtype=float))

    def fill_many(self, points: np.ndarray, weights: Optional[np.ndarray] = None) -> None:
        pts = np.asarray(points, dtype=float)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"points must have shape (n, 2); got {pts.shape}.")
        w = np.ones(pts.shape[0]) if weights is None else np.asarray(weights, dtype=float).ravel()
        if w.shape[0] != pts.shape[0]:
            raise ValueError(f"weights length {w.shape[0]} does not match {pts.shape[0]} points.")

        ex, ey = self._edges
        x, y = pts[:, 0], pts[:, 1]
        inside = (
            np.isfinite(x)
            & np.isfinite(y)
            & (x >= ex[0])
            & (x < ex[-1])
            & (y >= ey[0])
            & (y < ey[-1])
        )
        if np.any(inside):
            h, _, _ = np.histogram2d(x[inside], y[inside], bins=[ex, ey], weights=w[inside])
            h2, _, _ = np.histogram2d(x[inside], y[inside], bins=[ex, ey], weights=w[inside] ** 2)
            self._counts += h
            self._sumw2 += h2
        self._outside += float(np.sum(w[~inside]))
        self._entries += int(pts.shape[0])

    @classmethod
    def from_arrays(
        cls,
        x_edges: np.ndarray,
        y_edges: np.ndarray,
        counts: np.ndarray,
        sumw2: np.ndarray,
        *,
        entries: int = 0,
        outside_weight: float = 0.0,
        name: str = "",
        title: str = "",
    ) -> "Histogram2D":
        hist = cls(
            AxisConfig.irregular([float(e) for e in np.asarray(x_edges)]),
            AxisConfig.irregular([float(e) for e in np.asarray(y_edges)]),
            name=name,
            title=title,
        )
        counts = np.asarray(counts, dtype=float)
        if counts.shape != hist.shape:
            raise ValueError(f"counts shape {counts.shape} does not match axes {hist.shape}.")
        hist._counts = counts.copy()
        hist._sumw2 = np.asarray(sumw2, dtype=float).reshape(hist.shape).copy()
        hist._entries = int(entries)
        hist._outside = float(outside_weight)
        return hist

    def __repr__(self) -> str:
        return f"Histogram2D(name={self.name!r}, shape={self.shape}, entries={self._entries})"
