from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class AxisConfig(BaseModel):
    """One histogram axis: either equidistant or irregular.

        AxisConfig(n_bins=100, low=0.0, high=1.0)      # equidistant
        AxisConfig(edges=[0.0, 1.0, 2.0, 3.0, 10.0])   # irregular
    """

    n_bins: Optional[int] = Field(default=None, gt=0)
    low: Optional[float] = None
    high: Optional[float] = None
    edges: Optional[List[float]] = None
    title: str = ""

    @model_validator(mode="after")
    def _one_binning(self) -> "AxisConfig":
        if self.edges is not None:
            if self.n_bins is not None or self.low is not None or self.high is not None:
                raise ValueError("Give either edges or (n_bins, low, high), not both.")
            if len(self.edges) < 2:
                raise ValueError("An irregular axis needs at least two edges.")
            if any(b <= a for a, b in zip(self.edges, self.edges[1:])):
                raise ValueError("Axis edges must be strictly increasing.")
            return self
        if self.n_bins is None or self.low is None or self.high is None:
            raise ValueError("An equidistant axis needs n_bins, low and high.")
        if not self.high > self.low:
            raise ValueError(f"Axis high ({self.high}) must exceed low ({self.low}).")
        return self

    @classmethod
    def equidistant(cls, n_bins: int, low: float, high: float, title: str = "") -> "AxisConfig":
        return cls(n_bins=n_bins, low=low, high=high, title=title)

    @classmethod
    def irregular(cls, edges: List[float], title: str = "") -> "AxisConfig":
        return cls(edges=list(edges), title=title)

    @property
    def is_irregular(self) -> bool:
        return self.edges is not None

    def bin_edges(self) -> List[float]:
        if self.edges is not None:
            return [float(e) for e in self.edges]
        n = int(self.n_bins)
        lo, hi = float(self.low), float(self.high)
        step = (hi - lo) / n
        # computed per edge so the last edge is exactly `high`
        return [lo + i * step for i in range(n)] + [hi]
