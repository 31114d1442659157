from __future__ import annotations

from typing import List

from pydantic import Field

from .common import ResultModel


class FitResult(ResultModel):
    """Least-squares fit of a function to histogram contents."""

    params: List[float]
    errors: List[float]
    covariance: List[List[float]] = Field(default_factory=list)
    chi2: float
    ndf: int
    n_points: int
    success: bool = True
    message: str = ""

    @property
    def chi2_per_ndf(self) -> float:
        return self.chi2 / self.ndf if self.ndf > 0 else float("nan")
