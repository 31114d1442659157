from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy.optimize import OptimizeWarning, curve_fit

from crosseval.components.interfaces import FitFunction, Histogram
from crosseval.contracts.results.fit import FitResult
from crosseval.core.errors import FitError

logger = logging.getLogger(__name__)


@dataclass
class CurveFitter:
    """Least-squares fit of ``func(x, params)`` to histogram bin contents.

    ``x`` is an ``(ndim, n_bins)`` array of bin centers and ``params`` the
    parameter vector, so a 2D model reads ``x[0]``, ``x[1]``, ``params[0]``...

    By default every bin takes part with unit uncertainty. ``use_errors`` weights
    bins by their statistical error; empty bins then carry no information and are
    dropped. ``skip_empty`` drops them in either mode.
    """

    use_errors: bool = False
    skip_empty: bool = False
    maxfev: int = 10000

    def fit(
        self,
        hist: Histogram,
        func: FitFunction,
        initial_params: Sequence[float],
    ) -> FitResult:
        p0 = np.asarray(initial_params, dtype=float).ravel()
        if p0.size == 0:
            raise FitError("At least one fit parameter is required.")

        grids = np.meshgrid(*hist.bin_centers(), indexing="ij")
        xdata = np.vstack([g.ravel() for g in grids])
        ydata = np.asarray(hist.counts, dtype=float).ravel()
        sigma = np.asarray(hist.errors, dtype=float).ravel()

        keep = np.ones(ydata.shape, dtype=bool)
        if self.skip_empty or self.use_errors:
            keep &= ydata != 0.0
        if self.use_errors:
            keep &= sigma > 0.0

        xdata, ydata, sigma = xdata[:, keep], ydata[keep], sigma[keep]
        n_points = int(ydata.size)
        if n_points < p0.size:
            raise FitError(
                f"Cannot fit {p0.size} parameter(s) to {n_points} bin(s)."
            )

        def model(x: np.ndarray, *params: float) -> np.ndarray:
            return np.asarray(func(x, np.asarray(params)), dtype=float).ravel()

        message = ""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", OptimizeWarning)
            try:
                popt, pcov = curve_fit(
                    model,
                    xdata,
                    ydata,
                    p0=p0,
                    sigma=sigma if self.use_errors else None,
                    absolute_sigma=self.use_errors,
                    maxfev=self.maxfev,
                )
            except (RuntimeError, ValueError) as e:
                raise FitError(f"Fit did not converge: {e}") from e
        for w in caught:
            if issubclass(w.category, OptimizeWarning):
                message = str(w.message)

        residuals = ydata - model(xdata, *popt)
        if self.use_errors:
            residuals = residuals / sigma
        chi2 = float(np.sum(residuals ** 2))
        ndf = n_points - int(p0.size)

        pcov = np.atleast_2d(np.asarray(pcov, dtype=float))
        success = bool(np.all(np.isfinite(pcov)))
        errors = np.sqrt(np.abs(np.diag(pcov)))

        logger.debug("fit: params=%s chi2=%.4g ndf=%d", popt.tolist(), chi2, ndf)
        return FitResult(
            params=[float(v) for v in popt],
            errors=[float(v) for v in errors],
            covariance=[[float(v) for v in row] for row in pcov],
            chi2=chi2,
            ndf=ndf,
            n_points=n_points,
            success=success,
            message=message,
        )


def fit_to(
    hist: Histogram,
    func: FitFunction,
    initial_params: Sequence[float],
    *,
    use_errors: bool = False,
) -> FitResult:
    """Fit ``func`` to ``hist`` with the default :class:`CurveFitter`."""
    return CurveFitter(use_errors=use_errors).fit(hist, func, initial_params)
