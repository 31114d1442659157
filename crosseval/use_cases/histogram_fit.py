from __future__ import annotations

"""Fill a 2D histogram, fit a surface to it and write it to a file.

The x axis has 100 equal bins on [0, 1]; the y axis has irregular edges
``[0, 1, 2, 3, 10]``. One point ``(0.01, 1.02)`` is filled and the model
``p0 * x0**2 + (p1 - x1) * x1`` is fitted to all bin contents starting from
``(0, 1)``. The histogram is written under the name ``TheHist``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

import numpy as np

from crosseval.components.histograms.fitting import CurveFitter
from crosseval.components.histograms.hist2d import Histogram2D
from crosseval.contracts.hist_configs import AxisConfig
from crosseval.contracts.results.fit import FitResult
from crosseval.io.histograms import save_histogram

logger = logging.getLogger(__name__)

DEMO_HIST_NAME = "TheHist"
DEMO_Y_EDGES = (0.0, 1.0, 2.0, 3.0, 10.0)
DEMO_INITIAL_PARAMS = (0.0, 1.0)


def surface(x: np.ndarray, p: Sequence[float]) -> np.ndarray:
    """``p0 * x0**2 + (p1 - x1) * x1``."""
    return p[0] * x[0] ** 2 + (p[1] - x[1]) * x[1]


@dataclass
class HistogramFitOutcome:
    hist: Histogram2D
    fit: FitResult
    path: Path


def make_demo_histogram() -> Histogram2D:
    hist = Histogram2D(
        AxisConfig.equidistant(100, 0.0, 1.0, title="x"),
        AxisConfig.irregular(list(DEMO_Y_EDGES), title="y"),
        name=DEMO_HIST_NAME,
        title="Fitted histogram",
    )
    hist.fill((0.01, 1.02), 1.0)
    return hist


def fit_histogram_demo(
    file_path: Union[str, Path] = "hist.npz",
    *,
    fitter: CurveFitter | None = None,
) -> HistogramFitOutcome:
    hist = make_demo_histogram()
    fit = (fitter or CurveFitter()).fit(hist, surface, DEMO_INITIAL_PARAMS)
    logger.info(
        "fit of %s: p0=%.4g p1=%.4g chi2/ndf=%.4g/%d",
        DEMO_HIST_NAME,
        fit.params[0],
        fit.params[1],
        fit.chi2,
        fit.ndf,
    )
    path = save_histogram(hist, file_path, name=DEMO_HIST_NAME)
    logger.info("wrote %s to %s", DEMO_HIST_NAME, path)
    return HistogramFitOutcome(hist=hist, fit=fit, path=path)
