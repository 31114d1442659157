from .fitting import CurveFitter, fit_to
from .hist2d import Histogram2D

__all__ = ["CurveFitter", "Histogram2D", "fit_to"]
