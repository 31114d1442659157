"""Core primitives shared by every layer: errors, progress, logging."""

from .errors import ArtifactError, ConfigError, CrossEvalError, EvaluationError, FitError
from .log import configure_logging
from .progress import ProgressCallback

__all__ = [
    "ArtifactError",
    "CrossEvalError",
    "ConfigError",
    "EvaluationError",
    "FitError",
    "ProgressCallback",
    "configure_logging",
]
