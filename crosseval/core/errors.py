"""Exceptions raised by the cross-evaluation engine.

These are intentionally lightweight so they can be raised from compute paths
without importing orchestration modules.
"""


class CrossEvalError(RuntimeError):
    """Base class for crosseval errors."""


class ConfigError(CrossEvalError, ValueError):
    """Raised when a configuration (fold count, split expression, options) is invalid."""


class EvaluationError(CrossEvalError, ValueError):
    """Raised when a split expression cannot be evaluated for a record."""


class FitError(CrossEvalError):
    """Raised when a histogram fit does not produce a result."""


class ArtifactError(CrossEvalError, ValueError):
    """Raised when a stored model artifact is missing, corrupt or incompatible."""
