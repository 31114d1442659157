"""Stable entry points.

    from crosseval.api import FoldAssigner, CrossValidation, cross_evaluate
"""

from __future__ import annotations

from crosseval.components.data.loader import EventDataLoader, LabeledEvents
from crosseval.components.histograms import CurveFitter, Histogram2D
from crosseval.components.records import EventTable, Record
from crosseval.components.splitters.fold_assigner import FoldAssigner, assign_fold
from crosseval.contracts.cv_configs import DEFAULT_SPLIT_EXPR, CrossValidationConfig
from crosseval.contracts.data_configs import DatasetConfig
from crosseval.contracts.hist_configs import AxisConfig
from crosseval.contracts.method_configs import MethodSpec
from crosseval.contracts.results import CrossValidationResult, FitResult, FoldResult
from crosseval.core.errors import ArtifactError, ConfigError, CrossEvalError, EvaluationError, FitError
from crosseval.io.artifacts.filesystem_store import FileSystemArtifactStore
from crosseval.io.histograms import load_histogram, save_histogram
from crosseval.io.readers import read_event_table
from crosseval.registries.methods import list_methods
from crosseval.use_cases.cross_validation import (
    CrossValidatedMethod,
    CrossValidation,
    cross_evaluate,
    load_cross_validated_methods,
)
from crosseval.use_cases.histogram_fit import fit_histogram_demo

__all__ = [
    "ArtifactError",
    "AxisConfig",
    "ConfigError",
    "CrossEvalError",
    "CrossValidatedMethod",
    "CrossValidation",
    "CrossValidationConfig",
    "CrossValidationResult",
    "CurveFitter",
    "DEFAULT_SPLIT_EXPR",
    "DatasetConfig",
    "EvaluationError",
    "EventDataLoader",
    "EventTable",
    "FileSystemArtifactStore",
    "FitError",
    "FitResult",
    "FoldAssigner",
    "FoldResult",
    "Histogram2D",
    "LabeledEvents",
    "MethodSpec",
    "Record",
    "assign_fold",
    "cross_evaluate",
    "fit_histogram_demo",
    "list_methods",
    "load_cross_validated_methods",
    "load_histogram",
    "read_event_table",
    "save_histogram",
]
