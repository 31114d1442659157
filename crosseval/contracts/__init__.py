"""Config and result contracts.

Pydantic models and Literal-based choice types used to validate configuration
and to shape results. Keep module imports explicit in most of the codebase:

    from crosseval.contracts.cv_configs import CrossValidationConfig

The names re-exported here are a small convenience namespace.
"""

from .choices import AnalysisType, BoostType, MetricName, NormMode, OutputEnsembling, SplitType
from .cv_configs import DEFAULT_SPLIT_EXPR, CrossValidationConfig
from .data_configs import DatasetConfig
from .hist_configs import AxisConfig
from .method_configs import BDTConfig, FisherConfig, MethodOptions, MethodSpec
from .options import parse_option_string
from .results import CrossValidationResult, FitResult, FoldResult

__all__ = [
    "AnalysisType",
    "BoostType",
    "MetricName",
    "NormMode",
    "OutputEnsembling",
    "SplitType",
    "DEFAULT_SPLIT_EXPR",
    "CrossValidationConfig",
    "DatasetConfig",
    "AxisConfig",
    "BDTConfig",
    "FisherConfig",
    "MethodOptions",
    "MethodSpec",
    "parse_option_string",
    "CrossValidationResult",
    "FoldResult",
    "FitResult",
]
