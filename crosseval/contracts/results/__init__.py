from .common import JSONDict, ResultModel
from .cross_validation import CrossValidationResult, FoldResult
from .fit import FitResult

__all__ = ["JSONDict", "ResultModel", "FoldResult", "CrossValidationResult", "FitResult"]
