from .evaluators import SklearnEvaluator, make_evaluator
from .metrics import roc_curve_payload, score, weighted_roc_auc

__all__ = ["SklearnEvaluator", "make_evaluator", "roc_curve_payload", "score", "weighted_roc_auc"]
