"""Cross evaluation orchestration.

- folds: fit/score one model per fold (optionally in worker processes)
- run: fold assignment, OOF pooling, summary scores, model persistence
- facade: the book-then-evaluate ``CrossValidation`` workflow
- application: re-applying persisted fold models to new events
"""

from .application import CrossValidatedMethod, load_cross_validated_methods
from .facade import CrossValidation
from .run import cross_evaluate

__all__ = [
    "CrossValidatedMethod",
    "CrossValidation",
    "cross_evaluate",
    "load_cross_validated_methods",
]
