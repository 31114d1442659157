from .fold_assigner import FoldAssigner, assign_fold
from .splitters import DeterministicSplitter, RandomSplitter
from .types import Split

__all__ = ["FoldAssigner", "assign_fold", "DeterministicSplitter", "RandomSplitter", "Split"]
