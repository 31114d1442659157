from .builders import build_bdt, build_fisher
from .fitting import fit_model
from .trainers import SklearnTrainer, predict_output

__all__ = ["build_bdt", "build_fisher", "fit_model", "SklearnTrainer", "predict_output"]
