from __future__ import annotations

"""Literal-based "choice" types used across configs.

Keep this file dependency-free (stdlib + typing only). The spellings follow the
option-string surface (``AnalysisType=Classification``), so values parsed from an
option string validate without translation.
"""

from typing import Literal, TypeAlias

AnalysisType: TypeAlias = Literal["Classification", "Regression"]

SplitType: TypeAlias = Literal["Deterministic", "Random"]

# Application: score each event with its own fold's model, or average all folds
OutputEnsembling: TypeAlias = Literal["None", "Avg"]

# Per-class weight renormalisation applied by the data loader
NormMode: TypeAlias = Literal["None", "NumEvents", "EqualNumEvents"]

BoostType: TypeAlias = Literal["Grad", "AdaBoost"]

MetricName: TypeAlias = Literal["roc_auc", "r2", "mse", "mae"]


def canonical_choice(value: object, choices: tuple[str, ...]) -> object:
    """Map ``value`` case-insensitively onto one of ``choices``; leave others untouched."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        for c in choices:
            if c.lower() == lowered:
                return c
    return value


__all__ = [
    "AnalysisType",
    "SplitType",
    "OutputEnsembling",
    "NormMode",
    "BoostType",
    "MetricName",
    "canonical_choice",
]
