"""Built-in method registrations."""

from __future__ import annotations

from typing import Optional

from crosseval.components.trainers.builders import build_bdt, build_fisher
from crosseval.components.trainers.trainers import SklearnTrainer
from crosseval.contracts.method_configs import MethodSpec
from crosseval.registries.methods import register_method


@register_method("BDT")
def _bdt(spec: MethodSpec, analysis_type: str, seed: Optional[int]):
    return SklearnTrainer(build=build_bdt, options=spec.options, analysis_type=analysis_type, seed=seed)


@register_method("Fisher")
def _fisher(spec: MethodSpec, analysis_type: str, seed: Optional[int]):
    return SklearnTrainer(build=build_fisher, options=spec.options, analysis_type=analysis_type, seed=seed)
