from __future__ import annotations

from typing import Callable, Optional

from crosseval.components.interfaces import ClassifierTrainer
from crosseval.contracts.method_configs import MethodSpec
from crosseval.registries.base import Registry

# Factory takes (spec, analysis_type, seed) and returns a ClassifierTrainer.
TrainerFactory = Callable[[MethodSpec, str, Optional[int]], ClassifierTrainer]

_METHODS: Registry[TrainerFactory] = Registry(_name="methods", normalize=str.lower)

_BUILTINS_LOADED = False


def register_method(kind: str, *aliases: str) -> Callable[[TrainerFactory], TrainerFactory]:
    """Decorator: make a method kind bookable."""
    return _METHODS.register(kind, *aliases)


def _ensure_builtins() -> None:
    global _BUILTINS_LOADED
    if _BUILTINS_LOADED:
        return
    # Import triggers registration side-effects.
    from crosseval.registries.builtins import methods as _  # noqa: F401

    _BUILTINS_LOADED = True


def make_trainer(
    spec: MethodSpec,
    *,
    analysis_type: str = "Classification",
    seed: Optional[int] = None,
) -> ClassifierTrainer:
    _ensure_builtins()
    factory = _METHODS.get(spec.kind)
    return factory(spec, analysis_type, seed)


def list_methods() -> list[str]:
    _ensure_builtins()
    return _METHODS.names()
