from __future__ import annotations

from typing import Callable, Iterable

from crosseval.components.interfaces import Splitter
from crosseval.contracts.cv_configs import CrossValidationConfig
from crosseval.registries.base import Registry

# Factory takes (cfg, field names visible to the split expression).
SplitterFactory = Callable[[CrossValidationConfig, Iterable[str]], Splitter]

_SPLITTERS: Registry[SplitterFactory] = Registry(_name="splitters", normalize=str.lower)

_BUILTINS_LOADED = False


def register_splitter(split_type: str) -> Callable[[SplitterFactory], SplitterFactory]:
    return _SPLITTERS.register(split_type)


def _ensure_builtins() -> None:
    global _BUILTINS_LOADED
    if _BUILTINS_LOADED:
        return
    from crosseval.registries.builtins import splitters as _  # noqa: F401

    _BUILTINS_LOADED = True


def make_splitter(cfg: CrossValidationConfig, *, fields: Iterable[str]) -> Splitter:
    _ensure_builtins()
    factory = _SPLITTERS.get(str(cfg.split_type))
    return factory(cfg, fields)


def list_split_types() -> list[str]:
    _ensure_builtins()
    return _SPLITTERS.names()
