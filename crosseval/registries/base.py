from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from crosseval.core.errors import ConfigError

V = TypeVar("V")


def _identity(key: str) -> str:
    return key


@dataclass
class Registry(Generic[V]):
    """Name -> value registry used for methods, splitters and formula functions.

    Typical usage:
        METHODS = Registry[MethodFactory](_name="methods", normalize=str.lower)

        @METHODS.register("bdtg")
        def _bdtg(cfg, seed):
            ...

        factory = METHODS.get("BDTG")

    ``normalize`` is applied to keys on both registration and lookup, so a
    registry can be case-insensitive (booking names) or exact (formula
    functions). Unknown keys raise :class:`ConfigError` listing what exists.
    """

    _name: str = "registry"
    normalize: Callable[[str], str] = _identity
    _items: Dict[str, V] = field(default_factory=dict)

    def register(self, key: str, *aliases: str) -> Callable[[V], V]:
        def deco(value: V) -> V:
            for k in (key, *aliases):
                self._items[self.normalize(k)] = value
            return value

        return deco

    def get(self, key: str) -> V:
        k = self.normalize(key)
        if k not in self._items:
            raise ConfigError(f"{self._name}: unknown key {key!r}. Known: {self.names()}")
        return self._items[k]

    def try_get(self, key: str, default: Optional[V] = None) -> Optional[V]:
        return self._items.get(self.normalize(key), default)

    def names(self) -> List[str]:
        return sorted(self._items)

    def __contains__(self, key: str) -> bool:
        return self.normalize(key) in self._items

    def __iter__(self) -> Iterator[str]:  # pragma: no cover
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
