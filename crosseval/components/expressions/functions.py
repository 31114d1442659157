from __future__ import annotations

"""Function table for split expressions.

Functions operate elementwise on numpy values so the same AST evaluates one
record (0-d values) or a whole :class:`~crosseval.components.records.EventTable`
(1-d columns).
"""

from dataclasses import dataclass
from typing import Callable

import numpy as np

from crosseval.registries.base import Registry


@dataclass(frozen=True)
class FormulaFunction:
    name: str
    arity: int
    impl: Callable[..., np.ndarray]


FUNCTIONS: Registry[FormulaFunction] = Registry(_name="formula functions")


def _register(name: str, arity: int, impl: Callable[..., np.ndarray], *aliases: str) -> None:
    FUNCTIONS.register(name, *aliases)(FormulaFunction(name=name, arity=arity, impl=impl))


# int() truncates toward zero, like a C cast
_register("int", 1, np.trunc)
_register("abs", 1, np.abs)
_register("fabs", 1, np.fabs)
_register("floor", 1, np.floor)
_register("ceil", 1, np.ceil)
_register("sqrt", 1, np.sqrt)
_register("exp", 1, np.exp)
_register("log", 1, np.log)
_register("min", 2, np.minimum)
_register("max", 2, np.maximum)
