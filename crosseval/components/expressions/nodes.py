from __future__ import annotations

"""Typed AST for split expressions.

The tree is built once by :func:`crosseval.components.expressions.parser.parse`
and evaluated directly; nothing is re-parsed per record.

Evaluation contract
-------------------
``node.evaluate(values, num_folds)`` where ``values`` maps field names to a
number (one record) or a 1D array (a table column). All arithmetic is done in
float64 through numpy ufuncs, so the record path and the vectorised path give
identical results.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Mapping, Tuple

import numpy as np

from crosseval.core.errors import EvaluationError

from .functions import FormulaFunction

NUM_FOLDS_NAMES: FrozenSet[str] = frozenset({"NumFolds", "numFolds"})


class Node:
    """Base class for expression nodes."""

    def evaluate(self, values: Mapping[str, Any], num_folds: int) -> np.ndarray:
        raise NotImplementedError

    def referenced_fields(self) -> FrozenSet[str]:
        return frozenset()

    def to_source(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Number(Node):
    value: float

    def evaluate(self, values: Mapping[str, Any], num_folds: int) -> np.ndarray:
        return np.float64(self.value)

    def to_source(self) -> str:
        return repr(self.value) if not float(self.value).is_integer() else str(int(self.value))


@dataclass(frozen=True)
class FieldRef(Node):
    name: str
    bracketed: bool = False

    def evaluate(self, values: Mapping[str, Any], num_folds: int) -> np.ndarray:
        try:
            raw = values[self.name]
        except KeyError:
            raise EvaluationError(f"Record has no field {self.name!r}.") from None
        return np.asarray(raw, dtype=np.float64)

    def referenced_fields(self) -> FrozenSet[str]:
        return frozenset({self.name})

    def to_source(self) -> str:
        return f"[{self.name}]" if self.bracketed else self.name


@dataclass(frozen=True)
class NumFoldsRef(Node):
    spelling: str = "NumFolds"
    bracketed: bool = False

    def evaluate(self, values: Mapping[str, Any], num_folds: int) -> np.ndarray:
        return np.float64(num_folds)

    def to_source(self) -> str:
        return f"[{self.spelling}]" if self.bracketed else self.spelling


_UNARY: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "-": np.negative,
    "+": np.positive,
}

# '%' follows the dividend's sign (C fmod), not Python's floor modulo
_BINARY: Dict[str, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.true_divide,
    "%": np.fmod,
}


@dataclass(frozen=True)
class UnaryOp(Node):
    op: str
    operand: Node

    def evaluate(self, values: Mapping[str, Any], num_folds: int) -> np.ndarray:
        return _UNARY[self.op](self.operand.evaluate(values, num_folds))

    def referenced_fields(self) -> FrozenSet[str]:
        return self.operand.referenced_fields()

    def to_source(self) -> str:
        return f"{self.op}{self.operand.to_source()}"


@dataclass(frozen=True)
class BinaryOp(Node):
    op: str
    left: Node
    right: Node

    def evaluate(self, values: Mapping[str, Any], num_folds: int) -> np.ndarray:
        return _BINARY[self.op](
            self.left.evaluate(values, num_folds),
            self.right.evaluate(values, num_folds),
        )

    def referenced_fields(self) -> FrozenSet[str]:
        return self.left.referenced_fields() | self.right.referenced_fields()

    def to_source(self) -> str:
        return f"({self.left.to_source()}{self.op}{self.right.to_source()})"


@dataclass(frozen=True)
class Call(Node):
    function: FormulaFunction
    args: Tuple[Node, ...]

    def evaluate(self, values: Mapping[str, Any], num_folds: int) -> np.ndarray:
        return self.function.impl(*(a.evaluate(values, num_folds) for a in self.args))

    def referenced_fields(self) -> FrozenSet[str]:
        out: FrozenSet[str] = frozenset()
        for a in self.args:
            out = out | a.referenced_fields()
        return out

    def to_source(self) -> str:
        return f"{self.function.name}({', '.join(a.to_source() for a in self.args)})"


def evaluate_finite(node: Node, values: Mapping[str, Any], num_folds: int) -> np.ndarray:
    """Evaluate ``node`` and require every resulting value to be finite."""
    with np.errstate(all="ignore"):
        out = np.asarray(node.evaluate(values, num_folds), dtype=np.float64)
    if not np.all(np.isfinite(out)):
        bad = int(np.size(out) - np.count_nonzero(np.isfinite(out)))
        raise EvaluationError(
            f"Split expression produced a non-finite value for {bad} record(s)."
        )
    return out
