"""Split-expression mini-language: tokenizer, parser, typed AST."""

from .functions import FUNCTIONS, FormulaFunction
from .nodes import (
    NUM_FOLDS_NAMES,
    BinaryOp,
    Call,
    FieldRef,
    Node,
    Number,
    NumFoldsRef,
    UnaryOp,
    evaluate_finite,
)
from .parser import parse, tokenize

__all__ = [
    "FUNCTIONS",
    "FormulaFunction",
    "NUM_FOLDS_NAMES",
    "Node",
    "Number",
    "FieldRef",
    "NumFoldsRef",
    "UnaryOp",
    "BinaryOp",
    "Call",
    "evaluate_finite",
    "parse",
    "tokenize",
]
