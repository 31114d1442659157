from __future__ import annotations

import numpy as np
import pytest

from crosseval.components.expressions import (
    BinaryOp,
    Call,
    FieldRef,
    NumFoldsRef,
    evaluate_finite,
    parse,
    tokenize,
)
from crosseval.core.errors import ConfigError, EvaluationError


def _eval(source: str, num_folds: int = 2, **fields) -> float:
    return float(parse(source).evaluate(fields, num_folds))


@pytest.mark.parametrize(
    "source, expected",
    [
        ("1+2*3", 7.0),
        ("(1+2)*3", 9.0),
        ("7/2", 3.5),
        ("-5%2", -1.0),
        ("5%-2", 1.0),
        ("-2*-3", 6.0),
        ("+4", 4.0),
        ("int(-2.7)", -2.0),
        ("int(2.7)", 2.0),
        ("floor(-2.5)", -3.0),
        ("ceil(2.1)", 3.0),
        ("abs(-3)", 3.0),
        ("fabs(-3.5)", 3.5),
        ("sqrt(16)", 4.0),
        ("min(3, 8)", 3.0),
        ("max(3, 8)", 8.0),
        ("1e2", 100.0),
        (".5*4", 2.0),
        ("10-4-3", 3.0),
        ("24/4/3", 2.0),
    ],
)
def test_arithmetic(source, expected):
    assert _eval(source) == pytest.approx(expected)


def test_num_folds_spellings_bind_to_fold_count():
    for source in ("NumFolds", "numFolds", "[NumFolds]", "[numFolds]", "int([NumFolds])"):
        assert _eval(source, num_folds=7) == 7.0


def test_bare_and_bracketed_fields():
    assert _eval("[eventID]*2", eventID=21) == 42.0
    assert _eval("eventID*2", eventID=21) == 42.0
    assert _eval("[ eventID ]+x", eventID=1, x=0.5) == 1.5


def test_tree_shape_and_fields():
    node = parse("int(fabs([eventID]))%int([NumFolds])")
    assert isinstance(node, BinaryOp)
    assert node.op == "%"
    assert isinstance(node.left, Call)
    assert node.left.function.name == "int"
    assert isinstance(node.right.args[0], NumFoldsRef)
    assert node.referenced_fields() == frozenset({"eventID"})


def test_to_source_reparses_to_same_values():
    node = parse("int(fabs([eventID]))%int([NumFolds]) + -x/2")
    again = parse(node.to_source())
    values = {"eventID": np.arange(-6, 7), "x": np.linspace(0, 1, 13)}
    np.testing.assert_array_equal(node.evaluate(values, 3), again.evaluate(values, 3))


def test_field_ref_keeps_spelling():
    node = parse("[eventID]")
    assert node == FieldRef("eventID", bracketed=True)


@pytest.mark.parametrize(
    "source",
    ["", "   ", "1+", "(1+2", "1 2", "int(", "[eventID", "$x", "foo(1)", "min(1)", "int(1, 2)", "[1]"],
)
def test_malformed_expressions_raise_config_error(source):
    with pytest.raises(ConfigError):
        parse(source)


def test_function_names_are_case_sensitive():
    with pytest.raises(ConfigError, match="Unknown function"):
        parse("INT(1)")


def test_non_string_expression():
    with pytest.raises(ConfigError):
        parse(42)


def test_tokenizer_positions():
    toks = tokenize("int([eventID]) % 2")
    assert [t.kind for t in toks] == ["name", "op", "bracket", "op", "op", "number", "end"]
    assert toks[2].text == "eventID"
    assert toks[4].pos == 15


def test_missing_field_is_evaluation_error():
    with pytest.raises(EvaluationError, match="eventID"):
        _eval("[eventID]%2", x=1.0)


@pytest.mark.parametrize("source", ["[eventID]/0", "[eventID]%0", "sqrt(-1)", "log(0)"])
def test_non_finite_values_are_rejected(source):
    with pytest.raises(EvaluationError):
        evaluate_finite(parse(source), {"eventID": 3}, 2)


def test_vectorised_and_scalar_paths_agree():
    node = parse("int(fabs([eventID]*1.5 - x))%int([NumFolds])")
    ids = np.arange(-20, 21)
    xs = np.linspace(-3, 3, ids.size)
    vec = node.evaluate({"eventID": ids, "x": xs}, 4)
    scalar = [float(node.evaluate({"eventID": int(i), "x": float(x)}, 4)) for i, x in zip(ids, xs)]
    np.testing.assert_array_equal(vec, scalar)
