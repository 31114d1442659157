from __future__ import annotations

import pytest

from crosseval.contracts.cv_configs import DEFAULT_SPLIT_EXPR, CrossValidationConfig
from crosseval.contracts.method_configs import BDTConfig, FisherConfig, MethodSpec
from crosseval.contracts.options import parse_option_string
from crosseval.core.errors import ConfigError

from .conftest import BDTG_OPTIONS, CV_OPTIONS, SPLIT_EXPR


def test_parse_option_string_flags_and_values():
    opts = parse_option_string("!V:Silent:NumFolds=2:SplitExpr=int([eventID])%2::")
    assert opts == {"V": False, "Silent": True, "NumFolds": "2", "SplitExpr": "int([eventID])%2"}


@pytest.mark.parametrize("bad", ["=2", "!=x", "!"])
def test_malformed_option_tokens(bad):
    with pytest.raises(ConfigError):
        parse_option_string(bad)


def test_cross_validation_options_from_string():
    cfg = CrossValidationConfig.from_option_string(CV_OPTIONS)
    assert cfg.verbose is False
    assert cfg.silent is False
    assert cfg.model_persistence is True
    assert cfg.analysis_type == "Classification"
    assert cfg.num_folds == 2
    assert cfg.split_expr == SPLIT_EXPR
    assert cfg.split_type == "Deterministic"
    assert cfg.is_deterministic


def test_default_split_expression_is_the_event_number_one():
    assert DEFAULT_SPLIT_EXPR == SPLIT_EXPR


def test_keys_are_case_insensitive():
    cfg = CrossValidationConfig.from_option_string("numfolds=3:analysistype=regression:v:splitexpr=[id]")
    assert cfg.num_folds == 3
    assert cfg.analysis_type == "Regression"
    assert cfg.verbose is True
    assert cfg.split_expr == "[id]"


def test_no_split_expression_means_random_split():
    cfg = CrossValidationConfig.from_option_string("NumFolds=4:SplitSeed=7")
    assert cfg.split_type == "Random"
    assert cfg.split_seed == 7
    assert cfg.split_signature() == {"split_type": "Random", "split_expr": "", "num_folds": 4, "split_seed": 7}


def test_seed_only_matters_for_random_splits():
    det = CrossValidationConfig.from_option_string(f"NumFolds=2:SplitExpr={SPLIT_EXPR}:SplitSeed=1")
    assert det.split_signature() == CrossValidationConfig.from_option_string(
        f"NumFolds=2:SplitExpr={SPLIT_EXPR}:SplitSeed=2"
    ).split_signature()
    assert det.split_signature()["split_seed"] is None

    rnd = CrossValidationConfig.from_option_string("NumFolds=2:SplitSeed=1")
    assert rnd.split_signature() != CrossValidationConfig.from_option_string("NumFolds=2:SplitSeed=2").split_signature()


@pytest.mark.parametrize(
    "options",
    [
        "NumFolds=0",
        "NumFolds=-2",
        "NumFolds=two",
        "SplitType=Deterministic",
        "AnalysisType=Clustering",
        "OutputEnsembling=Median",
        "NumWorkers=0",
        "Unknown=1",
    ],
)
def test_invalid_cross_validation_options(options):
    with pytest.raises(ConfigError):
        CrossValidationConfig.from_option_string(options)


def test_option_string_round_trip():
    cfg = CrossValidationConfig.from_option_string(CV_OPTIONS + ":NumWorkers=2:OutputEnsembling=Avg")
    again = CrossValidationConfig.from_option_string(cfg.to_option_string())
    assert again == cfg


def test_coerce_accepts_every_form():
    cfg = CrossValidationConfig.coerce({"NumFolds": 3, "SplitExpr": SPLIT_EXPR})
    assert CrossValidationConfig.coerce(cfg) is cfg
    assert CrossValidationConfig.coerce("NumFolds=3:SplitExpr=" + SPLIT_EXPR) == cfg
    assert CrossValidationConfig(num_folds=3, split_expr=SPLIT_EXPR) == cfg
    with pytest.raises(ConfigError):
        CrossValidationConfig.coerce({"NumFolds": 0})


def test_bdt_options():
    cfg = BDTConfig.from_options(BDTG_OPTIONS)
    assert cfg.n_trees == 20
    assert cfg.min_node_size == pytest.approx(0.025)
    assert cfg.boost_type == "Grad"
    assert cfg.shrinkage == pytest.approx(0.10)
    assert cfg.n_cuts == 20
    assert cfg.max_depth == 2
    assert cfg.verbose is False


def test_bdt_defaults_and_bare_percent_min_node_size():
    cfg = BDTConfig.from_options("MinNodeSize=10:boosttype=adaboost")
    assert cfg.min_node_size == pytest.approx(0.1)
    assert cfg.boost_type == "AdaBoost"
    assert cfg.n_trees == 800


@pytest.mark.parametrize("options", ["NTrees=0", "nCuts=1", "MinNodeSize=60%", "MinNodeSize=60", "MinNodeSize=abc", "BoostType=Bagging", "Foo=1"])
def test_invalid_bdt_options(options):
    with pytest.raises(ConfigError):
        BDTConfig.from_options(options)


def test_fisher_options():
    assert FisherConfig.from_options("").shrinkage is None
    assert FisherConfig.from_options("!H:Shrinkage=0.3").shrinkage == pytest.approx(0.3)


def test_method_spec_builds_options_for_its_kind():
    spec = MethodSpec(kind="bdt", name="BDTG", options=BDTG_OPTIONS)
    assert spec.kind == "BDT"
    assert isinstance(spec.options, BDTConfig)
    assert spec.options.n_trees == 20

    spec = MethodSpec(kind="Fisher", name="Fisher", options={"Shrinkage": 0.5})
    assert isinstance(spec.options, FisherConfig)


def test_method_spec_rejects_foreign_options():
    with pytest.raises(ValueError):
        MethodSpec(kind="Fisher", name="F", options="NTrees=10")
    with pytest.raises(ValueError):
        MethodSpec(kind="BDT", name="B", options=FisherConfig())


@pytest.mark.parametrize("value, fraction", [("0.3", 0.003), ("5", 0.05), ("2.5%", 0.025)])
def test_min_node_size_is_a_percentage(value, fraction):
    cfg = BDTConfig.from_options(f"MinNodeSize={value}")
    assert cfg.min_node_size == pytest.approx(fraction)
    again = BDTConfig.from_options(cfg.to_option_string())
    assert again.min_node_size == pytest.approx(fraction)
