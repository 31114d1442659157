from __future__ import annotations

import numpy as np
import pytest
from sklearn.metrics import roc_auc_score

from crosseval.components.records import EventTable, Record
from crosseval.components.trainers.trainers import predict_output
from crosseval.contracts.method_configs import MethodSpec
from crosseval.core.errors import ArtifactError, ConfigError
from crosseval.extras.datasets.toy import generate_gaussian_events
from crosseval.use_cases.cross_validation import (
    CrossValidatedMethod,
    cross_evaluate,
    load_cross_validated_methods,
)

from .conftest import BDTG_OPTIONS, CV_OPTIONS, SPLIT_EXPR

JOB = "apply"


@pytest.fixture
def trained(toy_events, store):
    spec = MethodSpec(kind="BDT", name="BDTG", options=BDTG_OPTIONS)
    results = cross_evaluate(toy_events, CV_OPTIONS, [spec], job_name=JOB, store=store)
    return results["BDTG"]


def test_each_event_is_scored_by_its_own_fold_model(trained, toy_events, store):
    method = CrossValidatedMethod.from_store(JOB, "BDTG", store=store, cv_config=CV_OPTIONS)
    assert method.num_folds == 2
    assert method.variables == ("x", "y")

    out = method.predict(toy_events.table)
    folds = toy_events.table.column("eventID") % 2
    for k in (0, 1):
        mask = folds == k
        expected = predict_output(method.models[k], toy_events.X[mask])
        np.testing.assert_allclose(out[mask], expected)


def test_applied_output_reproduces_out_of_fold_score(trained, toy_events, store):
    method = CrossValidatedMethod.from_store(JOB, "BDTG", store=store)
    out = method.predict(toy_events.table)
    assert roc_auc_score(toy_events.y, out, sample_weight=toy_events.w) == pytest.approx(trained.oof_score)


def test_single_record_matches_table_output(trained, toy_events, store):
    method = CrossValidatedMethod.from_store(JOB, "BDTG", store=store)
    out = method.predict(toy_events.table)
    for i in (0, 1, 1500):
        assert method.predict_record(toy_events.table.record(i)) == pytest.approx(out[i])


def test_new_events_are_routed_by_split_expression(trained, store):
    method = CrossValidatedMethod.from_store(JOB, "BDTG", store=store)
    table = generate_gaussian_events(10, 0.0, seed=7)
    out = method.predict(table)
    assert out.shape == (10,)
    assert np.all((out >= 0.0) & (out <= 1.0))
    assert method.assign_folds(table).tolist() == [i % 2 for i in range(1, 11)]


def test_average_over_fold_models(trained, toy_events, store):
    method = CrossValidatedMethod.from_store(
        JOB, "BDTG", store=store, cv_config=CV_OPTIONS + ":OutputEnsembling=Avg"
    )
    out = method.predict(toy_events.table)
    expected = np.mean([predict_output(m, toy_events.X) for m in method.models], axis=0)
    np.testing.assert_allclose(out, expected)
    rec = Record(x=0.3, y=-0.2, eventID=17)
    assert method.predict_record(rec) == pytest.approx(
        np.mean([predict_output(m, np.array([[0.3, -0.2]]))[0] for m in method.models])
    )


@pytest.mark.parametrize(
    "options",
    [
        CV_OPTIONS.replace("NumFolds=2", "NumFolds=3"),
        CV_OPTIONS.replace(SPLIT_EXPR, "int([eventID])%int([NumFolds])"),
        "NumFolds=2:SplitType=Random:OutputEnsembling=Avg",
        CV_OPTIONS.replace("Classification", "Regression"),
    ],
)
def test_mismatched_configuration_is_rejected(trained, store, options):
    with pytest.raises(ConfigError):
        CrossValidatedMethod.from_store(JOB, "BDTG", store=store, cv_config=options)


def test_missing_variables_are_rejected(trained, store):
    method = CrossValidatedMethod.from_store(JOB, "BDTG", store=store)
    with pytest.raises(ConfigError):
        method.predict(EventTable({"x": np.zeros(2), "eventID": np.arange(2)}))
    with pytest.raises(ConfigError):
        method.predict_record({"x": 1.0, "eventID": 3})


def test_unknown_job_or_method(store):
    with pytest.raises(ArtifactError):
        CrossValidatedMethod.from_store("nope", "BDTG", store=store)


def test_randomly_split_models_need_averaging(toy_events, store):
    spec = MethodSpec(kind="BDT", name="BDTG", options=BDTG_OPTIONS)
    cross_evaluate(toy_events, "NumFolds=2:SplitSeed=3", [spec], job_name="rnd", store=store)
    with pytest.raises(ConfigError):
        CrossValidatedMethod.from_store("rnd", "BDTG", store=store)
    method = CrossValidatedMethod.from_store(
        "rnd", "BDTG", store=store, cv_config="NumFolds=2:SplitSeed=3:OutputEnsembling=Avg"
    )
    assert method.predict(toy_events.table).shape == (2000,)
    with pytest.raises(ConfigError):
        CrossValidatedMethod.from_store(
            "rnd", "BDTG", store=store, cv_config="NumFolds=2:SplitSeed=4:OutputEnsembling=Avg"
        )


def test_load_several_methods(toy_events, store):
    specs = [
        MethodSpec(kind="BDT", name="BDTG", options=BDTG_OPTIONS),
        MethodSpec(kind="Fisher", name="Fisher", options=""),
    ]
    cross_evaluate(toy_events, CV_OPTIONS, specs, job_name="multi", store=store)
    methods = load_cross_validated_methods("multi", ["BDTG", "Fisher"], store=store)
    assert set(methods) == {"BDTG", "Fisher"}
    assert methods["Fisher"].num_folds == 2


def test_retraining_with_fewer_folds_replaces_stored_models(toy_events, store):
    spec = MethodSpec(kind="BDT", name="BDTG", options=BDTG_OPTIONS)
    three_folds = CV_OPTIONS.replace("NumFolds=2", "NumFolds=3")
    cross_evaluate(toy_events, three_folds, [spec], job_name="rerun", store=store)
    assert len(list(store.list_uids(prefix="rerun/BDTG/"))) == 3

    cross_evaluate(toy_events, CV_OPTIONS, [spec], job_name="rerun", store=store)
    assert list(store.list_uids(prefix="rerun/BDTG/")) == ["rerun/BDTG/fold0", "rerun/BDTG/fold1"]

    method = CrossValidatedMethod.from_store("rerun", "BDTG", store=store, cv_config=CV_OPTIONS)
    assert method.num_folds == 2
