from __future__ import annotations

import numpy as np
import pytest

from crosseval.components.data.loader import EventDataLoader, normalize_weights
from crosseval.components.records import EventTable
from crosseval.contracts.data_configs import DatasetConfig
from crosseval.core.errors import ConfigError
from crosseval.extras.datasets.toy import generate_gaussian_events


def _loader(**kwargs) -> EventDataLoader:
    return EventDataLoader(DatasetConfig(variables=["x", "y"], spectators=["eventID"], **kwargs))


def test_toy_events_have_running_event_ids():
    table = generate_gaussian_events(1000, 1.0, 1.0, seed=100)
    assert table.n_rows == 1000
    assert table.column("eventID").tolist() == list(range(1, 1001))
    assert abs(float(np.mean(table.column("x"))) - 1.0) < 0.15


def test_toy_events_are_reproducible():
    a = generate_gaussian_events(50, -1.0, seed=101)
    b = generate_gaussian_events(50, -1.0, seed=101)
    np.testing.assert_array_equal(a.column("x"), b.column("x"))


def test_load_toy_dataset(toy_events):
    assert toy_events.n_events == 2000
    assert toy_events.X.shape == (2000, 2)
    assert toy_events.class_counts() == {0: 1000, 1: 1000}
    assert toy_events.variables == ("x", "y")
    assert toy_events.spectators == ("eventID",)
    assert toy_events.table.has_field("eventID")
    assert set(toy_events.table.field_names) == {"x", "y", "eventID"}
    np.testing.assert_allclose(toy_events.w, 1.0)


def test_spectators_do_not_reach_the_model(toy_events):
    np.testing.assert_array_equal(toy_events.X[:, 0], toy_events.table.column("x"))
    assert not np.array_equal(toy_events.X[:, 1], toy_events.table.column("eventID"))


def test_missing_declared_field_is_rejected():
    loader = _loader()
    with pytest.raises(ConfigError, match="eventID"):
        loader.add_signal_tree(EventTable({"x": np.zeros(3), "y": np.zeros(3)}))


def test_tree_weight_must_be_positive():
    loader = _loader()
    with pytest.raises(ConfigError):
        loader.add_signal_tree(generate_gaussian_events(5, 0.0, seed=1), 0.0)


def test_classification_needs_both_classes():
    loader = _loader()
    loader.add_signal_tree(generate_gaussian_events(5, 0.0, seed=1))
    with pytest.raises(ConfigError):
        loader.load()


def test_cannot_mix_classification_and_regression():
    loader = EventDataLoader(DatasetConfig(variables=["x"], spectators=["eventID"], targets=["y"]))
    loader.add_signal_tree(generate_gaussian_events(5, 0.0, seed=1))
    with pytest.raises(ConfigError):
        loader.add_regression_tree(generate_gaussian_events(5, 0.0, seed=2))


def test_regression_loader_uses_first_target():
    loader = EventDataLoader(DatasetConfig(variables=["x"], spectators=["eventID"], targets=["y"]))
    table = generate_gaussian_events(20, 0.0, seed=3)
    loader.add_regression_tree(table, 2.0)
    events = loader.load()
    assert events.analysis_type == "Regression"
    np.testing.assert_array_equal(events.y, table.column("y"))
    np.testing.assert_allclose(events.w, 2.0)


def test_weight_field_multiplies_tree_weight():
    cfg = DatasetConfig(variables=["x"], spectators=["eventID"], weight_field="w", norm_mode="None")
    loader = EventDataLoader(cfg)
    sig = generate_gaussian_events(4, 1.0, seed=1).with_column("w", np.array([1.0, 2.0, 3.0, 4.0]))
    bkg = generate_gaussian_events(4, -1.0, seed=2).with_column("w", np.ones(4))
    loader.add_signal_tree(sig, 2.0)
    loader.add_background_tree(bkg, 1.0)
    events = loader.load()
    np.testing.assert_allclose(events.w[:4], [2.0, 4.0, 6.0, 8.0])
    np.testing.assert_allclose(events.w[4:], 1.0)


@pytest.mark.parametrize(
    "mode, expected_sig, expected_bkg",
    [("None", 20.0, 2.0), ("NumEvents", 2.0, 4.0), ("EqualNumEvents", 2.0, 2.0)],
)
def test_normalize_weights(mode, expected_sig, expected_bkg):
    y = np.array([1, 1, 0, 0, 0, 0])
    w = np.array([10.0, 10.0, 0.5, 0.5, 0.5, 0.5])
    out = normalize_weights(y, w, mode)
    assert out[y == 1].sum() == pytest.approx(expected_sig)
    assert out[y == 0].sum() == pytest.approx(expected_bkg)


def test_duplicate_field_names_are_rejected():
    with pytest.raises(ValueError):
        DatasetConfig(variables=["x", "x"])
    with pytest.raises(ValueError):
        DatasetConfig(variables=["x"], spectators=["x"])
