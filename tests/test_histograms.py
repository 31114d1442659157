from __future__ import annotations

import numpy as np
import pytest

from crosseval.components.histograms import CurveFitter, Histogram2D
from crosseval.contracts.hist_configs import AxisConfig
from crosseval.core.errors import FitError
from crosseval.io.histograms import list_histograms, load_histogram, save_histogram, save_histograms
from crosseval.use_cases.histogram_fit import DEMO_HIST_NAME, fit_histogram_demo, make_demo_histogram, surface


def _demo_axes():
    return AxisConfig.equidistant(100, 0.0, 1.0), AxisConfig.irregular([0.0, 1.0, 2.0, 3.0, 10.0])


def test_axis_configs():
    eq, irr = _demo_axes()
    edges = eq.bin_edges()
    assert len(edges) == 101
    assert edges[0] == 0.0 and edges[-1] == 1.0
    assert irr.is_irregular and not eq.is_irregular
    with pytest.raises(ValueError):
        AxisConfig(edges=[0.0, 2.0, 1.0])
    with pytest.raises(ValueError):
        AxisConfig(n_bins=10, low=1.0, high=0.0)
    with pytest.raises(ValueError):
        AxisConfig(n_bins=10, low=0.0, high=1.0, edges=[0.0, 1.0])


def test_fill_lands_in_irregular_bin():
    hist = Histogram2D(*_demo_axes())
    assert hist.shape == (100, 4)
    hist.fill((0.555, 5.0), 2.0)
    ix, iy = np.argwhere(hist.counts)[0]
    assert (ix, iy) == (55, 3)
    assert hist.counts[ix, iy] == 2.0
    assert hist.errors[ix, iy] == pytest.approx(2.0)
    assert hist.entries == 1
    assert hist.integral() == 2.0


def test_out_of_range_points_are_tallied_separately():
    hist = Histogram2D(*_demo_axes())
    hist.fill_many(
        np.array([[0.5, 0.5], [1.5, 0.5], [0.5, -1.0], [np.nan, 1.0], [0.5, 10.0]]),
        np.array([1.0, 2.0, 3.0, 4.0, 5.0]),
    )
    assert hist.entries == 5
    assert hist.integral() == 1.0
    assert hist.outside_weight == 14.0


def test_upper_axis_edge_is_overflow():
    hist = Histogram2D(*_demo_axes())
    hist.fill((1.0, 0.5))
    hist.fill((0.5, 10.0))
    hist.fill((0.0, 0.0))
    assert hist.integral() == 1.0
    assert hist.counts[0, 0] == 1.0
    assert hist.outside_weight == 2.0


def test_sum_of_squared_weights():
    hist = Histogram2D(*_demo_axes())
    hist.fill_many(np.array([[0.005, 0.5]] * 3), np.array([1.0, 2.0, 3.0]))
    assert hist.counts[0, 0] == 6.0
    assert hist.sumw2[0, 0] == 14.0
    assert hist.errors[0, 0] == pytest.approx(np.sqrt(14.0))


def test_fill_many_validates_shapes():
    hist = Histogram2D(*_demo_axes())
    with pytest.raises(ValueError):
        hist.fill_many(np.zeros((3, 3)))
    with pytest.raises(ValueError):
        hist.fill_many(np.zeros((3, 2)), np.ones(2))


def test_bin_centers():
    hist = Histogram2D(*_demo_axes())
    cx, cy = hist.bin_centers()
    assert cx[0] == pytest.approx(0.005)
    assert cy.tolist() == [0.5, 1.5, 2.5, 6.5]


def test_fitter_recovers_known_parameters():
    hist = Histogram2D(*_demo_axes())
    cx, cy = hist.bin_centers()
    gx, gy = np.meshgrid(cx, cy, indexing="ij")
    truth = (2.0, 3.0)
    weights = surface(np.vstack([gx.ravel(), gy.ravel()]), truth)
    hist.fill_many(np.column_stack([gx.ravel(), gy.ravel()]), weights)

    fit = CurveFitter().fit(hist, surface, (0.0, 1.0))
    assert fit.params == pytest.approx(truth, abs=1e-6)
    assert fit.chi2 == pytest.approx(0.0, abs=1e-8)
    assert fit.ndf == 400 - 2
    assert fit.n_points == 400
    assert len(fit.errors) == 2
    assert len(fit.covariance) == 2


def test_fit_with_too_few_points():
    hist = make_demo_histogram()
    with pytest.raises(FitError):
        CurveFitter(skip_empty=True).fit(hist, surface, (0.0, 1.0))
    with pytest.raises(FitError):
        CurveFitter().fit(hist, surface, ())


def test_demo_workflow_writes_the_histogram(tmp_path):
    outcome = fit_histogram_demo(tmp_path / "hist.npz")
    assert outcome.path.exists()
    assert outcome.hist.entries == 1
    assert outcome.fit.n_points == 400
    assert all(np.isfinite(outcome.fit.params))

    assert list_histograms(outcome.path) == [DEMO_HIST_NAME]
    loaded = load_histogram(outcome.path, DEMO_HIST_NAME)
    np.testing.assert_array_equal(loaded.counts, outcome.hist.counts)
    np.testing.assert_array_equal(loaded.edges[1], [0.0, 1.0, 2.0, 3.0, 10.0])
    assert loaded.entries == 1
    assert loaded.name == DEMO_HIST_NAME


def test_several_histograms_per_file(tmp_path):
    a = make_demo_histogram()
    b = Histogram2D(*_demo_axes(), name="other", title="Other")
    b.fill((0.9, 9.0), 4.0)
    path = save_histograms({"a": a, "b": b}, tmp_path / "many")
    assert path.suffix == ".npz"
    assert list_histograms(path) == ["a", "b"]
    loaded = load_histogram(path, "b")
    assert loaded.integral() == 4.0
    assert loaded.title == "Other"
    np.testing.assert_array_equal(loaded.sumw2, b.sumw2)
    with pytest.raises(KeyError):
        load_histogram(path, "c")


def test_histogram_names_cannot_nest(tmp_path):
    with pytest.raises(ValueError):
        save_histogram(make_demo_histogram(), tmp_path / "h.npz", name="a/b")
