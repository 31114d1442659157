from __future__ import annotations

from io import BytesIO

import joblib
import numpy as np
import pytest
from sklearn.discriminant_analysis import LinearDiscriminantAnalysis

from crosseval.contracts.cv_configs import CrossValidationConfig
from crosseval.contracts.method_configs import MethodSpec
from crosseval.core.errors import ArtifactError
from crosseval.io.artifacts import (
    ARTIFACTS_DIR_ENV,
    FileSystemArtifactStore,
    build_fold_artifact_meta,
    load_model_artifact,
    save_model_artifact,
)
from crosseval.runtime.random import RngManager

from .conftest import CV_OPTIONS


def _fitted():
    rng = np.random.default_rng(0)
    X = np.vstack([rng.normal(1, 1, (50, 2)), rng.normal(-1, 1, (50, 2))])
    y = np.r_[np.ones(50), np.zeros(50)]
    return LinearDiscriminantAnalysis().fit(X, y), X


def _meta(fold: int = 0):
    return build_fold_artifact_meta(
        job_name="job",
        spec=MethodSpec(kind="Fisher", name="Fisher", options=""),
        cv=CrossValidationConfig.from_option_string(CV_OPTIONS),
        fold=fold,
        variables=["x", "y"],
        n_train=100,
    )


def test_meta_records_the_split_configuration():
    meta = _meta(1)
    assert meta["uid"] == "job/Fisher/fold1"
    assert meta["split"]["num_folds"] == 2
    assert meta["split"]["split_type"] == "Deterministic"
    assert meta["variables"] == ["x", "y"]
    assert meta["analysis_type"] == "Classification"


def test_model_round_trip():
    model, X = _fitted()
    saved = save_model_artifact(model, _meta())
    assert saved.size == len(saved.content_bytes)
    loaded, meta = load_model_artifact(saved.content_bytes)
    np.testing.assert_array_equal(loaded.predict_proba(X), model.predict_proba(X))
    assert meta["fold"] == 0


def test_incomplete_meta_is_rejected():
    model, _ = _fitted()
    meta = dict(_meta())
    del meta["split"]
    with pytest.raises(ArtifactError):
        save_model_artifact(model, meta)


def test_foreign_payload_is_rejected():
    buf = BytesIO()
    joblib.dump({"model": "nope"}, buf)
    with pytest.raises(ArtifactError):
        load_model_artifact(buf.getvalue())


def test_filesystem_store_layout(tmp_path):
    store = FileSystemArtifactStore(tmp_path)
    model, _ = _fitted()
    meta = _meta()
    saved = save_model_artifact(model, meta)
    ref = store.save(meta["uid"], saved.content_bytes, meta=dict(meta))

    assert (tmp_path / "job" / "Fisher" / "fold0.artifact.joblib").exists()
    assert ref.meta_path.endswith("fold0.artifact.meta.json")
    payload, stored_meta = store.load("job/Fisher/fold0")
    assert payload == saved.content_bytes
    assert stored_meta["split"] == meta["split"]

    store.save("job/Other/fold0", b"x")
    assert list(store.list_uids()) == ["job/Fisher/fold0", "job/Other/fold0"]
    assert list(store.list_uids(prefix="job/Fisher/")) == ["job/Fisher/fold0"]

    store.delete("job/Fisher/fold0")
    assert not store.exists("job/Fisher/fold0")
    with pytest.raises(FileNotFoundError):
        store.load("job/Fisher/fold0")


@pytest.mark.parametrize("uid", ["", "/abs", "a/../b", "a//b"])
def test_invalid_uids(tmp_path, uid):
    with pytest.raises(ArtifactError):
        FileSystemArtifactStore(tmp_path).exists(uid)


def test_store_directory_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(ARTIFACTS_DIR_ENV, str(tmp_path / "env-store"))
    store = FileSystemArtifactStore()
    assert store.base_dir == tmp_path / "env-store"
    assert store.base_dir.is_dir()


def test_child_seeds_are_stable_and_distinct():
    a = RngManager(100)
    b = RngManager(100)
    assert a.fold_seeds("BDTG", 3) == b.fold_seeds("BDTG", 3)
    assert len(set(a.fold_seeds("BDTG", 3))) == 3
    assert a.child_seed("BDTG/fold0") != RngManager(101).child_seed("BDTG/fold0")
    assert a.child_generator("toy").normal() == b.child_generator("toy").normal()
