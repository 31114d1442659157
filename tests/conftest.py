"""Shared fixtures."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from crosseval.components.records import EventTable
from crosseval.extras.datasets.toy import toy_classification_loader
from crosseval.io.artifacts.filesystem_store import FileSystemArtifactStore

SPLIT_EXPR = "int(fabs([eventID]))%int([NumFolds])"

CV_OPTIONS = (
    "!V:!Silent:ModelPersistence:AnalysisType=Classification:NumFolds=2:"
    f"SplitExpr={SPLIT_EXPR}"
)

BDTG_OPTIONS = "!H:!V:NTrees=20:MinNodeSize=2.5%:BoostType=Grad:Shrinkage=0.10:nCuts=20:MaxDepth=2"


@pytest.fixture
def store(tmp_path):
    return FileSystemArtifactStore(tmp_path / "artifacts")


@pytest.fixture
def toy_loader():
    return toy_classification_loader(1000)


@pytest.fixture
def toy_events(toy_loader):
    return toy_loader.load()


@pytest.fixture
def small_table():
    return EventTable(
        {
            "eventID": np.array([-5, -4, 0, 1, 2, 3, 4, 5, 10, 11], dtype=np.int64),
            "x": np.linspace(-1.0, 1.0, 10),
        }
    )
