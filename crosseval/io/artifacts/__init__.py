"""Fold model persistence.

- how fold models are serialized (joblib bytes + meta dict)
- what the meta records so a stored model can be checked before it is applied
- where artifacts live (ArtifactStore protocol; filesystem default)
"""

from .filesystem_store import ARTIFACTS_DIR_ENV, FileSystemArtifactStore, default_artifacts_dir
from .meta import FoldArtifactMetaDict, build_fold_artifact_meta, fold_artifact_prefix, fold_artifact_uid
from .serialization import MAGIC_KEY, SCHEMA_VERSION, SaveResult, load_model_artifact, save_model_artifact
from .store import ArtifactStore, StoredArtifact

__all__ = [
    "ARTIFACTS_DIR_ENV",
    "ArtifactStore",
    "FileSystemArtifactStore",
    "FoldArtifactMetaDict",
    "MAGIC_KEY",
    "SCHEMA_VERSION",
    "SaveResult",
    "StoredArtifact",
    "build_fold_artifact_meta",
    "default_artifacts_dir",
    "fold_artifact_prefix",
    "fold_artifact_uid",
    "load_model_artifact",
    "save_model_artifact",
]
