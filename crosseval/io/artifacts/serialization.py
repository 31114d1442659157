"""Fold model serialization.

A persisted fold model is a dict package written with joblib:

{
  "__crosseval_artifact__": true,
  "schema_version": "1",
  "meta": <FoldArtifactMetaDict>,
  "model": <fitted sklearn estimator>,
}
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Dict, Tuple, Union

import joblib

from crosseval.core.errors import ArtifactError

SCHEMA_VERSION = "1"
MAGIC_KEY = "__crosseval_artifact__"

_REQUIRED_META = (
    "uid",
    "created_at",
    "job_name",
    "method_name",
    "method_kind",
    "fold",
    "analysis_type",
    "variables",
    "split",
)


@dataclass
class SaveResult:
    content_bytes: bytes
    size: int
    sha256: str


def _ensure_model_is_serializable(model: Any) -> None:
    if not hasattr(model, "fit"):
        raise ArtifactError("Model must expose a fit() method.")
    if not any(hasattr(model, name) for name in ("predict_proba", "decision_function", "predict")):
        raise ArtifactError("Model must expose predict_proba(), decision_function() or predict().")


def validate_meta(meta: Dict[str, Any]) -> None:
    missing = [k for k in _REQUIRED_META if k not in meta]
    if missing:
        raise ArtifactError(f"Artifact meta missing required keys: {missing}")
    if not isinstance(meta["split"], dict):
        raise ArtifactError("Artifact meta 'split' must be a dict")
    if not isinstance(meta["variables"], list):
        raise ArtifactError("Artifact meta 'variables' must be a list")


def _hash_bytes(b: bytes) -> str:
    return hashlib.sha256(b).hexdigest()


def save_model_artifact(model: Any, meta: Dict[str, Any]) -> SaveResult:
    """Serialize a fitted fold model and its meta to joblib bytes."""

    _ensure_model_is_serializable(model)
    validate_meta(meta)

    package = {
        MAGIC_KEY: True,
        "schema_version": SCHEMA_VERSION,
        "meta": dict(meta),
        "model": model,
    }

    buf = BytesIO()
    joblib.dump(package, buf, compress=3)
    data = buf.getvalue()
    digest = _hash_bytes(data)

    meta.setdefault("payload_hash", digest)

    return SaveResult(content_bytes=data, size=len(data), sha256=digest)


def load_model_artifact(payload: Union[bytes, BytesIO]) -> Tuple[Any, Dict[str, Any]]:
    """Deserialize an artifact payload and validate it."""

    buf = BytesIO(payload) if isinstance(payload, bytes) else payload
    package = joblib.load(buf)

    if not isinstance(package, dict) or not package.get(MAGIC_KEY):
        raise ArtifactError("Not a valid crosseval artifact package")

    if str(package.get("schema_version")) != SCHEMA_VERSION:
        raise ArtifactError(
            f"Incompatible schema_version: {package.get('schema_version')}, expected {SCHEMA_VERSION}"
        )

    meta = package.get("meta")
    model = package.get("model")
    if meta is None or model is None:
        raise ArtifactError("Corrupt artifact: missing 'meta' or 'model'")

    validate_meta(meta)
    _ensure_model_is_serializable(model)

    return model, meta
