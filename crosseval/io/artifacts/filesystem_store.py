from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from crosseval.core.errors import ArtifactError

from .store import StoredArtifact

ARTIFACTS_DIR_ENV = "CROSSEVAL_ARTIFACTS_DIR"
_PAYLOAD_SUFFIX = ".artifact.joblib"
_META_SUFFIX = ".artifact.meta.json"


def default_artifacts_dir() -> Path:
    raw = os.getenv(ARTIFACTS_DIR_ENV, ".crosseval/artifacts")
    return Path(raw)


def _uid_parts(uid: str) -> Tuple[str, ...]:
    parts = tuple(uid.split("/"))
    if any(p in ("", ".", "..") for p in parts):
        raise ArtifactError(f"Invalid artifact uid {uid!r}.")
    return parts


class FileSystemArtifactStore:
    """Filesystem-based ArtifactStore.

    Layout (each ``/`` in a uid is a directory level):
      <base_dir>/
        <job>/<method>/fold<k>.artifact.joblib
        <job>/<method>/fold<k>.artifact.meta.json

    Safe for single-process writers, which is how cross-evaluation persists
    models (workers return fitted models; the parent writes them).
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir or default_artifacts_dir()).expanduser()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, uid: str, suffix: str) -> Path:
        *dirs, leaf = _uid_parts(uid)
        return self.base_dir.joinpath(*dirs, f"{leaf}{suffix}")

    def save(
        self,
        uid: str,
        payload: bytes,
        *,
        meta: Optional[Dict[str, Any]] = None,
    ) -> StoredArtifact:
        payload_path = self._path(uid, _PAYLOAD_SUFFIX)
        payload_path.parent.mkdir(parents=True, exist_ok=True)
        payload_path.write_bytes(payload)

        meta_path: Optional[Path] = None
        if meta is not None:
            meta_path = self._path(uid, _META_SUFFIX)
            with meta_path.open("w", encoding="utf-8") as f:
                json.dump(meta, f, ensure_ascii=False, indent=2)

        return StoredArtifact(
            uid=uid,
            payload_path=str(payload_path),
            meta_path=str(meta_path) if meta_path is not None else None,
        )

    def load(self, uid: str) -> Tuple[bytes, Optional[Dict[str, Any]]]:
        payload_path = self._path(uid, _PAYLOAD_SUFFIX)
        if not payload_path.exists():
            raise FileNotFoundError(f"Artifact payload not found for uid={uid}")

        payload = payload_path.read_bytes()

        meta_path = self._path(uid, _META_SUFFIX)
        meta: Optional[Dict[str, Any]] = None
        if meta_path.exists():
            with meta_path.open("r", encoding="utf-8") as f:
                meta = json.load(f)

        return payload, meta

    def exists(self, uid: str) -> bool:
        return self._path(uid, _PAYLOAD_SUFFIX).exists()

    def delete(self, uid: str) -> None:
        for suffix in (_PAYLOAD_SUFFIX, _META_SUFFIX):
            p = self._path(uid, suffix)
            if p.exists():
                p.unlink()

    def list_uids(self, prefix: str = "") -> Iterable[str]:
        for p in sorted(self.base_dir.rglob(f"*{_PAYLOAD_SUFFIX}")):
            rel = p.relative_to(self.base_dir).as_posix()
            uid = rel[: -len(_PAYLOAD_SUFFIX)]
            if uid and uid.startswith(prefix):
                yield uid
