from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Protocol, Tuple


@dataclass(frozen=True)
class StoredArtifact:
    """Where one fold model ended up."""

    uid: str
    payload_path: str
    meta_path: Optional[str] = None


class ArtifactStore(Protocol):
    """Where fold model payloads and their metadata live.

    UIDs are ``/``-separated (``<job>/<method>/fold<k>``); a store may map the
    segments onto directories or keys as it sees fit.
    """

    def save(
        self,
        uid: str,
        payload: bytes,
        *,
        meta: Optional[Dict[str, Any]] = None,
    ) -> StoredArtifact:
        """Write the serialized model under ``uid``, replacing any previous one."""

    def load(self, uid: str) -> Tuple[bytes, Optional[Dict[str, Any]]]:
        """Serialized model and its meta (None when none was saved)."""

    def exists(self, uid: str) -> bool: ...

    def delete(self, uid: str) -> None:
        """Remove the model and its meta; unknown uids are ignored."""

    def list_uids(self, prefix: str = "") -> Iterable[str]:
        """Stored uids starting with ``prefix``, sorted."""
