"""Dependency helpers for use-cases."""

from __future__ import annotations

from typing import Optional

from crosseval.io.artifacts.filesystem_store import FileSystemArtifactStore
from crosseval.io.artifacts.store import ArtifactStore


def default_store() -> ArtifactStore:
    """Return the default ArtifactStore.

    Uses :class:`~crosseval.io.artifacts.filesystem_store.FileSystemArtifactStore`
    and respects the ``CROSSEVAL_ARTIFACTS_DIR`` environment variable.
    """

    return FileSystemArtifactStore()


def resolve_store(store: Optional[ArtifactStore]) -> ArtifactStore:
    """Return ``store`` if provided, otherwise :func:`default_store`."""

    return store if store is not None else default_store()


def resolve_seed(seed: Optional[int], *, fallback: int = 0) -> int:
    """Return ``seed`` as an int, or a stable ``fallback`` when it is absent."""

    return int(seed) if seed is not None else int(fallback)
