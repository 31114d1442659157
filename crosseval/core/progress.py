from __future__ import annotations

"""Progress reporting primitives.

The engine must remain runnable without any specific UI. Long-running use-cases
(cross evaluation over many folds and methods) optionally accept a progress
callback; callers adapt their own progress bars to this protocol.
"""

from typing import Optional, Protocol


class ProgressCallback(Protocol):
    """A minimal progress reporting interface."""

    def init(self, *, total: int, label: Optional[str] = None) -> None:  # pragma: no cover
        ...

    def update(self, *, current: int, label: Optional[str] = None) -> None:  # pragma: no cover
        ...

    def finalize(self, *, label: Optional[str] = None) -> None:  # pragma: no cover
        ...
