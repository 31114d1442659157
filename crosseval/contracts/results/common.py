from __future__ import annotations

"""Result contracts.

These models represent *outputs* of the use-cases and are meant to be stable
across callers (scripts, notebooks, persisted JSON).

- JSON-friendly field types (lists, dicts, scalars) at the contract boundary.
- Strict validation (extra fields forbidden) to prevent silent drift.

Contracts depend only on stdlib + pydantic.
"""

import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

JSONDict = Dict[str, Any]


class ResultModel(BaseModel):
    """Base class for result contracts (strict by default)."""

    model_config = ConfigDict(extra="forbid")


def finite_or_none(x: Any) -> Optional[float]:
    """Return float(x) if finite, otherwise None (NaN is not valid JSON)."""
    try:
        f = float(x)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def finite_values(values: List[Optional[float]]) -> List[float]:
    return [float(v) for v in values if v is not None and math.isfinite(float(v))]
