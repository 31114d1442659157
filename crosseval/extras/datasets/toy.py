from __future__ import annotations

"""Gaussian toy events.

Each event has two variables ``x`` and ``y`` drawn from a normal distribution
around ``offset`` and a running ``eventID`` (1..n) used as the spectator for
deterministic fold assignment.
"""

from typing import Optional

import numpy as np

from crosseval.components.data.loader import EventDataLoader
from crosseval.components.records import EventTable
from crosseval.contracts.data_configs import DatasetConfig

SIGNAL_SEED = 100
BACKGROUND_SEED = 101


def generate_gaussian_events(
    n_points: int,
    offset: float,
    scale: float = 1.0,
    seed: Optional[int] = None,
) -> EventTable:
    if n_points <= 0:
        raise ValueError(f"n_points must be > 0; got {n_points}.")
    rng = np.random.default_rng(seed)
    return EventTable(
        {
            "x": rng.normal(offset, scale, size=n_points),
            "y": rng.normal(offset, scale, size=n_points),
            "eventID": np.arange(1, n_points + 1, dtype=np.int64),
        }
    )


def toy_classification_loader(n_points: int = 1000, *, scale: float = 1.0) -> EventDataLoader:
    """Data loader with ``x``, ``y`` as variables and ``eventID`` as spectator.

    Signal sits at +1, background at -1, each with ``n_points`` events.
    """
    loader = EventDataLoader(
        DatasetConfig(name="toy", variables=["x", "y"], spectators=["eventID"])
    )
    loader.add_signal_tree(generate_gaussian_events(n_points, 1.0, scale, SIGNAL_SEED), 1.0)
    loader.add_background_tree(generate_gaussian_events(n_points, -1.0, scale, BACKGROUND_SEED), 1.0)
    return loader
