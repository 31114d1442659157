from __future__ import annotations

import hashlib

import numpy as np
from numpy.random import Generator


class RngManager:
    """
    Named, order-independent seeds derived from one root seed.

      child_seed("BDT/fold0")      -> stable 32-bit int
      child_generator("toy/sig")   -> np.random.Generator seeded from it

    Each fold model gets its own child seed, so training folds in parallel or in
    a different order reproduces the same models.
    """

    def __init__(self, seed: int | None):
        self._root = 0 if seed is None else int(seed) & 0xFFFFFFFF

    @property
    def root_seed(self) -> int:
        return self._root

    def _mix(self, name: str) -> int:
        h = hashlib.sha256(f"{self._root}:{name}".encode("utf-8")).digest()
        return int.from_bytes(h[:4], "little", signed=False)

    def child_seed(self, name: str) -> int:
        return self._mix(name)

    def child_generator(self, name: str) -> Generator:
        return np.random.default_rng(self._mix(name))

    def fold_seeds(self, method_name: str, n_folds: int) -> list[int]:
        return [self.child_seed(f"{method_name}/fold{k}") for k in range(n_folds)]
