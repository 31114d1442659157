"""Process-level runtime helpers (randomness)."""
