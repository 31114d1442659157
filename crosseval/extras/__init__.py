"""Optional helpers that are not part of the core workflow (toy datasets)."""
