"""Deterministic k-fold cross evaluation of event classifiers."""

__version__ = "0.1.0"
