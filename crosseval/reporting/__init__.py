"""Plots of cross-evaluation results and histograms (matplotlib)."""
