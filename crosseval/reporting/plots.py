from __future__ import annotations

from typing import Iterable, Optional

import matplotlib.pyplot as plt
import numpy as np

from crosseval.components.histograms.hist2d import Histogram2D
from crosseval.contracts.results.cross_validation import CrossValidationResult


def plot_roc_curves(
    result: CrossValidationResult,
    *,
    ax=None,
    show_oof: bool = True,
    alpha: float = 0.6,
):
    """Per-fold ROC curves of one method (plus the pooled out-of-fold curve).

    Returns the axes. Folds without a curve (single-class test fold) are skipped.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 5))

    for fold in result.folds:
        curve = fold.roc_curve
        if not curve:
            continue
        ax.plot(
            curve["fpr"],
            curve["tpr"],
            alpha=alpha,
            label=f"fold {fold.fold} (AUC={curve['auc']:.3f})",
        )
    if show_oof and result.oof_roc_curve:
        c = result.oof_roc_curve
        ax.plot(c["fpr"], c["tpr"], color="k", lw=2, label=f"out-of-fold (AUC={c['auc']:.3f})")

    ax.plot([0, 1], [0, 1], ls="--", color="grey", lw=1)
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.set_xlabel("Background efficiency (FPR)")
    ax.set_ylabel("Signal efficiency (TPR)")
    ax.set_title(f"{result.method_name}: {result.num_folds}-fold ROC")
    ax.legend(loc="lower right", fontsize="small")
    return ax


def plot_roc_summary(results: Iterable[CrossValidationResult], *, ax=None):
    """Mean ROC AUC per method with the fold standard deviation as error bar."""
    results = list(results)
    if ax is None:
        _, ax = plt.subplots(figsize=(max(4, 1.2 * len(results) + 2), 4))
    names = [r.method_name for r in results]
    means = [r.get_roc_average() for r in results]
    stds = [r.get_roc_standard_deviation() for r in results]
    ax.errorbar(np.arange(len(results)), means, yerr=stds, fmt="o", capsize=4)
    ax.set_xticks(np.arange(len(results)))
    ax.set_xticklabels(names)
    ax.set_ylabel("ROC AUC")
    return ax


def plot_hist2d(hist: Histogram2D, *, ax=None, cmap: str = "viridis", log: bool = False):
    """Color map of the bin contents (irregular edges are drawn to scale)."""
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 5))
    ex, ey = hist.edges
    counts = hist.counts.T
    if log:
        counts = np.where(counts > 0, counts, np.nan)
    norm = "log" if log else None
    mesh = ax.pcolormesh(ex, ey, counts, cmap=cmap, norm=norm, shading="flat")
    plt.colorbar(mesh, ax=ax, label="entries")
    ax.set_xlabel(hist.x_axis.title or "x")
    ax.set_ylabel(hist.y_axis.title or "y")
    ax.set_title(hist.title or hist.name)
    return ax


def save_figure(ax, path: str, *, dpi: Optional[int] = 120) -> None:
    fig = ax.figure
    fig.tight_layout()
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
