# scripts/run_cross_evaluation.py
from __future__ import annotations

import argparse
from pathlib import Path

from crosseval.api import CrossValidation, FileSystemArtifactStore
from crosseval.extras.datasets.toy import toy_classification_loader
from crosseval.io.results import write_results
from crosseval.reporting.plots import plot_roc_curves, save_figure

# ==== EDIT THESE AS YOU LIKE ==================================================
JOB_NAME = "TMVACrossValidation"

CV_OPTIONS = ":".join(
    [
        "!V",
        "!Silent",
        "ModelPersistence",
        "AnalysisType=Classification",
        "NumFolds=2",
        "SplitExpr=int(fabs([eventID]))%int([NumFolds])",
    ]
)

METHODS = [
    (
        "BDT",
        "BDTG",
        "!H:!V:NTrees=100:MinNodeSize=2.5%:BoostType=Grad:Shrinkage=0.10:nCuts=20:MaxDepth=2",
    ),
]

N_EVENTS_PER_CLASS = 1000
# ============================================================================


def main(argv=None):
    ap = argparse.ArgumentParser(description="Cross-evaluate BDTG on Gaussian toy events.")
    ap.add_argument("--out", type=Path, default=Path("out"), help="output directory")
    ap.add_argument("--events", type=int, default=N_EVENTS_PER_CLASS)
    ap.add_argument("--plot", action="store_true", help="write ROC curve plots")
    args = ap.parse_args(argv)

    loader = toy_classification_loader(args.events)
    store = FileSystemArtifactStore(args.out / "artifacts")

    cv = CrossValidation(JOB_NAME, loader, CV_OPTIONS, store=store)
    for kind, name, options in METHODS:
        cv.book_method(kind, name, options)
    cv.evaluate()

    results = cv.get_results()
    print("\n=== CROSS EVALUATION ===")
    for result in results:
        print(f"Method: {result.method_name}")
        for fold, roc in result.get_roc_values().items():
            print(f"  fold {fold}: ROC AUC = {roc}")
        print(f"  average ROC AUC: {result.get_roc_average():.4f}")
        print(f"  std. dev.      : {result.get_roc_standard_deviation():.4f}")
        print(f"  out-of-fold    : {result.oof_score}")
        for note in result.notes:
            print(f"  note: {note}")
        if args.plot:
            save_figure(plot_roc_curves(result), str(args.out / f"{result.method_name}_roc.png"))

    path = write_results(results, args.out / f"{JOB_NAME}_results.json")
    print(f"\nResults written to {path}")


if __name__ == "__main__":
    main()
