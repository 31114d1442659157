# scripts/run_apply_models.py
from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from crosseval.api import CrossValidatedMethod, FileSystemArtifactStore, read_event_table


def main(argv=None):
    ap = argparse.ArgumentParser(description="Apply stored fold models to an event table.")
    ap.add_argument("events", type=Path, help=".npz or .csv event table")
    ap.add_argument("--artifacts", type=Path, default=Path("out/artifacts"))
    ap.add_argument("--job", default="TMVACrossValidation")
    ap.add_argument("--method", default="BDTG")
    ap.add_argument(
        "--options",
        default="NumFolds=2:SplitExpr=int(fabs([eventID]))%int([NumFolds])",
        help="cross-validation options the models must have been trained with",
    )
    ap.add_argument("--avg", action="store_true", help="average all fold models")
    args = ap.parse_args(argv)

    options = args.options
    if args.avg:
        options += ":OutputEnsembling=Avg"

    method = CrossValidatedMethod.from_store(
        args.job,
        args.method,
        store=FileSystemArtifactStore(args.artifacts),
        cv_config=options,
    )
    table = read_event_table(args.events)
    out = method.predict(table)
    print(f"{out.shape[0]} events, mean output {np.mean(out):.4f}")


if __name__ == "__main__":
    main()
