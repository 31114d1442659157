# scripts/run_histogram_fit.py
from __future__ import annotations

import argparse
from pathlib import Path

from crosseval.core.log import configure_logging
from crosseval.reporting.plots import plot_hist2d, save_figure
from crosseval.use_cases.histogram_fit import fit_histogram_demo


def main(argv=None):
    ap = argparse.ArgumentParser(description="Fill, fit and write the demo 2D histogram.")
    ap.add_argument("--out", type=Path, default=Path("hist.npz"))
    ap.add_argument("--plot", type=Path, default=None, help="optional PNG of the histogram")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    configure_logging(verbose=args.verbose)
    outcome = fit_histogram_demo(args.out)

    fit = outcome.fit
    print("\n=== FIT RESULT ===")
    for i, (p, e) in enumerate(zip(fit.params, fit.errors)):
        print(f"  p{i} = {p:.6g} +/- {e:.3g}")
    print(f"  chi2/ndf = {fit.chi2:.4g}/{fit.ndf}")
    print(f"Histogram written to {outcome.path}")

    if args.plot is not None:
        save_figure(plot_hist2d(outcome.hist), str(args.plot))


if __name__ == "__main__":
    main()
