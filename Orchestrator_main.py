# Orchestrator_main.py
from __future__ import annotations

import argparse
import os

from linreg.data_loader import load_yaml_config
from linreg.utils import ensure_dir
from linreg.model import fit_table
from linreg.evaluation import evaluate


def ensure_project_dirs(config: dict) -> None:
    """Create output folders declared in config (if missing)."""
    for key in ["fit_table_csv", "evaluated_table_csv"]:
        path = config["paths"].get(key, "")
        if path:
            ensure_dir(os.path.dirname(path))

    plot_dir = config.get("outputs", {}).get("plot_dir", "")
    if plot_dir:
        ensure_dir(plot_dir)


def main() -> None:
    parser = argparse.ArgumentParser(description="Least-squares line fitting pipeline (fit + evaluate)")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/regression_config.yaml",
        help="Path to YAML config",
    )
    parser.add_argument(
        "--step",
        type=str,
        default="all",
        choices=["fit", "evaluate", "all"],
        help="Which pipeline step to run",
    )
    args = parser.parse_args()

    config = load_yaml_config(args.config)
    ensure_project_dirs(config)

    # ----------------------------------------
    # Step 1: Fit one line per group
    # ----------------------------------------
    if args.step in ["fit", "all"]:
        print("=== Step: Fit (input_csv -> fit table) ===")
        fit_table(config)
        print("Fit done. Saved:", config["paths"]["fit_table_csv"], "\n")

    # ----------------------------------------
    # Step 2: Evaluate fitted lines
    # ----------------------------------------
    if args.step in ["evaluate", "all"]:
        print("=== Step: Evaluation (fit table -> metrics + plots) ===")
        evaluate(config)
        print("Evaluation done.\n")

    print("Pipeline finished.")


if __name__ == "__main__":
    main()
