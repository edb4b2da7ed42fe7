# tests/conftest.py
import copy
import os
import shutil

import matplotlib
matplotlib.use("Agg")

import yaml
import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture(scope="session")
def base_config():
    with open(os.path.join(ROOT, "configs", "regression_config.yaml"), "r") as f:
        return yaml.safe_load(f)


@pytest.fixture
def config(base_config, tmp_path):
    """Project config with every path redirected into tmp_path."""
    cfg = copy.deepcopy(base_config)

    input_csv = tmp_path / "raw" / "samples.csv"
    input_csv.parent.mkdir(parents=True)
    shutil.copy(os.path.join(ROOT, cfg["paths"]["input_csv"]), input_csv)

    cfg["paths"]["input_csv"] = str(input_csv)
    cfg["paths"]["fit_table_csv"] = str(tmp_path / "models" / "fit_table.csv")
    cfg["paths"]["evaluated_table_csv"] = str(tmp_path / "experiments" / "evaluated_table.csv")
    cfg["outputs"]["plot_dir"] = str(tmp_path / "experiments" / "plots")
    return cfg
