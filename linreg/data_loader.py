# linreg/data_loader.py
import os
from typing import Any, Dict, List

import pandas as pd
import yaml

from .utils import standardize_columns


def load_yaml_config(path: str) -> Dict[str, Any]:
    """Load YAML config file."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_csv(path: str) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(f"CSV not found: {path}")
    df = pd.read_csv(path)
    return standardize_columns(df)


def require_columns(df: pd.DataFrame, cols: List[str], name: str = "data") -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in {name}: {missing}. Got: {df.columns.tolist()}")
