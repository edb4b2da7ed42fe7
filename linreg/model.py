# linreg/model.py
import numpy as np
import pandas as pd
from typing import Dict, Any, List, Optional, Tuple

from sklearn.linear_model import LinearRegression

from .data_loader import load_csv, require_columns
from .regression import linear_regression, linear_regression_of
from .utils import save_csv


INPUT_FORMS = ("columns", "pairs")
DTYPES = {"float32": np.float32, "float64": np.float64}

FIT_COLUMNS = ["group", "n_points", "x_min", "x_max", "slope", "intercept", "fitted"]
SKLEARN_COLUMNS = ["sklearn_slope", "sklearn_intercept"]


def column_key(name: str) -> str:
    # same normalization load_csv applies to the header
    return str(name).strip().lower().replace(" ", "_")


def resolve_dtype(name: str):
    key = str(name).lower().strip()
    if key not in DTYPES:
        raise ValueError(f"Unsupported model.dtype: {name}. Expected one of {sorted(DTYPES)}")
    return DTYPES[key]


def fit_line(x, y, input_form: str = "columns", dtype=np.float64) -> Optional[Tuple[float, float]]:
    """
    Fit one line with the adapter matching `input_form`:
      columns -> linear_regression(xs, ys)
      pairs   -> linear_regression_of([(x, y), ...])
    """
    if input_form == "columns":
        return linear_regression(x, y, dtype=dtype)
    if input_form == "pairs":
        return linear_regression_of(list(zip(x, y)), dtype=dtype)
    raise ValueError(f"Unsupported model.input_form: {input_form}. Expected one of {list(INPUT_FORMS)}")


def sklearn_fit_1d(x: np.ndarray, y: np.ndarray) -> Tuple[float, float]:
    model = LinearRegression()
    model.fit(np.asarray(x, dtype=float).reshape(-1, 1), np.asarray(y, dtype=float))
    slope = float(model.coef_[0])
    intercept = float(model.intercept_)
    return slope, intercept


def fit_table(config: Dict[str, Any]) -> pd.DataFrame:
    """
    Fit y = slope*x + intercept per group of the input CSV.
    Output: fit table (one row per group), also saved to paths.fit_table_csv.
    Groups that cannot be fitted (single point, constant x) keep NaN
    slope/intercept and fitted=False.
    """
    input_csv = config["paths"]["input_csv"]
    out_csv = config["paths"]["fit_table_csv"]

    model_cfg = config["model"]
    x_col = column_key(model_cfg["x_column"])
    y_col = column_key(model_cfg["y_column"])
    group_col = model_cfg.get("group_column")
    group_col = column_key(group_col) if group_col else None

    input_form = str(model_cfg.get("input_form", "columns")).lower().strip()
    if input_form not in INPUT_FORMS:
        raise ValueError(f"Unsupported model.input_form: {input_form}. Expected one of {list(INPUT_FORMS)}")
    dtype = resolve_dtype(model_cfg.get("dtype", "float64"))
    compare_sklearn = bool(model_cfg.get("compare_sklearn", False))

    df = load_csv(input_csv)
    need = [x_col, y_col] + ([group_col] if group_col else [])
    require_columns(df, need, name=input_csv)

    df[x_col] = pd.to_numeric(df[x_col], errors="coerce")
    df[y_col] = pd.to_numeric(df[y_col], errors="coerce")
    df = df.dropna(subset=need).copy()

    if group_col:
        groups = df.groupby(group_col, sort=True)
    else:
        groups = [("all", df)]

    rows: List[dict] = []

    for group, g in groups:
        g = g.sort_values(x_col)
        x = g[x_col].to_numpy()
        y = g[y_col].to_numpy()

        fit = fit_line(x, y, input_form=input_form, dtype=dtype)

        row = {
            "group": group,
            "n_points": int(len(g)),
            "x_min": float(x.min()) if len(x) else np.nan,
            "x_max": float(x.max()) if len(x) else np.nan,
            "slope": float(fit[0]) if fit is not None else np.nan,
            "intercept": float(fit[1]) if fit is not None else np.nan,
            "fitted": fit is not None,
        }

        if compare_sklearn:
            # sklearn happily fits a constant-x group, only compare where we fit
            if fit is not None:
                sk_slope, sk_intercept = sklearn_fit_1d(x, y)
            else:
                sk_slope, sk_intercept = np.nan, np.nan
            row["sklearn_slope"] = sk_slope
            row["sklearn_intercept"] = sk_intercept

        rows.append(row)

    columns = FIT_COLUMNS + (SKLEARN_COLUMNS if compare_sklearn else [])
    fit_df = pd.DataFrame(rows, columns=columns).sort_values("group").reset_index(drop=True)
    save_csv(fit_df, out_csv)

    n_fitted = int(fit_df["fitted"].sum())
    print(f"Fitted {n_fitted}/{len(fit_df)} group(s) [{input_form}, {np.dtype(dtype).name}]")
    return fit_df
