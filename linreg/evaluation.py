import os
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from sklearn.metrics import mean_squared_error, mean_absolute_error

from .data_loader import load_csv, require_columns
from .model import column_key
from .regression import predict
from .utils import save_csv, ensure_dir


def compute_metrics(y_true, y_pred):
    return {
        "rmse": float(np.sqrt(mean_squared_error(y_true, y_pred))),
        "mae": float(mean_absolute_error(y_true, y_pred)),
    }


def plot_regression(x, y, y_fit, group, x_label, y_label, plot_dir):
    plt.figure(figsize=(7, 5))
    plt.scatter(x, y, label="Data", color="black")
    plt.plot(x, y_fit, label="Least squares", linewidth=2)

    plt.xlabel(x_label)
    plt.ylabel(y_label)
    plt.title(f"Group {group} – {y_label} vs {x_label}")
    plt.legend()
    plt.grid(True)
    plt.tight_layout()

    fname = f"group_{group}_{y_label}.png"
    path = os.path.join(plot_dir, fname)
    plt.savefig(path)
    plt.close()
    return path


def evaluate(cfg: dict) -> pd.DataFrame:
    input_csv = cfg["paths"]["input_csv"]
    fit_path = cfg["paths"]["fit_table_csv"]
    out_path = cfg["paths"]["evaluated_table_csv"]
    plot_dir = cfg.get("outputs", {}).get("plot_dir")

    x_col = column_key(cfg["model"]["x_column"])
    y_col = column_key(cfg["model"]["y_column"])
    group_col = cfg["model"].get("group_column")
    group_col = column_key(group_col) if group_col else None

    df = load_csv(input_csv)
    fit_df = load_csv(fit_path)

    need = [x_col, y_col] + ([group_col] if group_col else [])
    require_columns(df, need, name="input")
    require_columns(fit_df, ["group", "slope", "intercept", "fitted"], name="fit_table")

    df[x_col] = pd.to_numeric(df[x_col], errors="coerce")
    df[y_col] = pd.to_numeric(df[y_col], errors="coerce")
    df = df.dropna(subset=need).copy()

    if plot_dir:
        ensure_dir(plot_dir)

    rows = []
    for frow in fit_df.to_dict("records"):
        group = frow["group"]
        if group_col:
            g = df[df[group_col].astype(str) == str(group)]
        else:
            g = df
        g = g.sort_values(x_col)

        if not bool(frow["fitted"]) or g.empty:
            rows.append({"group": group, "rmse": np.nan, "mae": np.nan})
            continue

        x = g[x_col].to_numpy(dtype=float)
        y = g[y_col].to_numpy(dtype=float)
        y_fit = predict(float(frow["slope"]), float(frow["intercept"]), x)

        m = compute_metrics(y, y_fit)

        if plot_dir:
            plot_regression(x, y, y_fit, group, x_col, y_col, plot_dir)

        rows.append({"group": group, **m})

    metrics_df = pd.DataFrame(rows, columns=["group", "rmse", "mae"])
    final_df = fit_df.merge(metrics_df, on="group", how="left")

    save_csv(final_df, out_path)
    print(f"Saved evaluated table to: {out_path}")
    if plot_dir:
        print(f"Plots saved to: {plot_dir}")
    return final_df
