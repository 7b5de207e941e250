from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

ArrayLike1D = Sequence[float] | np.ndarray | pd.Series


def get_metrics(y_true: ArrayLike1D, y_pred: ArrayLike1D) -> dict[str, Any]:

    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)

    if y_true.ndim != 1 or y_pred.ndim != 1:
        raise ValueError("y_true and y_pred must be 1D.")
    if len(y_true) != len(y_pred):
        raise ValueError("Lengths must match.")

    if len(y_true) == 0:
        return {'n': 0, 'mae': float('nan'), 'rmse': float('nan'), 'r2': float('nan')}

    # r2 is undefined for a single sample
    r2 = r2_score(y_true, y_pred) if len(y_true) > 1 else float('nan')

    return {
        'n': int(len(y_true)),
        'mae': float(mean_absolute_error(y_true, y_pred)),
        'rmse': float(np.sqrt(mean_squared_error(y_true, y_pred))),
        'r2': float(r2),
    }


def format_metrics(metrics: Mapping[str, Any]) -> str:
    """
    Build a summary block from a metrics dict like:
      {"n": int, "mae": float, "rmse": float, "r2": float}
    """
    lines: list[str] = []
    lines.append("=" * 60)
    lines.append("ENDPOINT EVALUATION SUMMARY")
    lines.append("=" * 60)
    lines.append(f"Rows predicted: {metrics.get('n', 0)}")
    for key, name in (('mae', 'MAE'), ('rmse', 'RMSE'), ('r2', 'R2')):
        value = metrics.get(key)
        if value is not None:
            lines.append(f"{name}: {float(value):.4f}")
    lines.append("=" * 60)
    return "\n".join(lines)


def metrics_frame(metrics: Dict[str, Any], job_name: str) -> pd.DataFrame:
    return pd.DataFrame([{'job_name': job_name, **metrics}])
