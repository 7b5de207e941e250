from __future__ import annotations

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure


def plot_predicted_vs_actual(
    df: pd.DataFrame,
    actual_col: str = "rings",
    predicted_col: str = "predicted_rings",
    title: str = "Predicted vs actual rings",
) -> Figure:
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.scatter(df[actual_col], df[predicted_col], alpha=0.4, s=12)

    lo = min(df[actual_col].min(), df[predicted_col].min()) if len(df) else 0
    hi = max(df[actual_col].max(), df[predicted_col].max()) if len(df) else 1
    ax.plot([lo, hi], [lo, hi], linestyle="--", color="grey", linewidth=1)

    ax.set_xlabel("Actual rings")
    ax.set_ylabel("Predicted rings")
    ax.set_title(title)
    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path) -> None:
    fig.savefig(path, dpi=120)
    plt.close(fig)
