from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure


def plot_rings_vs_height(
    df: pd.DataFrame,
    jitter: float = 0.2,
    random_state: int = 42,
) -> Figure:
    """
    Scatter of rings against height, coloured by sex, on the raw frame.
    Zero-height measurement errors show up as a column of points at x=0.
    """
    rng = np.random.default_rng(random_state)
    plot_df = df[["height", "rings", "sex"]].copy()
    # rings are integers; jitter them so overlapping points stay visible
    plot_df["rings"] = plot_df["rings"] + rng.uniform(-jitter, jitter, len(plot_df))

    fig, ax = plt.subplots(figsize=(8, 5))
    sns.scatterplot(data=plot_df, x="height", y="rings", hue="sex", alpha=0.5, s=12, ax=ax)
    ax.set_title("Rings vs height by sex")
    fig.tight_layout()
    return fig
