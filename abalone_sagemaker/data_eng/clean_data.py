import logging

import pandas as pd

logger = logging.getLogger(__name__)


def cleaning_pipeline(df: pd.DataFrame) -> pd.DataFrame:
    logger.info(f'pre-cleaning qc check: {qc_report(df)}')
    cleaned = drop_zero_height(df)
    logger.info(f'dropped {len(df) - len(cleaned)} zero-height rows, {len(cleaned)} remain')
    return cleaned


def qc_report(df: pd.DataFrame) -> dict:
    return {
        "rows": int(df.shape[0]),
        "cols": list(df.columns),
        "n_zero_height": int((df["height"] == 0).sum()) if "height" in df.columns else None,
        "n_na": int(df.isna().sum().sum()),
        "sex_counts": {str(k): int(v) for k, v in df["sex"].value_counts().items()} if "sex" in df.columns else {},
    }


def drop_zero_height(df: pd.DataFrame) -> pd.DataFrame:
    # a height of exactly zero is a measurement error, not an observation
    if "height" not in df.columns:
        raise KeyError('Dataframe must have a "height" column')
    return df.loc[df["height"] != 0].copy()
