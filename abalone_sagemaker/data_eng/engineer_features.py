from __future__ import annotations

import logging
from typing import Dict, List

import numpy as np
import pandas as pd

from abalone_sagemaker.config import LABEL, MEASUREMENT_COLUMNS, SEX_INDICATORS
from abalone_sagemaker.errors import SchemaError

logger = logging.getLogger(__name__)


def make_features(
    df: pd.DataFrame,
    label: str = LABEL,
    indicators: Dict[str, str] = SEX_INDICATORS
) -> pd.DataFrame:
    """
    Build the model-ready frame from cleaned abalone rows.

    `sex` is replaced by one 0/1 column per category in `indicators`
    (female, male, infant) and the label is moved to the first column:

        rings, female, male, infant, length, ..., shell_weight

    Raises SchemaError for an unknown sex, a missing or non-positive height,
    a missing or negative measurement or a label that is not a non-negative integer. Zero-height
    rows must already have been dropped by cleaning.
    """
    validate_schema(df, label, indicators)
    out = add_sex_indicators(df, indicators)
    out[label] = out[label].astype(np.int64)
    out = order_columns(out, label, list(indicators.values()))
    logger.info(f'built features: {len(out)} rows, columns {list(out.columns)}')
    return out


def validate_schema(
    df: pd.DataFrame,
    label: str = LABEL,
    indicators: Dict[str, str] = SEX_INDICATORS
) -> None:
    missing = [c for c in ['sex', label, *MEASUREMENT_COLUMNS] if c not in df.columns]
    if missing:
        raise SchemaError(f'missing columns: {missing}')

    unknown = sorted(set(df['sex'].astype(str)) - set(indicators))
    if unknown:
        raise SchemaError(f'unexpected sex values {unknown}, expected one of {sorted(indicators)}')

    missing_values = [c for c in MEASUREMENT_COLUMNS if df[c].isna().any()]
    if missing_values:
        raise SchemaError(f'missing values in columns: {missing_values}')

    # NaN compares False, so test the positive condition
    positive = df['height'] > 0
    if not positive.all():
        raise SchemaError(f'{int((~positive).sum())} rows have a non-positive height')

    negative = [c for c in MEASUREMENT_COLUMNS if (df[c] < 0).any()]
    if negative:
        raise SchemaError(f'negative values in columns: {negative}')

    rings = df[label]
    if (rings < 0).any() or not np.all(np.mod(rings, 1) == 0):
        raise SchemaError(f'{label} must hold non-negative integers')


# one 0/1 column per sex category; exactly one is set per row
def add_sex_indicators(df: pd.DataFrame, indicators: Dict[str, str] = SEX_INDICATORS) -> pd.DataFrame:
    out = df.copy()
    for code, name in indicators.items():
        out[name] = (out['sex'] == code).astype(np.int64)
    return out.drop(columns=['sex'])


def order_columns(df: pd.DataFrame, label: str = LABEL, leading: List[str] | None = None) -> pd.DataFrame:
    leading = leading or []
    rest = [c for c in df.columns if c != label and c not in leading]
    return df[[label, *leading, *rest]]
