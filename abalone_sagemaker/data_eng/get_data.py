from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from abalone_sagemaker.config import LABEL, Config
from abalone_sagemaker.errors import InsufficientDataError
from .types import DataBundle

logger = logging.getLogger(__name__)

MIN_ROWS = 3


def _validate_fractions(fractions: Sequence[float]) -> Tuple[float, float, float]:
    if len(fractions) != 3:
        raise ValueError(f"fractions must be (train, test, validation), got {fractions}")
    train, test, validate = (float(f) for f in fractions)
    if min(train, test, validate) < 0:
        raise ValueError(f"fractions must be non-negative, got {fractions}")
    if not math.isclose(train + test + validate, 1.0, abs_tol=1e-9):
        raise ValueError(f"fractions must sum to 1, got {fractions}")
    return train, test, validate


def prep_data(
    df: pd.DataFrame,
    fractions: Sequence[float] = (0.70, 0.15, 0.15),
    seed: Optional[int] = None
) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """
    Split df into train/test/validate by sampling rows without replacement.
      train:    round(train_frac * n) rows
      test:     round(test_frac / (test_frac + validate_frac) * remainder) rows
      validate: every row left over
    With the default fractions this is 70% train, then half of the rest each.
    The three frames partition df exactly; a fraction that rounds to zero
    rows gives an empty frame. Pass seed for a reproducible split.
    """
    train_frac, test_frac, validate_frac = _validate_fractions(fractions)

    n = len(df)
    if n < MIN_ROWS:
        raise InsufficientDataError(f"need at least {MIN_ROWS} rows to split, got {n}")

    out = df if df.index.is_unique else df.reset_index(drop=True)
    rng = np.random.default_rng(seed)

    n_train = int(round(train_frac * n))
    train_df = out.sample(n=n_train, random_state=rng)
    rest = out.drop(index=train_df.index)

    holdout = test_frac + validate_frac
    n_test = int(round(test_frac / holdout * len(rest))) if holdout > 0 else 0
    test_df = rest.sample(n=n_test, random_state=rng)
    valid_df = rest.drop(index=test_df.index)

    logger.info(f"split {n} rows: train={len(train_df)} test={len(test_df)} validate={len(valid_df)}")
    return train_df, test_df, valid_df


def get_X_y(df: pd.DataFrame, y_col: str = LABEL) -> tuple[pd.DataFrame, pd.Series]:

    X = df.drop(columns=[y_col])
    y = df[y_col]

    return X, y


def load_data_bundle(df: pd.DataFrame, conf: Config) -> DataBundle:
    train, test, validate = prep_data(df, conf.fractions, conf.seed)

    X_train, y_train = get_X_y(train)
    X_test,  y_test  = get_X_y(test)
    X_val,   y_val   = get_X_y(validate)

    return DataBundle(
        train=train, test=test, validate=validate,
        X_train=X_train, y_train=y_train,
        X_test=X_test, y_test=y_test,
        X_validate=X_val, y_validate=y_val
    )
