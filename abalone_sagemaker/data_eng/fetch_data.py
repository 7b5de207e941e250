# imports
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union
from urllib.parse import urlparse

import pandas as pd

from abalone_sagemaker.config import RAW_COLUMNS
from abalone_sagemaker.errors import InsufficientDataError, RemoteServiceError, SchemaError
from .write_data import dump_csv

logger = logging.getLogger(__name__)


def _is_remote(source: Union[str, Path]) -> bool:
    return urlparse(str(source)).scheme in ('http', 'https', 'ftp', 's3')


def fetch_abalone(source: Union[str, Path], columns: List[str] = RAW_COLUMNS) -> pd.DataFrame:
    """
    Read the raw abalone file (no header, comma or whitespace delimited)
    from a URL or a local path.

    Returns a DataFrame with `columns` as names, `sex` as stripped strings
    and every other column numeric. An empty file raises
    InsufficientDataError.
    """
    logger.info(f'fetching raw data from {source}')
    try:
        df = pd.read_csv(source, header=None, sep=r'[\s,]+', engine='python', dtype=str)
    except pd.errors.EmptyDataError as e:
        raise InsufficientDataError(f'{source} holds no rows') from e
    except OSError as e:
        if _is_remote(source):
            raise RemoteServiceError(f'failed to fetch {source}: {e}') from e
        raise

    if df.shape[1] != len(columns):
        raise SchemaError(f'expected {len(columns)} columns, found {df.shape[1]} in {source}')
    df.columns = columns

    df['sex'] = df['sex'].str.strip()
    for c in columns[1:]:
        df[c] = pd.to_numeric(df[c], errors='coerce')

    bad = df[columns[1:]].isna().any(axis=0)
    if bad.any():
        raise SchemaError(f'non-numeric values in columns: {list(bad[bad].index)}')

    logger.info(f'fetched {len(df)} rows')
    return df


def fetch_and_save(source: Union[str, Path], out_dir: Path) -> pd.DataFrame:
    df = fetch_abalone(source)
    dump_csv(df, Path(out_dir), 'abalone')
    return df
