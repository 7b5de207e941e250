import logging
from pathlib import Path
from typing import Iterator

import pandas as pd

from abalone_sagemaker.config import LABEL, MAX_ROWS_PER_REQUEST

logger = logging.getLogger(__name__)


def encode_csv(df: pd.DataFrame, include_label: bool = True, label: str = LABEL) -> str:
    """
    Serialize df as headerless CSV in its current column order.

    Floats are written with round-trip precision and every line ends with
    a bare '\\n'. Pass include_label=False for inference batches.
    """
    out = df if include_label else df.drop(columns=[label], errors='ignore')
    if out.empty:
        return ''
    return out.to_csv(header=False, index=False, lineterminator='\n')


def iter_batches(df: pd.DataFrame, max_rows: int = MAX_ROWS_PER_REQUEST) -> Iterator[pd.DataFrame]:
    if max_rows < 1:
        raise ValueError(f'max_rows must be positive, got {max_rows}')
    for start in range(0, len(df), max_rows):
        yield df.iloc[start:start + max_rows]


def dump_csvs(frames: dict[str, pd.DataFrame], out_dir: Path, include_label: bool = True) -> dict[str, Path]:

    return {key: dump_csv(df, out_dir, key, include_label) for key, df in frames.items()}


def dump_csv(df: pd.DataFrame, out_dir: Path, name: str, include_label: bool = True) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    _path = out_dir / f'{name}.csv'
    with open(_path, 'w', encoding='utf-8', newline='') as file:
        file.write(encode_csv(df, include_label=include_label))
    logger.info(f"saved: {_path}")
    return _path
