from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from abalone_sagemaker.config import LABEL, MAX_ROWS_PER_REQUEST
from abalone_sagemaker.data_eng.write_data import encode_csv, iter_batches
from abalone_sagemaker.errors import ParseError
from abalone_sagemaker.eval.metrics import get_metrics
from abalone_sagemaker.models.interfaces import Endpoint

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r'[,\n]')
# plain decimal with optional exponent
_NUMBER = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


def decode_predictions(text: Union[str, bytes]) -> List[float]:
    """
    Parse an endpoint response such as "7.1,8.3,6.9" (or one value per line)
    into floats, in order. Surrounding whitespace and trailing separators are
    ignored; any other token that is not a finite number raises ParseError.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = text.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseError(f'response is not valid UTF-8: {e}') from e

    body = text.strip(' \t\r\n,')
    if not body:
        return []

    values: List[float] = []
    for i, token in enumerate(_SEPARATORS.split(body)):
        token = token.strip()
        if not _NUMBER.fullmatch(token):
            raise ParseError(f'token {i} is not a number: {token!r}')
        value = float(token)
        if not math.isfinite(value):
            raise ParseError(f'token {i} is not finite: {token!r}')
        values.append(value)
    return values


def predict_dataset(
    endpoint: Endpoint,
    df: pd.DataFrame,
    max_rows: int = MAX_ROWS_PER_REQUEST,
    label: str = LABEL
) -> List[float]:
    """
    Invoke the endpoint on every row of df, label dropped, in requests of at
    most max_rows rows. Each response must hold one value per row sent.
    """
    predictions: List[float] = []
    for batch in iter_batches(df, max_rows):
        response = endpoint.invoke(encode_csv(batch, include_label=False, label=label), content_type='text/csv')
        values = decode_predictions(response)
        if len(values) != len(batch):
            raise ParseError(f'endpoint returned {len(values)} predictions for {len(batch)} rows')
        predictions.extend(values)
    logger.info(f'received {len(predictions)} predictions from {getattr(endpoint, "name", "endpoint")}')
    return predictions


def merge_predictions(
    df: pd.DataFrame,
    predictions: Sequence[float],
    column: str = 'predicted_rings'
) -> pd.DataFrame:
    if len(predictions) != len(df):
        raise ParseError(f'{len(predictions)} predictions for {len(df)} rows')
    out = df.copy()
    out.insert(0, column, list(predictions))
    return out


@dataclass
class RingsPredictor:
    endpoint: Endpoint
    max_rows: int = MAX_ROWS_PER_REQUEST
    label: str = LABEL
    predictions: pd.DataFrame | None = None
    metrics: Dict[str, Any] | None = None

    def run(self, test: pd.DataFrame) -> pd.DataFrame:
        values = predict_dataset(self.endpoint, test, self.max_rows, self.label)
        self.predictions = merge_predictions(test, values)
        self.metrics = get_metrics(test[self.label], values)
        return self.predictions
