# abalone_sagemaker/errors.py
from __future__ import annotations


class PipelineError(Exception):
    """Base class for every failure raised by the abalone pipeline."""


class SchemaError(PipelineError, ValueError):
    """Unexpected categorical value or out-of-range numeric value."""


class InsufficientDataError(PipelineError):
    """Too few rows to form train/test/validation partitions."""


class ParseError(PipelineError, ValueError):
    """Malformed prediction text returned by an endpoint."""


class RemoteServiceError(PipelineError):
    """
    Failure surfaced from storage, training or hosting.
    The original exception is always chained as __cause__.
    """
