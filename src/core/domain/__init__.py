"""
Domain models and value objects.

Contains metadata models of a tabular source: ReaderConfig, DatasetSummary.
"""

from src.core.domain.dataset import (
    DELIMITER,
    DatasetSummary,
    ReaderConfig,
    ReaderState,
    split_fields,
)

__all__ = [
    "DELIMITER",
    "DatasetSummary",
    "ReaderConfig",
    "ReaderState",
    "split_fields",
]
