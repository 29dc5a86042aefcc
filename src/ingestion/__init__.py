"""Ingestion — загрузка числового CSV в проверенную DenseMatrix.

Структурный проход в конструкторе TabularReader, материализация в read_data.
"""

from .number_syntax import is_valid_number, parse_number
from .tabular_reader import ProgressCallback, ReadOutcome, TabularReader, load_matrix

__all__ = [
    "ProgressCallback",
    "ReadOutcome",
    "TabularReader",
    "is_valid_number",
    "load_matrix",
    "parse_number",
]
