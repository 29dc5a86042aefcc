"""
Core math modules

Плотная матрица и численные примитивы сравнения.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # NaN/Inf checks
    all_finite,
    is_valid_float,
    # Epsilon comparisons
    is_close,
    sequences_close,
)

# Dense Matrix
from src.core.math.dense_matrix import (
    DenseMatrix,
    add,
    multiply,
    negate,
    render,
    scale,
    subtract,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards — NaN/Inf checks
    "all_finite",
    "is_valid_float",
    # Numerical Safeguards — Epsilon comparisons
    "is_close",
    "sequences_close",
    # Dense Matrix — Types
    "DenseMatrix",
    # Dense Matrix — Functions
    "add",
    "multiply",
    "negate",
    "render",
    "scale",
    "subtract",
]
