"""
Numerical Safeguards — сравнения float с учётом машинной точности

Модуль даёт примитивы для сравнения элементов матриц:
- Epsilon-параметры относительной и абсолютной толерантности
- Проверка конечности значений (NaN/Inf)
- Epsilon-сравнения для скаляров и плоских последовательностей

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float сравнения всегда учитывают машинную точность
2. NaN никогда не считается близким ни к чему (включая NaN)
3. Нечисловые элементы (Decimal, Fraction) сравниваются через float-проекцию
"""

import math
from typing import Final, Sequence

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
# Нужна для сравнений около нуля, где относительная толерантность бесполезна
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли значение конечным (не NaN, не Inf).

    Args:
        value: Проверяемое значение (float или приводимое к float)

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


def all_finite(values: Sequence[float]) -> bool:
    """Все ли элементы последовательности конечны."""
    return all(is_valid_float(v) for v in values)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность (default: 1e-9)
        abs_tol: Абсолютная толерантность (default: 1e-12)

    Returns:
        True если значения близки с учётом толерантности

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
        >>> is_close(0.0, 1e-13)
        True
    """
    if rel_tol < 0 or abs_tol < 0:
        raise ValueError(f"tolerances must be non-negative, got rel_tol={rel_tol}, abs_tol={abs_tol}")
    return math.isclose(float(a), float(b), rel_tol=rel_tol, abs_tol=abs_tol)


def sequences_close(
    left: Sequence[float],
    right: Sequence[float],
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Поэлементное epsilon-сравнение двух последовательностей.

    Последовательности разной длины никогда не близки.
    """
    if len(left) != len(right):
        return False
    return all(
        is_close(a, b, rel_tol=rel_tol, abs_tol=abs_tol) for a, b in zip(left, right)
    )
