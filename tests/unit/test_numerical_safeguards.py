"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Проверки конечности (NaN/Inf)
2. Epsilon-сравнения float
3. Поэлементные сравнения последовательностей
"""

import math
from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    all_finite,
    is_close,
    is_valid_float,
    sequences_close,
)


class TestIsValidFloat:
    """Тесты для is_valid_float"""

    def test_finite_values(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-1e300)
        assert is_valid_float(3)

    def test_nan_and_inf(self) -> None:
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(-math.inf)

    def test_all_finite(self) -> None:
        assert all_finite([1.0, 2.0, Decimal("3")])
        assert not all_finite([1.0, float("nan")])
        assert all_finite([])


class TestIsClose:
    """Тесты для is_close"""

    def test_constants(self) -> None:
        assert EPS_FLOAT_COMPARE_REL == 1e-9
        assert EPS_FLOAT_COMPARE_ABS == 1e-12

    def test_close_values(self) -> None:
        assert is_close(1.0, 1.0 + 1e-10)
        assert is_close(0.1 + 0.2, 0.3)
        assert is_close(0.0, 1e-13)

    def test_far_values(self) -> None:
        assert not is_close(1.0, 1.1)
        assert not is_close(0.0, 1e-6)

    def test_nan_never_close(self) -> None:
        assert not is_close(float("nan"), float("nan"))

    def test_custom_tolerance(self) -> None:
        assert is_close(1.0, 1.05, rel_tol=0.1)
        assert is_close(0.0, 0.01, abs_tol=0.1)

    def test_exact_types(self) -> None:
        """Decimal и Fraction сравниваются через float-проекцию"""
        assert is_close(Fraction(1, 3), 1 / 3)
        assert is_close(Decimal("0.1"), 0.1)

    def test_negative_tolerance_raises(self) -> None:
        with pytest.raises(ValueError, match="tolerances must be non-negative"):
            is_close(1.0, 1.0, rel_tol=-1e-9)


class TestSequencesClose:
    """Тесты для sequences_close"""

    def test_equal_sequences(self) -> None:
        assert sequences_close([0.1 + 0.2, 1.0], [0.3, 1.0])

    def test_length_mismatch(self) -> None:
        assert not sequences_close([1.0], [1.0, 1.0])

    def test_one_element_differs(self) -> None:
        assert not sequences_close([1.0, 2.0, 3.0], [1.0, 2.5, 3.0])
