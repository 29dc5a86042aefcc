"""
Тесты таксономии ошибок

Каждая ошибка несёт kind и сообщение, достаточное для диагностики,
и ловится как через иерархию пакета, так и через встроенные исключения.
"""

import pytest

from src.core.errors import (
    DimensionMismatch,
    EmptyLine,
    ErrorKind,
    IndexOutOfRange,
    InputFailure,
    InvalidDimension,
    MatrixError,
    NumberInvalid,
    ReaderError,
    SizeMismatch,
    SourceNotFound,
    TabularDataError,
    TooFewColumns,
    TooManyColumns,
)


ALL_ERRORS = [
    (SourceNotFound("data.csv"), ErrorKind.SOURCE_NOT_FOUND, ReaderError),
    (EmptyLine(3), ErrorKind.EMPTY_LINE, ReaderError),
    (InputFailure("data.csv", "disk error"), ErrorKind.INPUT_FAILURE, ReaderError),
    (TooManyColumns(1, 2, 3), ErrorKind.TOO_MANY_COLUMNS, ReaderError),
    (TooFewColumns(1, 3, 2), ErrorKind.TOO_FEW_COLUMNS, ReaderError),
    (NumberInvalid("x", 1, 1), ErrorKind.NUMBER_INVALID, ReaderError),
    (InvalidDimension(0, 2), ErrorKind.INVALID_DIMENSION, MatrixError),
    (SizeMismatch(2, 2, 3), ErrorKind.SIZE_MISMATCH, MatrixError),
    (DimensionMismatch("add", (1, 2), (2, 1)), ErrorKind.DIMENSION_MISMATCH, MatrixError),
    (IndexOutOfRange(5, 0, (2, 2)), ErrorKind.INDEX_OUT_OF_RANGE, MatrixError),
]


@pytest.mark.parametrize("error, kind, family", ALL_ERRORS)
def test_kind_and_family(error, kind, family):
    """kind совпадает с именем вида ошибки; семейство — Matrix или Reader"""
    assert error.kind is kind
    assert kind.value == type(error).__name__
    assert isinstance(error, family)
    assert isinstance(error, TabularDataError)
    assert error.message == str(error)


def test_every_kind_has_an_error_class():
    assert {kind for _, kind, _ in ALL_ERRORS} == set(ErrorKind)


def test_messages_carry_context():
    assert "3" in str(EmptyLine(3))
    assert "row 7" in str(TooFewColumns(7, 3, 2))
    assert "expected 3, found 2" in str(TooFewColumns(7, 3, 2))
    assert "'1.2.3' at row 4, column 2" in str(NumberInvalid("1.2.3", 4, 2))
    assert "(5, 0)" in str(IndexOutOfRange(5, 0, (2, 2)))
    assert "expected 4 for 2x2, got 3" in str(SizeMismatch(2, 2, 3))


def test_row_is_optional_for_column_errors():
    assert "Too many columns in row:" in str(TooManyColumns(None, 2, 3))
    assert str(NumberInvalid("x")) == "The number 'x' is invalid and cannot be converted"


def test_builtin_compatibility():
    assert isinstance(IndexOutOfRange(0, 0, (1, 1)), IndexError)
    for error in (InvalidDimension(0, 0), SizeMismatch(1, 1, 0), EmptyLine(1), NumberInvalid("x")):
        assert isinstance(error, ValueError)
