"""
Errors — таксономия ошибок загрузки и вычислений

Каждая ошибка несёт машиночитаемый `kind` (ErrorKind) и человекочитаемое
сообщение, достаточное для диагностики строки/колонки/значения.

Иерархия:
- TabularDataError
  - MatrixError: InvalidDimension, SizeMismatch, DimensionMismatch, IndexOutOfRange
  - ReaderError: SourceNotFound, EmptyLine, InputFailure,
                 TooManyColumns, TooFewColumns, NumberInvalid

Ни одна ошибка не восстанавливается внутри: операция прерывается немедленно,
повтор (например, повторный read_data) — ответственность вызывающего кода.
"""

from enum import Enum
from typing import Optional


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Вид ошибки (тег для tagged outcome)"""

    SOURCE_NOT_FOUND = "SourceNotFound"
    EMPTY_LINE = "EmptyLine"
    INPUT_FAILURE = "InputFailure"
    TOO_MANY_COLUMNS = "TooManyColumns"
    TOO_FEW_COLUMNS = "TooFewColumns"
    NUMBER_INVALID = "NumberInvalid"
    INVALID_DIMENSION = "InvalidDimension"
    SIZE_MISMATCH = "SizeMismatch"
    DIMENSION_MISMATCH = "DimensionMismatch"
    INDEX_OUT_OF_RANGE = "IndexOutOfRange"


# =============================================================================
# BASE CLASSES
# =============================================================================


class TabularDataError(Exception):
    """Базовая ошибка пакета. Подклассы фиксируют `kind`."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MatrixError(TabularDataError):
    """Ошибки DenseMatrix (конструкторы, доступ, арифметика)."""


class ReaderError(TabularDataError):
    """Ошибки TabularReader (структура и содержимое источника)."""


# =============================================================================
# MATRIX ERRORS
# =============================================================================


class InvalidDimension(MatrixError, ValueError):
    """Нулевое число строк/колонок или пустая последовательность диагонали."""

    kind = ErrorKind.INVALID_DIMENSION

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        super().__init__(
            f"Matrix cannot have zero rows or columns: got {rows}x{cols}"
        )


class SizeMismatch(MatrixError, ValueError):
    """Длина плоских данных не равна rows*cols."""

    kind = ErrorKind.SIZE_MISMATCH

    def __init__(self, rows: int, cols: int, size: int):
        self.rows = rows
        self.cols = cols
        self.size = size
        super().__init__(
            f"Initializer does not have the expected number of elements: "
            f"expected {rows * cols} for {rows}x{cols}, got {size}"
        )


class DimensionMismatch(MatrixError, ValueError):
    """Несовместимые размерности операндов арифметики."""

    kind = ErrorKind.DIMENSION_MISMATCH

    def __init__(
        self,
        operation: str,
        left_shape: tuple[int, int],
        right_shape: tuple[int, int],
    ):
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape
        super().__init__(
            f"Cannot {operation} matrices of shapes "
            f"{left_shape[0]}x{left_shape[1]} and {right_shape[0]}x{right_shape[1]}"
        )


class IndexOutOfRange(MatrixError, IndexError):
    """Проверяемый доступ вне [0, rows) x [0, cols)."""

    kind = ErrorKind.INDEX_OUT_OF_RANGE

    def __init__(self, row: int, col: int, shape: tuple[int, int]):
        self.row = row
        self.col = col
        self.shape = shape
        super().__init__(
            f"Index ({row}, {col}) is out of range for matrix of shape "
            f"{shape[0]}x{shape[1]}"
        )


# =============================================================================
# READER ERRORS
# =============================================================================


class SourceNotFound(ReaderError):
    """Источник не открывается (при конструировании или при чтении)."""

    kind = ErrorKind.SOURCE_NOT_FOUND

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Cannot open a file with the given name: {path!r}")


class EmptyLine(ReaderError, ValueError):
    """Пустая строка в области данных (row — номер строки данных, с 1)."""

    kind = ErrorKind.EMPTY_LINE

    def __init__(self, row: int):
        self.row = row
        super().__init__(
            f"Line number {row} is empty; remove the empty line and try again"
        )


class InputFailure(ReaderError):
    """Низкоуровневый сбой чтения, отличный от штатного конца источника."""

    kind = ErrorKind.INPUT_FAILURE

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Encountered an error in input {path!r}: {detail}")


class TooManyColumns(ReaderError, ValueError):
    """В строке данных больше полей, чем в заголовке."""

    kind = ErrorKind.TOO_MANY_COLUMNS

    def __init__(self, row: Optional[int], expected: int, found: int):
        self.row = row
        self.expected = expected
        self.found = found
        where = f"row {row}" if row is not None else "row"
        super().__init__(
            f"Too many columns in {where}: expected {expected}, found at least {found}"
        )


class TooFewColumns(ReaderError, ValueError):
    """В строке данных меньше полей, чем в заголовке."""

    kind = ErrorKind.TOO_FEW_COLUMNS

    def __init__(self, row: Optional[int], expected: int, found: int):
        self.row = row
        self.expected = expected
        self.found = found
        where = f"row {row}" if row is not None else "row"
        super().__init__(
            f"Too few columns in {where}: expected {expected}, found {found}"
        )


class NumberInvalid(ReaderError, ValueError):
    """Поле не является валидным числом или не конвертируется."""

    kind = ErrorKind.NUMBER_INVALID

    def __init__(self, token: str, row: Optional[int] = None, col: Optional[int] = None):
        self.token = token
        self.row = row
        self.col = col
        location = []
        if row is not None:
            location.append(f"row {row}")
        if col is not None:
            location.append(f"column {col}")
        where = f" at {', '.join(location)}" if location else ""
        super().__init__(
            f"The number {token!r}{where} is invalid and cannot be converted"
        )
