"""
DenseMatrix — плотная матрица с построчным (row-major) хранением

Матрица владеет плоским буфером элементов и размерами rows/cols.
Элемент логической позиции (r, c) лежит по плоскому индексу r*cols + c.

Двухуровневый доступ:
- get/set          — без проверки границ (для горячих внутренних циклов)
- at/set_at, m[r, c] — с проверкой границ (IndexOutOfRange)

Арифметика (функции модуля и операторы):
- add / subtract (+, -)   — поэлементно, размеры должны совпадать
- negate (унарный -)      — поэлементная смена знака
- multiply (*, @)         — матричное произведение, a.cols == b.rows
- scale (* со скаляром)   — поэлементное умножение на скаляр, коммутативно

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rows > 0 и cols > 0 для любой существующей матрицы
2. len(elements) == rows * cols всегда
3. Форма неизменна после конструирования; значения элементов изменяемы
4. Операторы создают новые матрицы; только += и -= меняют левый операнд
5. multiply накапливает в порядке i (строка) → j (колонка) → k (внутренний)
   для воспроизводимого округления float
"""

import numbers
import operator
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from src.core.errors import DimensionMismatch, IndexOutOfRange, InvalidDimension, SizeMismatch
from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    all_finite,
    sequences_close,
)

T = TypeVar("T")

Shape = Tuple[int, int]


# =============================================================================
# DENSE MATRIX
# =============================================================================


class DenseMatrix(Generic[T]):
    """
    Плотная матрица элементов типа T в row-major порядке.

    T — числовой тип: поддерживает арифметику, имеет нулевое значение
    element_type(0) и конструируется из распарсенного десятичного значения
    (float, int, Decimal, Fraction).

    Конструирование:
        DenseMatrix(rows, cols)                 — нулевая матрица
        DenseMatrix(rows, cols, flat_values)    — из плоских данных
        DenseMatrix.zeros(rows, cols)
        DenseMatrix.diagonal(values)            — квадратная диагональная
        DenseMatrix.from_flat(rows, cols, values)
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        elements: Optional[Sequence[T]] = None,
        *,
        element_type: Optional[Callable[[Any], T]] = None,
    ):
        """
        Args:
            rows: Число строк (> 0)
            cols: Число колонок (> 0)
            elements: Плоские данные в row-major порядке; None → нули
            element_type: Тип элементов; по умолчанию тип первого элемента
                (или float для нулевой матрицы)

        Raises:
            InvalidDimension: rows или cols равны нулю
            SizeMismatch: len(elements) != rows * cols
        """
        rows = operator.index(rows)
        cols = operator.index(cols)
        if rows <= 0 or cols <= 0:
            raise InvalidDimension(rows, cols)

        if elements is None:
            etype = element_type or float
            data = [etype(0)] * (rows * cols)
        else:
            data = list(elements)
            if len(data) != rows * cols:
                raise SizeMismatch(rows, cols, len(data))
            etype = element_type or type(data[0])

        self._rows = rows
        self._cols = cols
        self._elements: List[T] = data
        self._element_type: Callable[[Any], T] = etype

    # -------------------------------------------------------------------------
    # Альтернативные конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(
        cls, rows: int, cols: int, element_type: Callable[[Any], T] = float
    ) -> "DenseMatrix[T]":
        """Нулевая матрица rows x cols."""
        return cls(rows, cols, element_type=element_type)

    @classmethod
    def diagonal(
        cls, values: Sequence[T], element_type: Optional[Callable[[Any], T]] = None
    ) -> "DenseMatrix[T]":
        """
        Квадратная матрица стороны len(values) с values[i] на диагонали.

        Raises:
            InvalidDimension: values пустая
        """
        diag = list(values)
        size = len(diag)
        if size == 0:
            raise InvalidDimension(0, 0)

        etype = element_type or type(diag[0])
        data = [etype(0)] * (size * size)
        for i, value in enumerate(diag):
            data[size * i + i] = value
        return cls(size, size, data, element_type=etype)

    @classmethod
    def from_flat(
        cls,
        rows: int,
        cols: int,
        values: Sequence[T],
        element_type: Optional[Callable[[Any], T]] = None,
    ) -> "DenseMatrix[T]":
        """Матрица rows x cols из плоских данных в row-major порядке."""
        return cls(rows, cols, values, element_type=element_type)

    # -------------------------------------------------------------------------
    # Размеры
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Shape:
        return (self._rows, self._cols)

    @property
    def element_type(self) -> Callable[[Any], T]:
        return self._element_type

    # -------------------------------------------------------------------------
    # Доступ к элементам
    # -------------------------------------------------------------------------

    def get(self, row: int, col: int) -> T:
        """Чтение без проверки границ. Индексы вне диапазона — неопределённое поведение."""
        return self._elements[self._cols * row + col]

    def set(self, row: int, col: int, value: T) -> None:
        """Запись без проверки границ. Индексы вне диапазона — неопределённое поведение."""
        self._elements[self._cols * row + col] = value

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexOutOfRange(row, col, self.shape)

    def at(self, row: int, col: int) -> T:
        """
        Чтение с проверкой границ.

        Raises:
            IndexOutOfRange: row >= rows или col >= cols (или отрицательные)
        """
        self._check_index(row, col)
        return self._elements[self._cols * row + col]

    def set_at(self, row: int, col: int, value: T) -> None:
        """
        Запись с проверкой границ.

        Raises:
            IndexOutOfRange: row >= rows или col >= cols (или отрицательные)
        """
        self._check_index(row, col)
        self._elements[self._cols * row + col] = value

    def __getitem__(self, key: Tuple[int, int]) -> T:
        row, col = key
        return self.at(row, col)

    def __setitem__(self, key: Tuple[int, int], value: T) -> None:
        row, col = key
        self.set_at(row, col, value)

    # -------------------------------------------------------------------------
    # Выгрузка и сравнение
    # -------------------------------------------------------------------------

    def flat(self) -> List[T]:
        """Копия плоского буфера в row-major порядке."""
        return list(self._elements)

    def to_rows(self) -> List[List[T]]:
        """Элементы построчно (список списков)."""
        cols = self._cols
        return [self._elements[i * cols:(i + 1) * cols] for i in range(self._rows)]

    def copy(self) -> "DenseMatrix[T]":
        return DenseMatrix(
            self._rows, self._cols, self._elements, element_type=self._element_type
        )

    def all_finite(self) -> bool:
        """Нет ли среди элементов NaN/Inf."""
        return all_finite(self._elements)

    def is_close(
        self,
        other: "DenseMatrix[T]",
        rel_tol: float = EPS_FLOAT_COMPARE_REL,
        abs_tol: float = EPS_FLOAT_COMPARE_ABS,
    ) -> bool:
        """
        Поэлементное epsilon-сравнение с другой матрицей.

        Матрицы разной формы никогда не близки.
        """
        if self.shape != other.shape:
            return False
        return sequences_close(
            self._elements, other._elements, rel_tol=rel_tol, abs_tol=abs_tol
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.shape == other.shape and self._elements == other._elements

    __hash__ = None  # type: ignore[assignment]

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "DenseMatrix[T]":
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return add(self, other)

    def __iadd__(self, other: object) -> "DenseMatrix[T]":
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        _require_same_shape("add", self, other)
        for idx, value in enumerate(other._elements):
            self._elements[idx] = self._elements[idx] + value
        return self

    def __sub__(self, other: object) -> "DenseMatrix[T]":
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return subtract(self, other)

    def __isub__(self, other: object) -> "DenseMatrix[T]":
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        _require_same_shape("subtract", self, other)
        for idx, value in enumerate(other._elements):
            self._elements[idx] = self._elements[idx] - value
        return self

    def __neg__(self) -> "DenseMatrix[T]":
        return negate(self)

    def __mul__(self, other: object) -> "DenseMatrix[T]":
        if isinstance(other, DenseMatrix):
            return multiply(self, other)
        if isinstance(other, numbers.Number):
            return scale(self, other)
        return NotImplemented

    def __rmul__(self, other: object) -> "DenseMatrix[T]":
        if isinstance(other, numbers.Number):
            return scale(other, self)
        return NotImplemented

    def __matmul__(self, other: object) -> "DenseMatrix[T]":
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return multiply(self, other)

    # -------------------------------------------------------------------------
    # Текстовое представление
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        return f"DenseMatrix(rows={self._rows}, cols={self._cols}, elements={self._elements!r})"


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def _require_same_shape(operation: str, a: DenseMatrix, b: DenseMatrix) -> None:
    if a.shape != b.shape:
        raise DimensionMismatch(operation, a.shape, b.shape)


def add(a: DenseMatrix[T], b: DenseMatrix[T]) -> DenseMatrix[T]:
    """
    Поэлементная сумма a + b.

    Raises:
        DimensionMismatch: формы a и b различаются
    """
    _require_same_shape("add", a, b)
    data = [x + y for x, y in zip(a._elements, b._elements)]
    return DenseMatrix(a.rows, a.cols, data, element_type=a.element_type)


def subtract(a: DenseMatrix[T], b: DenseMatrix[T]) -> DenseMatrix[T]:
    """
    Поэлементная разность a - b.

    Raises:
        DimensionMismatch: формы a и b различаются
    """
    _require_same_shape("subtract", a, b)
    data = [x - y for x, y in zip(a._elements, b._elements)]
    return DenseMatrix(a.rows, a.cols, data, element_type=a.element_type)


def negate(a: DenseMatrix[T]) -> DenseMatrix[T]:
    """Поэлементная смена знака. Никогда не падает."""
    return DenseMatrix(
        a.rows, a.cols, [-x for x in a._elements], element_type=a.element_type
    )


def multiply(a: DenseMatrix[T], b: DenseMatrix[T]) -> DenseMatrix[T]:
    """
    Матричное произведение a x b.

    Результат a.rows x b.cols; элемент (i, j) — скалярное произведение
    строки i матрицы a и колонки j матрицы b. Накопление начинается с нуля
    типа элементов a и идёт в порядке i → j → k.

    Raises:
        DimensionMismatch: a.cols != b.rows

    Examples:
        >>> a = DenseMatrix.from_flat(1, 2, [1.0, 2.0])
        >>> b = DenseMatrix.from_flat(2, 1, [3.0, 4.0])
        >>> multiply(a, b).flat()
        [11.0]
    """
    if a.cols != b.rows:
        raise DimensionMismatch("multiply", a.shape, b.shape)

    a_el = a._elements
    b_el = b._elements
    inner = a.cols
    out_cols = b.cols
    zero = a.element_type(0)

    data = []
    for i in range(a.rows):
        row_offset = i * inner
        for j in range(out_cols):
            acc = zero
            for k in range(inner):
                acc += a_el[row_offset + k] * b_el[k * out_cols + j]
            data.append(acc)
    return DenseMatrix(a.rows, out_cols, data, element_type=a.element_type)


def scale(
    left: Union[DenseMatrix[T], T], right: Union[DenseMatrix[T], T]
) -> DenseMatrix[T]:
    """
    Поэлементное умножение матрицы на скаляр: scale(m, s) == scale(s, m).

    Raises:
        TypeError: ни один или оба аргумента — матрицы
    """
    left_is_matrix = isinstance(left, DenseMatrix)
    right_is_matrix = isinstance(right, DenseMatrix)
    if left_is_matrix == right_is_matrix:
        raise TypeError("scale expects exactly one matrix and one scalar")

    matrix, scalar = (left, right) if left_is_matrix else (right, left)
    # Скаляр всегда слева: s * m(i, j) при любом порядке аргументов
    data = [scalar * x for x in matrix._elements]
    return DenseMatrix(matrix.rows, matrix.cols, data, element_type=matrix.element_type)


# =============================================================================
# РЕНДЕРИНГ
# =============================================================================


def _format_element(value: Any) -> str:
    if isinstance(value, float):
        return format(value, "g")
    return str(value)


def render(matrix: DenseMatrix) -> str:
    """
    Человекочитаемый блок для диагностики (не wire-формат).

    Одна строка вывода на строку матрицы, элементы разделены табуляцией,
    строка заключена в скобки:

        >>> print(render(DenseMatrix.diagonal([1, 2])), end="")
        <BLANKLINE>
        ( 1	0	)
        ( 0	2	)
    """
    lines = ["\n"]
    for row in matrix.to_rows():
        cells = "".join(f"{_format_element(value)}\t" for value in row)
        lines.append(f"( {cells})\n")
    return "".join(lines)
