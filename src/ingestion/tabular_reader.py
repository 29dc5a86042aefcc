"""
TabularReader — двухпроходное чтение числового CSV в DenseMatrix

Формат источника:
- Первая строка — заголовок; число его сегментов фиксирует число колонок
- Далее N строк данных, поля разделены запятой, только числа
- Пустые строки в области данных запрещены
- Кавычки и экранирование разделителя не поддерживаются

Проходы:
1. Структурный (в конструкторе): заголовок, число колонок, число строк,
   отсутствие пустых строк. Числовое содержимое не разбирается.
2. Материализация (read_data): каждая строка данных разбирается в числа,
   опционально с префиксом порядкового номера строки (с 1), результат
   собирается в DenseMatrix. Проход повторяем: каждый вызов открывает
   источник заново и начинает с первой строки данных.

Заголовок пропускается по счёту строк, а не по байтовому смещению:
терминаторы строк (\\n, \\r\\n, \\r) обрабатываются универсально.

Файловый дескриптор не удерживается между вызовами: каждый проход
открывает и закрывает источник до возврата или исключения.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. cols и rows фиксируются структурным проходом и не меняются
2. Любая ошибка прерывает операцию немедленно, частичный результат не возвращается
3. Матрица результата: rows x cols или rows x (cols + 1) с номерами строк
"""

import itertools
import logging
import os
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TextIO, TypeVar, Union

from src.core.contracts import DatasetSummaryValidator
from src.core.domain.dataset import DatasetSummary, ReaderConfig, ReaderState, split_fields
from src.core.errors import (
    EmptyLine,
    ErrorKind,
    InputFailure,
    SourceNotFound,
    TabularDataError,
    TooFewColumns,
    TooManyColumns,
)
from src.core.math.dense_matrix import DenseMatrix
from src.ingestion.number_syntax import parse_number

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (обработано строк, всего строк)
ProgressCallback = Callable[[int, int], None]


# =============================================================================
# TAGGED OUTCOME
# =============================================================================


@dataclass(frozen=True)
class ReadOutcome(Generic[T]):
    """
    Результат чтения без исключений: успех с матрицей или вид ошибки.

    ok=True  → matrix заполнена, error_kind=None
    ok=False → matrix=None, error_kind и message описывают ошибку
    """

    ok: bool
    matrix: Optional[DenseMatrix[T]]
    error_kind: Optional[ErrorKind]
    message: str

    @classmethod
    def success(cls, matrix: DenseMatrix[T]) -> "ReadOutcome[T]":
        return cls(ok=True, matrix=matrix, error_kind=None, message="")

    @classmethod
    def failure(cls, error: TabularDataError) -> "ReadOutcome[T]":
        return cls(ok=False, matrix=None, error_kind=error.kind, message=error.message)


# =============================================================================
# TABULAR READER
# =============================================================================


def _strip_terminator(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


class TabularReader(Generic[T]):
    """
    Ридер числового CSV источника.

    Состояния: UNOPENED → METADATA_SCANNED → DATA_READ (DATA_READ повторно входим).
    Конструктор выполняет структурный проход; read_data — проход материализации.

    Не потокобезопасен: один ридер не разделяется между потоками без
    внешней синхронизации.
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        number_type: Callable[[str], T] = float,
        config: Optional[ReaderConfig] = None,
        progress: Optional[ProgressCallback] = None,
    ):
        """
        Args:
            path: Путь к источнику
            number_type: Конструктор T из десятичной строки (float, Decimal, Fraction)
            config: Настройки чтения (default: ReaderConfig())
            progress: Callback (обработано, всего), вызывается периодически в read_data

        Raises:
            SourceNotFound: источник не открывается
            EmptyLine: пустая строка в области данных (с номером строки)
            InputFailure: низкоуровневый сбой чтения
        """
        self._path = os.fspath(path)
        self._number_type = number_type
        self._config = config or ReaderConfig()
        self._progress = progress

        self._state = ReaderState.UNOPENED
        self._header = ""
        self._cols = 0
        self._rows = 0

        # Номера строк последнего полного чтения
        self._row_numbers: List[T] = []

        try:
            self._scan_metadata()
        except TabularDataError as exc:
            logger.warning("Metadata scan of %r failed: %s", self._path, exc)
            raise
        self._state = ReaderState.METADATA_SCANNED

    # -------------------------------------------------------------------------
    # Проход 1: структура
    # -------------------------------------------------------------------------

    def _open(self) -> TextIO:
        try:
            return open(self._path, "r", encoding=self._config.encoding)
        except OSError as exc:
            raise SourceNotFound(self._path) from exc

    def _scan_metadata(self) -> None:
        with self._open() as handle:
            try:
                self._header = _strip_terminator(handle.readline())
                self._cols = len(split_fields(self._header))

                rows = 0
                for line in handle:
                    if _strip_terminator(line) == "":
                        raise EmptyLine(rows + 1)
                    rows += 1
            except (OSError, UnicodeDecodeError) as exc:
                raise InputFailure(self._path, str(exc)) from exc

        self._rows = rows
        logger.info(
            "Data file %r is successfully received: %d rows, %d columns",
            self._path,
            self._rows,
            self._cols,
        )

    # -------------------------------------------------------------------------
    # Разбор строки
    # -------------------------------------------------------------------------

    def parse_row(self, line: str, row: Optional[int] = None) -> List[T]:
        """
        Разбор одной строки данных (без терминатора) в cols чисел.

        Поля проверяются по порядку; лишнее поле отклоняется сразу,
        не дочитывая строку.

        Args:
            line: Строка данных
            row: Номер строки данных (с 1), для диагностики

        Returns:
            Ровно cols значений в порядке полей

        Raises:
            TooManyColumns: полей больше, чем в заголовке
            TooFewColumns: полей меньше, чем в заголовке
            NumberInvalid: поле не является валидным числом
        """
        values: List[T] = []
        for position, token in enumerate(split_fields(line), start=1):
            if position > self._cols:
                raise TooManyColumns(row, self._cols, position)
            values.append(parse_number(token, self._number_type, row=row, col=position))

        if len(values) < self._cols:
            raise TooFewColumns(row, self._cols, len(values))
        return values

    # -------------------------------------------------------------------------
    # Проход 2: материализация
    # -------------------------------------------------------------------------

    def read_data(self, with_row_index: bool = False) -> DenseMatrix[T]:
        """
        Чтение всех строк данных в матрицу.

        Args:
            with_row_index: Добавить первой колонкой номер строки (с 1) типа T

        Returns:
            DenseMatrix rows x cols (или rows x (cols + 1) с номерами строк)

        Raises:
            SourceNotFound: источник не открывается
            TooManyColumns / TooFewColumns / NumberInvalid: ошибка разбора строки
            InputFailure: сбой чтения или лишние строки после ожидаемых rows
            InvalidDimension: в источнике нет ни одной строки данных
        """
        try:
            matrix, row_numbers = self._materialize(with_row_index)
        except TabularDataError as exc:
            logger.warning("Reading data from %r failed: %s", self._path, exc)
            raise

        self._row_numbers = row_numbers
        self._state = ReaderState.DATA_READ
        logger.info(
            "Reached end of the file %r: all %d rows are received", self._path, matrix.rows
        )
        return matrix

    def _materialize(self, with_row_index: bool):
        expected = self._rows
        step = self._config.progress_step(expected)
        elements: List[T] = []
        row_numbers: List[T] = []
        done = 0

        logger.debug("Started reading the data from %r", self._path)
        with self._open() as handle:
            try:
                handle.readline()
                for line in itertools.islice(handle, expected):
                    row = done + 1
                    values = self.parse_row(_strip_terminator(line), row=row)
                    if with_row_index:
                        ordinal = self._number_type(str(row))
                        row_numbers.append(ordinal)
                        elements.append(ordinal)
                    elements.extend(values)
                    done = row
                    if done % step == 0 or done == expected:
                        self._report_progress(done)
                trailing = handle.readline()
            except (OSError, UnicodeDecodeError) as exc:
                raise InputFailure(self._path, str(exc)) from exc

        if trailing:
            raise InputFailure(
                self._path, f"expected end of source after {expected} data lines"
            )
        if done < expected:
            logger.warning(
                "Source %r ended after %d of %d expected data lines", self._path, done, expected
            )

        width = self._cols + 1 if with_row_index else self._cols
        matrix = DenseMatrix(done, width, elements, element_type=self._number_type)
        return matrix, row_numbers

    def _report_progress(self, done: int) -> None:
        logger.debug("Read %d of %d rows from %r", done, self._rows, self._path)
        if self._progress is not None:
            self._progress(done, self._rows)

    def try_read_data(self, with_row_index: bool = False) -> ReadOutcome[T]:
        """read_data без исключений: ошибки пакета возвращаются как ReadOutcome."""
        try:
            return ReadOutcome.success(self.read_data(with_row_index))
        except TabularDataError as exc:
            return ReadOutcome.failure(exc)

    # -------------------------------------------------------------------------
    # Метаданные
    # -------------------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def state(self) -> ReaderState:
        return self._state

    def get_cols(self) -> int:
        return self._cols

    def get_rows(self) -> int:
        return self._rows

    def get_header(self) -> str:
        return self._header

    def get_row_numbers(self) -> List[T]:
        """Номера строк последнего read_data(with_row_index=True); иначе пусто."""
        return list(self._row_numbers)

    def summary(self) -> DatasetSummary:
        """
        Снапшот метаданных структурного прохода.

        JSON форма снапшота проверяется контрактом dataset_summary.
        """
        summary = DatasetSummary.from_header(self._path, self._header, self._rows)
        DatasetSummaryValidator().validate_model(summary)
        return summary


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def load_matrix(
    path: Union[str, os.PathLike],
    with_row_index: bool = False,
    number_type: Callable[[str], T] = float,
    config: Optional[ReaderConfig] = None,
    progress: Optional[ProgressCallback] = None,
) -> ReadOutcome[T]:
    """
    Конструирование ридера и чтение данных одним вызовом.

    Ошибки обоих проходов возвращаются как ReadOutcome, не исключениями.
    """
    try:
        reader = TabularReader(path, number_type=number_type, config=config, progress=progress)
    except TabularDataError as exc:
        return ReadOutcome.failure(exc)
    return reader.try_read_data(with_row_index)
