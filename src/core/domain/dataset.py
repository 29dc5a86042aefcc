"""
Dataset — модели метаданных табличного источника

Immutable Pydantic модели:
- ReaderConfig    — настройки чтения (кодировка, шаг прогресса)
- DatasetSummary  — снапшот метаданных после структурного прохода
Полная совместимость с JSON Schema (src/core/contracts/schema/dataset_summary.json).
"""

import codecs
from enum import Enum
from typing import Final

from pydantic import BaseModel, Field, field_validator, model_validator


# Единственный поддерживаемый разделитель полей
DELIMITER: Final[str] = ","


# =============================================================================
# ENUMS
# =============================================================================


class ReaderState(str, Enum):
    """
    Состояние TabularReader.

    UNOPENED → METADATA_SCANNED → DATA_READ (DATA_READ повторно входим)
    """

    UNOPENED = "UNOPENED"
    METADATA_SCANNED = "METADATA_SCANNED"
    DATA_READ = "DATA_READ"


# =============================================================================
# READER CONFIG
# =============================================================================


class ReaderConfig(BaseModel):
    """
    Настройки чтения источника.

    Immutable модель (frozen=True): один конфиг может разделяться ридерами.
    """

    encoding: str = Field(
        default="utf-8-sig",
        min_length=1,
        description="Кодировка текста источника (utf-8-sig снимает BOM, если он есть)",
    )
    progress_step_fraction: float = Field(
        default=0.1,
        gt=0,
        le=1,
        description="Доля строк между вызовами progress callback (0.1 = каждые 10%)",
    )

    model_config = {"frozen": True}

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Кодировка должна быть известна codecs."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e
        return v

    def progress_step(self, total_rows: int) -> int:
        """Шаг прогресса в строках: max(1, round(total_rows * fraction))."""
        return max(1, round(total_rows * self.progress_step_fraction))


# =============================================================================
# DATASET SUMMARY
# =============================================================================


class DatasetSummary(BaseModel):
    """
    Метаданные источника после структурного прохода.

    cols равно числу сегментов заголовка; rows — число непустых строк данных.
    """

    path: str = Field(..., min_length=1, description="Путь к источнику")
    header: str = Field(..., description="Первая строка источника как есть (без терминатора)")
    column_names: list[str] = Field(..., description="Заголовок, разбитый по разделителю")
    rows: int = Field(..., ge=0, description="Число строк данных")
    cols: int = Field(..., ge=0, description="Число колонок по заголовку")

    model_config = {"frozen": True}

    @field_validator("header")
    @classmethod
    def validate_single_line(cls, v: str) -> str:
        """Заголовок — одна строка без терминатора."""
        if "\n" in v or "\r" in v:
            raise ValueError("header must not contain line terminators")
        return v

    @model_validator(mode="after")
    def validate_columns_match_header(self) -> "DatasetSummary":
        """cols == len(column_names)."""
        if self.cols != len(self.column_names):
            raise ValueError(
                f"cols {self.cols} must equal number of column names {len(self.column_names)}"
            )
        return self

    @classmethod
    def from_header(cls, path: str, header: str, rows: int) -> "DatasetSummary":
        """Построение из сырого заголовка (пустой заголовок → ноль колонок)."""
        column_names = split_fields(header)
        return cls(
            path=path,
            header=header,
            column_names=column_names,
            rows=rows,
            cols=len(column_names),
        )


def split_fields(line: str) -> list[str]:
    """
    Сегменты строки (заголовка или данных) по разделителю.

    Пустая строка не содержит сегментов. Завершающий разделитель не
    порождает пустой сегмент: "1,2," → ["1", "2"]; внутренние пустые
    сегменты сохраняются: "1,,2" → ["1", "", "2"].
    """
    if not line:
        return []
    segments = line.split(DELIMITER)
    if segments[-1] == "":
        segments.pop()
    return segments
