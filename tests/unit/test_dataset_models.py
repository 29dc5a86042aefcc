"""
Tests for Dataset Pydantic Models

Покрывает:
- ReaderConfig: значения по умолчанию, границы, шаг прогресса, immutability
- DatasetSummary: построение из заголовка, согласованность cols/column_names
- split_fields: разбиение строки по разделителю
"""

import pytest
from pydantic import ValidationError

from src.core.domain import DELIMITER, DatasetSummary, ReaderConfig, ReaderState, split_fields


# =============================================================================
# READER CONFIG
# =============================================================================


class TestReaderConfig:
    """Тесты ReaderConfig."""

    def test_defaults(self):
        config = ReaderConfig()
        assert config.encoding == "utf-8-sig"
        assert config.progress_step_fraction == 0.1

    @pytest.mark.parametrize("fraction", [0.0, -0.1, 1.5])
    def test_rejects_fraction_out_of_range(self, fraction):
        with pytest.raises(ValidationError):
            ReaderConfig(progress_step_fraction=fraction)

    def test_rejects_empty_encoding(self):
        with pytest.raises(ValidationError):
            ReaderConfig(encoding="")

    def test_rejects_unknown_encoding(self):
        """Неизвестный codec отклоняется при создании, а не при открытии файла"""
        with pytest.raises(ValidationError, match="unknown encoding: no-such-codec"):
            ReaderConfig(encoding="no-such-codec")

    @pytest.mark.parametrize("encoding", ["utf-8", "latin-1", "cp1251", "UTF8"])
    def test_accepts_known_encodings(self, encoding):
        assert ReaderConfig(encoding=encoding).encoding == encoding

    def test_frozen(self):
        config = ReaderConfig()
        with pytest.raises(ValidationError):
            config.encoding = "latin-1"

    @pytest.mark.parametrize(
        "total_rows, fraction, expected",
        [(100, 0.1, 10), (5, 0.1, 1), (0, 0.1, 1), (20, 1.0, 20), (7, 0.5, 4)],
    )
    def test_progress_step(self, total_rows, fraction, expected):
        config = ReaderConfig(progress_step_fraction=fraction)
        assert config.progress_step(total_rows) == expected


# =============================================================================
# DATASET SUMMARY
# =============================================================================


class TestDatasetSummary:
    """Тесты DatasetSummary."""

    def test_from_header(self):
        summary = DatasetSummary.from_header("data.csv", "a,b,c", rows=4)
        assert summary.column_names == ["a", "b", "c"]
        assert summary.cols == 3
        assert summary.rows == 4

    def test_empty_header_has_no_columns(self):
        summary = DatasetSummary.from_header("data.csv", "", rows=0)
        assert summary.cols == 0
        assert summary.column_names == []

    def test_rejects_inconsistent_cols(self):
        with pytest.raises(ValidationError, match="must equal number of column names"):
            DatasetSummary(path="d.csv", header="a,b", column_names=["a", "b"], rows=1, cols=3)

    def test_rejects_multiline_header(self):
        with pytest.raises(ValidationError, match="line terminators"):
            DatasetSummary(path="d.csv", header="a\nb", column_names=["a"], rows=0, cols=1)

    def test_rejects_negative_rows(self):
        with pytest.raises(ValidationError):
            DatasetSummary(path="d.csv", header="a", column_names=["a"], rows=-1, cols=1)

    def test_json_roundtrip(self):
        summary = DatasetSummary.from_header("data.csv", "x,y", rows=2)
        restored = DatasetSummary.model_validate_json(summary.model_dump_json())
        assert restored == summary


# =============================================================================
# SPLIT FIELDS
# =============================================================================


class TestSplitFields:
    """Тесты split_fields."""

    def test_delimiter_is_comma(self):
        assert DELIMITER == ","

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("a,b,c", ["a", "b", "c"]),
            ("1,,2", ["1", "", "2"]),
            ("1,2,", ["1", "2"]),
            (",", [""]),
            ("", []),
            ("single", ["single"]),
        ],
    )
    def test_split(self, line, expected):
        assert split_fields(line) == expected


def test_reader_state_values():
    """Состояния ридера сериализуются своими именами."""
    assert [s.value for s in ReaderState] == ["UNOPENED", "METADATA_SCANNED", "DATA_READ"]
