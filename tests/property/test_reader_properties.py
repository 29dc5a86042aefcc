"""Property tests для TabularReader."""

from pathlib import Path
import tempfile

from hypothesis import given, settings, strategies as st

from src.ingestion.tabular_reader import TabularReader

values = st.integers(min_value=-10**6, max_value=10**6)
shapes = st.tuples(st.integers(min_value=1, max_value=5), st.integers(min_value=1, max_value=8))


@st.composite
def tables(draw):
    cols, rows = draw(shapes)
    body = draw(st.lists(st.lists(values, min_size=cols, max_size=cols), min_size=rows, max_size=rows))
    return cols, body


def _write(directory: str, cols: int, body: list[list[int]]) -> Path:
    path = Path(directory) / "data.csv"
    header = ",".join(f"c{i}" for i in range(cols))
    lines = [header] + [",".join(str(v) for v in row) for row in body]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@settings(max_examples=50, deadline=None)
@given(tables())
def test_read_shape_and_values(table):
    """R x H без номеров, R x (H+1) с номерами; элементы равны токенам"""
    cols, body = table
    with tempfile.TemporaryDirectory() as directory:
        reader = TabularReader(_write(directory, cols, body))
        plain = reader.read_data(False)
        indexed = reader.read_data(True)

    assert plain.shape == (len(body), cols)
    assert indexed.shape == (len(body), cols + 1)
    assert plain.to_rows() == [[float(v) for v in row] for row in body]
    assert [row[0] for row in indexed.to_rows()] == [float(i) for i in range(1, len(body) + 1)]


@settings(max_examples=30, deadline=None)
@given(tables(), st.booleans())
def test_read_is_idempotent(table, with_row_index):
    cols, body = table
    with tempfile.TemporaryDirectory() as directory:
        reader = TabularReader(_write(directory, cols, body))
        first = reader.read_data(with_row_index)
        second = reader.read_data(with_row_index)
    assert first == second
