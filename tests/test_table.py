"""Tests for table.py — column tagging, construction checks, frame round-trip."""
import numpy as np
import pandas as pd
import pytest

from intro_stats.errors import TypeMismatchError
from intro_stats.table import NumericColumn, Table, TextColumn, classify_series


# ─── Column classification ───────────────────────────────────────

def test_numeric_dtypes_are_numeric():
    assert classify_series("x", pd.Series([1, 2, 3])).is_numeric
    assert classify_series("x", pd.Series([1.5, np.nan, 3.0])).is_numeric


def test_nullable_int_becomes_float_with_nan():
    col = classify_series("x", pd.Series([1, None, 3], dtype="Int64"))
    assert isinstance(col, NumericColumn)
    assert col.values[0] == 1.0
    assert np.isnan(col.values[1])


def test_strings_bools_and_categoricals_are_text():
    assert isinstance(classify_series("s", pd.Series(["a", "b"])), TextColumn)
    assert isinstance(classify_series("b", pd.Series([True, False])), TextColumn)
    assert isinstance(classify_series("c", pd.Series(["x", "y"], dtype="category")), TextColumn)


def test_object_column_of_numbers_is_numeric():
    col = classify_series("x", pd.Series([1, 2.5, None], dtype=object))
    assert isinstance(col, NumericColumn)
    assert col.values[1] == 2.5
    assert np.isnan(col.values[2])


def test_mixed_object_column_raises():
    with pytest.raises(TypeMismatchError) as exc:
        classify_series("mixed", pd.Series([1.0, "two", 3.0], dtype=object))
    assert exc.value.column == "mixed"
    assert "mixed" in str(exc.value)


def test_numeric_values_are_read_only():
    col = NumericColumn("x", [1.0, 2.0])
    with pytest.raises(ValueError):
        col.values[0] = 5.0


# ─── Table construction ──────────────────────────────────────────

class TestTable:
    def test_from_frame_tags_iris(self, iris_df):
        table = Table.from_frame(iris_df)
        assert table.names == list(iris_df.columns)
        assert table.numeric_names == ["Sepal.Length", "Sepal.Width", "Petal.Length", "Petal.Width"]
        assert table.text_names == ["Species"]
        assert table.shape == (150, 5)
        assert len(table) == 150

    def test_from_dict_preserves_order(self):
        table = Table.from_dict({"b": [1, 2], "a": ["x", "y"]})
        assert table.names == ["b", "a"]
        assert table.column("b").is_numeric
        assert not table.column("a").is_numeric

    def test_from_dict_mixed_raises(self):
        with pytest.raises(TypeMismatchError):
            Table.from_dict({"x": [1, "a", 3]})

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            Table((NumericColumn("x", [1.0]), TextColumn("x", ["a"])))

    def test_from_frame_duplicate_labels_rejected(self):
        df = pd.DataFrame([[1, 2]], columns=["x", "x"])
        with pytest.raises(ValueError, match="Duplicate column names"):
            Table.from_frame(df)

    def test_from_frame_keeps_original_labels(self):
        df = pd.DataFrame([[1.0, "a"], [2.0, "b"]], columns=[1, "1"])
        table = Table.from_frame(df)
        assert table.names == [1, "1"]
        assert table.column(1).is_numeric
        assert not table.column("1").is_numeric
        assert list(table.to_frame().columns) == [1, "1"]

    def test_unequal_lengths_rejected(self):
        with pytest.raises(ValueError, match="unequal"):
            Table((NumericColumn("x", [1.0, 2.0]), TextColumn("y", ["a"])))

    def test_empty_table(self):
        assert Table().n_rows == 0
        assert Table.from_dict({"x": []}).n_rows == 0

    def test_column_lookup(self):
        table = Table.from_dict({"x": [1.0, 2.0]})
        assert table.column("x").name == "x"
        with pytest.raises(KeyError):
            table.column("nope")

    def test_replace_column_returns_new_table(self):
        table = Table.from_dict({"x": [1.0, 2.0], "y": ["a", "b"]})
        new = table.replace_column(NumericColumn("x", [9.0, 8.0]))
        assert new.column("x").values.tolist() == [9.0, 8.0]
        assert table.column("x").values.tolist() == [1.0, 2.0]
        assert new.names == table.names
        with pytest.raises(KeyError):
            table.replace_column(NumericColumn("z", [0.0, 0.0]))

    def test_to_frame_round_trip(self, iris_df):
        back = Table.from_frame(iris_df).to_frame()
        assert list(back.columns) == list(iris_df.columns)
        np.testing.assert_allclose(back["Petal.Length"], iris_df["Petal.Length"])
        assert back["Species"].tolist() == iris_df["Species"].tolist()
