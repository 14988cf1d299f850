"""Tests for rename()."""

import pytest

from treeframe import ColumnNotFoundError, TreeFrameSchemaError, rename


class TestRenameMapping:
    """{path: new_name} renames."""

    def test_nested_rename(self, nested_table):
        table = rename(nested_table, {"person.name": "full_name"})
        assert table["person"].column_names == ["full_name", "address"]
        assert table.column_names == ["id", "person", "score"]

    def test_group_rename_keeps_children(self, nested_table):
        table = rename(nested_table, {"person.address": "home"})
        assert table["person.home.city"].to_pylist() == ["Oslo", "Rome"]

    def test_swap_sibling_names(self, flat_table):
        table = rename(flat_table, {"id": "name", "name": "id"})
        assert table.column_names == ["name", "id", "age", "city"]
        assert table["name"].to_pylist() == [1, 2, 3]

    def test_values_are_shared(self, flat_table):
        table = rename(flat_table, {"age": "years"})
        assert table["years"].values is flat_table["age"].values

    def test_clash_with_sibling(self, flat_table):
        with pytest.raises(TreeFrameSchemaError, match="duplicate"):
            rename(flat_table, {"id": "name"})

    def test_missing_column(self, flat_table):
        with pytest.raises(ColumnNotFoundError):
            rename(flat_table, {"zip": "code"})

    def test_unchanged_names_return_same_table(self, flat_table):
        assert rename(flat_table, {"id": "id"}) is flat_table


class TestRenameCallable:
    """callable(path, column) -> new_name renames."""

    def test_selected_columns(self, flat_table):
        table = rename(flat_table, lambda path, col: col.name.upper(), columns=["id", "age"])
        assert table.column_names == ["ID", "name", "AGE", "city"]

    def test_all_columns(self, nested_table):
        table = rename(nested_table, lambda path, col: col.name.upper())
        assert [str(p) for p in table.paths(leaves_only=True)] == [
            "ID",
            "PERSON.NAME",
            "PERSON.ADDRESS.STREET",
            "PERSON.ADDRESS.CITY",
            "SCORE",
        ]

    def test_table_method(self, flat_table):
        table = flat_table.rename(lambda path, col: f"col_{col.name}", columns="city")
        assert table.column_names[-1] == "col_city"
