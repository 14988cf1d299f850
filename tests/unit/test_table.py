"""Tests for treeframe.table.Table access and export."""

import pytest

from treeframe import ColumnNotFoundError, ColumnPath, Table, TreeFrameSchemaError, ValueColumn


class TestConstruction:
    """Row counts and sibling validation."""

    def test_from_pydict(self, nested_table):
        assert nested_table.column_names == ["id", "person", "score"]
        assert nested_table.nrow == 2
        assert nested_table.ncol == 3
        assert len(nested_table) == 2

    def test_empty_table(self):
        table = Table()
        assert table.nrow == 0
        assert table.columns == ()

    def test_columnless_table_keeps_row_count(self):
        assert Table(nrow=4).nrow == 4

    def test_row_count_mismatch_rejected(self):
        with pytest.raises(TreeFrameSchemaError, match="Table"):
            Table([ValueColumn("a", [1, 2]), ValueColumn("b", [1, 2, 3])])

    def test_duplicate_names_rejected(self):
        with pytest.raises(TreeFrameSchemaError, match="duplicate"):
            Table([ValueColumn("a", [1]), ValueColumn("a", [2])])


class TestAccess:
    """Path lookup and traversal."""

    def test_get_nested_column(self, nested_table):
        assert nested_table["person.address.city"].to_pylist() == ["Oslo", "Rome"]
        assert nested_table[["person", "name"]].to_pylist() == ["Ann", "Bob"]

    def test_missing_column_lists_siblings(self, nested_table):
        with pytest.raises(ColumnNotFoundError) as exc_info:
            nested_table.get_column("person.age")

        msg = str(exc_info.value)
        assert "person.age" in msg
        assert "'name', 'address'" in msg

    def test_missing_column_is_a_key_error(self, nested_table):
        with pytest.raises(KeyError):
            nested_table["nope"]

    def test_descending_into_value_column(self, nested_table):
        with pytest.raises(ColumnNotFoundError, match="not a group"):
            nested_table.get_column("id.x")

    def test_contains(self, nested_table):
        assert "person.address" in nested_table
        assert "person.zip" not in nested_table

    def test_children_at(self, nested_table):
        assert [c.name for c in nested_table.children_at(())] == ["id", "person", "score"]
        assert [c.name for c in nested_table.children_at(("person",))] == ["name", "address"]

    def test_walk_is_preorder(self, nested_table):
        assert [str(p) for p, _ in nested_table.walk()] == [
            "id",
            "person",
            "person.name",
            "person.address",
            "person.address.street",
            "person.address.city",
            "score",
        ]

    def test_paths_leaves_only(self, nested_table):
        assert nested_table.paths(leaves_only=True) == [
            ColumnPath(["id"]),
            ColumnPath(["person", "name"]),
            ColumnPath(["person", "address", "street"]),
            ColumnPath(["person", "address", "city"]),
            ColumnPath(["score"]),
        ]

    def test_frame_columns_are_not_descended(self, frame_table):
        assert frame_table.paths() == [ColumnPath(["id"]), ColumnPath(["orders"])]


class TestExport:
    """Python conversions and display."""

    def test_to_pydict(self, nested_table):
        data = nested_table.to_pydict()
        assert data["person"]["address"]["city"] == ["Oslo", "Rome"]

    def test_to_pylist(self, frame_table):
        rows = frame_table.to_pylist()
        assert rows[1] == {"id": 2, "orders": [{"sku": "c", "qty": 5}]}

    def test_equals(self, nested_table):
        again = Table.from_pydict(nested_table.to_pydict())
        assert nested_table.equals(again)

    def test_describe(self, nested_table):
        text = nested_table.describe()
        assert text.startswith("Table: 2 rows x 3 columns")
        assert "    address: group" in text
