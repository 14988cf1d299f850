"""Tests for reorder()."""

from treeframe import Table, reorder


class TestReorder:
    """Selected columns are sorted within their slots."""

    def test_sorted_into_selected_slots(self):
        table = Table.from_pydict({"c": [1], "id": [0], "a": [2], "b": [3]})
        out = reorder(table, ["c", "a", "b"])
        assert out.column_names == ["a", "id", "b", "c"]
        assert out["c"].to_pylist() == [1]

    def test_descending(self, flat_table):
        out = reorder(flat_table, flat_table.column_names, desc=True)
        assert out.column_names == ["name", "id", "city", "age"]

    def test_key_is_stable(self, flat_table):
        out = reorder(flat_table, ["name", "age", "city"], key=lambda col: len(col.name))
        assert out.column_names == ["id", "age", "name", "city"]

    def test_per_parent(self, nested_table):
        out = reorder(
            nested_table,
            ["score", "person.address.city", "person.address.street", "id"],
        )
        assert out.column_names == ["id", "person", "score"]
        assert out["person.address"].column_names == ["city", "street"]

    def test_table_method(self, flat_table):
        assert flat_table.reorder(["age", "city"], desc=True).column_names == [
            "id",
            "name",
            "city",
            "age",
        ]
