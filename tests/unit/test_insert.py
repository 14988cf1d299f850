"""Tests for insert()."""

import pytest

from treeframe import GroupColumn, PathCollisionError, ValueColumn, insert


def score(nrow):
    return ValueColumn("score", list(range(nrow)))


class TestInsert:
    """Placement of new columns."""

    def test_appends_at_root(self, flat_table):
        table = insert(flat_table, score(3))
        assert table.column_names == ["id", "name", "age", "city", "score"]
        assert table["score"].to_pylist() == [0, 1, 2]

    def test_under_existing_group(self, nested_table):
        table = insert(nested_table, ValueColumn("zip", ["1", "2"]), under="person.address")
        assert table["person.address"].column_names == ["street", "city", "zip"]

    def test_under_new_group(self, flat_table):
        table = insert(flat_table, score(3), under="stats")
        assert table.column_names == ["id", "name", "age", "city", "stats"]
        assert isinstance(table["stats"], GroupColumn)

    def test_after(self, flat_table):
        table = insert(flat_table, score(3), after="name")
        assert table.column_names == ["id", "name", "score", "age", "city"]

    def test_after_nested(self, nested_table):
        table = insert(nested_table, ValueColumn("age", [1, 2]), after="person.name")
        assert table["person"].column_names == ["name", "age", "address"]

    def test_several_columns_after(self, flat_table):
        table = insert(flat_table, score(3), ValueColumn("rank", [3, 2, 1]), after="id")
        assert table.column_names == ["id", "score", "rank", "name", "age", "city"]

    def test_at_index(self, flat_table):
        table = insert(flat_table, score(3), at=1)
        assert table.column_names == ["id", "score", "name", "age", "city"]

    def test_at_index_under_group(self, nested_table):
        table = insert(nested_table, ValueColumn("age", [1, 2]), under="person", at=0)
        assert table["person"].column_names == ["age", "name", "address"]

    def test_before(self, flat_table):
        table = insert(flat_table, score(3), before="name")
        assert table.column_names == ["id", "score", "name", "age", "city"]

    def test_before_first_column(self, flat_table):
        table = insert(flat_table, score(3), before="id")
        assert table.column_names == ["score", "id", "name", "age", "city"]
        assert table["score"].to_pylist() == [0, 1, 2]

    def test_before_nested(self, nested_table):
        table = insert(nested_table, ValueColumn("age", [1, 2]), before="person.address")
        assert table["person"].column_names == ["name", "age", "address"]

    def test_before_first_nested_column(self, nested_table):
        zip_code = ValueColumn("zip", ["1", "2"])
        table = insert(nested_table, zip_code, before="person.address.street")
        assert table["person.address"].column_names == ["zip", "street", "city"]
        assert table.column_names == ["id", "person", "score"]

    @pytest.mark.parametrize(
        "position",
        [
            {"before": "id", "under": "g"},
            {"before": "id", "at": 1},
            {"before": "id", "after": "age"},
        ],
    )
    def test_before_with_other_position_rejected(self, flat_table, position):
        with pytest.raises(ValueError, match="cannot be combined"):
            insert(flat_table, score(3), **position)

    def test_after_with_under_rejected(self, flat_table):
        with pytest.raises(ValueError, match="'after' cannot be combined"):
            insert(flat_table, score(3), after="id", under="g")

    def test_existing_path_collides(self, flat_table):
        with pytest.raises(PathCollisionError):
            insert(flat_table, ValueColumn("age", [1, 2, 3]))

    def test_no_columns_returns_table(self, flat_table):
        assert insert(flat_table) is flat_table

    def test_table_method(self, flat_table):
        assert flat_table.insert(score(3), after="id").column_names[1] == "score"
        assert flat_table.insert(score(3), before="id").column_names[0] == "score"
