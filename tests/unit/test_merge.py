"""Tests for the tree merge engine (insert_impl / merge_columns)."""

import pytest

from treeframe import (
    DuplicateInsertionError,
    GroupColumn,
    NonGroupDescentError,
    PathCollisionError,
    Table,
    ValueColumn,
)
from treeframe.restructure import InsertionRequest, insert_impl, merge_columns, remove_columns


def request(path, values=(1, 2), name=None):
    """Unanchored request for a value column."""
    parts = path.split(".")
    return InsertionRequest(path=path, column=ValueColumn(name or parts[-1], list(values)))


class TestIdentity:
    """Empty batches."""

    def test_empty_batch_returns_same_table(self, nested_table):
        assert insert_impl(nested_table, []) is nested_table

    def test_merge_columns_empty_batch(self, nested_table):
        columns = merge_columns(nested_table.columns, [], None, 0)
        assert columns == list(nested_table.columns)


class TestUnanchoredInsertions:
    """Requests without reference nodes append inside their parent."""

    def test_existing_order_preserved(self, nested_table):
        table = insert_impl(nested_table, [request("z"), request("a")])
        assert table.column_names == ["id", "person", "score", "z", "a"]

    def test_insert_into_existing_group(self, nested_table):
        table = insert_impl(nested_table, [request("person.address.zip")])
        assert table["person.address"].column_names == ["street", "city", "zip"]
        assert table.column_names == ["id", "person", "score"]

    def test_new_group_is_synthesized(self):
        base = Table.from_pydict({"id": [1, 2]})
        table = insert_impl(base, [request("fullName.first"), request("fullName.last")])

        assert table.column_names == ["id", "fullName"]
        assert isinstance(table["fullName"], GroupColumn)
        assert table["fullName"].column_names == ["first", "last"]

    def test_supplied_group_merged_with_deeper_insertions(self):
        base = Table.from_pydict({"id": [1, 2]})
        group = GroupColumn("g", [ValueColumn("a", [1, 2])])
        table = insert_impl(
            base,
            [InsertionRequest(path="g", column=group), request("g.b")],
        )
        assert table["g"].column_names == ["a", "b"]

    def test_inserted_column_renamed_to_path(self):
        base = Table.from_pydict({"id": [1, 2]})
        table = insert_impl(base, [request("renamed", name="original")])
        assert table.column_names == ["id", "renamed"]

    def test_columnless_table_adopts_row_count(self):
        table = insert_impl(Table(), [request("a", values=[1, 2, 3])])
        assert table.nrow == 3

    def test_inputs_not_modified(self, nested_table):
        before = nested_table.paths()
        insert_impl(nested_table, [request("person.extra")])
        assert nested_table.paths() == before


class TestConflicts:
    """Structural conflicts are fatal."""

    def test_path_collision(self, nested_table):
        with pytest.raises(PathCollisionError) as exc_info:
            insert_impl(nested_table, [request("person.name")])
        assert str(exc_info.value.path) == "person.name"

    def test_collision_with_untouched_root_sibling(self, flat_table):
        with pytest.raises(PathCollisionError):
            insert_impl(flat_table, [request("age", values=[1, 2, 3])])

    def test_non_group_descent(self, nested_table):
        with pytest.raises(NonGroupDescentError, match="not a column group") as exc_info:
            insert_impl(nested_table, [request("score.x")])
        assert str(exc_info.value.path) == "score"

    def test_non_group_descent_through_frame(self, frame_table):
        with pytest.raises(NonGroupDescentError, match="frame column") as exc_info:
            insert_impl(frame_table, [request("orders.x")])
        assert str(exc_info.value.path) == "orders"

    def test_non_group_supplied_column_with_deeper_insertions(self):
        base = Table.from_pydict({"id": [1, 2]})
        with pytest.raises(NonGroupDescentError):
            insert_impl(base, [request("v"), request("v.child")])

    @pytest.mark.parametrize("order", [(0, 1), (1, 0)])
    def test_duplicate_insertion_in_any_order(self, order):
        base = Table.from_pydict({"id": [1, 2]})
        requests = [request("x", values=[1, 2]), request("x", values=[3, 4])]
        with pytest.raises(DuplicateInsertionError) as exc_info:
            insert_impl(base, [requests[i] for i in order])

        assert str(exc_info.value.path) == "x"
        assert base.column_names == ["id"]


class TestAnchoredInsertions:
    """Requests anchored in a removal snapshot."""

    def test_round_trip_through_own_nodes(self, nested_table):
        result = remove_columns(nested_table, ["id", "person.address.city", "score"])
        restored = insert_impl(result.table, [r.to_insert() for r in result.removed])
        assert restored.equals(nested_table)

    def test_round_trip_of_emptied_group(self, nested_table):
        result = remove_columns(
            nested_table, ["person.address.street", "person.address.city"]
        )
        restored = insert_impl(result.table, [r.to_insert() for r in result.removed])
        assert restored.equals(nested_table)

    def test_surviving_anchor_places_after_it(self, flat_table):
        result = remove_columns(flat_table, "city")
        anchor = result.reference.find(["id"])
        (removed,) = result.removed
        table = insert_impl(result.table, [removed.to_insert(reference=anchor)])
        assert table.column_names == ["id", "city", "name", "age"]

    def test_anchored_before_unanchored(self, flat_table):
        result = remove_columns(flat_table, "name")
        requests = [request("new", values=[0, 0, 0])] + [r.to_insert() for r in result.removed]
        table = insert_impl(result.table, requests)
        assert table.column_names == ["id", "name", "age", "city", "new"]

    def test_anchor_from_other_level_appends(self, nested_table):
        result = remove_columns(nested_table, "id")
        (removed,) = result.removed
        table = insert_impl(result.table, [removed.to_insert(path=["person", "id"])])
        assert table["person"].column_names == ["name", "address", "id"]
