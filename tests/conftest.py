"""Pytest fixtures for treeframe tests."""

import pytest

from treeframe import FrameColumn, GroupColumn, Table, ValueColumn


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests (pure in-memory)")
    config.addinivalue_line("markers", "integration: integration tests across arrow and backends")
    config.addinivalue_line("markers", "polars: requires polars package")
    config.addinivalue_line("markers", "pandas: requires pandas package")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def flat_table() -> Table:
    """id, name, age, city (3 rows)."""
    return Table.from_pydict(
        {
            "id": [1, 2, 3],
            "name": ["Ann", "Bob", "Cid"],
            "age": [31, 45, 27],
            "city": ["Oslo", "Rome", "Lima"],
        }
    )


@pytest.fixture
def nested_table() -> Table:
    """
    id
    person
      name
      address
        street
        city
    score
    """
    return Table.from_pydict(
        {
            "id": [1, 2],
            "person": {
                "name": ["Ann", "Bob"],
                "address": {
                    "street": ["Main St", "High St"],
                    "city": ["Oslo", "Rome"],
                },
            },
            "score": [0.5, 0.75],
        }
    )


@pytest.fixture
def frame_table() -> Table:
    """id plus a frame column 'orders' with one nested table per row."""
    return Table(
        [
            ValueColumn("id", [1, 2]),
            FrameColumn(
                "orders",
                [
                    Table.from_pydict({"sku": ["a", "b"], "qty": [1, 2]}),
                    Table.from_pydict({"sku": ["c"], "qty": [5]}),
                ],
            ),
        ]
    )


@pytest.fixture
def group_of():
    """Build a GroupColumn of value columns: group_of("g", a=[..], b=[..])."""

    def build(name, **children):
        return GroupColumn(name, [ValueColumn(k, v) for k, v in children.items()])

    return build
