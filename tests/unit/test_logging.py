"""Tests for treeframe._logging module."""

import logging

import pytest

from treeframe import ColumnPath
from treeframe._logging import (
    disable_logging,
    enable_debug_logging,
    format_paths,
    get_logger,
    setup_basic_logging,
)


class TestGetLogger:
    """get_logger() namespace handling."""

    def test_already_namespaced_unchanged(self):
        logger = get_logger("treeframe.restructure._merge")
        assert logger.name == "treeframe.restructure._merge"

    def test_bare_name_gets_prefixed(self):
        logger = get_logger("mymodule")
        assert logger.name == "treeframe.mymodule"

    def test_dunder_main_becomes_root(self):
        logger = get_logger("__main__")
        assert logger.name == "treeframe"


class TestFormatPaths:
    """Path lists in log messages."""

    def test_short_list(self):
        assert format_paths([ColumnPath(["a"]), ColumnPath(["b", "c"])]) == "['a', 'b.c']"

    def test_long_list_is_summarized(self):
        paths = [ColumnPath([name]) for name in "abcdefg"]
        assert format_paths(paths) == "['a', 'b', 'c', 'd', 'e', ... (+2 more)]"


class TestSetupBasicLogging:
    """setup_basic_logging() configuration."""

    @pytest.fixture(autouse=True)
    def cleanup_handlers(self):
        """Remove handlers added during tests."""
        logger = logging.getLogger("treeframe")
        original_handlers = logger.handlers[:]
        original_level = logger.level
        original_propagate = logger.propagate
        yield
        logger.handlers = original_handlers
        logger.level = original_level
        logger.propagate = original_propagate

    def test_sets_requested_level(self):
        setup_basic_logging(level=logging.WARNING)
        logger = logging.getLogger("treeframe")
        assert logger.level == logging.WARNING

    def test_does_not_duplicate_handlers_on_repeated_calls(self):
        setup_basic_logging()
        setup_basic_logging()
        setup_basic_logging()

        logger = logging.getLogger("treeframe")
        assert len(logger.handlers) == 1

    def test_disables_propagation(self):
        setup_basic_logging()
        logger = logging.getLogger("treeframe")
        assert logger.propagate is False


class TestConvenienceFunctions:
    """enable_debug_logging() and disable_logging()."""

    @pytest.fixture(autouse=True)
    def cleanup_logger(self):
        logger = logging.getLogger("treeframe")
        original_handlers = logger.handlers[:]
        original_level = logger.level
        original_propagate = logger.propagate
        yield
        logger.handlers = original_handlers
        logger.level = original_level
        logger.propagate = original_propagate

    def test_enable_debug_sets_debug_level(self):
        enable_debug_logging()
        logger = logging.getLogger("treeframe")
        assert logger.level == logging.DEBUG

    def test_debug_after_info_lowers_existing_handler(self):
        setup_basic_logging(level=logging.INFO)
        enable_debug_logging()

        logger = logging.getLogger("treeframe")
        assert logger.handlers
        assert all(h.level == logging.DEBUG for h in logger.handlers)

    def test_disable_logging_silences_completely(self):
        disable_logging()
        logger = logging.getLogger("treeframe")
        assert logger.level > logging.CRITICAL


class TestOperationLogging:
    """Structural operations log through the treeframe namespace."""

    def test_move_logs_info(self, flat_table, caplog):
        with caplog.at_level(logging.INFO, logger="treeframe"):
            flat_table.move_after("city", "name")

        assert "Moved ['city'] after 'name'" in caplog.text

    def test_merge_logs_debug(self, flat_table, caplog):
        with caplog.at_level(logging.DEBUG, logger="treeframe"):
            flat_table.move_after("city", "name")

        records = [r for r in caplog.records if r.name == "treeframe.restructure._merge"]
        assert records
        assert all(r.levelno == logging.DEBUG for r in records)
