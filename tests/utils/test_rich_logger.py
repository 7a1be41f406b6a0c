"""Tests for rich logging setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from docpress.utils.rich_logger import render_table, set_debug, setup_logging


class TestRichLogger:
    """Test suite for rich logging setup."""

    def test_setup_installs_single_handler(self):
        """Repeated setup replaces the handler instead of stacking them."""
        setup_logging("DEBUG")
        logger = setup_logging("INFO")

        handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.INFO

    def test_records_reach_console(self):
        """Messages from package modules are rendered by the handler."""
        console = Console(record=True, width=120)
        setup_logging("DEBUG", console=console)
        logging.getLogger("docpress.engine.test").debug("hello from the engine")

        assert "hello from the engine" in console.export_text()

    def test_set_debug(self):
        """Debug mode toggles the package logger level."""
        set_debug(True)
        assert logging.getLogger("docpress").level == logging.DEBUG
        set_debug(False)
        assert logging.getLogger("docpress").level == logging.NOTSET

    def test_render_table(self):
        """Tables show every key and value."""
        console = Console(record=True, width=120)
        render_table("Info", {"pages": 3, "valid": True}, console=console)
        output = console.export_text()

        assert "pages" in output
        assert "True" in output
