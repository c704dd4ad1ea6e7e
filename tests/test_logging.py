"""
Test Logging Module
==================

Tests for thread-local logging context.
"""

import io
import logging
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

import main as cli
from core.config import Config
from core.logging import ContextFilter, set_log_context, clear_log_context


def make_record():
    return logging.LogRecord(
        name="eliza_chat.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )


class TestLogContext:
    """Tests for set_log_context and clear_log_context."""

    def teardown_method(self):
        clear_log_context()

    def test_context_attached_to_record(self):
        """Test that context values are copied onto records."""
        set_log_context(channel="cli")

        record = make_record()
        assert ContextFilter().filter(record) is True
        assert record.extra_data == {"channel": "cli"}

    def test_clear_removes_context(self):
        """Test that cleared context no longer reaches records."""
        set_log_context(channel="tui")
        clear_log_context()

        record = make_record()
        ContextFilter().filter(record)
        assert not hasattr(record, "extra_data")

    def test_run_chat_clears_context(self):
        """Test that the stdin chat loop leaves no context behind."""
        cli.run_chat(Config(), stdin=io.StringIO("hello\n"), stdout=io.StringIO())

        record = make_record()
        ContextFilter().filter(record)
        assert not hasattr(record, "extra_data")
