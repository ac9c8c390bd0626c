"""
Tests for logging_manager module.

Covers the file-backed AntiblogLogger, the NullLogger fallback returned
by safe_logger, and the shared CLI error handler.
"""
import pytest
from unittest.mock import MagicMock

import click

from antiblog.core.exceptions import InvalidReferenceError
from antiblog.core.logging_manager import (
    AntiblogLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


@pytest.fixture
def file_logger(tmp_path):
    logger = AntiblogLogger(tmp_path / "logs", component_name="test")
    yield logger
    logger.close()


def read_log(path):
    return path.read_text(encoding="utf-8")


class TestAntiblogLogger:
    """Tests for the rotating file logger."""

    def test_creates_log_directory(self, tmp_path, file_logger):
        assert (tmp_path / "logs").is_dir()

    def test_operation_written_to_component_log(self, tmp_path, file_logger):
        file_logger.log_operation("rotate_completed", {"promoted": 1234567})

        content = read_log(tmp_path / "logs" / "test.log")
        assert "OPERATION - rotate_completed" in content
        assert '"promoted": 1234567' in content

    def test_debug_and_info_levels(self, tmp_path, file_logger):
        file_logger.log_debug("session_start")
        file_logger.log_info("Promoted entry 1234567", {"rank": 1})

        content = read_log(tmp_path / "logs" / "test.log")
        assert "DEBUG - session_start" in content
        assert "INFO - Promoted entry 1234567" in content

    def test_errors_go_to_error_log(self, tmp_path, file_logger):
        file_logger.log_error(ValueError("boom"), {"operation": "create_entry"})

        content = read_log(tmp_path / "logs" / "errors.log")
        assert "ERROR - ValueError: boom" in content
        assert "operation=create_entry" in content

    def test_cli_error_format(self, file_logger):
        message = file_logger.log_cli_error(InvalidReferenceError("Bad number: x"))
        assert message == "❌ InvalidReferenceError: Bad number: x"

    def test_close_detaches_handlers(self, file_logger):
        file_logger.close()
        assert file_logger.main_logger.handlers == []
        assert file_logger.error_logger.handlers == []


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_all_methods_are_no_ops(self):
        logger = NullLogger()
        logger.log_operation("op", {"key": "value"})
        logger.log_error(ValueError("test"), {"context": "test"})
        logger.log_debug("debug")
        logger.log_info("info")
        logger.log_warning("warning")

    def test_log_cli_error_returns_formatted(self):
        """NullLogger.log_cli_error should still format the message."""
        result = NullLogger().log_cli_error(ValueError("test error"))
        assert result == "❌ ValueError: test error"


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_returns_logger_when_provided(self):
        mock_logger = MagicMock(spec=AntiblogLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_returns_shared_null_logger(self):
        result = safe_logger(None)
        assert isinstance(result, NullLogger)
        assert safe_logger(None) is result

    def test_forwards_calls(self):
        mock_logger = MagicMock(spec=AntiblogLogger)
        details = {"entry_id": 1234567}

        safe_logger(mock_logger).log_operation("update_entry", details)

        mock_logger.log_operation.assert_called_once_with("update_entry", details)


class TestHandleCliError:
    """Tests for the shared CLI error handler."""

    def make_context(self, logger=None, verbose=False):
        ctx = click.Context(click.Command("test"))
        ctx.obj = {"logger": logger, "verbose": verbose}
        return ctx

    def test_exits_with_code(self, capsys):
        ctx = self.make_context()

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, ValueError("bad"), "page")

        assert exc_info.value.code == 1
        assert "❌ ValueError: bad" in capsys.readouterr().err

    def test_logs_operation_context(self):
        mock_logger = MagicMock(spec=AntiblogLogger)
        mock_logger.log_cli_error.return_value = "❌ ValueError: bad"
        ctx = self.make_context(mock_logger, verbose=True)

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("bad"), "entry", {"ref": "foo"}, exit_code=2)

        args, kwargs = mock_logger.log_cli_error.call_args
        assert args[1] == {"operation": "entry", "ref": "foo"}
        assert kwargs["show_traceback"] is True
