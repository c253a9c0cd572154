"""
Unit tests for CLI utilities.
"""

import logging

import pytest

from toolcmd.cli_utils import (
    CONSOLE_HANDLER_NAME,
    ConfigDetector,
    DefineParser,
    ErrorFormatter,
    PathValidator,
    setup_logging,
)


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_levels(self):
        """Test verbose selects DEBUG and the default is INFO."""
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG
        setup_logging(verbose=False)
        assert logging.getLogger().level == logging.INFO

    def test_single_handler(self):
        """Test repeated calls do not stack console handlers."""
        setup_logging()
        setup_logging()
        names = [h.get_name() for h in logging.getLogger().handlers]
        assert names.count(CONSOLE_HANDLER_NAME) == 1


class TestDefineParser:
    """Test suite for DefineParser."""

    def test_parse(self):
        """Test NAME and NAME=VALUE forms."""
        assert DefineParser.parse_defines(["DEBUG", "LEVEL=2", "EXPR=a=b"]) == [
            ("DEBUG", None),
            ("LEVEL", "2"),
            ("EXPR", "a=b"),
        ]

    def test_none(self):
        """Test no defines gives an empty list."""
        assert DefineParser.parse_defines(None) == []


class TestConfigDetector:
    """Test suite for ConfigDetector."""

    def test_no_config(self, tmp_path):
        """Test None is returned when no toolcmd.ini exists."""
        assert ConfigDetector.detect_settings(search_dir=tmp_path) is None

    def test_discovered_config(self, tmp_path):
        """Test a toolcmd.ini in the search directory is used."""
        (tmp_path / "toolcmd.ini").write_text("[default]\nmode = release\n")
        settings = ConfigDetector.detect_settings(search_dir=tmp_path)
        assert settings is not None
        assert settings.is_release


class TestErrorFormatter:
    """Test suite for ErrorFormatter."""

    def test_handle_error(self, capsys):
        """Test expected errors exit 1 and print the title."""
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_error("Broken", ValueError("details"))
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Broken" in err
        assert "details" in err

    def test_keyboard_interrupt(self, capsys):
        """Test interrupts exit 130."""
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_keyboard_interrupt()
        assert exc_info.value.code == 130
        assert "Interrupted" in capsys.readouterr().err

    def test_unexpected_error(self, capsys):
        """Test unexpected errors exit 1 with the exception type."""
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_unexpected_error(RuntimeError("boom"))
        assert exc_info.value.code == 1
        assert "RuntimeError: boom" in capsys.readouterr().err


class TestPathValidator:
    """Test suite for PathValidator."""

    def test_missing_file(self, tmp_path):
        """Test a missing file exits 2."""
        with pytest.raises(SystemExit) as exc_info:
            PathValidator.validate_file(tmp_path / "missing.txt")
        assert exc_info.value.code == 2

    def test_existing_file(self, tmp_path):
        """Test an existing file passes."""
        path = tmp_path / "present.txt"
        path.write_text("")
        PathValidator.validate_file(path)
