"""CLI utility functions for toolcmd.

This module provides common utilities used across CLI commands including:
- Logging setup
- User config detection
- Define argument parsing
- Error handling and formatting
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from toolcmd.config import ToolchainSettings, UserConfig

CONSOLE_HANDLER_NAME = "toolcmd-console"


def setup_logging(verbose: bool = False) -> None:
    """Setup logging for the CLI.

    Args:
        verbose: Log DEBUG messages (generated commands, skipped entries)
    """
    logger = logging.getLogger()
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    # Replace the handler from an earlier call instead of stacking another
    for handler in list(logger.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(level)
    console_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)


class ConfigDetector:
    """Handles user config detection from toolcmd.ini."""

    @staticmethod
    def detect_settings(
        config_path: Optional[Path] = None,
        project: Optional[str] = None,
        search_dir: Optional[Path] = None,
    ) -> Optional[ToolchainSettings]:
        """Load toolchain settings from an explicit or discovered toolcmd.ini.

        Args:
            config_path: Explicit config file (must exist)
            project: Project whose overrides apply
            search_dir: Directory searched when no path is given (default: cwd)

        Returns:
            ToolchainSettings, or None when no config file is found

        Raises:
            UserConfigError: If the config file is missing or invalid
        """
        if config_path is None:
            config_path = UserConfig.find_config(search_dir or Path.cwd())
            if config_path is None:
                return None

        config = UserConfig(config_path)
        return config.get_toolchain_settings(project)


class DefineParser:
    """Parses -D arguments from the command line."""

    @staticmethod
    def parse_defines(raw_defines: Optional[List[str]]) -> List[Tuple[str, Optional[str]]]:
        """Split NAME or NAME=VALUE strings into (name, value) pairs.

        Example:
            >>> DefineParser.parse_defines(["DEBUG", "LEVEL=2"])
            [('DEBUG', None), ('LEVEL', '2')]
        """
        defines = []
        for raw in raw_defines or []:
            if "=" in raw:
                name, value = raw.split("=", 1)
                defines.append((name, value))
            else:
                defines.append((raw, None))
        return defines


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message to stderr.

        Args:
            title: Error title (e.g., "Unsupported toolchain")
            message: Error message details
        """
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}", file=sys.stderr)
        print(message, file=sys.stderr)

    @staticmethod
    def print_warning(message: str) -> None:
        """Print formatted warning message to stderr.

        Args:
            message: Warning message
        """
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}", file=sys.stderr)

    @staticmethod
    def handle_error(title: str, error: Exception) -> None:
        """Report an expected error and exit with status 1.

        Args:
            title: Error title
            error: The exception to report
        """
        ErrorFormatter.print_error(title, str(error))
        sys.exit(1)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:", file=sys.stderr)
            print(traceback.format_exc(), file=sys.stderr)

        sys.exit(1)


class PathValidator:
    """Validates input file paths."""

    @staticmethod
    def validate_file(path: Path) -> None:
        """Validate that a file exists.

        Args:
            path: Path to validate

        Raises:
            SystemExit: If path doesn't exist or isn't a file
        """
        if not path.is_file():
            print(
                f"{ErrorFormatter.RED}✗ Error: File does not exist: {path}{ErrorFormatter.RESET}",
                file=sys.stderr,
            )
            sys.exit(2)
