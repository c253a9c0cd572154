"""Platform Detection Utilities.

This module provides utilities for detecting the host OS and for naming
libraries the way that OS expects.

Supported Platforms:
    - Linux: lib<name>.a, lib<name>.so
    - Windows: <name>.lib, <name>.dll
"""

import platform
import sys
from typing import Optional

from ..build.errors import UnsupportedToolchainError


class PlatformError(UnsupportedToolchainError):
    """Raised when platform detection fails or platform is unsupported."""

    pass


LINUX = "Linux"
WINDOWS = "Windows"


class PlatformDetector:
    """Detects the current OS for library naming and toolchain selection."""

    @staticmethod
    def detect_os() -> str:
        """Detect the OS the build runs on.

        Returns:
            OS name as reported by platform.system() (e.g. 'Linux', 'Windows')
        """
        return platform.system()

    @staticmethod
    def get_platform_info() -> dict:
        """Get detailed information about the current platform.

        Returns:
            Dictionary with platform information including system, machine, and Python info
        """
        return {
            "system": platform.system(),
            "machine": platform.machine(),
            "platform": platform.platform(),
            "python_version": platform.python_version(),
            "is_64bit": sys.maxsize > 2**32,
        }


def _resolve_os(os_name: Optional[str]) -> str:
    resolved = PlatformDetector.detect_os() if os_name is None else os_name
    if resolved not in (LINUX, WINDOWS):
        raise PlatformError(f"Unsupported platform: {resolved}")
    return resolved


def get_static_lib_name(lib: str, os_name: Optional[str] = None) -> str:
    """Format a library name into a static lib filename for the target OS.

    Args:
        lib: Library short name (e.g. 'iro')
        os_name: 'Linux' or 'Windows' (default: the host OS)

    Returns:
        'lib<name>.a' on Linux, '<name>.lib' on Windows

    Raises:
        PlatformError: If the OS is not supported
    """
    if _resolve_os(os_name) == LINUX:
        return f"lib{lib}.a"
    return f"{lib}.lib"


def get_shared_lib_name(lib: str, os_name: Optional[str] = None) -> str:
    """Format a library name into a shared lib filename for the target OS.

    Args:
        lib: Library short name (e.g. 'iro')
        os_name: 'Linux' or 'Windows' (default: the host OS)

    Returns:
        'lib<name>.so' on Linux, '<name>.dll' on Windows

    Raises:
        PlatformError: If the OS is not supported
    """
    if _resolve_os(os_name) == LINUX:
        return f"lib{lib}.so"
    return f"{lib}.dll"
