"""
Unit tests for platform detection and library naming.
"""

from unittest.mock import patch

import pytest

from toolcmd.build.errors import UnsupportedToolchainError
from toolcmd.packages.platform_utils import (
    PlatformDetector,
    PlatformError,
    get_shared_lib_name,
    get_static_lib_name,
)


class TestLibraryNames:
    """Test suite for library filename formatting."""

    def test_linux(self):
        """Test Linux static and shared names."""
        assert get_static_lib_name("iro", "Linux") == "libiro.a"
        assert get_shared_lib_name("iro", "Linux") == "libiro.so"

    def test_windows(self):
        """Test Windows static and shared names."""
        assert get_static_lib_name("iro", "Windows") == "iro.lib"
        assert get_shared_lib_name("iro", "Windows") == "iro.dll"

    @pytest.mark.parametrize("os_name", ["Darwin", "FreeBSD", "linux"])
    def test_unsupported(self, os_name):
        """Test any other OS is rejected by name."""
        with pytest.raises(UnsupportedToolchainError, match=f"Unsupported platform: {os_name}"):
            get_static_lib_name("iro", os_name)
        with pytest.raises(PlatformError):
            get_shared_lib_name("iro", os_name)

    @patch("platform.system")
    def test_defaults_to_host(self, mock_system):
        """Test the host OS is used when none is given."""
        mock_system.return_value = "Windows"
        assert get_static_lib_name("lua") == "lua.lib"
        mock_system.return_value = "Linux"
        assert get_shared_lib_name("lua") == "liblua.so"

    @patch("platform.system")
    def test_unsupported_host(self, mock_system):
        """Test an unsupported host OS is rejected."""
        mock_system.return_value = "Darwin"
        with pytest.raises(PlatformError):
            get_static_lib_name("lua")


class TestPlatformDetector:
    """Test suite for PlatformDetector."""

    @patch("platform.system")
    def test_detect_os(self, mock_system):
        """Test detect_os reports platform.system()."""
        mock_system.return_value = "Linux"
        assert PlatformDetector.detect_os() == "Linux"

    def test_platform_info_keys(self):
        """Test the platform info dictionary has the expected keys."""
        info = PlatformDetector.get_platform_info()
        assert set(info) == {"system", "machine", "platform", "python_version", "is_64bit"}


class TestExplicitOsName:
    """Test suite for explicitly passed OS names."""

    @patch("platform.system")
    def test_empty_os_name(self, mock_system):
        """Test an empty OS name is rejected instead of using the host OS."""
        mock_system.return_value = "Linux"
        with pytest.raises(PlatformError, match="Unsupported platform"):
            get_static_lib_name("iro", "")
        with pytest.raises(PlatformError):
            get_shared_lib_name("iro", "")
