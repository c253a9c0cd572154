"""Unit tests for the lua script drivers."""

from pathlib import Path

import pytest

from toolcmd.build.errors import ConfigurationError
from toolcmd.build.script_drivers import LuaObjDriver, LuaScriptDriver, default_tool_path


class TestLuaObjDriver:
    """Test suite for LuaObjDriver."""

    def test_with_debug_info(self):
        """Test debug info is kept by default."""
        driver = LuaObjDriver(input="mod.lua", output="mod.o")
        assert driver.make_command() == ["luajit", "-b", "-g", "mod.lua", "mod.o"]

    def test_without_debug_info(self):
        """Test -g is omitted when debug info is off."""
        driver = LuaObjDriver(input="mod.lua", output="mod.o", debug_info=False)
        assert driver.make_command() == ["luajit", "-b", "mod.lua", "mod.o"]

    def test_missing_output(self):
        """Test a driver without an output fails."""
        with pytest.raises(ConfigurationError, match="LuaObjDriver"):
            LuaObjDriver(input="mod.lua").make_command()


class TestLuaScriptDriver:
    """Test suite for LuaScriptDriver."""

    def test_default_binary(self, clean_cwd):
        """Test elua defaults to bin/elua under the working directory."""
        cmd = LuaScriptDriver(input="build.lua").make_command()
        assert cmd == [str(Path.cwd() / "bin" / "elua"), "build.lua"]

    def test_explicit_binary(self):
        """Test an explicit interpreter is used as given."""
        cmd = LuaScriptDriver(binary="/usr/bin/elua", input="build.lua").make_command()
        assert cmd == ["/usr/bin/elua", "build.lua"]

    def test_missing_input(self):
        """Test a driver without an input fails."""
        with pytest.raises(ConfigurationError):
            LuaScriptDriver().make_command()


class TestDefaultToolPath:
    """Test suite for default_tool_path."""

    def test_under_cwd(self, clean_cwd):
        """Test tools are looked up in <cwd>/bin."""
        assert default_tool_path("lpp") == str(Path.cwd() / "bin" / "lpp")
