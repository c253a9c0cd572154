"""
Unit tests for DriverFactory.

Tests that toolchain settings map onto driver fields.
"""

from toolcmd.build.compiler import CppDriver
from toolcmd.build.driver_factory import DriverFactory
from toolcmd.build.depfile import DepfileDriver
from toolcmd.config.user_config import ToolchainSettings


class TestCreateCpp:
    """Test suite for DriverFactory.create_cpp."""

    def test_debug_mode(self):
        """Test debug mode disables optimization and keeps debug info."""
        cpp = DriverFactory.create_cpp(ToolchainSettings(mode="debug"), "a.cpp", "a.o")
        assert cpp.binary == "clang++"
        assert cpp.opt == "none"
        assert cpp.debug_info is True

    def test_release_mode(self):
        """Test release mode optimizes for speed without debug info."""
        cpp = DriverFactory.create_cpp(ToolchainSettings(mode="release"), "a.cpp", "a.o")
        assert cpp.opt == "speed"
        assert cpp.debug_info is False

    def test_disabled_warnings(self):
        """Test disabled warnings become -Wno flags for clang++."""
        settings = ToolchainSettings(
            disabled_warnings=["switch"],
            compiler_flags={"clang++": ["-fno-exceptions"]},
        )
        cpp = DriverFactory.create_cpp(settings, "a.cpp", "a.o")
        assert cpp.flags["clang++"] == ["-fno-exceptions", "-Wno-switch"]
        assert settings.compiler_flags["clang++"] == ["-fno-exceptions"]

    def test_overrides(self):
        """Test keyword overrides are applied last."""
        cpp = DriverFactory.create_cpp(
            ToolchainSettings(mode="release"), "a.cpp", "a.o", opt="size", nortti=True
        )
        assert cpp.opt == "size"
        assert cpp.nortti is True

    def test_msvc(self):
        """Test the configured compiler is used."""
        settings = ToolchainSettings(compiler="cl")
        cmd = DriverFactory.create_cpp(settings, "a.cpp", "a.obj").make_command()
        assert cmd[0] == "cl"


class TestCreateOthers:
    """Test suite for the remaining factory methods."""

    def test_create_depfile(self):
        """Test the depfile driver mirrors the compile driver."""
        cpp = CppDriver(binary="clang++", input="a.cpp", include_dirs=["inc"])
        dep = DriverFactory.create_depfile(cpp)
        assert isinstance(dep, DepfileDriver)
        assert dep.include_dirs == ["inc"]

    def test_create_linker(self):
        """Test linker settings follow the mode and linker flags."""
        settings = ToolchainSettings(mode="release", linker="link", linker_flags={"link": ["-WX"]})
        linker = DriverFactory.create_linker(settings, ["a.obj"], "a.exe")
        assert linker.make_command() == ["link", "a.obj", "-nologo", "-OPT:REF", "-WX", "-OUT:a.exe"]

    def test_create_lua_obj(self):
        """Test release builds strip lua debug info."""
        release = DriverFactory.create_lua_obj(ToolchainSettings(mode="release"), "a.lua", "a.o")
        debug = DriverFactory.create_lua_obj(ToolchainSettings(), "a.lua", "a.o")
        assert "-g" not in release.make_command()
        assert "-g" in debug.make_command()

    def test_create_lpp(self):
        """Test lpp drivers embed a compile driver for the project."""
        lpp = DriverFactory.create_lpp(ToolchainSettings(compiler="cl"), "a.lpp", "a.cpp")
        assert lpp.cpp.binary == "cl"
        dep = DriverFactory.create_lpp_depfile(ToolchainSettings(), "a.lpp", "a.d", requires=["src"])
        assert dep.cpp.binary == "clang++"
        assert dep.requires == ["src"]
