"""
Driver factory for toolcmd.

This module provides factory methods for creating drivers pre-populated from
a project's toolchain settings. It centralizes how the build mode and the
user's per-binary flags map onto driver fields.
"""

from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .compiler import CppDriver
from .depfile import DepfileDriver
from .flag_builder import CLANG
from .linker import LinkerDriver
from .preprocessor import LppDepfileDriver, LppDriver
from .script_drivers import LuaObjDriver

if TYPE_CHECKING:
    from ..config.user_config import ToolchainSettings


class DriverFactory:
    """
    Factory for creating drivers with proper configurations.

    Example usage:
        settings = UserConfig(Path("toolcmd.ini")).get_toolchain_settings("iro")
        cpp = DriverFactory.create_cpp(settings, "src/a.cpp", "build/a.o")
        cmd = cpp.make_command()
        cmd, normalize = DriverFactory.create_depfile(cpp).make_command()
    """

    @staticmethod
    def compiler_flags(settings: "ToolchainSettings") -> Dict[str, List[str]]:
        """
        Per-binary compiler flags including disabled warnings.

        Disabled warnings become -Wno-<name> flags for clang++ only.
        """
        flags = {binary: list(values) for binary, values in settings.compiler_flags.items()}
        if settings.disabled_warnings:
            flags.setdefault(CLANG, []).extend(
                f"-Wno-{warning}" for warning in settings.disabled_warnings
            )
        return flags

    @staticmethod
    def create_cpp(
        settings: "ToolchainSettings",
        input: Optional[str] = None,
        output: Optional[str] = None,
        defines: Optional[List[Any]] = None,
        include_dirs: Optional[List[Any]] = None,
        **overrides: Any
    ) -> CppDriver:
        """
        Create a CppDriver for the project's compiler.

        Debug mode compiles without optimization and with debug info;
        release mode optimizes for speed without debug info.

        Args:
            settings: Project toolchain settings
            input: Source file
            output: Object file
            defines: Preprocessor defines
            include_dirs: Include directories
            **overrides: Any other CppDriver field, applied last

        Returns:
            Configured CppDriver
        """
        cpp = CppDriver(
            binary=settings.compiler,
            input=input,
            output=output,
            opt="speed" if settings.is_release else "none",
            debug_info=not settings.is_release,
            defines=list(defines or []),
            include_dirs=list(include_dirs or []),
            flags=DriverFactory.compiler_flags(settings),
        )
        return replace(cpp, **overrides)

    @staticmethod
    def create_depfile(cpp: CppDriver) -> DepfileDriver:
        """Create a DepfileDriver scanning the same file as cpp."""
        return DepfileDriver.from_cpp(cpp)

    @staticmethod
    def create_linker(
        settings: "ToolchainSettings",
        inputs: Optional[List[Any]] = None,
        output: Optional[str] = None,
        **overrides: Any
    ) -> LinkerDriver:
        """
        Create a LinkerDriver for the project's linker.

        Args:
            settings: Project toolchain settings
            inputs: Object files
            output: Executable or shared library path
            **overrides: Any other LinkerDriver field, applied last

        Returns:
            Configured LinkerDriver
        """
        linker = LinkerDriver(
            binary=settings.linker,
            inputs=list(inputs or []),
            output=output,
            opt="speed" if settings.is_release else "none",
            debug_info=not settings.is_release,
            flags={binary: list(values) for binary, values in settings.linker_flags.items()},
        )
        return replace(linker, **overrides)

    @staticmethod
    def create_lua_obj(
        settings: "ToolchainSettings",
        input: Optional[str] = None,
        output: Optional[str] = None
    ) -> LuaObjDriver:
        """Create a LuaObjDriver; release builds strip debug info."""
        return LuaObjDriver(input=input, output=output, debug_info=not settings.is_release)

    @staticmethod
    def create_lpp(
        settings: "ToolchainSettings",
        input: Optional[str] = None,
        output: Optional[str] = None,
        requires: Optional[List[Any]] = None,
        metafile: Optional[str] = None,
        cpp: Optional[CppDriver] = None
    ) -> LppDriver:
        """Create an LppDriver embedding a CppDriver for the project's compiler."""
        return LppDriver(
            input=input,
            output=output,
            cpp=cpp or DriverFactory.create_cpp(settings),
            requires=list(requires or []),
            metafile=metafile,
        )

    @staticmethod
    def create_lpp_depfile(
        settings: "ToolchainSettings",
        input: Optional[str] = None,
        output: Optional[str] = None,
        requires: Optional[List[Any]] = None,
        cpp: Optional[CppDriver] = None
    ) -> LppDepfileDriver:
        """Create an LppDepfileDriver embedding a CppDriver for the project's compiler."""
        return LppDepfileDriver(
            input=input,
            output=output,
            cpp=cpp or DriverFactory.create_cpp(settings),
            requires=list(requires or []),
        )
