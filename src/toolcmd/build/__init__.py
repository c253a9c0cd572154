"""
Build step drivers for toolcmd.

This module turns declarative descriptions of build steps into the exact
commands a toolchain needs:
- C++ compilation (clang++, cl)
- Dependency scanning and depfile normalization
- Linking (mold, link)
- Lua object embedding and lua script execution (luajit, elua)
- lpp preprocessing
"""

from .build_utils import canonicalize_path, flatten, format_command
from .command_builder import build_command, optional
from .compiler import CppDriver, Driver
from .depfile import DepfileDriver, make_clang_normalizer, make_msvc_normalizer
from .driver_factory import DriverFactory
from .errors import (
    ConfigurationError,
    DependencyReportError,
    DriverError,
    InvalidOptionValue,
    PathCanonicalizationError,
    UnsupportedToolchainError,
)
from .flag_builder import FlagBuilder
from .linker import LinkerDriver
from .preprocessor import LppDepfileDriver, LppDriver
from .script_drivers import LuaObjDriver, LuaScriptDriver

__all__ = [
    'build_command',
    'optional',
    'flatten',
    'canonicalize_path',
    'format_command',
    'Driver',
    'CppDriver',
    'DepfileDriver',
    'LinkerDriver',
    'LuaObjDriver',
    'LuaScriptDriver',
    'LppDriver',
    'LppDepfileDriver',
    'DriverFactory',
    'FlagBuilder',
    'make_clang_normalizer',
    'make_msvc_normalizer',
    'DriverError',
    'DependencyReportError',
    'ConfigurationError',
    'UnsupportedToolchainError',
    'InvalidOptionValue',
    'PathCanonicalizationError',
]
