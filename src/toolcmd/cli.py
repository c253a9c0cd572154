"""
Command-line interface for toolcmd.

This module provides the `toolcmd` CLI tool, which prints the command a
toolchain needs for one build step and normalizes dependency scanner output.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from toolcmd import __version__
from toolcmd.build import (
    CppDriver,
    DriverError,
    DriverFactory,
    LinkerDriver,
    format_command,
)
from toolcmd.build.flag_builder import CLANG, OPT_LEVELS
from toolcmd.build.linker import MOLD
from toolcmd.cli_utils import (
    ConfigDetector,
    DefineParser,
    ErrorFormatter,
    PathValidator,
    setup_logging,
)
from toolcmd.config import UserConfig, UserConfigError
from toolcmd.packages import PlatformDetector, get_shared_lib_name, get_static_lib_name

logger = logging.getLogger(__name__)


@dataclass
class CompileArgs:
    """Arguments for the compile command."""

    input: str
    output: str
    binary: Optional[str] = None
    std: Optional[str] = None
    opt: Optional[str] = None
    defines: List[str] = field(default_factory=list)
    include_dirs: List[str] = field(default_factory=list)
    debug_info: bool = False
    nortti: bool = False
    export_all: bool = False
    config: Optional[Path] = None
    project: Optional[str] = None


@dataclass
class DepfileArgs:
    """Arguments for the depfile command."""

    input: str
    binary: Optional[str] = None
    defines: List[str] = field(default_factory=list)
    include_dirs: List[str] = field(default_factory=list)
    normalize: Optional[str] = None
    config: Optional[Path] = None
    project: Optional[str] = None


@dataclass
class LinkArgs:
    """Arguments for the link command."""

    inputs: List[str]
    output: str
    binary: Optional[str] = None
    opt: Optional[str] = None
    debug_info: bool = False
    shared: bool = False
    libdirs: List[str] = field(default_factory=list)
    libs: List[str] = field(default_factory=list)
    static_libs: List[str] = field(default_factory=list)
    rpath: Optional[str] = None
    config: Optional[Path] = None
    project: Optional[str] = None


@dataclass
class LibnameArgs:
    """Arguments for the libname command."""

    name: str
    shared: bool = False
    os_name: Optional[str] = None


@dataclass
class ConfigArgs:
    """Arguments for the config command."""

    config: Optional[Path] = None
    project: Optional[str] = None


def _make_cpp(args: CompileArgs) -> CppDriver:
    settings = ConfigDetector.detect_settings(args.config, args.project)
    defines = DefineParser.parse_defines(args.defines)

    if settings is not None:
        cpp = DriverFactory.create_cpp(
            settings, args.input, args.output, defines, args.include_dirs
        )
    else:
        cpp = CppDriver(
            binary=CLANG,
            input=args.input,
            output=args.output,
            defines=defines,
            include_dirs=list(args.include_dirs),
        )

    # Explicit options win over config
    if args.binary:
        cpp.binary = args.binary
    if args.std:
        cpp.std = args.std
    if args.opt:
        cpp.opt = args.opt
    if args.debug_info:
        cpp.debug_info = True
    if args.nortti:
        cpp.nortti = True
    if args.export_all:
        cpp.export_all = True
    return cpp


def compile_command(args: CompileArgs) -> None:
    """Print the command compiling one C++ file.

    Examples:
        toolcmd compile src/a.cpp -o build/a.o
        toolcmd compile src/a.cpp -o build/a.o --binary cl --opt size
        toolcmd compile src/a.cpp -o build/a.o -D DEBUG -D LEVEL=2 -I include
    """
    cpp = _make_cpp(args)
    print(format_command(cpp.make_command()))


def depfile_command(args: DepfileArgs) -> None:
    """Print the dependency scan command, or normalize captured scan output.

    Examples:
        toolcmd depfile src/a.cpp -I include
        clang++ src/a.cpp -MM -MG | toolcmd depfile src/a.cpp --normalize -
    """
    cpp = _make_cpp(
        CompileArgs(
            input=args.input,
            output="",
            binary=args.binary,
            defines=args.defines,
            include_dirs=args.include_dirs,
            config=args.config,
            project=args.project,
        )
    )
    cmd, normalize = DriverFactory.create_depfile(cpp).make_command()

    if args.normalize is None:
        print(format_command(cmd))
        return

    if args.normalize == "-":
        captured = sys.stdin.read()
    else:
        path = Path(args.normalize)
        PathValidator.validate_file(path)
        captured = path.read_text(encoding="utf-8")

    listing = normalize(captured)
    if listing:
        print(listing)


def link_command(args: LinkArgs) -> None:
    """Print the command linking objects into an executable or shared library.

    Examples:
        toolcmd link a.o b.o -o app -l iro
        toolcmd link a.o -o libfoo.so --shared -L lib --static-lib luajit
        toolcmd link a.obj -o app.exe --binary link --opt speed
    """
    settings = ConfigDetector.detect_settings(args.config, args.project)
    if settings is not None:
        linker = DriverFactory.create_linker(settings, args.inputs, args.output)
    else:
        linker = LinkerDriver(binary=MOLD, inputs=list(args.inputs), output=args.output)

    if args.binary:
        linker.binary = args.binary
    if args.opt:
        linker.opt = args.opt
    if args.debug_info:
        linker.debug_info = True
    if args.rpath:
        linker.rpath = args.rpath
    linker.shared_lib = args.shared
    linker.libdirs = list(args.libdirs)
    linker.shared_libs = list(args.libs)
    linker.static_libs = list(args.static_libs)

    print(format_command(linker.make_command()))


def libname_command(args: LibnameArgs) -> None:
    """Print the platform filename of a library.

    Examples:
        toolcmd libname iro                  # libiro.a on Linux
        toolcmd libname iro --shared --os Windows   # iro.dll
    """
    if args.shared:
        print(get_shared_lib_name(args.name, args.os_name))
    else:
        print(get_static_lib_name(args.name, args.os_name))


def config_command(args: ConfigArgs) -> None:
    """Print the toolchain settings resolved from toolcmd.ini."""
    config_path = args.config or UserConfig.find_config(Path.cwd())
    if config_path is None:
        raise UserConfigError(f"no toolcmd.ini found in {Path.cwd()}")

    config = UserConfig(config_path)
    settings = config.get_toolchain_settings(args.project)

    print(f"config:     {config_path}")
    print(f"projects:   {', '.join(config.get_projects())}")
    print(f"max_jobs:   {config.get_max_jobs()}")
    print(f"mode:       {settings.mode}")
    print(f"compiler:   {settings.compiler}")
    print(f"linker:     {settings.linker}")
    if settings.disabled_warnings:
        print(f"disabled:   {' '.join(settings.disabled_warnings)}")
    for binary, flags in settings.compiler_flags.items():
        print(f"cflags[{binary}]: {format_command(flags)}")
    for binary, flags in settings.linker_flags.items():
        print(f"lflags[{binary}]: {format_command(flags)}")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="toolcmd.ini to take defaults from (default: ./toolcmd.ini if present)",
    )
    parser.add_argument(
        "--project",
        default=None,
        help="Project whose config overrides apply",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )


def _add_compile_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--binary",
        default=None,
        help="Compiler to use: clang++ or cl (default: clang++)",
    )
    parser.add_argument(
        "-D",
        dest="defines",
        action="append",
        default=[],
        metavar="NAME[=VALUE]",
        help="Preprocessor define",
    )
    parser.add_argument(
        "-I",
        dest="include_dirs",
        action="append",
        default=[],
        metavar="DIR",
        help="Include directory",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the toolcmd CLI."""
    parser = argparse.ArgumentParser(
        prog="toolcmd",
        description="toolcmd - toolchain command generation",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"toolcmd {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Compile command
    compile_parser = subparsers.add_parser(
        "compile",
        help="Print the command compiling one C++ file",
    )
    compile_parser.add_argument("input", help="C++ source file")
    compile_parser.add_argument("-o", "--output", required=True, help="Object file")
    _add_compile_arguments(compile_parser)
    compile_parser.add_argument("--std", default=None, help="C++ standard (default: c++20)")
    compile_parser.add_argument(
        "--opt",
        choices=OPT_LEVELS,
        default=None,
        help="Optimization tier (default: none)",
    )
    compile_parser.add_argument("--debug-info", action="store_true", help="Emit debug info")
    compile_parser.add_argument("--nortti", action="store_true", help="Disable RTTI")
    compile_parser.add_argument(
        "--export-all",
        action="store_true",
        help="Expose all symbols to the dynamic table",
    )
    _add_common_arguments(compile_parser)

    # Depfile command
    depfile_parser = subparsers.add_parser(
        "depfile",
        help="Print the dependency scan command or normalize its output",
    )
    depfile_parser.add_argument("input", help="C++ source file")
    _add_compile_arguments(depfile_parser)
    depfile_parser.add_argument(
        "--normalize",
        default=None,
        metavar="FILE",
        help="Normalize captured scanner output from FILE ('-' for stdin)",
    )
    _add_common_arguments(depfile_parser)

    # Link command
    link_parser = subparsers.add_parser(
        "link",
        help="Print the command linking an executable or shared library",
    )
    link_parser.add_argument("inputs", nargs="+", help="Object files")
    link_parser.add_argument("-o", "--output", required=True, help="Output file")
    link_parser.add_argument(
        "--binary",
        default=None,
        help="Linker to use: mold or link (default: mold)",
    )
    link_parser.add_argument(
        "--opt",
        choices=OPT_LEVELS,
        default=None,
        help="Optimization tier (default: none)",
    )
    link_parser.add_argument("--debug-info", action="store_true", help="Emit debug info")
    link_parser.add_argument("--shared", action="store_true", help="Link a shared library")
    link_parser.add_argument(
        "-L", dest="libdirs", action="append", default=[], metavar="DIR",
        help="Library search directory",
    )
    link_parser.add_argument(
        "-l", dest="libs", action="append", default=[], metavar="LIB",
        help="Library to link against",
    )
    link_parser.add_argument(
        "--static-lib", dest="static_libs", action="append", default=[], metavar="LIB",
        help="Library to link statically",
    )
    link_parser.add_argument("--rpath", default=None, help="Runtime library search path")
    _add_common_arguments(link_parser)

    # Libname command
    libname_parser = subparsers.add_parser(
        "libname",
        help="Print the platform filename of a library",
    )
    libname_parser.add_argument("name", help="Library short name")
    libname_parser.add_argument("--shared", action="store_true", help="Shared library name")
    libname_parser.add_argument(
        "--os",
        dest="os_name",
        default=None,
        help="Target OS: Linux or Windows (default: host OS)",
    )
    libname_parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")

    # Config command
    config_parser = subparsers.add_parser(
        "config",
        help="Print the toolchain settings resolved from toolcmd.ini",
    )
    _add_common_arguments(config_parser)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """toolcmd - toolchain command generation."""
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    verbose = parsed_args.verbose
    setup_logging(verbose)
    logger.debug(f"platform: {PlatformDetector.get_platform_info()}")

    try:
        if parsed_args.command == "compile":
            compile_command(
                CompileArgs(
                    input=parsed_args.input,
                    output=parsed_args.output,
                    binary=parsed_args.binary,
                    std=parsed_args.std,
                    opt=parsed_args.opt,
                    defines=parsed_args.defines,
                    include_dirs=parsed_args.include_dirs,
                    debug_info=parsed_args.debug_info,
                    nortti=parsed_args.nortti,
                    export_all=parsed_args.export_all,
                    config=parsed_args.config,
                    project=parsed_args.project,
                )
            )
        elif parsed_args.command == "depfile":
            depfile_command(
                DepfileArgs(
                    input=parsed_args.input,
                    binary=parsed_args.binary,
                    defines=parsed_args.defines,
                    include_dirs=parsed_args.include_dirs,
                    normalize=parsed_args.normalize,
                    config=parsed_args.config,
                    project=parsed_args.project,
                )
            )
        elif parsed_args.command == "link":
            link_command(
                LinkArgs(
                    inputs=parsed_args.inputs,
                    output=parsed_args.output,
                    binary=parsed_args.binary,
                    opt=parsed_args.opt,
                    debug_info=parsed_args.debug_info,
                    shared=parsed_args.shared,
                    libdirs=parsed_args.libdirs,
                    libs=parsed_args.libs,
                    static_libs=parsed_args.static_libs,
                    rpath=parsed_args.rpath,
                    config=parsed_args.config,
                    project=parsed_args.project,
                )
            )
        elif parsed_args.command == "libname":
            libname_command(
                LibnameArgs(
                    name=parsed_args.name,
                    shared=parsed_args.shared,
                    os_name=parsed_args.os_name,
                )
            )
        elif parsed_args.command == "config":
            config_command(
                ConfigArgs(config=parsed_args.config, project=parsed_args.project)
            )
    except DriverError as e:
        ErrorFormatter.handle_error(type(e).__name__, e)
    except UserConfigError as e:
        ErrorFormatter.handle_error("Configuration error", e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, verbose)


if __name__ == "__main__":
    main()
