"""
Linker driver for executables and shared libraries.

This module generates link commands for mold and for MSVC's link.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .build_utils import flatten
from .command_builder import build_command, optional
from .compiler import Driver
from .errors import InvalidOptionValue, UnsupportedToolchainError
from .flag_builder import binary_flags

logger = logging.getLogger(__name__)

MOLD = "mold"
MSVC_LINK = "link"

SUPPORTED_LINKERS = (MOLD, MSVC_LINK)

# link only strips unreferenced code when optimizing
LINK_OPT_FLAGS = {
    "none": "",
    "size": "-OPT:REF",
    "speed": "-OPT:REF",
}


@dataclass
class LinkerDriver(Driver):
    """
    Links object files and libraries into an executable or shared library.

    Attributes:
        binary: Linker to use ('mold' or 'link')
        inputs: Object files to link
        output: Output file path
        opt: Optimization tier, one of none, size, speed (default none)
        debug_info: Emit debug info
        export_all: Expose all symbols to the dynamic table by default
        shared_lib: Produce a shared library instead of an executable
        shared_libs: Shared libraries to link against
        static_libs: Static libraries to link against, for libraries that
            ship both a static and a shared variant under one name
        libdirs: Directories to search for libraries
        rpath: Runtime library search path baked into the output
            (default '$ORIGIN', the output's own directory)
        flags: Binary-specific extra flags, e.g. {'mold': ['--gc-sections']}
    """

    binary: Optional[str] = None
    inputs: List[Any] = field(default_factory=list)
    output: Optional[str] = None
    opt: Optional[str] = None
    debug_info: bool = False
    export_all: bool = False
    shared_lib: bool = False
    shared_libs: List[Any] = field(default_factory=list)
    static_libs: List[Any] = field(default_factory=list)
    libdirs: List[Any] = field(default_factory=list)
    rpath: Optional[str] = None
    flags: Dict[str, List[str]] = field(default_factory=dict)

    def make_command(self) -> List[str]:
        self._require(self.inputs, "inputs")
        self._require(self.output, "output")

        level = self.opt or "none"
        if level not in LINK_OPT_FLAGS:
            raise InvalidOptionValue(f"invalid optimization level specified: {self.opt}")

        custom_flags = binary_flags(self.flags, self.binary)

        if self.binary == MOLD:
            cmd = build_command(
                MOLD,
                flatten(self.inputs),
                # Expose all symbols so embedded lua objects and anything
                # marked EXPORT_DYNAMIC stay visible.
                "-E",
                optional(self.shared_lib, "-shared"),
                custom_flags,
                [f"-L{d}" for d in flatten(self.libdirs)],
                # Link order between our libraries is not tracked, so let
                # the linker revisit the whole group.
                "--start-group",
                [f"-l{lib}" for lib in flatten(self.shared_libs)],
                [f"-l:lib{lib}.a" for lib in flatten(self.static_libs)],
                "--end-group",
                f"-rpath,{self.rpath or '$ORIGIN'}",
                "-o",
                self.output,
            )
        elif self.binary == MSVC_LINK:
            if self.export_all:
                # TODO: generate a .def file listing every symbol
                logger.warning(
                    f"export_all is not supported by {MSVC_LINK}; "
                    f"no symbols are exported from {self.output}"
                )
            cmd = build_command(
                MSVC_LINK,
                flatten(self.inputs),
                "-nologo",
                LINK_OPT_FLAGS[level],
                optional(self.debug_info, "-DEBUG"),
                optional(self.shared_lib, "-DLL"),
                custom_flags,
                [f"-libpath:{d}" for d in flatten(self.libdirs)],
                [f"{lib}.lib" for lib in flatten(self.shared_libs)],
                [f"{lib}.lib" for lib in flatten(self.static_libs)],
                f"-OUT:{self.output}",
            )
        else:
            raise UnsupportedToolchainError(
                f"Linker driver not setup for linker {self.binary}"
            )

        logger.debug(f"link command for {self.output}: {cmd}")
        return cmd
