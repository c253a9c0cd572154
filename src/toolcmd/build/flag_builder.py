"""Compilation Flag Builder.

This module translates the toolchain-agnostic compile settings of a
CppDriver into the flag syntax of a concrete compiler.

Design:
    - Two compiler families are supported: clang++ and cl
    - Optimization tiers map through per-family tables; the tables
      differ for the 'size' tier (-Os vs -O1)
    - Flags that do not depend on input/output paths are produced here so
      they can be reused by the lpp drivers, which forward them as one
      argument
    - Any other compiler yields no flags at all
"""

import shlex
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple, Union

from .build_utils import flatten
from .command_builder import build_command, optional
from .errors import InvalidOptionValue

if TYPE_CHECKING:
    from .compiler import CppDriver

Define = Tuple[str, Optional[str]]

CLANG = "clang++"
MSVC = "cl"

OPT_LEVELS = ("none", "size", "speed")

CLANG_OPT_FLAGS = {
    "none": "-O0",
    "size": "-Os",
    "speed": "-O2",
}

MSVC_OPT_FLAGS = {
    "none": "-O0",
    "size": "-O1",
    "speed": "-O2",
}

DEFAULT_STD = "c++20"


def normalize_defines(
    defines: Optional[Iterable[Union[str, Sequence[Optional[str]]]]]
) -> List[Define]:
    """Normalize defines into (name, value) pairs.

    Args:
        defines: Names, or (name,) / (name, value) sequences

    Returns:
        List of (name, value) tuples, value None when the define is bare

    Example:
        >>> normalize_defines(["DEBUG", ("LEVEL", "2")])
        [('DEBUG', None), ('LEVEL', '2')]
    """
    result: List[Define] = []
    for define in defines or []:
        if isinstance(define, str):
            result.append((define, None))
        elif len(define) == 1:
            result.append((define[0], None))
        else:
            result.append((define[0], define[1]))
    return result


def binary_flags(flags: Optional[dict], binary: Optional[str]) -> List[str]:
    """Extra flags registered for binary.

    A value given as one string is split like a command line instead of
    being iterated character by character.

    Example:
        >>> binary_flags({"clang++": "-O3 -g"}, "clang++")
        ['-O3', '-g']
    """
    value = (flags or {}).get(binary)
    if isinstance(value, str):
        return FlagBuilder.parse_flag_string(value)
    return flatten(value)


class FlagBuilder:
    """Builds compiler flags for one CppDriver.

    This class handles:
    - Parsing flag strings with quoted values
    - Mapping optimization tiers per compiler family
    - Translating defines and include directories
    - Emitting family-specific diagnostics, RTTI and visibility flags
    """

    def __init__(self, cpp: "CppDriver"):
        """Initialize flag builder.

        Args:
            cpp: Compile driver whose settings are translated
        """
        self.cpp = cpp

    @staticmethod
    def parse_flag_string(flag_string: str) -> List[str]:
        """Parse a flag string that may contain quoted values.

        Args:
            flag_string: String containing compiler flags

        Returns:
            List of individual flags with quotes preserved

        Example:
            >>> FlagBuilder.parse_flag_string('-DFOO="bar baz" -DTEST')
            ['-DFOO=bar baz', '-DTEST']
        """
        try:
            return shlex.split(flag_string)
        except ValueError:
            return flag_string.split()

    @staticmethod
    def define_flags(defines: Optional[Iterable]) -> List[str]:
        """Translate defines to -D flags (shared by clang++ and cl)."""
        flags = []
        for name, value in normalize_defines(defines):
            if value is not None:
                flags.append(f"-D{name}={value}")
            else:
                flags.append(f"-D{name}")
        return flags

    @staticmethod
    def include_flags(include_dirs: Optional[Iterable]) -> List[str]:
        """Translate include directories to -I flags (shared by clang++ and cl)."""
        return [f"-I{d}" for d in flatten(include_dirs)]

    @staticmethod
    def opt_flag(binary: str, opt: Optional[str]) -> str:
        """Map an optimization tier to the flag used by binary.

        Raises:
            InvalidOptionValue: If opt is not one of none, size or speed
        """
        table = MSVC_OPT_FLAGS if binary == MSVC else CLANG_OPT_FLAGS
        level = opt or "none"
        if level not in table:
            raise InvalidOptionValue(f"invalid optimization level specified: {opt}")
        return table[level]

    def custom_flags(self) -> List[str]:
        """Flags the caller registered for this driver's binary."""
        return binary_flags(self.cpp.flags, self.cpp.binary)

    def build_flags(self) -> List[str]:
        """Build the input/output independent flags for the compiler.

        Returns:
            Ordered flag list, empty for an unrecognized compiler

        Raises:
            InvalidOptionValue: If the optimization tier is invalid
        """
        if self.cpp.binary == CLANG:
            return self._clang_flags()
        elif self.cpp.binary == MSVC:
            return self._msvc_flags()
        return []

    def _clang_flags(self) -> List[str]:
        cpp = self.cpp
        return build_command(
            "-Wno-#warnings",
            "-fdiagnostics-absolute-paths",
            f"-std={cpp.std or DEFAULT_STD}",
            optional(cpp.nortti, "-fno-rtti"),
            self.opt_flag(CLANG, cpp.opt),
            optional(cpp.debug_info, "-ggdb3"),
            self.custom_flags(),
            self.define_flags(cpp.defines),
            self.include_flags(cpp.include_dirs),
            "-fpatchable-function-entry=16",
            # Only EXPORT_DYNAMIC marked symbols reach the dynamic table
            optional(not cpp.export_all, "-fvisibility=hidden"),
        )

    def _msvc_flags(self) -> List[str]:
        cpp = self.cpp
        return build_command(
            "-utf-8",
            "-nologo",
            "-FC",  # full paths in diagnostics
            f"-std:{cpp.std or DEFAULT_STD}",
            "-GR-" if cpp.nortti else "-GR",
            self.opt_flag(MSVC, cpp.opt),
            optional(cpp.debug_info, ["-Z7", "-Od"]),
            self.custom_flags(),
            self.define_flags(cpp.defines),
            self.include_flags(cpp.include_dirs),
        )
