"""lpp drivers.

lpp preprocesses a file and then invokes a C++ compiler on the result, so
these drivers embed a CppDriver. Its input/output independent flags are
forwarded to lpp as one '--cargs=' argument, and its include directories are
added to lpp's require directories so both stages resolve the same files.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .build_utils import flatten
from .command_builder import build_command
from .compiler import CppDriver, Driver
from .depfile import Normalizer, canonical_listing
from .script_drivers import default_tool_path

logger = logging.getLogger(__name__)

CARGS_SEPARATOR = ","


def make_cargs(cpp: CppDriver) -> str:
    """Serialize the compile flags of cpp into a single --cargs= argument.

    Example:
        >>> make_cargs(CppDriver(binary="clang++", opt="speed"))[:24]
        '--cargs=-Wno-#warnings,-'
    """
    return "--cargs=" + CARGS_SEPARATOR.join(flatten(cpp.get_flags()))


def make_requires(requires: List[Any], cpp: CppDriver) -> List[str]:
    """Expand require directories (and cpp's include dirs) into -R pairs."""
    out: List[str] = []
    for require in flatten(requires) + flatten(cpp.include_dirs):
        out.extend(["-R", require])
    return out


def make_lpp_depfile_normalizer(source: str) -> Normalizer:
    """Create a normalizer for the dependency list lpp writes.

    lpp writes one path per line; blank lines are ignored and every other
    line is canonicalized the same way compiler reports are.
    """

    def normalize(output: str) -> str:
        entries = [line.strip() for line in output.splitlines() if line.strip()]
        return canonical_listing(entries, source)

    return normalize


@dataclass
class LppDriver(Driver):
    """Compiles lpp files using lpp.

    Attributes:
        binary: Path to lpp (default '<cwd>/bin/lpp')
        input: The file to compile
        output: The file lpp writes
        cpp: The CppDriver used to build the resulting file
        requires: Require directories
        metafile: Optional path to write a metafile to
    """

    binary: Optional[str] = None
    input: Optional[str] = None
    output: Optional[str] = None
    cpp: Optional[CppDriver] = None
    requires: List[Any] = field(default_factory=list)
    metafile: Optional[str] = None

    def make_command(self) -> List[str]:
        self._require(self.input, "input")
        self._require(self.output, "output")
        self._require(self.cpp, "Cpp driver")

        cmd = build_command(
            self.binary or default_tool_path("lpp"),
            self.input,
            "-o", self.output,
            # Lets generated code find the C++ file it ends up in.
            f"--cpp-path={self.output}",
            ["-om", self.metafile] if self.metafile else None,
            make_cargs(self.cpp),
            make_requires(self.requires, self.cpp),
        )
        logger.debug(f"lpp command for {self.input}: {cmd}")
        return cmd


@dataclass
class LppDepfileDriver(Driver):
    """Generates a depfile using lpp.

    Attributes:
        binary: Path to lpp (default '<cwd>/bin/lpp')
        input: The file to scan
        output: The dependency list lpp writes
        cpp: The CppDriver used to build the resulting file
        requires: Require directories
    """

    binary: Optional[str] = None
    input: Optional[str] = None
    output: Optional[str] = None
    cpp: Optional[CppDriver] = None
    requires: List[Any] = field(default_factory=list)

    def make_command(self) -> Tuple[List[str], Normalizer]:
        self._require(self.input, "input")
        self._require(self.output, "output")
        self._require(self.cpp, "Cpp driver")

        cmd = build_command(
            self.binary or default_tool_path("lpp"),
            self.input,
            make_cargs(self.cpp),
            make_requires(self.requires, self.cpp),
            "-D", self.output,
        )
        logger.debug(f"lpp depfile command for {self.input}: {cmd}")
        return cmd, make_lpp_depfile_normalizer(str(self.input))
