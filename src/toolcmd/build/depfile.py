"""Dependency scanning driver.

A DepfileDriver produces two things: a command that makes a compiler report
the files a C++ file includes, and a normalizer that turns the captured
output of that command into a depfile. A depfile is a newline delimited list
of absolute paths to every file the source depends on.

Paths beginning with 'generated' (relative to the working directory the
tools run in) are produced by the lpp stage rather than read from disk, so
they are never tracked.
"""

import copy
import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .build_utils import canonicalize_path
from .command_builder import build_command
from .compiler import CppDriver, Driver
from .errors import (
    DependencyReportError,
    PathCanonicalizationError,
    UnsupportedToolchainError,
)
from .flag_builder import CLANG, MSVC, FlagBuilder, binary_flags

logger = logging.getLogger(__name__)

GENERATED_PREFIX = "generated"

# Start of the '"Includes": [...]' array in a cl -sourceDependencies- report
_MSVC_INCLUDES_RE = re.compile(r'"Includes"\s*:\s*')

Normalizer = Callable[[str], str]


def is_generated(path: str, base_dir: Optional[str] = None) -> bool:
    """Check whether a dependency entry names generated content.

    Absolute entries are compared by their path relative to base_dir
    (default: cwd), so compilers that report absolute paths are filtered
    the same way as those that echo the relative include.
    """
    if os.path.isabs(path):
        try:
            path = os.path.relpath(path, base_dir or os.getcwd())
        except ValueError:
            # Different drive on Windows
            return False
    return path.startswith(GENERATED_PREFIX)


def canonical_listing(entries: List[str], source: str) -> str:
    """Canonicalize dependency entries into depfile text.

    Raises:
        PathCanonicalizationError: If an entry does not resolve to a file
    """
    out = []
    for entry in entries:
        if is_generated(entry):
            logger.debug(f"skipping generated dependency {entry} of {source}")
            continue
        canonical = canonicalize_path(entry)
        if canonical is None:
            raise PathCanonicalizationError(
                f"while generating depfile for {source}:\n"
                f"failed to canonicalize depfile path '{entry}'"
            )
        out.append(canonical)
    return "\n".join(out)


def make_clang_normalizer(source: str) -> Normalizer:
    """Create a normalizer for the output of clang++ -MM -MG.

    The make rule is split on whitespace. Target tokens (ending in ':') and
    line continuations are dropped and every other token is canonicalized.

    Args:
        source: The scanned file, used in error messages

    Returns:
        Function mapping captured output to a depfile
    """

    def normalize(output: str) -> str:
        entries = [
            token for token in output.split()
            if not token.endswith(":") and token != "\\"
        ]
        return canonical_listing(entries, source)

    return normalize


def _report_error(source: str, problem: str) -> DependencyReportError:
    return DependencyReportError(
        f"while generating depfile for {source}:\n{problem}"
    )


def parse_msvc_includes(output: str, source: str) -> Optional[List[str]]:
    """Extract the "Includes" array from a cl dependency report.

    The report is normally pure JSON with the array under "Data". When cl
    prints other text around it, the array is decoded in place.

    Returns:
        The reported include paths, or None when the report has no array

    Raises:
        DependencyReportError: If the array is present but malformed
    """
    try:
        report = json.loads(output)
    except ValueError:
        report = None

    if isinstance(report, dict):
        data = report.get("Data")
        if isinstance(data, dict) and "Includes" in data:
            includes = data["Includes"]
        else:
            includes = report.get("Includes")
    else:
        match = _MSVC_INCLUDES_RE.search(output)
        if match is None:
            return None
        try:
            includes, _ = json.JSONDecoder().raw_decode(output, match.end())
        except ValueError as e:
            raise _report_error(source, f"malformed Includes array: {e}") from e

    if includes is None:
        return None
    if not isinstance(includes, list) or not all(isinstance(i, str) for i in includes):
        raise _report_error(source, "Includes is not a list of paths")
    return includes


def make_msvc_normalizer(source: str) -> Normalizer:
    """Create a normalizer for the report of cl -sourceDependencies-.

    Every entry of the report's "Includes" array is listed. cl already
    reports absolute paths so they are listed as reported.

    Args:
        source: The scanned file, used in log and error messages

    Returns:
        Function mapping captured output to a depfile
    """

    def normalize(output: str) -> str:
        includes = parse_msvc_includes(output, source)
        if includes is None:
            logger.warning(f"no Includes array in dependency report for {source}")
            return ""
        return "\n".join(
            include for include in includes if not is_generated(include)
        )

    return normalize


@dataclass
class DepfileDriver(Driver):
    """Generates the dependencies of a C++ file.

    Attributes:
        binary: Compiler used for scanning ('clang++' or 'cl')
        input: Path to the C++ file
        defines: Preprocessor defines as names or (name, value) pairs
        include_dirs: Directories to search for includes (may be nested)
        flags: Binary-specific extra flags
    """

    binary: Optional[str] = None
    input: Optional[str] = None
    defines: List[Any] = field(default_factory=list)
    include_dirs: List[Any] = field(default_factory=list)
    flags: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_cpp(cls, cpp: CppDriver) -> "DepfileDriver":
        """Create a DepfileDriver from an existing CppDriver.

        The lists are copied so later changes to either driver do not
        affect the other. Compile-only settings (std, opt, output, nortti,
        export_all, debug_info) are not carried over.
        """
        return cls(
            binary=cpp.binary,
            input=cpp.input,
            defines=copy.deepcopy(cpp.defines),
            include_dirs=copy.deepcopy(cpp.include_dirs),
            flags=copy.deepcopy(cpp.flags),
        )

    def make_command(self) -> Tuple[List[str], Normalizer]:
        self._require(self.input, "input")

        scan_flags = build_command(
            binary_flags(self.flags, self.binary),
            FlagBuilder.define_flags(self.defines),
            FlagBuilder.include_flags(self.include_dirs),
        )

        if self.binary == CLANG:
            cmd = build_command(CLANG, self.input, scan_flags, "-MM", "-MG")
            normalizer = make_clang_normalizer(str(self.input))
        elif self.binary == MSVC:
            cmd = build_command(MSVC, self.input, scan_flags, "-sourceDependencies-")
            normalizer = make_msvc_normalizer(str(self.input))
        else:
            raise UnsupportedToolchainError(
                f"Depfile driver not setup for dependency finder {self.binary}"
            )

        logger.debug(f"depfile command for {self.input}: {cmd}")
        return cmd, normalizer
