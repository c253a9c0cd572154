"""Driver interface and C++ compile driver.

A driver is a descriptor for one build step: the caller creates it, fills in
its fields and asks it for the command that performs the step. Drivers keep
no state between steps and never run anything themselves.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .command_builder import build_command
from .errors import ConfigurationError, UnsupportedToolchainError
from .flag_builder import CLANG, MSVC, FlagBuilder

logger = logging.getLogger(__name__)

SUPPORTED_COMPILERS = (CLANG, MSVC)


class Driver(ABC):
    """Interface for build step drivers.

    Implemented by:
    - CppDriver (compile one C++ file)
    - DepfileDriver (scan the includes of one C++ file)
    - LinkerDriver (link objects into an executable or shared library)
    - LuaObjDriver / LuaScriptDriver (embed or run a lua script)
    - LppDriver / LppDepfileDriver (lpp preprocessing)
    """

    @abstractmethod
    def make_command(self) -> Any:
        """Generate the command for this build step.

        Returns:
            The command as a list of arguments (program first). Dependency
            drivers return a (command, normalizer) pair instead.

        Raises:
            DriverError: If the driver is incomplete or names an unsupported tool
        """
        pass

    def _require(self, value: Any, name: str) -> None:
        if not value:
            raise ConfigurationError(
                f"{type(self).__name__}.make_command called on a driver with no {name}"
            )


@dataclass
class CppDriver(Driver):
    """Compiles a single C++ file into an object file.

    Attributes:
        binary: Compiler to use ('clang++' or 'cl')
        input: Path to the C++ file
        output: Path to the object file
        std: C++ standard (default c++20)
        opt: Optimization tier, one of none, size, speed (default none)
        defines: Preprocessor defines as names or (name, value) pairs
        include_dirs: Directories to search for includes (may be nested)
        debug_info: Emit debug info
        nortti: Build without RTTI
        export_all: Expose all symbols to the dynamic table by default
        flags: Binary-specific extra flags, e.g. {'clang++': ['-fno-exceptions']}
    """

    binary: Optional[str] = None
    input: Optional[str] = None
    output: Optional[str] = None
    std: Optional[str] = None
    opt: Optional[str] = None
    defines: List[Any] = field(default_factory=list)
    include_dirs: List[Any] = field(default_factory=list)
    debug_info: bool = False
    nortti: bool = False
    export_all: bool = False
    flags: Dict[str, List[str]] = field(default_factory=dict)

    def get_flags(self) -> List[str]:
        """Flags that do not depend on the input or output path."""
        return FlagBuilder(self).build_flags()

    def make_command(self) -> List[str]:
        if self.binary not in SUPPORTED_COMPILERS:
            raise UnsupportedToolchainError(
                f"Cpp driver not setup for compiler {self.binary}"
            )
        self._require(self.input, "input")
        self._require(self.output, "output")

        if self.binary == CLANG:
            cmd = build_command(
                CLANG,
                "-c", self.input,
                "-o", self.output,
                self.get_flags(),
            )
        else:
            cmd = build_command(
                MSVC,
                "-c", self.input,
                "-Fo:", self.output,
                self.get_flags(),
            )

        logger.debug(f"compile command for {self.input}: {cmd}")
        return cmd
