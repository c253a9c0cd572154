"""Lua script drivers.

LuaObjDriver turns a lua file into an object file so lua modules can be
linked statically into executables. LuaScriptDriver runs a standalone lua
script with elua.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .command_builder import build_command, optional
from .compiler import Driver

logger = logging.getLogger(__name__)

LUAJIT = "luajit"


def default_tool_path(name: str) -> str:
    """Path of a tool built into '<cwd>/bin'."""
    return str(Path.cwd() / "bin" / name)


@dataclass
class LuaObjDriver(Driver):
    """Creates an object file from a lua file.

    Attributes:
        input: Input lua file
        output: Output object file
        debug_info: Keep debug info (default True)
    """

    input: Optional[str] = None
    output: Optional[str] = None
    debug_info: bool = True

    def make_command(self) -> List[str]:
        self._require(self.input, "input")
        self._require(self.output, "output")

        cmd = build_command(
            LUAJIT,
            "-b",
            optional(self.debug_info, "-g"),
            self.input,
            self.output,
        )
        logger.debug(f"lua object command for {self.input}: {cmd}")
        return cmd


@dataclass
class LuaScriptDriver(Driver):
    """Runs a standalone lua script using elua.

    Attributes:
        binary: Path to elua (default '<cwd>/bin/elua')
        input: The lua script to run
    """

    binary: Optional[str] = None
    input: Optional[str] = None

    def make_command(self) -> List[str]:
        self._require(self.input, "input")
        return build_command(self.binary or default_tool_path("elua"), self.input)
