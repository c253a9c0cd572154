"""
toolcmd.ini user configuration parser.

This module reads the per-checkout user configuration: which projects to
build, how many jobs to run, and the toolchain defaults applied to every
project (optionally overridden per project).
"""

import configparser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ..build.flag_builder import CLANG, FlagBuilder
from ..build.linker import MOLD

CONFIG_FILENAME = "toolcmd.ini"

MODES = ("debug", "release")

COMPILER_FLAGS_PREFIX = "compiler_flags."
LINKER_FLAGS_PREFIX = "linker_flags."


class UserConfigError(Exception):
    """Exception raised for toolcmd.ini configuration errors."""

    pass


@dataclass
class ToolchainSettings:
    """Toolchain defaults for one project."""

    mode: str = "debug"
    compiler: str = CLANG
    linker: str = MOLD
    disabled_warnings: List[str] = field(default_factory=list)
    compiler_flags: Dict[str, List[str]] = field(default_factory=dict)
    linker_flags: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def is_release(self) -> bool:
        return self.mode == "release"


class UserConfig:
    """
    Parser for toolcmd.ini configuration files.

    Example toolcmd.ini:
        [toolcmd]
        projects = iro, lpp
        max_jobs = 6

        [default]
        mode = debug
        compiler = clang++
        linker = mold
        compiler_flags.clang++ = -fmessage-length=80

        [project:llvm]
        mode = release

    Usage:
        config = UserConfig(Path("toolcmd.ini"))
        settings = config.get_toolchain_settings("llvm")
    """

    def __init__(self, ini_path: Path):
        """
        Initialize the parser with a toolcmd.ini file.

        Args:
            ini_path: Path to the toolcmd.ini file

        Raises:
            UserConfigError: If the file doesn't exist or cannot be parsed
        """
        self.ini_path = ini_path

        if not ini_path.exists():
            raise UserConfigError(f"Configuration file not found: {ini_path}")

        self.config = configparser.ConfigParser(
            allow_no_value=True, interpolation=configparser.ExtendedInterpolation()
        )
        # Keys such as 'compiler_flags.clang++' are case sensitive binary names.
        self.config.optionxform = str

        try:
            self.config.read(ini_path, encoding="utf-8")
        except configparser.Error as e:
            raise UserConfigError(f"Failed to parse {ini_path}: {e}") from e

    @staticmethod
    def find_config(start_dir: Path) -> Optional[Path]:
        """
        Locate toolcmd.ini in a directory.

        Args:
            start_dir: Directory to look in

        Returns:
            Path to toolcmd.ini, or None if there is none
        """
        candidate = Path(start_dir) / CONFIG_FILENAME
        return candidate if candidate.is_file() else None

    def get_projects(self) -> List[str]:
        """
        Get the ordered list of projects to build.

        Returns:
            Project names (e.g., ['iro', 'lpp'])

        Raises:
            UserConfigError: If no projects are listed or a project is listed twice
        """
        raw = ""
        if "toolcmd" in self.config and "projects" in self.config["toolcmd"]:
            raw = self._read_value("toolcmd", "projects") or ""

        projects: List[str] = []
        for line in raw.split("\n"):
            for name in line.split(","):
                name = name.strip()
                if not name:
                    continue
                if name in projects:
                    raise UserConfigError(f"project '{name}' was already listed")
                projects.append(name)

        if not projects:
            raise UserConfigError(f"{self.ini_path} does not specify any projects to build!")
        return projects

    def get_max_jobs(self) -> int:
        """
        Get the maximum number of parallel jobs.

        Returns:
            Job count (default 1)
        """
        if "toolcmd" not in self.config:
            return 1
        try:
            return self.config["toolcmd"].getint("max_jobs", fallback=1)
        except ValueError as e:
            raise UserConfigError(f"max_jobs must be an integer: {e}") from e
        except configparser.Error as e:
            raise UserConfigError(f"Invalid value for 'max_jobs' in {self.ini_path}: {e}") from e

    def get_config_value(self, project: Optional[str], key: str) -> Optional[str]:
        """
        Get a config value for a project, falling back to [default].

        Args:
            project: Project name, or None for the defaults
            key: Config key to look up

        Returns:
            The value, or None if neither section sets it
        """
        section = f"project:{project}"
        if project and section in self.config and key in self.config[section]:
            return self._read_value(section, key)
        if "default" in self.config and key in self.config["default"]:
            return self._read_value("default", key)
        return None

    def _read_value(self, section: str, key: str) -> Optional[str]:
        # Flag strings are taken verbatim so tokens like $ORIGIN survive
        raw = key.startswith(COMPILER_FLAGS_PREFIX) or key.startswith(LINKER_FLAGS_PREFIX)
        try:
            return self.config.get(section, key, raw=raw)
        except configparser.Error as e:
            raise UserConfigError(
                f"Invalid value for '{key}' in [{section}] of {self.ini_path}: {e}"
            ) from e

    def _merged_section(self, project: Optional[str]) -> Dict[str, str]:
        sections = ["default"]
        if project:
            # Project values override default values key by key
            sections.append(f"project:{project}")

        merged: Dict[str, Optional[str]] = {}
        for section in sections:
            if section in self.config:
                for key in self.config[section]:
                    merged[key] = self._read_value(section, key)
        return {k: (v or "").strip() for k, v in merged.items()}

    def get_toolchain_settings(self, project: Optional[str] = None) -> ToolchainSettings:
        """
        Resolve the toolchain settings for a project.

        Args:
            project: Project name, or None for the defaults

        Returns:
            ToolchainSettings with [project:<name>] values applied over [default]

        Raises:
            UserConfigError: If mode is not 'debug' or 'release'
        """
        values = self._merged_section(project)
        settings = ToolchainSettings()

        mode = values.get("mode")
        if mode:
            if mode not in MODES:
                raise UserConfigError(
                    f"Invalid mode '{mode}' for {project or 'default'}; "
                    + f"expected one of: {', '.join(MODES)}"
                )
            settings.mode = mode

        if values.get("compiler"):
            settings.compiler = values["compiler"]
        if values.get("linker"):
            settings.linker = values["linker"]

        settings.disabled_warnings = values.get("disabled_warnings", "").split()

        for key, value in values.items():
            if key.startswith(COMPILER_FLAGS_PREFIX):
                binary = key[len(COMPILER_FLAGS_PREFIX):]
                settings.compiler_flags[binary] = FlagBuilder.parse_flag_string(value)
            elif key.startswith(LINKER_FLAGS_PREFIX):
                binary = key[len(LINKER_FLAGS_PREFIX):]
                settings.linker_flags[binary] = FlagBuilder.parse_flag_string(value)

        return settings
