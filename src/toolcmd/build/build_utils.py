"""Build utilities for toolcmd.

Small helpers shared by the drivers: flattening nested directory lists,
canonicalizing dependency paths and formatting commands for display.
"""

import os
import shlex
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence


def flatten(items: Optional[Iterable[Any]]) -> List[str]:
    """Flatten a possibly nested collection of paths into a list of strings.

    Include and library directory lists are often built by concatenating
    other projects' lists, so they may arrive nested.

    Args:
        items: Paths, strings or nested iterables of them (None for empty)

    Returns:
        Flat list of string paths, empty entries removed

    Example:
        >>> flatten(["a", ["b", ["c"]], ""])
        ['a', 'b', 'c']
    """
    result: List[str] = []
    if items is None:
        return result
    if isinstance(items, (str, os.PathLike)):
        items = [items]
    for item in items:
        if item is None:
            continue
        if isinstance(item, os.PathLike):
            item = os.fspath(item)
        if isinstance(item, str):
            if item:
                result.append(item)
        else:
            result.extend(flatten(item))
    return result


def canonicalize_path(path: str, base_dir: Optional[Path] = None) -> Optional[str]:
    """Resolve a path to an absolute path with symlinks removed.

    Args:
        path: Path as reported by a tool (relative or absolute)
        base_dir: Directory relative paths are resolved against (default: cwd)

    Returns:
        Absolute path string, or None if the path does not exist
    """
    candidate = Path(path)
    if not candidate.is_absolute() and base_dir is not None:
        candidate = Path(base_dir) / candidate
    try:
        return str(candidate.resolve(strict=True))
    except (OSError, RuntimeError):
        return None


def format_command(cmd: Sequence[str]) -> str:
    """Format a command as a single shell-quoted line."""
    return shlex.join(cmd)
