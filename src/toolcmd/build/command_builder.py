"""Command assembly.

Commands are assembled from a mix of plain strings, nested lists of strings
and absent slots (None, False or ""). Absent slots and empty strings are
dropped here, in one place, so no command carries an empty argument.
"""

import os
from typing import Iterable, List, Optional, Sequence, Union

Token = Optional[Union[str, bool, "os.PathLike[str]", Sequence[str]]]


def optional(condition: bool, token: Union[str, Sequence[str]]) -> Token:
    """Return token when condition holds, otherwise an absent slot.

    Example:
        >>> build_command("cc", optional(False, "-g"), "-c")
        ['cc', '-c']
    """
    return token if condition else None


def build_command(*tokens: Token) -> List[str]:
    """Flatten and filter a sequence of argument tokens.

    Args:
        *tokens: Strings, paths, nested sequences of strings, or absent markers

    Returns:
        Flat list of non-empty string arguments in their original order

    Example:
        >>> build_command("clang++", ["-c", "a.cpp"], None, "", "-o", "a.o")
        ['clang++', '-c', 'a.cpp', '-o', 'a.o']
    """
    out: List[str] = []
    _collect(tokens, out)
    return out


def _collect(tokens: Iterable, out: List[str]) -> None:
    for token in tokens:
        if token is None or isinstance(token, bool):
            continue
        if isinstance(token, os.PathLike):
            token = os.fspath(token)
        if isinstance(token, str):
            if token:
                out.append(token)
        else:
            _collect(token, out)
