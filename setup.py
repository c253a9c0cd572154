"""
Setup file.
"""

import os

from setuptools import setup

URL = "https://github.com/toolcmd/toolcmd"
KEYWORDS = "build toolchain compiler linker clang msvc mold depfile command-line"
HERE = os.path.dirname(os.path.abspath(__file__))


if __name__ == "__main__":
    setup(
        keywords=KEYWORDS,
        url=URL,
    )
