"""toolcmd - toolchain command generation.

Translates declarative build step descriptions into the command lines of
concrete native toolchains, and normalizes dependency scanner output into
toolchain independent depfiles.
"""

__version__ = "0.1.0"
