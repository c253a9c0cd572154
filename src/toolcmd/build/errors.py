"""Exceptions raised while generating toolchain commands.

Every error here is fatal for the command being generated. Nothing in this
layer retries or recovers; callers decide whether to skip, retry or abort.
"""


class DriverError(Exception):
    """Base exception for driver command generation failures."""
    pass


class ConfigurationError(DriverError):
    """Raised when a required driver field (input, output, ...) is missing."""
    pass


class UnsupportedToolchainError(DriverError):
    """Raised when a binary or OS is not one of the supported variants."""
    pass


class InvalidOptionValue(DriverError):
    """Raised when an option is set to a value outside its enumeration."""
    pass


class PathCanonicalizationError(DriverError):
    """Raised when a dependency path cannot be resolved to an absolute path."""
    pass


class DependencyReportError(DriverError):
    """Raised when a compiler's structured dependency report cannot be decoded."""
    pass
