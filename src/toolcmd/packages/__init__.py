"""Host platform helpers for toolcmd."""

from .platform_utils import (
    PlatformDetector,
    PlatformError,
    get_shared_lib_name,
    get_static_lib_name,
)

__all__ = [
    "PlatformDetector",
    "PlatformError",
    "get_static_lib_name",
    "get_shared_lib_name",
]
