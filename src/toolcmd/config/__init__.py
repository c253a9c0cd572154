"""Configuration parsing modules for toolcmd."""

from .user_config import CONFIG_FILENAME, ToolchainSettings, UserConfig, UserConfigError

__all__ = [
    "CONFIG_FILENAME",
    "UserConfig",
    "UserConfigError",
    "ToolchainSettings",
]
