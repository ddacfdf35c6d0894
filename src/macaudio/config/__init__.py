"""Configuration package for macaudio."""

from macaudio.config.manager import ConfigManager, get_config_path
from macaudio.config.models import (
    AudioConfig,
    BrowserTarget,
    ChunkingConfig,
    LoggingConfig,
    RecordingConfig,
    SilencerConfig,
    ToolsConfig,
)

__all__ = [
    "AudioConfig",
    "BrowserTarget",
    "ChunkingConfig",
    "ConfigManager",
    "LoggingConfig",
    "RecordingConfig",
    "SilencerConfig",
    "ToolsConfig",
    "get_config_path",
]
