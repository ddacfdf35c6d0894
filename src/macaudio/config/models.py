"""Configuration models for macaudio.

This module contains all configuration-related Pydantic models used throughout the package.
"""

import logging

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = console output unless MACAUDIO_JSON_LOGS is set
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "macaudio"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate that the level is a known logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level '{v}'.")
        return level


class ToolsConfig(BaseModel):
    """Names (or absolute paths) of the external executables."""

    bash: str = "bash"
    pgrep: str = "pgrep"
    osascript: str = "osascript"
    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"
    sox: str = "sox"
    play: str = "play"


class BrowserTarget(BaseModel):
    """A browser whose matching tabs get their inline video paused."""

    app_name: str
    url_fragment: str
    video_selector: str
    timeout_seconds: int = 2

    @field_validator("app_name", "url_fragment", "video_selector")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty names, they would match every process or tab."""
        if not v.strip():
            raise ValueError("Must not be blank.")
        return v


def _default_browsers() -> list[BrowserTarget]:
    return [
        BrowserTarget(
            app_name="Google Chrome",
            url_fragment="youtube.com",
            video_selector=".html5-main-video",
        )
    ]


class SilencerConfig(BaseModel):
    """Applications paused before playback or recording starts."""

    enabled: bool = True
    browsers: list[BrowserTarget] = Field(default_factory=_default_browsers)
    media_players: list[str] = Field(default_factory=lambda: ["Spotify"])

    @field_validator("media_players")
    @classmethod
    def validate_media_players(cls, v: list[str]) -> list[str]:
        """Reject blank application names."""
        if any(not name.strip() for name in v):
            raise ValueError("Media player names must not be blank.")
        return v


class RecordingConfig(BaseModel):
    """Format of microphone recordings."""

    channels: int = 1
    sample_rate: int = 22050  # Enough for speech, small enough to stay cheap
    file_type: str = "mp3"

    @field_validator("channels", "sample_rate")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate that the value is positive."""
        if v <= 0:
            raise ValueError("Must be a positive integer.")
        return v


class ChunkingConfig(BaseModel):
    """Settings applied to every temporary chunk."""

    voice_sample_rate: int = 22050

    @field_validator("voice_sample_rate")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate that the sample rate is positive."""
        if v <= 0:
            raise ValueError("Must be a positive integer.")
        return v


class AudioConfig(BaseModel):
    """Configuration settings for the macaudio package."""

    config_version: str = "1.0.0"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    silencer: SilencerConfig = Field(default_factory=SilencerConfig)
    recording: RecordingConfig = Field(default_factory=RecordingConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
