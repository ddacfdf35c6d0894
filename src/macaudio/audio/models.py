"""Value objects shared by the audio services."""

from dataclasses import dataclass

MIN_PLAYBACK_SPEED = 0.5
MAX_PLAYBACK_SPEED = 2.0


@dataclass(frozen=True)
class AudioFileInfo:
    """Duration (seconds) and bit rate (bits/sec) reported by the prober."""

    duration: float = 0.0
    bit_rate: int = 0


@dataclass(frozen=True)
class SegmentSettings:
    """Bounds and conversions for one extracted segment.

    ``playback_speed`` is clamped to [0.5, 2.0]; None or 0 means normal speed.
    ``bitrate_conversion`` is applied as the output sample rate, e.g. 22050.
    """

    start_secs: float
    end_secs: float
    to_mono: bool = False
    bitrate_conversion: int | None = None
    playback_speed: float | None = None

    def __post_init__(self) -> None:
        if self.start_secs < 0:
            raise ValueError(f"start_secs must not be negative, got {self.start_secs}")
        if self.start_secs > self.end_secs:
            raise ValueError(
                f"start_secs ({self.start_secs}) must not exceed end_secs ({self.end_secs})"
            )
        if self.bitrate_conversion is not None and self.bitrate_conversion <= 0:
            raise ValueError(f"bitrate_conversion must be positive, got {self.bitrate_conversion}")

    @property
    def duration_secs(self) -> float:
        return self.end_secs - self.start_secs

    @property
    def effective_playback_speed(self) -> float:
        """Speed factor actually applied to the segment."""
        if not self.playback_speed:
            return 1.0
        return max(MIN_PLAYBACK_SPEED, min(float(self.playback_speed), MAX_PLAYBACK_SPEED))


@dataclass(frozen=True)
class Chunk:
    """A file handed to a chunk handler.

    Temporary chunks are generated segment files owned (and deleted) by the caller;
    the original input is passed with ``is_temporary=False``.
    """

    path: str
    is_temporary: bool
    start_secs: float
    end_secs: float
