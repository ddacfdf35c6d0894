"""Module-level shortcuts using the configuration from ``ConfigManager``.

Each function builds its service from ``get_config()``, which is loaded once and cached.
Call ``get_config.cache_clear()`` after changing the configuration file.
"""

from functools import lru_cache

from macaudio.audio.chunks import ChunkHandler, ChunkProcessor
from macaudio.audio.models import AudioFileInfo, SegmentSettings
from macaudio.audio.player import FilePlayer
from macaudio.audio.prober import MediaProber
from macaudio.audio.recorder import MicrophoneRecorder, RecordingHandle
from macaudio.audio.segments import SegmentExtractor
from macaudio.audio.silencer import PlaybackSilencer
from macaudio.config.manager import ConfigManager
from macaudio.config.models import AudioConfig


@lru_cache
def get_config() -> AudioConfig:
    return ConfigManager().load()


async def probe(path: str) -> AudioFileInfo:
    """Get the duration and bit rate of an audio file."""
    return await MediaProber(get_config()).probe(path)


async def extract_segment(path: str, settings: SegmentSettings) -> str:
    """Extract a segment of ``path`` and return the new file's path."""
    return await SegmentExtractor(get_config()).extract(path, settings)


def silence_known_players() -> None:
    """Ask known players to pause, without waiting."""
    PlaybackSilencer(get_config()).silence_known_players()


async def for_each_chunk(
    path: str,
    chunk_secs: float,
    overlap_secs: float,
    playback_speed: float | None,
    handler: ChunkHandler,
) -> None:
    """Run ``handler(chunk_path, is_temporary)`` over overlapping chunks of ``path``."""
    await ChunkProcessor(get_config()).for_each_chunk(
        path, chunk_secs, overlap_secs, playback_speed, handler
    )


async def start_recording(out_path: str) -> RecordingHandle:
    """Start streaming the microphone to ``out_path``."""
    return await MicrophoneRecorder(get_config()).start(out_path)


async def play(path: str) -> None:
    """Play an audio file until it finishes."""
    await FilePlayer(get_config()).play(path)
