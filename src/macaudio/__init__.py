"""Controlling audio on macOS: probing, segmenting, pausing, playing and recording.

The heavy lifting is done by external tools (ffprobe, ffmpeg, sox, osascript); this
package builds their command lines and awaits them.
"""

from macaudio.api import (
    extract_segment,
    for_each_chunk,
    play,
    probe,
    silence_known_players,
    start_recording,
)
from macaudio.audio.models import AudioFileInfo, Chunk, SegmentSettings
from macaudio.audio.recorder import RecordingHandle
from macaudio.exceptions import (
    AudioError,
    ChunkConfigurationError,
    ConfigurationError,
    ProbeError,
    ProcessExitError,
    ProcessSpawnError,
    TranscodeError,
)

__all__ = [
    "AudioError",
    "AudioFileInfo",
    "Chunk",
    "ChunkConfigurationError",
    "ConfigurationError",
    "ProbeError",
    "ProcessExitError",
    "ProcessSpawnError",
    "RecordingHandle",
    "SegmentSettings",
    "TranscodeError",
    "extract_segment",
    "for_each_chunk",
    "play",
    "probe",
    "silence_known_players",
    "start_recording",
]
