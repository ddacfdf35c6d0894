"""Extraction of time ranges from audio files into separate segment files."""

import asyncio
import logging

from macaudio.audio.models import SegmentSettings
from macaudio.config.models import AudioConfig
from macaudio.exceptions import TranscodeError

logger = logging.getLogger(__name__)


def format_seconds(value: float) -> str:
    """Render seconds the way a plain number prints: 300 not 300.0, 270.5 stays 270.5."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def segment_path(path: str, start_secs: float, end_secs: float) -> str:
    """Path of the segment file extracted from ``path`` between the given bounds.

    Identical arguments always give the identical path, so a second extraction with the
    same bounds overwrites the first.
    """
    return f"{path}.segment-{format_seconds(start_secs)}-{format_seconds(end_secs)}.mp3"


class SegmentExtractor:
    """Extracts time-bounded mp3 segments from audio (or video) files with ffmpeg."""

    def __init__(self, config: AudioConfig) -> None:
        self.config = config

    def build_command(self, path: str, settings: SegmentSettings) -> list[str]:
        """Build the ffmpeg command line for one segment."""
        command = [
            self.config.tools.ffmpeg,
            "-hide_banner",
            "-loglevel",
            "error",
            "-y",  # Overwrite a segment extracted earlier with the same bounds
            "-ss",
            format_seconds(settings.start_secs),
            "-i",
            str(path),
            "-t",
            format_seconds(settings.duration_secs),
            "-vn",  # In case we were given a video file
        ]

        if settings.to_mono:
            command.extend(["-ac", "1"])

        if settings.bitrate_conversion:
            command.extend(["-ar", str(settings.bitrate_conversion)])

        playback_speed = settings.effective_playback_speed
        if playback_speed != 1.0:
            command.extend(["-filter:a", f"atempo={format_seconds(playback_speed)}"])

        command.extend(
            [
                "-acodec",
                "libmp3lame",
                "-f",
                "mp3",
                segment_path(path, settings.start_secs, settings.end_secs),
            ]
        )
        return command

    async def extract(self, path: str, settings: SegmentSettings) -> str:
        """Extract a segment and return the path of the newly created file.

        A partially written output file may remain on disk when extraction fails.

        Raises:
            TranscodeError: If ffmpeg is missing or reports an error
        """
        command = self.build_command(path, settings)
        new_path = command[-1]
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise TranscodeError(str(path), f"could not run {command[0]}: {e}") from e

        _, stderr = await process.communicate()
        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip() if stderr else ""
            raise TranscodeError(
                str(path),
                error_msg or f"{command[0]} exited with code {process.returncode}",
                returncode=process.returncode,
                stderr=error_msg,
            )

        logger.info(
            "Extracted segment %s-%s of %s to %s",
            format_seconds(settings.start_secs),
            format_seconds(settings.end_secs),
            path,
            new_path,
        )
        return new_path
