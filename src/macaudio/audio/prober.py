"""Duration and bit rate lookup for media files through ffprobe."""

import asyncio
import json
import logging
import math
from typing import Any

from macaudio.audio.models import AudioFileInfo
from macaudio.config.models import AudioConfig
from macaudio.exceptions import ProbeError

logger = logging.getLogger(__name__)


def _parse_number(value: Any, cast: type) -> Any:  # noqa: ANN401
    """Convert an ffprobe field, treating absent, 'N/A' or non-finite values as zero."""
    if value is None:
        return cast(0)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return cast(0)
    if not math.isfinite(number):
        return cast(0)
    return cast(number)


def parse_probe_output(output: str, path: str) -> AudioFileInfo:
    """Build an AudioFileInfo from ffprobe's JSON output."""
    try:
        metadata = json.loads(output)
    except json.JSONDecodeError as e:
        raise ProbeError(path, f"unreadable ffprobe output: {e}") from e
    if not isinstance(metadata, dict):
        raise ProbeError(path, "unexpected ffprobe output")

    fmt = metadata.get("format") or {}
    duration = max(0.0, _parse_number(fmt.get("duration"), float))
    bit_rate = max(0, _parse_number(fmt.get("bit_rate"), int))
    return AudioFileInfo(duration=duration, bit_rate=bit_rate)


class MediaProber:
    """Reads duration and bit rate of media files with ffprobe."""

    def __init__(self, config: AudioConfig) -> None:
        self.config = config

    def build_command(self, path: str) -> list[str]:
        return [
            self.config.tools.ffprobe,
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_format",
            str(path),
        ]

    async def probe(self, path: str) -> AudioFileInfo:
        """Get information about an audio file, such as duration and bit rate.

        Raises:
            ProbeError: If ffprobe is missing or cannot read the file
        """
        command = self.build_command(path)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProbeError(str(path), f"could not run {command[0]}: {e}") from e

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip() if stderr else "unknown error"
            raise ProbeError(str(path), error_msg)

        info = parse_probe_output(stdout.decode(errors="replace"), str(path))
        logger.debug(
            "Probed %s: duration=%.3fs bit_rate=%d", path, info.duration, info.bit_rate
        )
        return info
