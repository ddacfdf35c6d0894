"""Playback of audio files through sox."""

import asyncio
import logging

from macaudio.audio.silencer import PlaybackSilencer
from macaudio.config.models import AudioConfig
from macaudio.exceptions import ProcessExitError, ProcessSpawnError

logger = logging.getLogger(__name__)


class FilePlayer:
    """Plays audio files through sox's ``play`` command."""

    def __init__(self, config: AudioConfig, silencer: PlaybackSilencer | None = None) -> None:
        self.config = config
        self.silencer = silencer or PlaybackSilencer(config)

    def build_command(self, path: str) -> list[str]:
        return [self.config.tools.play, "-q", str(path)]

    async def play(self, path: str) -> None:
        """Play the given audio file and return once playback has finished.

        Raises:
            ProcessSpawnError: If the player cannot be started
            ProcessExitError: If the player exits with a non-zero code
        """
        self.silencer.silence_known_players()

        command = self.build_command(path)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProcessSpawnError(command, str(e)) from e

        logger.info("Playing %s", path)
        _, stderr = await process.communicate()
        if process.returncode != 0:
            raise ProcessExitError(
                command, process.returncode, stderr.decode(errors="replace") if stderr else ""
            )
        logger.debug("Finished playing %s", path)
