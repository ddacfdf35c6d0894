"""Microphone capture to a file through sox."""

import asyncio
import logging
from pathlib import Path

from macaudio.audio.silencer import PlaybackSilencer
from macaudio.config.models import AudioConfig
from macaudio.exceptions import ProcessSpawnError

logger = logging.getLogger(__name__)


class RecordingHandle:
    """A running microphone capture.

    ``completion`` resolves to the output path exactly once, when the capture process
    closes, whether it was stopped through ``stop()`` or ended on its own.
    """

    def __init__(self, out_path: str, process: asyncio.subprocess.Process) -> None:
        self.out_path = out_path
        self._process = process
        self._stop_requested = False
        self.completion: asyncio.Task[str] = asyncio.create_task(self._watch())

    @property
    def is_recording(self) -> bool:
        return self._process.returncode is None

    def stop(self) -> None:
        """Stop recording from the microphone. Further calls do nothing."""
        if self._stop_requested or self._process.returncode is not None:
            return
        self._stop_requested = True
        try:
            self._process.terminate()
        except ProcessLookupError:
            pass

    async def wait(self) -> str:
        return await self.completion

    async def _log_stderr(self) -> None:
        if self._process.stderr is None:
            return
        async for line in self._process.stderr:
            text = line.decode(errors="replace").rstrip()
            if text:
                logger.info("sox: %s", text)

    async def _watch(self) -> str:
        await self._log_stderr()
        returncode = await self._process.wait()
        if returncode != 0 and not self._stop_requested:
            logger.warning("Microphone capture exited with code %s", returncode)
        else:
            logger.info("Microphone capture exited with code %s", returncode)
        return self.out_path


class MicrophoneRecorder:
    """Streams the microphone input to an encoded file on disk with sox."""

    def __init__(self, config: AudioConfig, silencer: PlaybackSilencer | None = None) -> None:
        self.config = config
        self.silencer = silencer or PlaybackSilencer(config)

    def build_command(self, out_path: str) -> list[str]:
        recording = self.config.recording
        return [
            self.config.tools.sox,
            "-d",  # Default input device
            "-t",
            recording.file_type,
            "-c",
            str(recording.channels),
            "-r",
            str(recording.sample_rate),
            str(out_path),
        ]

    async def start(self, out_path: str) -> RecordingHandle:
        """Start recording to ``out_path`` and return at once with a handle.

        Raises:
            ProcessSpawnError: If sox cannot be started
        """
        self.silencer.silence_known_players()

        output_dir = Path(out_path).parent
        output_dir.mkdir(parents=True, exist_ok=True)

        command = self.build_command(out_path)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProcessSpawnError(command, str(e)) from e

        logger.info("Recording microphone to %s (pid %s)", out_path, process.pid)
        return RecordingHandle(str(out_path), process)
