"""Exception hierarchy for macaudio.

Every failure raised by this package derives from ``AudioError`` so callers can
catch the whole family at once. The playback silencer never raises.
"""


class AudioError(Exception):
    """Base class for all macaudio errors."""


class ConfigurationError(AudioError, ValueError):
    """The configuration file could not be read or failed validation."""


class ProbeError(AudioError):
    """Reading a media file's metadata failed."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Could not probe {path}: {message}")


class TranscodeError(AudioError):
    """The transcoder failed to produce a segment."""

    def __init__(
        self, path: str, message: str, returncode: int | None = None, stderr: str = ""
    ) -> None:
        self.path = path
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Could not extract segment from {path}: {message}")


class ProcessSpawnError(AudioError):
    """A player or recorder process could not be started."""

    def __init__(self, command: list[str], message: str) -> None:
        self.command = command
        super().__init__(f"Could not start {command[0]}: {message}")


class ProcessExitError(AudioError):
    """A playback process exited abnormally."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"{command[0]} exited with code {returncode}{detail}")


class ChunkConfigurationError(AudioError, ValueError):
    """Chunk and overlap durations cannot make forward progress."""
