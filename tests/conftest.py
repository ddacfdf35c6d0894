import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from macaudio.config.models import AudioConfig


@pytest.fixture
def config() -> AudioConfig:
    """Provide a default AudioConfig."""
    return AudioConfig()


@pytest.fixture
def make_process():
    """Build a mock asyncio subprocess whose communicate() returns canned output."""

    def _make(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b""):
        process = MagicMock(spec=asyncio.subprocess.Process)
        process.returncode = returncode
        process.pid = 4242
        process.communicate = AsyncMock(return_value=(stdout, stderr))
        return process

    return _make


class FakeCaptureProcess:
    """Stands in for a long-running capture process until terminate() or finish()."""

    def __init__(self, stderr_lines: list[bytes] | None = None) -> None:
        self.pid = 4243
        self.returncode = None
        self.terminate_calls = 0
        self._exit_code = 0
        self._done = asyncio.Event()
        self.stderr = self._read_stderr(stderr_lines or [])

    async def _read_stderr(self, lines: list[bytes]):
        for line in lines:
            yield line
        await self._done.wait()

    def terminate(self) -> None:
        self.terminate_calls += 1
        self.finish(-15)

    def finish(self, exit_code: int) -> None:
        self._exit_code = exit_code
        self._done.set()

    async def wait(self) -> int:
        await self._done.wait()
        self.returncode = self._exit_code
        return self.returncode


@pytest.fixture
def capture_process():
    """Provide a FakeCaptureProcess factory."""
    return FakeCaptureProcess
