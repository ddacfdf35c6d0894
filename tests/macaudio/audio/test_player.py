"""Tests for the FilePlayer."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from macaudio.audio.player import FilePlayer
from macaudio.audio.silencer import PlaybackSilencer
from macaudio.exceptions import ProcessExitError, ProcessSpawnError


@pytest.fixture
def mock_silencer():
    """Provide a mock PlaybackSilencer."""
    return Mock(spec=PlaybackSilencer)


@pytest.fixture
def player(config, mock_silencer):
    """Provide a FilePlayer with a mocked silencer."""
    return FilePlayer(config, silencer=mock_silencer)


def test_build_command(player):
    """Should use sox's play quietly."""
    assert player.build_command("/music/a.mp3") == ["play", "-q", "/music/a.mp3"]


@pytest.mark.asyncio
async def test_play_success(player, mock_silencer, make_process):
    """Should silence other players and wait for playback to finish."""
    process = make_process(returncode=0)

    with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)) as m:
        result = await player.play("/music/a.mp3")

    assert result is None
    mock_silencer.silence_known_players.assert_called_once()
    assert m.await_args.args == ("play", "-q", "/music/a.mp3")
    process.communicate.assert_awaited_once()


@pytest.mark.asyncio
async def test_play_abnormal_exit(player, make_process):
    """Should raise ProcessExitError with the exit code and stderr."""
    process = make_process(returncode=2, stderr=b"play FAIL formats: can't open input file")

    with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
        with pytest.raises(ProcessExitError, match="can't open input file") as exc_info:
            await player.play("/music/missing.mp3")

    assert exc_info.value.returncode == 2


@pytest.mark.asyncio
async def test_play_spawn_failure(player):
    """Should raise ProcessSpawnError when play is not installed."""
    with patch("asyncio.create_subprocess_exec", new=AsyncMock(side_effect=FileNotFoundError)):
        with pytest.raises(ProcessSpawnError, match="Could not start play"):
            await player.play("/music/a.mp3")
