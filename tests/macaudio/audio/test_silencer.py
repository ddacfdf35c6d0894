"""Tests for the PlaybackSilencer."""

import shlex
from unittest.mock import patch

import pytest

from macaudio.audio.silencer import (
    PlaybackSilencer,
    build_browser_pause_script,
    build_guarded_command,
    build_pause_video_javascript,
    build_player_pause_script,
)
from macaudio.config.models import BrowserTarget


@pytest.fixture
def chrome_target():
    """Return the default Chrome/YouTube browser target."""
    return BrowserTarget(
        app_name="Google Chrome", url_fragment="youtube.com", video_selector=".html5-main-video"
    )


class TestScripts:
    """Test the AppleScript and JavaScript builders."""

    def test_pause_video_javascript(self):
        """Should pause the selected video only when it is playing."""
        javascript = build_pause_video_javascript(".html5-main-video")

        assert 'document.querySelector(".html5-main-video")' in javascript
        assert "!player.paused" in javascript
        assert "player.pause();" in javascript

    def test_browser_script_targets_matching_tabs(self, chrome_target):
        """Should loop over every tab and match on the URL fragment."""
        script = build_browser_pause_script(chrome_target)

        assert 'tell application "Google Chrome"' in script
        assert "repeat with t in tabs of w" in script
        assert 'URL of t contains "youtube.com"' in script
        assert "with timeout of 2 seconds" in script

    def test_browser_script_escapes_javascript_quotes(self, chrome_target):
        """Should embed the JavaScript as a valid AppleScript string."""
        script = build_browser_pause_script(chrome_target)

        assert 'document.querySelector(\\".html5-main-video\\")' in script

    def test_browser_script_swallows_per_tab_errors(self, chrome_target):
        """Should wrap each tab and the whole walk in try blocks."""
        script = build_browser_pause_script(chrome_target)

        assert script.count("try") >= 4  # two try ... end try pairs
        assert "on error errMsg" in script
        assert "on error timeoutErr" in script

    def test_player_script(self):
        """Should tell the player to pause."""
        assert build_player_pause_script("Spotify") == 'tell application "Spotify" to pause'

    def test_guarded_command(self):
        """Should only run osascript when pgrep finds the application."""
        command = build_guarded_command("Google Chrome", 'tell application "X" to pause')

        assert shlex.split(command) == [
            "pgrep",
            "-q",
            "Google Chrome",
            "&&",
            "osascript",
            "-e",
            'tell application "X" to pause',
        ]


class TestPlaybackSilencer:
    """Test the PlaybackSilencer class."""

    def test_build_commands_defaults(self, config):
        """Should pause YouTube in Chrome and Spotify by default."""
        commands = PlaybackSilencer(config).build_commands()

        assert len(commands) == 2
        assert commands[0].startswith("pgrep -q 'Google Chrome' && osascript -e ")
        assert commands[1] == (
            "pgrep -q Spotify && osascript -e 'tell application \"Spotify\" to pause'"
        )

    @patch("macaudio.audio.silencer.run_detached")
    def test_silence_known_players_dispatches_in_background(self, mock_run_detached, config):
        """Should hand every command to the detached invoker and return None."""
        silencer = PlaybackSilencer(config)

        result = silencer.silence_known_players()

        assert result is None
        assert mock_run_detached.call_count == 2
        for call, command in zip(mock_run_detached.call_args_list, silencer.build_commands()):
            assert call.args == (command,)
            assert call.kwargs == {"shell": "bash"}

    @patch("macaudio.audio.silencer.run_detached")
    def test_disabled(self, mock_run_detached, config):
        """Should do nothing when disabled."""
        config.silencer.enabled = False

        PlaybackSilencer(config).silence_known_players()

        mock_run_detached.assert_not_called()

    @patch("macaudio.audio.silencer.run_detached")
    def test_custom_players(self, mock_run_detached, config):
        """Should follow the configured application list."""
        config.silencer.browsers = []
        config.silencer.media_players = ["Music", "Spotify"]

        PlaybackSilencer(config).silence_known_players()

        dispatched = [call.args[0] for call in mock_run_detached.call_args_list]
        assert dispatched[0].startswith("pgrep -q Music &&")
        assert dispatched[1].startswith("pgrep -q Spotify &&")
