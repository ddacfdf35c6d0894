"""Pausing other applications' audio before we play or record.

Every command is dispatched with ``run_detached``: the silencer returns before anything
has been paused and never reports whether it worked. Applications that are not running
are skipped by a ``pgrep`` guard inside the dispatched command itself.
"""

import logging
import shlex

from macaudio.config.models import AudioConfig, BrowserTarget
from macaudio.system.process_invoker import run_detached

logger = logging.getLogger(__name__)


def _applescript_string(value: str) -> str:
    """Quote a value as an AppleScript string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_pause_video_javascript(video_selector: str) -> str:
    """JavaScript that pauses the first matching video element if it is playing."""
    selector = video_selector.replace("\\", "\\\\").replace('"', '\\"')
    return (
        f'var player = document.querySelector("{selector}");\n'
        "if (player && !player.paused) {\n"
        "    player.pause();\n"
        "}\n"
    )


def build_browser_pause_script(target: BrowserTarget) -> str:
    """AppleScript pausing inline video in every tab whose URL matches the target.

    A failing tab does not stop the loop, and the whole walk is bounded by the target's
    timeout.
    """
    javascript = build_pause_video_javascript(target.video_selector)
    return f"""
tell application {_applescript_string(target.app_name)}
    try
        with timeout of {target.timeout_seconds} seconds
            repeat with w in windows
                repeat with t in tabs of w
                    try
                        if (URL of t contains {_applescript_string(target.url_fragment)}) then
                            tell t to execute javascript {_applescript_string(javascript)}
                        end if
                    on error errMsg
                    end try
                end repeat
            end repeat
        end timeout
    on error timeoutErr
    end try
end tell
"""


def build_player_pause_script(app_name: str) -> str:
    """AppleScript telling a media player application to pause."""
    return f"tell application {_applescript_string(app_name)} to pause"


def build_guarded_command(
    app_name: str, script: str, pgrep: str = "pgrep", osascript: str = "osascript"
) -> str:
    """Shell command running ``script`` only if a process named ``app_name`` exists."""
    return (
        f"{shlex.quote(pgrep)} -q {shlex.quote(app_name)} && "
        f"{shlex.quote(osascript)} -e {shlex.quote(script)}"
    )


class PlaybackSilencer:
    """Tells applications like Spotify and YouTube in Chrome to stop playing."""

    def __init__(self, config: AudioConfig) -> None:
        self.config = config

    def build_commands(self) -> list[str]:
        """Shell commands dispatched by ``silence_known_players``."""
        tools = self.config.tools
        commands = []
        for target in self.config.silencer.browsers:
            commands.append(
                build_guarded_command(
                    target.app_name,
                    build_browser_pause_script(target),
                    pgrep=tools.pgrep,
                    osascript=tools.osascript,
                )
            )
        for app_name in self.config.silencer.media_players:
            commands.append(
                build_guarded_command(
                    app_name,
                    build_player_pause_script(app_name),
                    pgrep=tools.pgrep,
                    osascript=tools.osascript,
                )
            )
        return commands

    def silence_known_players(self) -> None:
        """Ask known players to pause. Returns immediately, without any result."""
        if not self.config.silencer.enabled:
            logger.debug("Playback silencer disabled")
            return
        for command in self.build_commands():
            run_detached(command, shell=self.config.tools.bash)
