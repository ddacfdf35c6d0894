"""Fire-and-forget shell commands.

``run_detached`` is a best-effort side channel: it starts a shell command in its
own session and returns at once. There is no handle, no exit status and no
output, so callers cannot tell whether the command did anything.
"""

import logging
import subprocess

logger = logging.getLogger(__name__)


def run_detached(command: str, shell: str = "bash") -> None:
    """Run a shell command in the background without waiting for it to complete.

    Args:
        command: Shell command line, already quoted for the shell
        shell: Shell executable used to interpret the command
    """
    try:
        subprocess.Popen(
            [shell, "-c", command],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
            close_fds=True,
        )
    except OSError as e:
        logger.warning("Could not dispatch background command via %s: %s", shell, e)
        return
    logger.debug("Dispatched background command: %s", command)
