"""
External command execution.
Args are always passed as a list, never through a shell.
"""

import logging
import subprocess
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Runs a program with arguments; returns True on exit status 0."""

    def __call__(self, command: str, args: Sequence[str], quiet: bool) -> bool: ...


def run_command(command: str, args: Sequence[str], quiet: bool = False) -> bool:
    """Run command, inheriting stdout/stderr unless quiet. Blocks until the child exits."""
    argv = [command, *args]
    logger.debug("Running %s", argv)
    stream = subprocess.DEVNULL if quiet else None
    try:
        proc = subprocess.run(argv, stdout=stream, stderr=stream, check=False)
    except OSError as e:
        logger.error("Could not launch %s: %s", command, e)
        return False

    if proc.returncode != 0:
        logger.error("%s exited with status %d", command, proc.returncode)
        return False
    return True
