"""
Runner executing external generators as child processes.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence

from ...cli_utils import format_command_line
from ...logging import get_logger
from .base import CommandRunner, StageResult

logger = get_logger("runners")


class SubprocessRunner(CommandRunner):
    """Runs commands with subprocess, blocking until they exit.

    stderr of the child always goes to our stderr. stdout is forwarded unless
    ``forward_stdout`` is False, in which case it is discarded.
    """

    def is_available(self, command: str) -> bool:
        """Check if the command is on PATH."""
        return shutil.which(command) is not None

    def run(self, args: Sequence[str], forward_stdout: bool = True) -> StageResult:
        """
        Run a command without timeout.

        Args:
            args: Command name followed by its arguments
            forward_stdout: Whether the child's stdout reaches ours

        Returns:
            StageResult describing the exit
        """
        args = tuple(args)
        logger.debug("Executing: %s", format_command_line(args))

        try:
            result = subprocess.run(
                list(args),
                stdout=None if forward_stdout else subprocess.DEVNULL,
                check=False,
            )
        except OSError as e:
            return StageResult(args=args, returncode=None, error=str(e))

        if result.returncode != 0:
            return StageResult(
                args=args,
                returncode=result.returncode,
                error=f"{args[0]} exited with status {result.returncode}",
            )
        return StageResult(args=args, returncode=0)
