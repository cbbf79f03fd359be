"""
Base classes for external generator runners.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class StageResult:
    """Outcome of one external command.

    Attributes:
        args: Full command line that was run
        returncode: Exit status, or None when the process could not be started
        error: Launch error or a description of the non-zero exit
    """

    args: tuple[str, ...]
    returncode: int | None = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0


class CommandRunner(ABC):
    """Abstract base class for running external commands."""

    @abstractmethod
    def run(self, args: Sequence[str], forward_stdout: bool = True) -> StageResult:
        """
        Run a command and wait for it to exit.

        Args:
            args: Command name followed by its arguments
            forward_stdout: Whether the child's stdout reaches ours

        Returns:
            The StageResult; failures are reported there, never raised
        """

    @abstractmethod
    def is_available(self, command: str) -> bool:
        """
        Check if a command can be found.

        Returns:
            True if the command can be run
        """
