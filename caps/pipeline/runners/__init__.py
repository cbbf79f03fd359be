"""
Runners for the external code generators.
"""

from __future__ import annotations

from .base import CommandRunner, StageResult
from .commands import capnp_command, msgp_command
from .subprocess_runner import SubprocessRunner

__all__ = [
    "CommandRunner",
    "StageResult",
    "SubprocessRunner",
    "capnp_command",
    "msgp_command",
]
