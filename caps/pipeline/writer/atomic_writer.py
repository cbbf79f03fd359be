"""
Atomic file writer for generated artifacts.

Ensures that rewriting a generated file never leaves it half written.
"""

from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path


class AtomicWriter:
    """Handles atomic file writes.

    Uses a two-phase approach:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file
    """

    def __init__(self, encoding: str = "utf-8", errors: str = "surrogateescape"):
        # surrogateescape carries undecodable bytes through a rewrite unchanged
        self._encoding = encoding
        self._errors = errors

    def read(self, path: Path) -> str:
        """Read a generated artifact.

        Raises:
            OSError: If the file cannot be read
            UnicodeError: If the file cannot be decoded with a strict error handler
        """
        return path.read_text(encoding=self._encoding, errors=self._errors)

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OSError: If file operations fail
        """
        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding=self._encoding, errors=self._errors) as f:
                f.write(content)

            temp_path.replace(path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def rewrite(self, path: Path, transform: Callable[[str], str]) -> str:
        """Read ``path``, apply ``transform`` to its text and write it back.

        Returns:
            The new content

        Raises:
            OSError: If reading or writing fails
        """
        content = transform(self.read(path))
        self.write(path, content)
        return content
