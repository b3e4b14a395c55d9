"""File content providers used by license detection."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol


class FileContentProvider(Protocol):
    """Read access to files under a package root."""

    def exists(self, root: Path, filename: str) -> bool:
        """Return True if ``filename`` is a file under ``root``."""
        ...

    def read_text(self, root: Path, filename: str) -> Optional[str]:
        """Return the UTF-8 content of the file, or None if it does not exist."""
        ...


class LocalFileProvider:
    """File content provider reading from the local filesystem.

    Absence is reported as False/None. Any other I/O failure (permissions,
    a directory where a file was expected) propagates to the caller.
    """

    def exists(self, root: Path, filename: str) -> bool:
        """Check whether ``root / filename`` is an existing file.

        Args:
            root: Package root directory.
            filename: File name relative to the root.

        Returns:
            True if the file exists.
        """
        return (root / filename).is_file()

    def read_text(self, root: Path, filename: str) -> Optional[str]:
        """Read ``root / filename`` as UTF-8 text.

        Undecodable bytes are replaced rather than failing the read.

        Args:
            root: Package root directory.
            filename: File name relative to the root.

        Returns:
            File content, or None if the file does not exist.
        """
        try:
            return (root / filename).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None
