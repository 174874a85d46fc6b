"""Port: filesystem — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class FileSystem(Protocol):
    """Abstract contract for the read-only file access the validator needs."""

    def exists(self, path: str) -> bool:
        """Return *True* if *path* exists."""
        ...

    def read_text(self, path: str) -> str:
        """Return the decoded text of *path*; raise ``OSError`` if unreadable."""
        ...
