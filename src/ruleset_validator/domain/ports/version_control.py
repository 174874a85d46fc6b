"""Port: version control — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class VersionControl(Protocol):
    """Abstract contract for materializing a working copy on disk."""

    async def clone(self, url: str, target_path: str, ref: str) -> None:
        """Ensure *url* is cloned into *target_path* with *ref* checked out."""
        ...
