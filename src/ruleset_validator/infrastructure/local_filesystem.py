"""Local filesystem adapter — implements the FileSystem port."""

from __future__ import annotations

from pathlib import Path


class LocalFileSystem:
    """Concrete ``FileSystem`` backed by :mod:`pathlib`."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding=self._encoding)
