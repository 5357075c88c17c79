"""A small filesystem abstraction with a real and a fake implementation."""

from __future__ import annotations

import io
import os
from typing import BinaryIO, Protocol

_FAKE_PREFIX = b"fake file - "


class FileSystem(Protocol):
    """Operations needed from a filesystem."""

    def open(self, name: str) -> BinaryIO:
        """Open ``name`` for reading."""

    def mkdir_all(self, path: str, mode: int) -> None:
        """Create ``path`` and any missing parents."""


class DefaultFS:
    """The host operating system's filesystem."""

    def open(self, name: str) -> BinaryIO:
        """Open ``name`` for binary reading."""
        return open(name, "rb")

    def mkdir_all(self, path: str, mode: int) -> None:
        """Create ``path`` and its parents; existing directories are fine."""
        os.makedirs(path, mode, exist_ok=True)


def _valid_path(name: str) -> bool:
    if name == ".":
        return True
    return bool(name) and all(part not in ("", ".", "..") for part in name.split("/"))


class FakeFS:
    """A filesystem for tests: every valid path holds placeholder content."""

    def __init__(self) -> None:
        self.created: list[str] = []

    def open(self, name: str) -> BinaryIO:
        """Return a file whose content names ``name``."""
        if not _valid_path(name):
            raise FileNotFoundError(f"open {name}: file does not exist")
        return io.BytesIO(_FAKE_PREFIX + name.encode())

    def mkdir_all(self, path: str, mode: int) -> None:
        """Record ``path`` as created without touching the disk."""
        self.created.append(path)


FS: FileSystem = DefaultFS()


def mkdir_all(path: str, mode: int = 0o777) -> None:
    """Create ``path`` on the current filesystem."""
    FS.mkdir_all(path, mode)


def open_file(name: str) -> BinaryIO:
    """Open ``name`` on the current filesystem."""
    return FS.open(name)