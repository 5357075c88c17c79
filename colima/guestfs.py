"""File access inside the guest virtual machine."""

from __future__ import annotations

import io
import posixpath
from dataclasses import dataclass
from datetime import datetime, timezone

from colima.environment import GuestActions


@dataclass(frozen=True)
class FileInfo:
    """Information about a file in the guest."""

    name: str
    size: int
    mode: int
    mod_time: datetime
    is_dir: bool


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def parse_stat(filename: str, output: str) -> FileInfo:
    """Parse ``stat -c %s,%a,%Y,%F`` output for ``filename``.

    Unparseable numbers become zero; too few fields raise ``OSError``.
    """
    fields = output.split(",")
    if len(fields) < 4:
        raise OSError(f"cannot stat file: {filename}")
    return FileInfo(
        name=filename,
        size=_to_int(fields[0]),
        mode=_to_int(fields[1]),
        mod_time=datetime.fromtimestamp(_to_int(fields[2]), tz=timezone.utc),
        is_dir=fields[3] == "directory",
    )


def stat(guest: GuestActions, filename: str) -> FileInfo:
    """Return information about ``filename`` in the guest."""
    try:
        output = guest.run_output("sudo", "stat", "-c", "%s,%a,%Y,%F", filename)
    except Exception as exc:
        raise OSError(f"cannot stat file: {filename}") from exc
    return parse_stat(filename, output)


def read(guest: GuestActions, filename: str) -> str:
    """Return the contents of ``filename`` in the guest."""
    try:
        return guest.run_output("sudo", "cat", filename)
    except Exception as exc:
        raise OSError(f"cannot read file: {filename}") from exc


def write(guest: GuestActions, filename: str, body: str) -> None:
    """Write ``body`` to ``filename`` in the guest, creating its directory."""
    directory = posixpath.dirname(filename) or "."
    try:
        guest.run_quiet("sudo", "mkdir", "-p", directory)
    except Exception as exc:
        raise OSError(f"error creating directory '{directory}': {exc}") from exc
    guest.run_with(io.StringIO(body), None, "sudo", "sh", "-c", "cat > " + filename)