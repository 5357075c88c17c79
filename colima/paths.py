"""Path, PATH-variable and shell helpers."""

from __future__ import annotations

import logging
import os
import posixpath
import re
import shlex
import socket
import sys
from pathlib import Path

_log = logging.getLogger(__name__)

_ENV_VAR = re.compile(r"\$(?:\{([^}]*)\}|([A-Za-z0-9_]+))")


def home_dir() -> str:
    """Return the home directory of the current user."""
    try:
        return str(Path.home())
    except RuntimeError as exc:
        raise RuntimeError(f"error retrieving home directory: {exc}") from exc


def is_macos() -> bool:
    """Return whether the current operating system is macOS."""
    return sys.platform == "darwin"


def append_to_path(path: str, directory: str) -> str:
    """Put ``directory`` at the front of the colon separated ``path``."""
    if not path:
        return directory
    if not directory:
        return path
    return f"{directory}:{path}"


def remove_from_path(path: str, directory: str) -> str:
    """Remove ``directory`` and empty entries from the colon separated ``path``."""
    target = directory.removesuffix("/")
    kept = (
        entry
        for entry in path.split(":")
        if entry.removesuffix("/") != target and entry.strip()
    )
    return ":".join(kept)


def random_available_port() -> int:
    """Return a TCP port that is currently free on the host."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("", 0))
        return sock.getsockname()[1]


def shell_split(cmd: str) -> list[str]:
    """Split ``cmd`` into arguments the way a shell would.

    Falls back to splitting on whitespace when the command cannot be parsed.
    """
    try:
        return shlex.split(cmd)
    except ValueError as exc:
        _log.warning("error splitting into args: %s", exc)
        _log.warning("falling back to whitespace split")
        return cmd.split()


def _expand_env(value: str) -> str:
    def replace(match: re.Match[str]) -> str:
        name = match.group(1) if match.group(1) is not None else match.group(2)
        return os.environ.get(name, "")

    return _ENV_VAR.sub(replace, value)


def _clean(value: str) -> str:
    cleaned = posixpath.normpath(value)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def clean_path(location: str) -> str:
    """Return the absolute form of a mount location with a trailing slash.

    An empty location is returned unchanged. Relative paths raise ``ValueError``.
    """
    if not location:
        return ""

    expanded = _expand_env(location)
    if expanded.startswith("~"):
        expanded = expanded.replace("~", home_dir(), 1)

    expanded = _clean(expanded)
    if not posixpath.isabs(expanded):
        raise ValueError(f"relative paths not supported for mount '{location}'")

    return expanded.removesuffix("/") + "/"