"""Operating system helpers."""

from __future__ import annotations

import logging
import os
import shutil
import sys

_log = logging.getLogger(__name__)

ENV_COLIMA_BINARY = "COLIMA_BINARY"


def _resolve(name: str) -> str:
    override = os.environ.get(ENV_COLIMA_BINARY, "")
    if override:
        return override

    if os.path.isabs(name):
        return name

    found = shutil.which(name)
    if found is None:
        raise FileNotFoundError(f"error looking up '{name}' in PATH")
    return os.path.abspath(found)


def executable(argv0: str | None = None) -> str:
    """Return the path of the executable that started this process.

    The ``COLIMA_BINARY`` environment variable takes priority, so that nested
    processes find the same binary. Falls back to ``argv0`` when it cannot be
    resolved.
    """
    name = sys.argv[0] if argv0 is None else argv0
    try:
        return _resolve(name)
    except OSError as exc:
        _log.warning("cannot detect current running executable: %s", exc)
        _log.warning("falling back to first CLI argument")
        return name