"""Docker daemon configuration."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

DAEMON_FILE = "/etc/docker/daemon.json"

_CGROUP_DRIVER = "native.cgroupdriver=cgroupfs"

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def daemon_config(conf: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return the daemon settings with buildkit and the cgroupfs driver enabled.

    Settings given by the user are kept; ``features`` is only added when
    absent, and the cgroup driver is added to (or appended to a list of
    strings in) ``exec-opts``. The given mapping is not changed.
    """
    result = dict(conf or {})

    if "features" not in result:
        result["features"] = {"buildkit": True}

    if "exec-opts" not in result:
        result["exec-opts"] = [_CGROUP_DRIVER]
    else:
        opts = result["exec-opts"]
        if isinstance(opts, list) and all(isinstance(opt, str) for opt in opts):
            result["exec-opts"] = [*opts, _CGROUP_DRIVER]

    return result


def daemon_json(conf: Mapping[str, Any] | None) -> str:
    """Return the daemon settings as indented JSON with sorted keys."""
    try:
        text = json.dumps(daemon_config(conf), indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"error marshaling daemon.json: {exc}") from exc
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text