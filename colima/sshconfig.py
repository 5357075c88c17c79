"""Virtual machine instance listings and ssh configuration rewriting."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from colima.paths import shell_split

_STATUS_RUNNING = "Running"


@dataclass
class InstanceInfo:
    """Information about a virtual machine instance."""

    name: str = ""
    status: str = ""
    arch: str = ""
    cpus: int = 0
    memory: int = 0
    disk: int = 0
    dir: str = ""
    network: list[dict[str, str]] = field(default_factory=list)
    ip_address: str = ""
    runtime: str = ""

    def running(self) -> bool:
        """Return whether the instance is running."""
        return self.status == _STATUS_RUNNING

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> InstanceInfo:
        return cls(
            name=data.get("name") or "",
            status=data.get("status") or "",
            arch=data.get("arch") or "",
            cpus=data.get("cpus") or 0,
            memory=data.get("memory") or 0,
            disk=data.get("disk") or 0,
            dir=data.get("dir") or "",
            network=[
                {"vnl": n.get("vnl") or "", "interface": n.get("interface") or ""}
                for n in data.get("network") or []
            ],
            ip_address=data.get("address") or "",
            runtime=data.get("runtime") or "",
        )


def parse_instances(text: str) -> list[InstanceInfo]:
    """Parse one JSON instance per line, keeping only colima instances."""
    instances = []
    for line in text.splitlines():
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise ValueError(f"error retrieving instances: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("error retrieving instances: expected a JSON object")
        info = InstanceInfo._from_json(data)
        if info.name.startswith("colima"):
            instances.append(info)
    return instances


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def replace_ssh_cmd(cmd: str, name: str, ip: str, port: int, control_path: str) -> str:
    """Rewrite an ssh command line to target ``ip`` and, if ``port`` > 0, ``port``."""
    out = []
    for arg in shell_split(cmd):
        if port > 0:
            if arg.startswith("ControlPath="):
                arg = "ControlPath=" + _quote(control_path)
            if arg.startswith("Port="):
                arg = f"Port={port}"
            if arg.startswith("Hostname="):
                arg = "Hostname=" + ip
        out.append(arg)

    if out and out[-1] == "lima-" + name:
        out[-1] = ip

    return " ".join(out)


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def _indent_if_prefixed(line: str, prefix: str) -> str | None:
    if prefix and line.strip().startswith(prefix):
        return line[: line.index(prefix[0])]
    return None


def replace_ssh_config(conf: str, name: str, ip: str, port: int, control_path: str) -> str:
    """Rewrite an ssh config to use host ``name``, and ``ip``/``port`` if ``port`` > 0."""
    out = []
    for line in _lines(conf):
        if line.startswith("Host "):
            line = "Host " + name

        if port > 0:
            pad = _indent_if_prefixed(line, "ControlPath ")
            if pad is not None:
                line = pad + "ControlPath " + _quote(control_path)

            pad = _indent_if_prefixed(line, "Hostname ")
            if pad is not None:
                line = pad + "Hostname " + ip

            pad = _indent_if_prefixed(line, "Port")
            if pad is not None:
                line = pad + f"Port {port}"

        out.append(line + "\n")
    return "".join(out)


def runtime_label(runtime: str, kubernetes_enabled: bool) -> str:
    """Return the display label of a runtime, or an empty string for unknown ones."""
    if runtime not in ("docker", "containerd"):
        return ""
    if kubernetes_enabled:
        return runtime + "+k3s"
    return runtime