"""Mount, port forwarding and provisioning settings of the virtual machine config."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from colima.paths import clean_path

TCP = "tcp"

REVSSHFS = "reverse-sshfs"
NINEP = "9p"

PROVISION_MODE_SYSTEM = "system"
PROVISION_MODE_USER = "user"

_SSHFS_ALIASES = frozenset(
    {"", "ssh", "sshfs", "reversessh", "reverse-ssh", "reversesshfs", REVSSHFS}
)

_FULL_RANGE = (1, 65535)


@dataclass(frozen=True)
class MountSpec:
    """A mount as requested by the user."""

    location: str
    mount_point: str = ""
    writable: bool = False


@dataclass(frozen=True)
class LimaMount:
    """A mount as written into the virtual machine config."""

    location: str
    mount_point: str = ""
    writable: bool = False
    security_model: str = ""
    protocol_version: str = ""
    msize: str = ""
    cache: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the config mapping, leaving out unset optional keys."""
        data: dict[str, Any] = {"location": self.location}
        if self.mount_point:
            data["mountPoint"] = self.mount_point
        data["writable"] = self.writable
        nine_p = {
            key: value
            for key, value in (
                ("securityModel", self.security_model),
                ("protocolVersion", self.protocol_version),
                ("msize", self.msize),
                ("cache", self.cache),
            )
            if value
        }
        if nine_p:
            data["9p"] = nine_p
        return data


@dataclass(frozen=True)
class PortForward:
    """A port or socket forwarding rule between guest and host."""

    guest_ip_must_be_zero: bool = False
    guest_ip: str = ""
    guest_port: int = 0
    guest_port_range: tuple[int, int] = (0, 0)
    guest_socket: str = ""
    host_ip: str = ""
    host_port: int = 0
    host_port_range: tuple[int, int] = (0, 0)
    host_socket: str = ""
    proto: str = ""
    ignore: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the config mapping, leaving out unset keys."""
        pairs = (
            ("guestIPMustBeZero", self.guest_ip_must_be_zero),
            ("guestIP", self.guest_ip),
            ("guestPort", self.guest_port),
            ("guestPortRange", list(self.guest_port_range) if any(self.guest_port_range) else None),
            ("guestSocket", self.guest_socket),
            ("hostIP", self.host_ip),
            ("hostPort", self.host_port),
            ("hostPortRange", list(self.host_port_range) if any(self.host_port_range) else None),
            ("hostSocket", self.host_socket),
            ("proto", self.proto),
            ("ignore", self.ignore),
        )
        return {key: value for key, value in pairs if value}


@dataclass(frozen=True)
class Provision:
    """A script run while provisioning the virtual machine."""

    script: str
    mode: str = PROVISION_MODE_SYSTEM

    def to_dict(self) -> dict[str, str]:
        """Return the config mapping."""
        return {"mode": self.mode, "script": self.script}


def check_overlapping_mounts(mounts: Sequence[MountSpec]) -> None:
    """Raise ``ValueError`` if any two mount locations overlap or one is relative."""
    for index, first in enumerate(mounts[:-1]):
        for second in mounts[index + 1 :]:
            a = clean_path(first.location)
            b = clean_path(second.location)
            if a.startswith(b) or b.startswith(a):
                raise ValueError(f"'{a}' overlaps '{b}'")


def resolve_mount_type(mount_type: str) -> str:
    """Map a mount type name or alias to ``reverse-sshfs`` or ``9p``.

    Any name that is not an sshfs alias selects ``9p``.
    """
    if mount_type.lower() in _SSHFS_ALIASES:
        return REVSSHFS
    return NINEP


def resolve_mounts(
    mounts: Sequence[MountSpec],
    mount_type: str,
    cache_dir: str,
    profile_id: str,
) -> list[LimaMount]:
    """Return the mounts for the virtual machine config.

    Without requested mounts, the home directory and a per-profile temporary
    directory are mounted writable. Otherwise the cache directory is mounted
    read-only first, unless a requested mount already contains it.
    """
    if not mounts:
        return [
            LimaMount(location="~", writable=True),
            LimaMount(location=f"/tmp/{profile_id}", writable=True),
        ]

    try:
        check_overlapping_mounts(mounts)
    except ValueError as exc:
        raise ValueError(f"overlapping mounts not supported: {exc}") from exc

    result = [LimaMount(location=cache_dir, writable=False)]
    cache_covered = False

    for spec in mounts:
        location = clean_path(spec.location)
        mount_point = clean_path(spec.mount_point)

        # read-only 9p mounts use passthrough
        security_model = "passthrough" if mount_type == NINEP and not spec.writable else ""

        result.append(
            LimaMount(
                location=location,
                mount_point=mount_point,
                writable=spec.writable,
                security_model=security_model,
            )
        )

        if cache_dir.startswith(location) and not cache_covered:
            result = result[1:]
            cache_covered = True

    return result


def default_port_forwards() -> list[PortForward]:
    """Return the rules forwarding all guest ports on 0.0.0.0 and 127.0.0.1."""
    return [
        PortForward(
            guest_ip_must_be_zero=True,
            guest_ip="0.0.0.0",
            guest_port_range=_FULL_RANGE,
            host_ip="0.0.0.0",
            host_port_range=_FULL_RANGE,
            proto=TCP,
        ),
        PortForward(
            guest_ip="127.0.0.1",
            guest_port_range=_FULL_RANGE,
            host_ip="127.0.0.1",
            host_port_range=_FULL_RANGE,
            proto=TCP,
        ),
    ]