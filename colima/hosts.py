"""Management of host name entries in the guest's /etc/hosts."""

from __future__ import annotations

import ipaddress
import json
import logging

from colima.environment import GuestActions

_log = logging.getLogger(__name__)

HOSTS_FILE = "/etc/hosts"

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def _ip_text(ip: str | IPAddress) -> str:
    return str(ipaddress.ip_address(ip))


def includes_host(content: str, host: str, ip: str | IPAddress) -> bool:
    """Return whether the hosts file ``content`` maps ``ip`` to ``host``.

    Only the first name after the address on each line is considered.
    """
    address = _ip_text(ip)
    for line in content.splitlines():
        fields = line.split()
        if not fields or fields[0] != address:
            continue
        if len(fields) > 1 and fields[1] == host:
            return True
    return False


def add_host(guest: GuestActions, host: str, ip: str | IPAddress) -> None:
    """Append an entry for ``host`` at ``ip`` to the guest's hosts file.

    Nothing is done when the entry is already present. A hosts file that
    cannot be read is logged and the entry is appended regardless.
    """
    address = _ip_text(ip)
    try:
        content = guest.read(HOSTS_FILE)
    except Exception as exc:
        _log.warning("cannot read %s in the VM: %s", HOSTS_FILE, exc)
    else:
        if includes_host(content, host, address):
            return

    entry = json.dumps(f"{address}\t{host}", ensure_ascii=False)
    guest.run("sudo", "sh", "-c", f"echo -e {entry} >> {HOSTS_FILE}")