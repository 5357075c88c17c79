"""Host, guest and container runtime abstractions."""

from __future__ import annotations

import os
import platform
from enum import Enum
from typing import IO, Any, Callable, Protocol

CONTAINER_RUNTIME_KEY = "runtime"


class Arch(str, Enum):
    """CPU architecture of a virtual machine."""

    X8664 = "x86_64"
    AARCH64 = "aarch64"

    def go_arch(self) -> str:
        """Return the short toolchain style name of the architecture."""
        return "amd64" if self is Arch.X8664 else "arm64"


_ALIASES = {
    "x86_64": Arch.X8664,
    "amd": Arch.X8664,
    "amd64": Arch.X8664,
    "x86": Arch.X8664,
    "x64": Arch.X8664,
    "aarch64": Arch.AARCH64,
    "arm": Arch.AARCH64,
    "arm64": Arch.AARCH64,
    "m1": Arch.AARCH64,
}


def host_arch() -> Arch:
    """Return the CPU architecture of the host."""
    machine = platform.machine().lower()
    try:
        return _ALIASES[machine]
    except KeyError:
        raise RuntimeError(f"unsupported host architecture '{machine}'") from None


def normalize_arch(value: str | Arch | None) -> Arch:
    """Map an architecture name or alias to an ``Arch``.

    Unknown or empty values resolve to the host architecture.
    """
    if isinstance(value, Arch):
        return value
    if value and value in _ALIASES:
        return _ALIASES[value]
    return host_arch()


class HostActions(Protocol):
    """Actions performed on the host."""

    def run(self, *args: str) -> None:
        """Run a command."""

    def run_quiet(self, *args: str) -> None:
        """Run a command, suppressing its output."""

    def run_output(self, *args: str) -> str:
        """Run a command and return its output."""

    def run_interactive(self, *args: str) -> None:
        """Run a command interactively."""

    def run_with(self, stdin: IO[str] | None, stdout: IO[str] | None, *args: str) -> None:
        """Run a command with the given standard input and output."""

    def read(self, file_name: str) -> str:
        """Return the contents of a file."""

    def write(self, file_name: str, body: str) -> None:
        """Write ``body`` to a file."""

    def stat(self, file_name: str) -> os.stat_result:
        """Return information about a file."""

    def with_env(self, *env: str) -> HostActions:
        """Return a copy that adds the given ``KEY=value`` variables."""

    def env(self, name: str) -> str:
        """Return an environment variable of the host."""


class GuestActions(Protocol):
    """Actions performed on the guest virtual machine."""

    def run(self, *args: str) -> None:
        """Run a command."""

    def run_quiet(self, *args: str) -> None:
        """Run a command, suppressing its output."""

    def run_output(self, *args: str) -> str:
        """Run a command and return its output."""

    def run_interactive(self, *args: str) -> None:
        """Run a command interactively."""

    def run_with(self, stdin: IO[str] | None, stdout: IO[str] | None, *args: str) -> None:
        """Run a command with the given standard input and output."""

    def read(self, file_name: str) -> str:
        """Return the contents of a file."""

    def write(self, file_name: str, body: str) -> None:
        """Write ``body`` to a file."""

    def stat(self, file_name: str) -> Any:
        """Return information about a file."""

    def start(self, conf: Any) -> None:
        """Start the virtual machine."""

    def stop(self, force: bool) -> None:
        """Shut down the virtual machine."""

    def restart(self) -> None:
        """Restart the virtual machine."""

    def ssh(self, working_dir: str, *args: str) -> None:
        """Open an ssh session to the virtual machine."""

    def created(self) -> bool:
        """Return whether the virtual machine exists."""

    def running(self) -> bool:
        """Return whether the virtual machine is running."""

    def env(self, name: str) -> str:
        """Return an environment variable inside the virtual machine."""

    def get(self, key: str) -> str:
        """Return a stored setting of the virtual machine."""

    def set(self, key: str, value: str) -> None:
        """Store a setting in the virtual machine."""

    def user(self) -> str:
        """Return the user name inside the virtual machine."""

    def arch(self) -> Arch:
        """Return the architecture of the virtual machine."""


class Container(Protocol):
    """A container runtime inside the virtual machine."""

    def name(self) -> str:
        """Return the runtime name, e.g. docker."""

    def provision(self) -> None:
        """Install the runtime; safe to repeat."""

    def start(self) -> None:
        """Start the runtime."""

    def stop(self) -> None:
        """Stop the runtime."""

    def teardown(self) -> None:
        """Uninstall the runtime."""

    def version(self) -> str:
        """Return the runtime version."""

    def running(self) -> bool:
        """Return whether the runtime is running."""

    def dependencies(self) -> list[str]:
        """Return programs that must exist on the host."""


ContainerFactory = Callable[[HostActions, GuestActions], Container]


class UnsupportedRuntimeError(ValueError):
    """Raised for a container runtime that is not registered."""


_registry: dict[str, tuple[ContainerFactory, bool]] = {}


def register_container(name: str, factory: ContainerFactory, hidden: bool) -> None:
    """Register a container runtime; hidden runtimes are not listed."""
    if name in _registry:
        raise ValueError(f"container runtime '{name}' already registered")
    _registry[name] = (factory, hidden)


def new_container(runtime: str, host: HostActions, guest: GuestActions) -> Container:
    """Create the container runtime registered as ``runtime``."""
    try:
        factory, _ = _registry[runtime]
    except KeyError:
        raise UnsupportedRuntimeError(f"unsupported container runtime '{runtime}'") from None
    return factory(host, guest)


def container_runtimes() -> list[str]:
    """Return the sorted names of the runtimes that are not hidden."""
    return sorted(name for name, (_, hidden) in _registry.items() if not hidden)