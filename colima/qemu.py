"""Locations of the emulator binaries."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass

from colima.environment import host_arch

BIN_AARCH64 = "qemu-system-aarch64"
BIN_X8664 = "qemu-system-x86_64"

BINARIES = (BIN_AARCH64, BIN_X8664)


@dataclass(frozen=True)
class InstallDir:
    """A Unix style installation directory holding ``bin`` and ``share``."""

    path: str

    def bin(self) -> str:
        """Return the directory holding the binaries."""
        return os.path.join(self.path, "bin")

    def share(self) -> str:
        """Return the matching ``share`` directory."""
        return os.path.join(self.path, "share")

    def root(self) -> str:
        """Return the installation directory itself."""
        return self.path

    def bins_env_var(self) -> list[str]:
        """Return ``KEY=path`` environment entries pointing at the binaries."""
        return [
            "QEMU_SYSTEM_X86_64=" + os.path.join(self.bin(), BIN_X8664),
            "QEMU_SYSTEM_AARCH64=" + os.path.join(self.bin(), BIN_AARCH64),
        ]


def host_dir() -> InstallDir:
    """Return the installation directory of the emulator found in PATH."""
    binary = "qemu-system-" + host_arch().value
    found = shutil.which(binary)
    if found is None:
        raise FileNotFoundError(f"error locating qemu binaries in PATH: '{binary}' not found")
    bin_dir = os.path.dirname(found)
    if not bin_dir.endswith("/bin"):
        raise ValueError(f"unsupported bin directory '{bin_dir}' for qemu")
    return InstallDir(os.path.dirname(bin_dir))