"""SHA digests of strings."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass


@dataclass(frozen=True)
class Digest:
    """The raw bytes of a computed digest."""

    value: bytes

    def hex(self) -> str:
        """Return the digest as lower case hexadecimal."""
        return self.value.hex()

    def __str__(self) -> str:
        return self.hex()

    def __bytes__(self) -> bytes:
        return self.value


def sha256(s: str) -> Digest:
    """Compute the SHA-256 digest of ``s``."""
    return Digest(hashlib.sha256(s.encode()).digest())


def sha1(s: str) -> Digest:
    """Compute the SHA-1 digest of ``s``."""
    return Digest(hashlib.sha1(s.encode()).digest())