"""Cached downloads of files into the guest."""

from __future__ import annotations

import os
from dataclasses import dataclass

from colima.environment import GuestActions, HostActions
from colima.sha import sha256
from colima.terminal import clear_line


@dataclass
class Downloader:
    """Downloads files on the host, keeping a cache under ``cache_dir``."""

    host: HostActions
    guest: GuestActions
    cache_dir: str

    def cache_file_name(self, url: str) -> str:
        """Return the cache path for ``url``."""
        return os.path.join(self.cache_dir, "caches", sha256(url).hex())

    def _downloading_file_name(self, url: str) -> str:
        return self.cache_file_name(url) + ".downloading"

    def has_cache(self, url: str) -> bool:
        """Return whether ``url`` has already been downloaded."""
        try:
            os.stat(self.cache_file_name(url))
        except OSError:
            return False
        return True

    def download_file(self, url: str) -> None:
        """Download ``url`` into the cache.

        The file is saved under a temporary name and renamed once complete,
        so that an interrupted download never leaves a corrupt cache entry.
        """
        downloading = self._downloading_file_name(url)
        try:
            self.host.run_quiet("mkdir", "-p", os.path.dirname(downloading))
        except Exception as exc:
            raise RuntimeError(f"error preparing cache dir: {exc}") from exc

        # resolve redirects first so the progress bar only covers the real download
        try:
            download_url = self.host.run_output(
                "curl", "-Ls", "-o", "/dev/null", "-w", "%{url_effective}", url
            )
        except Exception as exc:
            raise RuntimeError(f"error retrieving redirect url: {exc}") from exc

        # "-C -" resumes a previous partial download where possible
        self.host.run_interactive("curl", "-L", "-#", "-C", "-", "-o", downloading, download_url)
        clear_line()

        self.host.run_quiet("mv", downloading, self.cache_file_name(url))


def download(
    host: HostActions,
    guest: GuestActions,
    url: str,
    file_name: str,
    cache_dir: str,
) -> None:
    """Download ``url`` (through the host cache) and copy it to ``file_name`` in the guest.

    ``file_name`` must be a location in the guest that needs no root access.
    """
    loader = Downloader(host=host, guest=guest, cache_dir=cache_dir)

    if not loader.has_cache(url):
        try:
            loader.download_file(url)
        except Exception as exc:
            raise RuntimeError(f"error downloading '{url}': {exc}") from exc

    guest.run_quiet("cp", loader.cache_file_name(url), file_name)