"""
Local filesystem adapter.

Read-only access to a workspace on disk. Probes never follow symlinks
out of the answer: a broken link simply does not exist.
"""

import os
from pathlib import Path
from typing import Iterator

from ..ports.fs_port import FSPort, DirEntry, PathLike


class LocalFS(FSPort):
    """
    Read-only filesystem implementation backed by os/pathlib.

    Text reads are capped at max_bytes so a stray generated bundle
    cannot stall a graph build.
    """

    def __init__(self, max_bytes: int = 2 * 1024 * 1024):
        self.max_bytes = max_bytes
        self._read_count = 0
        self._bytes_read = 0

    def scandir(self, path: PathLike) -> Iterator[DirEntry]:
        """Iterate over entries in a directory."""
        if not os.path.isdir(path):
            raise NotADirectoryError(f"Not a directory: {path}")

        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    yield DirEntry(
                        name=entry.name,
                        path=entry.path,
                        is_dir=entry.is_dir(follow_symlinks=False),
                        is_file=entry.is_file(follow_symlinks=False),
                    )
                except OSError:
                    # Skip entries we can't access
                    continue

    def exists(self, path: PathLike) -> bool:
        try:
            return os.path.exists(path)
        except (OSError, ValueError):
            return False

    def is_dir(self, path: PathLike) -> bool:
        try:
            return os.path.isdir(path)
        except (OSError, ValueError):
            return False

    def is_file(self, path: PathLike) -> bool:
        try:
            return os.path.isfile(path)
        except (OSError, ValueError):
            return False

    def read_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        """Read up to max_bytes of a file, decoding with replacement."""
        with open(Path(path), "rb") as f:
            data = f.read(self.max_bytes)

        self._read_count += 1
        self._bytes_read += len(data)
        return data.decode(encoding, errors="replace")

    @property
    def stats(self) -> dict:
        """Get read statistics."""
        return {
            "read_count": self._read_count,
            "bytes_read": self._bytes_read,
        }
