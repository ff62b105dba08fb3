"""
Filesystem port interface.

Defines the contract the core uses to look at a workspace.
Implementations are read-only: the core only probes paths and reads text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Union
from pathlib import Path


PathLike = Union[str, Path]


@dataclass
class DirEntry:
    """A directory entry from scandir."""
    name: str
    path: str
    is_dir: bool
    is_file: bool


class FSPort(ABC):
    """
    Abstract interface for filesystem operations.

    Probes (exists/is_dir/is_file) must never raise for a missing or
    unreadable path; they answer False instead.
    """

    @abstractmethod
    def scandir(self, path: PathLike) -> Iterator[DirEntry]:
        """
        Iterate over entries in a directory.

        Args:
            path: Directory to scan

        Yields:
            DirEntry for each item in the directory
        """
        pass

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Check if a path exists."""
        pass

    @abstractmethod
    def is_dir(self, path: PathLike) -> bool:
        """Check if path is a directory."""
        pass

    @abstractmethod
    def is_file(self, path: PathLike) -> bool:
        """Check if path is a file."""
        pass

    @abstractmethod
    def read_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        """
        Read file contents as text.

        Raises:
            OSError: if the file cannot be read
        """
        pass
