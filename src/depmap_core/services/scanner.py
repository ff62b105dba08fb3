"""
Workspace Scanner - file enumeration.

Walks a workspace root and lists source files with their language.
Uses only scandir - does not read file contents.
"""

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, List, Optional, Tuple

from ..config import DepMapConfig
from ..ports.fs_port import FSPort

logger = logging.getLogger(__name__)

# Directories that are never worth mapping
ALWAYS_SKIP = {"node_modules", "__pycache__", ".git", ".hg", ".svn", ".venv", "venv"}


@dataclass
class ScanProgress:
    """Progress information for a scan."""
    dirs_scanned: int = 0
    files_found: int = 0
    errors: int = 0
    current_path: str = ""


class WorkspaceScanner:
    """
    Enumerates (absolute path, language) pairs under a root.

    Ignore patterns are shell-style globs tested against both the entry
    name and its root-relative POSIX path.
    """

    def __init__(self, fs: FSPort, config: DepMapConfig):
        self.fs = fs
        self.config = config

    def scan(
        self,
        root: str,
        progress_callback: Optional[Callable[[ScanProgress], None]] = None,
    ) -> List[Tuple[str, str]]:
        """
        Scan the workspace.

        Returns:
            Pairs sorted by path, for files whose extension has a language
        """
        root = os.path.normpath(os.path.abspath(root))
        if not self.fs.is_dir(root):
            raise NotADirectoryError(f"Path is not a directory: {root}")

        progress = ScanProgress(current_path=root)
        found: List[Tuple[str, str]] = []
        pending = [root]

        while pending:
            dir_path = pending.pop()
            progress.current_path = dir_path
            progress.dirs_scanned += 1

            try:
                entries = list(self.fs.scandir(dir_path))
            except OSError as e:
                logger.debug("Cannot scan %s: %s", dir_path, e)
                progress.errors += 1
                continue

            for entry in entries:
                rel = PurePath(os.path.relpath(entry.path, root)).as_posix()
                if self._is_ignored(entry.name, rel, entry.is_dir):
                    continue

                if entry.is_dir:
                    pending.append(entry.path)
                elif entry.is_file:
                    language = self.config.language_for(entry.name)
                    if language:
                        found.append((os.path.normpath(entry.path), language))
                        progress.files_found += 1

            if progress_callback and progress.dirs_scanned % 10 == 0:
                progress_callback(progress)

        if progress_callback:
            progress_callback(progress)

        found.sort(key=lambda pair: pair[0])
        logger.info("Scanned %d directories, found %d source files",
                    progress.dirs_scanned, len(found))
        return found

    def _is_ignored(self, name: str, rel_path: str, is_dir: bool) -> bool:
        if is_dir and (name in ALWAYS_SKIP or name.startswith(".")):
            return True
        return any(
            matches_ignore(name, rel_path, pattern, is_dir)
            for pattern in self.config.ignore_patterns
        )


def matches_ignore(name: str, rel_path: str, pattern: str, is_dir: bool = False) -> bool:
    """
    Test one ignore glob against an entry.

    A leading `**/` also matches at the root, and a `dir/**` pattern matches
    the directory itself so the whole subtree is pruned.
    """
    variants = [pattern]
    while pattern.startswith("**/"):
        pattern = pattern[3:]
        variants.append(pattern)

    for glob in variants:
        if fnmatch.fnmatch(name, glob) or fnmatch.fnmatch(rel_path, glob):
            return True
        if is_dir and glob.endswith("/**"):
            prefix = glob[:-3]
            if prefix and fnmatch.fnmatch(rel_path, prefix):
                return True
    return False
