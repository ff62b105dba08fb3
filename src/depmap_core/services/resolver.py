"""
Import resolver - maps raw import strings onto files in the workspace.

Strategies run in order and the first one that produces files wins:
relative (only for strings starting with '.'), root-relative,
src-relative, then fuzzy suffix matching.
"""

import logging
import os
from typing import Dict, Iterable, List, Optional

from ..ports.fs_port import FSPort

logger = logging.getLogger(__name__)


# Appended to a candidate path when probing for a file
FILE_SUFFIXES = [
    ".ts", ".tsx", ".js", ".jsx",
    ".py", ".go", ".java",
    ".h", ".hpp", ".c", ".cpp",
]
INDEX_SUFFIXES = ["/index.ts", "/index.js", "/index.tsx"]
CANDIDATE_SUFFIXES = FILE_SUFFIXES + INDEX_SUFFIXES


def _norm(path: str) -> str:
    return os.path.normpath(path)


class ImportResolver:
    """
    Resolves imports against a fixed set of known files.

    Results only ever contain paths from the known file set. A directory hit
    expands to its direct children (non-recursive).
    """

    def __init__(self, root: str, known_files: Iterable[str], fs: FSPort):
        self.root = _norm(os.path.abspath(root))
        self.fs = fs

        self._known: Dict[str, None] = {}
        self._children: Dict[str, List[str]] = {}
        for path in known_files:
            path = _norm(path)
            if path in self._known:
                continue
            self._known[path] = None
            self._children.setdefault(os.path.dirname(path), []).append(path)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def resolve(self, import_path: str, source_file: str) -> List[str]:
        """
        Resolve one import string.

        Args:
            import_path: The raw string captured by an extractor
            source_file: Absolute path of the importing file

        Returns:
            Matching known files, possibly empty
        """
        if not import_path:
            return []

        if import_path.startswith("."):
            base = os.path.dirname(_norm(source_file))
            return self._probe(os.path.join(base, import_path))

        anchored = import_path.lstrip("/")
        for base in (self.root, os.path.join(self.root, "src")):
            found = self._probe(os.path.join(base, anchored))
            if found:
                return found

        return self._fuzzy(anchored)

    def is_known(self, path: str) -> bool:
        return _norm(path) in self._known

    # -------------------------------------------------------------------------
    # Probes
    # -------------------------------------------------------------------------

    def _probe(self, candidate: str) -> List[str]:
        """File probe first, then directory expansion."""
        candidate = _norm(candidate)
        files = self._probe_files(candidate)
        if files:
            return files
        return self._probe_dir(candidate)

    def _probe_files(self, candidate: str) -> List[str]:
        found: List[str] = []
        for path in [candidate] + [_norm(candidate + s) for s in CANDIDATE_SUFFIXES]:
            if path in self._known and path not in found and self.fs.is_file(path):
                found.append(path)
        return found

    def _probe_dir(self, candidate: str) -> List[str]:
        if not self.fs.is_dir(candidate):
            return []
        return list(self._children.get(candidate, []))

    def _fuzzy(self, import_path: str) -> List[str]:
        """
        Strip leading segments until root/<rest> exists.

        Dotted module paths (no '/') are split on '.', so `pkg.sub.mod`
        can land on `sub/mod.py`. Only the first existing suffix is used.
        """
        separator = "/" if "/" in import_path else "."
        segments = [s for s in import_path.split(separator) if s]

        for i in range(len(segments)):
            candidate = _norm(os.path.join(self.root, *segments[i:]))
            if self._exists(candidate):
                return self._probe(candidate)
        return []

    def _exists(self, candidate: str) -> bool:
        if self.fs.exists(candidate):
            return True
        return any(self.fs.is_file(candidate + ext) for ext in FILE_SUFFIXES)


def resolve_import(
    import_path: str,
    source_file: str,
    root: str,
    known_files: Iterable[str],
    fs: Optional[FSPort] = None,
) -> List[str]:
    """One-shot convenience wrapper around ImportResolver."""
    if fs is None:
        from ..adapters.local_fs import LocalFS
        fs = LocalFS()
    return ImportResolver(root, known_files, fs).resolve(import_path, source_file)
