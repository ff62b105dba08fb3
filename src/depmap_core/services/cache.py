"""
Graph cache keyed by a dirty flag.

The cached graph is served as-is until a relevant file changes.
"""

import logging
import os
import threading
from typing import Callable, Optional

from ..config import CONFIG_FILENAME
from ..domain.models import DependencyGraph

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = {
    ".ts", ".tsx", ".js", ".jsx", ".py", ".go", ".java",
    ".c", ".cpp", ".h", ".hpp",
}
WATCHED_NAMES = {CONFIG_FILENAME, ".gitignore"}


class GraphCache:
    """Holds the last built graph and whether it is stale."""

    def __init__(self):
        self._graph: Optional[DependencyGraph] = None
        self._dirty = True
        self._lock = threading.Lock()

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def graph(self) -> Optional[DependencyGraph]:
        return self._graph

    @staticmethod
    def is_relevant(path: str) -> bool:
        """Whether a change to path can affect the graph."""
        name = os.path.basename(path)
        if name in WATCHED_NAMES:
            return True
        return os.path.splitext(name)[1].lower() in SOURCE_EXTENSIONS

    def mark_dirty(self, path: Optional[str] = None) -> bool:
        """
        Flag the cache stale for a created/changed/deleted path.

        Returns:
            True if the flag was set
        """
        if path is not None and not self.is_relevant(path):
            return False
        with self._lock:
            self._dirty = True
        logger.debug("Graph cache invalidated by %s", path or "request")
        return True

    def store(self, graph: DependencyGraph) -> None:
        with self._lock:
            self._graph = graph
            self._dirty = False

    def clear(self) -> None:
        with self._lock:
            self._graph = None
            self._dirty = True

    def get_or_build(self, build: Callable[[], DependencyGraph]) -> DependencyGraph:
        """Serve the cached graph when clean, otherwise rebuild and store."""
        with self._lock:
            if self._graph is not None and not self._dirty:
                return self._graph
        graph = build()
        self.store(graph)
        return graph
