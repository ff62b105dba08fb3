"""
Graph Builder - turns a set of source files into a dependency graph.

Each file is read, its imports extracted and resolved independently on a
thread pool. A file that fails is recorded and skipped; the build always
returns whatever graph it could assemble.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import DepMapConfig
from ..domain.models import (
    ROOT_DIRECTORY,
    BuildFailure,
    DependencyGraph,
    FileRecord,
    GraphEdge,
    GraphNode,
)
from ..extractors.registry import ExtractorRegistry, get_registry
from ..ports.fs_port import FSPort
from .resolver import ImportResolver
from .scanner import WorkspaceScanner

logger = logging.getLogger(__name__)


@dataclass
class BuildProgress:
    """Progress info for build callbacks."""
    files_processed: int
    files_total: int
    current_file: str


def make_record(path: str, language: str, root: str) -> FileRecord:
    """Create the FileRecord for an absolute path under root."""
    path = os.path.normpath(path)
    rel_dir = os.path.relpath(os.path.dirname(path), root)
    directory = PurePath(rel_dir).as_posix()
    if directory in (".", ""):
        directory = ROOT_DIRECTORY
    return FileRecord(
        path=path,
        label=os.path.basename(path),
        language=language,
        directory=directory,
    )


class GraphBuilder:
    """
    Service that builds a DependencyGraph for a workspace.

    Node ids are ordinal strings assigned in input order before any work is
    scheduled, so they never change during a build.
    """

    def __init__(
        self,
        fs: FSPort,
        config: Optional[DepMapConfig] = None,
        registry: Optional[ExtractorRegistry] = None,
    ):
        """
        Initialize the builder.

        Args:
            fs: Filesystem adapter used for probes and reads
            config: Workspace configuration (defaults if None)
            registry: Import extractors (shared registry if None)
        """
        self.fs = fs
        self.config = config or DepMapConfig()
        self.registry = registry or get_registry()

    def build(
        self,
        root: str,
        files: Optional[Sequence[Tuple[str, str]]] = None,
        progress_callback: Optional[Callable[[BuildProgress], None]] = None,
    ) -> DependencyGraph:
        """
        Build the graph.

        Args:
            root: Workspace root directory
            files: Ordered (absolute path, language) pairs; scanned if None
            progress_callback: Called as each file finishes

        Returns:
            The (possibly partial) graph with a list of per-file failures

        Raises:
            NotADirectoryError: if root is not an existing directory
        """
        start = time.perf_counter()
        root = os.path.normpath(os.path.abspath(root))
        if not self.fs.is_dir(root):
            raise NotADirectoryError(f"Workspace root is not a directory: {root}")

        if files is None:
            files = WorkspaceScanner(self.fs, self.config).scan(root)

        logger.info("Building dependency graph for %d files in %s", len(files), root)

        records: List[FileRecord] = []
        seen = set()
        for path, language in files:
            record = make_record(path, language, root)
            if record.path in seen:
                continue
            seen.add(record.path)
            records.append(record)

        nodes = [
            GraphNode(
                node_id=str(i),
                label=r.label,
                directory=r.directory,
                full_path=r.path,
            )
            for i, r in enumerate(records)
        ]
        path_to_id: Dict[str, str] = {r.path: n.node_id for r, n in zip(records, nodes)}

        resolver = ImportResolver(root, path_to_id.keys(), self.fs)
        edges: List[GraphEdge] = []
        failures: List[BuildFailure] = []

        work = [r for r in records if self.registry.supports(r.language)]
        processed = 0

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = {
                executor.submit(self._resolve_file, record, resolver): record
                for record in work
            }
            for future in as_completed(futures):
                record = futures[future]
                processed += 1
                try:
                    targets = future.result()
                except Exception as e:
                    logger.debug("Failed to process %s: %s", record.path, e)
                    failures.append(BuildFailure(path=record.path, message=str(e)))
                    targets = []

                source_id = path_to_id[record.path]
                for target in targets:
                    target_id = path_to_id.get(target)
                    if target_id is None or target_id == source_id:
                        continue
                    edges.append(GraphEdge(source=source_id, target=target_id))

                if progress_callback:
                    progress_callback(BuildProgress(
                        files_processed=processed,
                        files_total=len(work),
                        current_file=record.path,
                    ))

        if failures:
            logger.warning("Encountered %d errors during graph generation", len(failures))

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Generation complete. Nodes: %d, Edges: %d, Time: %.0fms",
            len(nodes), len(edges), elapsed_ms,
        )
        return DependencyGraph(
            nodes=nodes,
            edges=edges,
            failures=failures,
            elapsed_ms=elapsed_ms,
        )

    def _resolve_file(self, record: FileRecord, resolver: ImportResolver) -> List[str]:
        """Read one file and resolve all of its imports."""
        text = self.fs.read_text(record.path)
        imports = self.registry.extract(text, record.language)

        targets: List[str] = []
        for import_path in sorted(imports):
            targets.extend(resolver.resolve(import_path, record.path))
        return targets
