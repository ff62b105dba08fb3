"""
Build worker thread.

Runs graph generation in the background without blocking the UI.
"""

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from depmap_core.config import DepMapConfig
from depmap_core.ports.fs_port import FSPort
from depmap_core.services.graph_builder import GraphBuilder

logger = logging.getLogger(__name__)


class BuildWorker(QThread):
    """
    Background thread for building the dependency graph.

    Signals:
        progress(int, int, str): (files_processed, files_total, current_file)
        graph_ready(object): The DependencyGraph, emitted before finished
        finished(bool, str): (success, message)
    """

    progress = pyqtSignal(int, int, str)
    graph_ready = pyqtSignal(object)
    finished = pyqtSignal(bool, str)

    def __init__(self, fs: FSPort, config: DepMapConfig, root: str):
        """
        Initialize the worker.

        Args:
            fs: Filesystem adapter
            config: Workspace configuration
            root: Workspace root to map
        """
        super().__init__()
        self.builder = GraphBuilder(fs, config)
        self.root = root

    def run(self):
        """Run the build."""
        try:
            def on_progress(p):
                self.progress.emit(p.files_processed, p.files_total, p.current_file)

            graph = self.builder.build(self.root, progress_callback=on_progress)
            self.graph_ready.emit(graph)

            message = f"Mapped {graph.node_count:,} files, {graph.edge_count:,} imports"
            if graph.failures:
                message += f" ({len(graph.failures)} files skipped)"
            self.finished.emit(True, message)
        except Exception as e:
            logger.exception("Graph build failed for %s", self.root)
            self.finished.emit(False, f"Build failed: {e}")
