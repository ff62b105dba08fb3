"""
Graph ViewModel - the controller behind the dependency map.

Owns the graph, the force layout and the derived regions; holds the
selection; turns disambiguated clicks into selection changes and camera
requests; keeps the minimum zoom in step with the graph's extent.
"""

import logging
import os
from typing import Any, Dict, Iterable, Optional, Set, Tuple

from PyQt6.QtCore import QObject, QTimer, QFileSystemWatcher, pyqtSignal

from depmap_core.adapters.local_fs import LocalFS
from depmap_core.config import DepMapConfig
from depmap_core.domain.enums import SelectionKind
from depmap_core.domain.models import (
    DependencyGraph,
    GraphEdge,
    Landforms,
    Positions,
    SelectionState,
)
from depmap_core.ports.fs_port import FSPort
from depmap_core.services.cache import GraphCache
from depmap_core.services.geometry import RegionGeometry
from depmap_core.services.layout import ForceLayout

from .base import BaseViewModel

logger = logging.getLogger(__name__)


def neighbors_of(node_id: str, edges: Iterable[GraphEdge]) -> Set[str]:
    """Ids directly connected to node_id, ignoring direction."""
    result: Set[str] = set()
    for edge in edges:
        if edge.source == node_id:
            result.add(edge.target)
        elif edge.target == node_id:
            result.add(edge.source)
    result.discard(node_id)
    return result


def fit_min_scale(
    positions: Positions,
    viewport_w: float,
    viewport_h: float,
    padding: float = 200.0,
    fill: float = 0.8,
    cap: float = 0.5,
) -> Optional[float]:
    """
    Smallest zoom worth allowing: enough to see the whole graph, but never
    more restrictive than cap.
    """
    if not positions or viewport_w <= 0 or viewport_h <= 0:
        return None

    xs = [p[0] for p in positions.values()]
    ys = [p[1] for p in positions.values()]
    width = max(xs) - min(xs) + padding
    height = max(ys) - min(ys) + padding
    fit = min(viewport_w / width, viewport_h / height) * fill
    return min(fit, cap)


class GraphVM(BaseViewModel):
    """
    ViewModel for the map canvas.

    Signals:
        graph_loaded(): A new node set is ready (views rebuild items)
        frame_ready(): Positions/regions/selection changed (views redraw)
        selection_changed(object): Info payload dict, or None when cleared
        camera_requested(float, float, float): Look at world x, y at scale
        min_scale_changed(float): New minimum zoom
        open_file_requested(str): Absolute path the user asked to open
        build_started(): A background build began
        build_progress(int, int, str): Files processed, total, current file
        build_finished(bool, str): Build result (success, message)
        stale_changed(bool): Workspace changed since the last build
    """

    graph_loaded = pyqtSignal()
    frame_ready = pyqtSignal()
    selection_changed = pyqtSignal(object)
    camera_requested = pyqtSignal(float, float, float)
    min_scale_changed = pyqtSignal(float)
    open_file_requested = pyqtSignal(str)
    build_started = pyqtSignal()
    build_progress = pyqtSignal(int, int, str)
    build_finished = pyqtSignal(bool, str)
    stale_changed = pyqtSignal(bool)

    FOCUS_SCALE = 1.5
    OVERVIEW_SCALE = 1.0
    INTRO_SCALE = 1.2
    INTRO_DELAY_MS = 500
    TICK_MS = 16

    def __init__(
        self,
        fs: Optional[FSPort] = None,
        config: Optional[DepMapConfig] = None,
        parent: Optional[QObject] = None,
        seed: int = 0,
    ):
        super().__init__(parent)
        self._fs = fs
        self._config = config or DepMapConfig()

        self._layout = ForceLayout(on_tick=self._on_tick, seed=seed)
        self._geometry = RegionGeometry()
        self._cache = GraphCache()

        self._graph: Optional[DependencyGraph] = None
        self._root: Optional[str] = None
        self._positions: Positions = {}
        self._directories: Dict[str, str] = {}
        self._landforms = Landforms()
        self._selection = SelectionState.empty()

        self._viewport: Tuple[float, float] = (0.0, 0.0)
        self._min_scale: Optional[float] = None

        self._timer = QTimer(self)
        self._timer.setInterval(self.TICK_MS)
        self._timer.timeout.connect(self.step)

        self._watcher: Optional[QFileSystemWatcher] = None
        self._listings: Dict[str, Set[str]] = {}
        self._current_worker = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def graph(self) -> Optional[DependencyGraph]:
        return self._graph

    @property
    def layout(self) -> ForceLayout:
        return self._layout

    @property
    def positions(self) -> Positions:
        return self._positions

    @property
    def landforms(self) -> Landforms:
        return self._landforms

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def min_scale(self) -> Optional[float]:
        return self._min_scale

    @property
    def cache(self) -> GraphCache:
        return self._cache

    @property
    def root(self) -> Optional[str]:
        return self._root

    @property
    def config(self) -> DepMapConfig:
        return self._config

    @property
    def build_in_progress(self) -> bool:
        return self._current_worker is not None and self._current_worker.isRunning()

    # -------------------------------------------------------------------------
    # Graph Loading
    # -------------------------------------------------------------------------

    def load_graph(self, graph: DependencyGraph, intro: bool = True) -> None:
        """Display a freshly built graph."""
        self._graph = graph
        self._selection = SelectionState.empty()
        self._directories = {n.node_id: n.directory for n in graph.nodes}

        self._layout.set_data(graph.nodes, graph.edges)
        self._on_tick(self._layout.snapshot())

        self.graph_loaded.emit()
        self.selection_changed.emit(None)
        self.frame_ready.emit()
        self._ensure_running()

        if intro:
            QTimer.singleShot(
                self.INTRO_DELAY_MS,
                lambda: self.camera_requested.emit(0.0, 0.0, self.INTRO_SCALE),
            )
        logger.info("Loaded graph: %d nodes, %d edges", graph.node_count, graph.edge_count)

    def start_build(self, root: str, force: bool = False) -> bool:
        """
        Build (or serve from cache) the graph for root in the background.

        Returns:
            False if a build is already running
        """
        if self.build_in_progress:
            return False

        if root != self._root:
            self._cache.clear()
            self._root = root

        if not force and self._cache.graph is not None and not self._cache.dirty:
            self.load_graph(self._cache.graph)
            self.build_finished.emit(True, "Served cached graph")
            return True

        from ..workers import BuildWorker

        fs = self._fs or LocalFS()
        self._current_worker = BuildWorker(fs, self._config, root)
        self._current_worker.progress.connect(self._on_build_progress)
        self._current_worker.graph_ready.connect(self._on_graph_built)
        self._current_worker.finished.connect(self._on_build_finished)
        self.build_started.emit()
        self._current_worker.start()
        return True

    def set_config(self, config: DepMapConfig) -> None:
        """Use a new configuration; the cached graph no longer applies."""
        self._config = config
        self._cache.mark_dirty()

    def refresh(self) -> bool:
        """Rebuild the current workspace, ignoring the cache."""
        if self._root is None:
            return False
        return self.start_build(self._root, force=True)

    def _on_graph_built(self, graph: DependencyGraph):
        self._cache.store(graph)
        self._notify_change(self.stale_changed, False)
        self._watch(graph)
        self.load_graph(graph)

    def _on_build_progress(self, done: int, total: int, current: str):
        self._notify_change(self.build_progress, done, total, current)

    def _on_build_finished(self, success: bool, message: str):
        worker, self._current_worker = self._current_worker, None
        if worker is not None:
            # run() is returning; let the thread exit before it is released
            worker.wait()
        self.build_finished.emit(success, message)

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def step(self) -> bool:
        """Advance the layout one tick (driven by the timer)."""
        running = self._layout.tick()
        if not running:
            self._timer.stop()
        return running

    def _ensure_running(self):
        self._layout.restart()
        if not self._timer.isActive():
            self._timer.start()

    def _on_tick(self, positions: Positions) -> None:
        self._positions = positions
        self._landforms = self._geometry.compute(positions, self._directories)
        self._update_min_scale()
        self.frame_ready.emit()

    # -------------------------------------------------------------------------
    # Zoom Bounds
    # -------------------------------------------------------------------------

    def set_viewport_size(self, width: float, height: float) -> None:
        self._viewport = (width, height)
        self._update_min_scale()

    def _update_min_scale(self) -> None:
        value = fit_min_scale(self._positions, *self._viewport)
        if value is not None:
            self._min_scale = value
            self._notify_change(self.min_scale_changed, value)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def neighbors(self, node_id: str) -> Set[str]:
        if self._graph is None:
            return set()
        return neighbors_of(node_id, self._graph.edges)

    def select_node(self, node_id: str) -> None:
        node = self._graph.node_by_id(node_id) if self._graph else None
        if node is None:
            return

        self._selection = SelectionState.for_node(node_id, self.neighbors(node_id))
        self.camera_requested.emit(node.x, node.y, self.FOCUS_SCALE)
        self.selection_changed.emit({
            "label": node.label,
            "directory": node.directory,
            "description": None,
            "type": "node",
            "path": node.full_path,
        })
        self.frame_ready.emit()

    def select_cluster(self, directory: str) -> None:
        if self._graph is None:
            return
        members = [n for n in self._graph.nodes if n.directory == directory]
        if not members:
            return

        centroid = self._landforms.centroids.get(directory)
        if centroid is None:
            centroid = (
                sum(n.x for n in members) / len(members),
                sum(n.y for n in members) / len(members),
            )

        self._selection = SelectionState.for_cluster(directory)
        self.camera_requested.emit(centroid[0], centroid[1], self.FOCUS_SCALE)
        self.selection_changed.emit({
            "label": f"Cluster: {directory}",
            "directory": directory,
            "description": f"Contains {len(members)} nodes.",
            "type": "cluster",
            "path": None,
        })
        self.frame_ready.emit()

    def clear_selection(self) -> None:
        was_selected = not self._selection.is_empty
        self._selection = SelectionState.empty()
        self.selection_changed.emit(None)
        if was_selected:
            self.frame_ready.emit()

    def reset_camera(self) -> None:
        self.clear_selection()
        self.camera_requested.emit(0.0, 0.0, self.OVERVIEW_SCALE)

    # -------------------------------------------------------------------------
    # Click Handling
    # -------------------------------------------------------------------------

    def on_node_click(self, node_id: str, count: int) -> None:
        """Single clicks are reserved for dragging; doubles select."""
        if count >= 2:
            self.select_node(node_id)

    def on_plate_click(self, directory: str, count: int) -> None:
        if count >= 2:
            self.select_cluster(directory)

    def on_background_click(self, count: int) -> None:
        self.clear_selection()
        if count >= 2:
            self.camera_requested.emit(0.0, 0.0, self.OVERVIEW_SCALE)

    # -------------------------------------------------------------------------
    # Dragging
    # -------------------------------------------------------------------------

    def begin_drag(self, node_id: str) -> None:
        self._layout.drag_start()
        self._ensure_running()

    def drag_node(self, node_id: str, x: float, y: float) -> None:
        self._layout.drag_move(node_id, x, y)

    def end_drag(self, node_id: str) -> None:
        self._layout.drag_end(node_id)

    # -------------------------------------------------------------------------
    # File Actions
    # -------------------------------------------------------------------------

    def request_open_file(self, path: Optional[str] = None) -> bool:
        """Ask the host to open a file (defaults to the selected node's)."""
        if path is None:
            if self._selection.kind != SelectionKind.NODE or self._graph is None:
                return False
            node = self._graph.node_by_id(self._selection.node_id)
            if node is None:
                return False
            path = node.full_path
        self.open_file_requested.emit(path)
        return True

    def export_dict(self) -> Optional[Dict[str, Any]]:
        return self._graph.to_dict() if self._graph else None

    # -------------------------------------------------------------------------
    # Change Tracking
    # -------------------------------------------------------------------------

    def _watch(self, graph: DependencyGraph) -> None:
        if self._watcher is None:
            self._watcher = QFileSystemWatcher(self)
            self._watcher.fileChanged.connect(self._on_path_changed)
            self._watcher.directoryChanged.connect(self._on_directory_changed)
        else:
            existing = self._watcher.files() + self._watcher.directories()
            if existing:
                self._watcher.removePaths(existing)

        files = [n.full_path for n in graph.nodes]
        dirs = sorted({os.path.dirname(p) for p in files} | ({self._root} if self._root else set()))
        self._listings = {d: self._relevant_names(d) for d in dirs}
        if files or dirs:
            self._watcher.addPaths(files + dirs)

    def _on_path_changed(self, path: str):
        if self._cache.mark_dirty(path):
            self._notify_change(self.stale_changed, True)

    def _on_directory_changed(self, path: str):
        # Only an added or removed source file (or config) counts
        names = self._relevant_names(path)
        changed = names ^ self._listings.get(path, set())
        self._listings[path] = names
        if changed and self._cache.mark_dirty(os.path.join(path, min(changed))):
            self._notify_change(self.stale_changed, True)

    def _relevant_names(self, directory: str) -> Set[str]:
        fs = self._fs or LocalFS()
        try:
            entries = list(fs.scandir(directory))
        except OSError:
            return set()
        return {e.name for e in entries if e.is_file and GraphCache.is_relevant(e.name)}
