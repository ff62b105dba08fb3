"""
Main Window for depmap.

Thin view layer using MVVM pattern:
- GraphVM holds graph, layout and selection state
- This view handles layout, status reporting and host actions
"""

import logging
import os
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QLabel, QStatusBar, QProgressBar, QFileDialog, QMessageBox,
)
from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QAction, QDesktopServices, QKeySequence

from depmap_core.adapters.local_fs import LocalFS
from depmap_core.config import DepMapConfig, load_config

from ..viewmodels import GraphVM
from .graph import MapCanvas
from .info_panel import InfoPanel

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window using MVVM pattern."""

    def __init__(self, root: Optional[str] = None, config: Optional[DepMapConfig] = None):
        super().__init__()

        self.setWindowTitle("depmap - Codebase Dependency Map")
        self.resize(1400, 900)

        self._config = config
        self._fs = LocalFS()

        # Initialize ViewModels
        self._graph_vm = GraphVM(self._fs, config or DepMapConfig(), parent=self)

        # Setup UI
        self._setup_ui()
        self._setup_actions()
        self._setup_status_bar()

        # Bind ViewModels to UI
        self._bind_viewmodels()

        if root:
            self.open_workspace(root)

    def _setup_ui(self):
        self.canvas = MapCanvas(self._graph_vm)
        self.setCentralWidget(self.canvas)

        self.info_panel = InfoPanel(self._graph_vm, parent=self.canvas)

    def _setup_actions(self):
        menu = self.menuBar().addMenu("&File")

        open_action = QAction("&Open Workspace...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open_workspace)
        menu.addAction(open_action)

        refresh_action = QAction("&Rebuild Graph", self)
        refresh_action.setShortcut(QKeySequence.StandardKey.Refresh)
        refresh_action.triggered.connect(self._graph_vm.refresh)
        menu.addAction(refresh_action)

        view_menu = self.menuBar().addMenu("&View")

        reset_action = QAction("Reset &Camera", self)
        reset_action.triggered.connect(self._graph_vm.reset_camera)
        view_menu.addAction(reset_action)

        theme_action = QAction("Toggle &Theme", self)
        theme_action.triggered.connect(self.canvas.toggle_theme)
        view_menu.addAction(theme_action)

    def _setup_status_bar(self):
        status_bar = QStatusBar()
        self.setStatusBar(status_bar)

        self.progress = QProgressBar()
        self.progress.setFixedWidth(180)
        self.progress.setVisible(False)
        status_bar.addPermanentWidget(self.progress)

        self.stale_label = QLabel(" changed on disk ")
        self.stale_label.setVisible(False)
        status_bar.addPermanentWidget(self.stale_label)

        self.root_label = QLabel("No workspace")
        self.root_label.setStyleSheet("padding: 0 12px;")
        status_bar.addWidget(self.root_label)

    def _bind_viewmodels(self):
        vm = self._graph_vm
        vm.build_started.connect(self._on_build_started)
        vm.build_progress.connect(self._on_build_progress)
        vm.build_finished.connect(self._on_build_finished)
        vm.open_file_requested.connect(self._on_open_file_requested)
        vm.stale_changed.connect(self.stale_label.setVisible)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def open_workspace(self, root: str):
        """Load config for root and start a build."""
        if self._config is None:
            self._graph_vm.set_config(load_config(workspace_root=root))
        self.root_label.setText(root)
        self._graph_vm.start_build(root)

    def _on_open_workspace(self):
        folder = QFileDialog.getExistingDirectory(self, "Open Workspace")
        if folder:
            self.open_workspace(folder)

    # -------------------------------------------------------------------------
    # ViewModel Handlers
    # -------------------------------------------------------------------------

    def _on_build_started(self):
        self.progress.setRange(0, 0)
        self.progress.setVisible(True)
        self.statusBar().showMessage("Building dependency graph...")

    def _on_build_progress(self, done: int, total: int, current: str):
        if total > 0:
            self.progress.setRange(0, total)
            self.progress.setValue(done)
        if current:
            self.statusBar().showMessage(f"Resolving {os.path.basename(current)}")

    def _on_build_finished(self, success: bool, message: str):
        self.progress.setVisible(False)
        if success:
            self.statusBar().showMessage(message, 5000)
        else:
            self.statusBar().clearMessage()
            QMessageBox.critical(self, "Dependency Map", message)

    def _on_open_file_requested(self, path: str):
        ok = QDesktopServices.openUrl(QUrl.fromLocalFile(path))
        if not ok:
            logger.warning("Could not open %s", path)
            self.statusBar().showMessage(f"Could not open {path}", 5000)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._place_info_panel()

    def _place_info_panel(self):
        margin = 12
        self.info_panel.move(self.canvas.width() - self.info_panel.width() - margin, margin)
