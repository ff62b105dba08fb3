"""
MapCanvas - QGraphicsView hosting the dependency map.

Routes pointer and wheel input: background drags pan through the
InputManager, node presses drag through the GraphVM, and every click is
counted per target by the ClickTracker. Camera moves are eased by Camera
on a frame timer.
"""

import math
from typing import Optional

from PyQt6.QtWidgets import QGraphicsView, QWidget, QPushButton, QHBoxLayout
from PyQt6.QtCore import Qt, QPointF, QTimer, pyqtSignal
from PyQt6.QtGui import QPainter, QMouseEvent, QWheelEvent, QResizeEvent

from ...viewmodels.graph_vm import GraphVM
from .camera import Camera
from .click_tracker import ClickTracker
from .input_manager import InputManager
from .scene import MapScene, HitTarget, HIT_NODE, HIT_PLATE, BACKGROUND
from .style_manager import StyleManager, Theme


class MapCanvas(QGraphicsView):
    """
    Interactive map view.

    Signals:
        theme_changed(str): Theme value after a toggle
        scale_changed(float): Camera scale after zoom or animation
    """

    theme_changed = pyqtSignal(str)
    scale_changed = pyqtSignal(float)

    FRAME_MS = 16
    DRAG_THRESHOLD_PX = 3.0
    CLICK_TOLERANCE_PX = 5.0

    def __init__(self, vm: GraphVM, theme: Theme = Theme.DARK, parent=None):
        super().__init__(parent)
        self._vm = vm

        # Style manager
        self._style = StyleManager(theme)

        # Create scene
        self._scene = MapScene(self._style)
        self.setScene(self._scene)

        # Camera, input, clicks
        self._camera = Camera()
        self._input = InputManager(on_zoom=self._on_zoom, on_pan=self._on_pan)
        self._clicks = ClickTracker()

        self._anim_timer = QTimer(self)
        self._anim_timer.setInterval(self.FRAME_MS)
        self._anim_timer.timeout.connect(self._on_anim_frame)

        # Press state
        self._press_pos: Optional[QPointF] = None
        self._press_hit: HitTarget = BACKGROUND
        self._drag_node: Optional[str] = None
        self._drag_moved = False
        self._centered = False

        self._setup_view()
        self._setup_overlay_buttons()
        self._bind_viewmodel()

    def _setup_view(self):
        """Configure the QGraphicsView."""
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)

        # The camera lives on the world item; the view itself never scrolls
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setFrameShape(QGraphicsView.Shape.NoFrame)
        self.setMouseTracking(True)

        self.setMinimumSize(400, 300)

    def _setup_overlay_buttons(self):
        """Floating controls in the top-left corner."""
        self._overlay = QWidget(self)
        self._overlay.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        layout = QHBoxLayout(self._overlay)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(12)

        for text, tip, slot in [
            ("⌂", "Reset camera", self._vm.reset_camera),
            ("◐", "Toggle theme", self.toggle_theme),
            ("⟳", "Rebuild graph", self._vm.refresh),
        ]:
            btn = QPushButton(text)
            btn.setFixedSize(28, 28)
            btn.setToolTip(tip)
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.clicked.connect(lambda _checked=False, s=slot: s())
            btn.setStyleSheet("""
                QPushButton {
                    background: transparent;
                    color: rgba(160, 160, 160, 220);
                    border: none;
                    font-size: 18px;
                }
                QPushButton:hover { color: rgba(255, 107, 107, 255); }
            """)
            layout.addWidget(btn)

        self._overlay.adjustSize()

    def _bind_viewmodel(self):
        self._vm.graph_loaded.connect(self._on_graph_loaded)
        self._vm.frame_ready.connect(self.render_frame)
        self._vm.camera_requested.connect(self.smooth_look_at)
        self._vm.min_scale_changed.connect(self._input.set_min_scale)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def style_manager(self) -> StyleManager:
        return self._style

    @property
    def map_scene(self) -> MapScene:
        return self._scene

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def input_manager(self) -> InputManager:
        return self._input

    @property
    def click_tracker(self) -> ClickTracker:
        return self._clicks

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _on_graph_loaded(self):
        graph = self._vm.graph
        if graph is None:
            return
        self._clicks.reset()
        self._scene.set_graph(graph.nodes, graph.edges)
        self.render_frame()

    def render_frame(self):
        self._scene.render(self._vm.positions, self._vm.landforms, self._vm.selection)

    def _apply_camera(self):
        self._scene.set_camera(self._camera.state)
        self.scale_changed.emit(self._camera.state.scale)

    def toggle_theme(self):
        theme = self._style.toggle_theme()
        self._scene.apply_theme()
        self.render_frame()
        self.theme_changed.emit(theme.value)

    # -------------------------------------------------------------------------
    # Camera
    # -------------------------------------------------------------------------

    def smooth_look_at(self, x: float, y: float, scale: float):
        """Ease the camera so world (x, y) sits at the viewport centre."""
        vp = self.viewport()
        self._camera.look_at(x, y, scale, vp.width(), vp.height())
        if not self._anim_timer.isActive():
            self._anim_timer.start()

    def _on_anim_frame(self):
        running = self._camera.step()
        self._input.sync_scale(self._camera.state.scale)
        self._apply_camera()
        if not running:
            self._anim_timer.stop()

    def _on_zoom(self, scale: float, anchor_x: float, anchor_y: float):
        self._camera.cancel()
        self._camera.zoom_to(scale, anchor_x, anchor_y)
        self._apply_camera()

    def _on_pan(self, dx: float, dy: float):
        self._camera.cancel()
        self._camera.pan(dx, dy)
        self._apply_camera()

    # -------------------------------------------------------------------------
    # Qt Events
    # -------------------------------------------------------------------------

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        vp = self.viewport()
        self._scene.setSceneRect(0, 0, vp.width(), vp.height())
        self._vm.set_viewport_size(vp.width(), vp.height())
        if not self._centered:
            self._camera.center_on_screen(vp.width(), vp.height())
            self._apply_camera()
            self._centered = True

    def wheelEvent(self, event: QWheelEvent):
        """Wheel zoom about the cursor."""
        delta = event.angleDelta().y()
        if delta == 0:
            return
        pos = event.position()
        # Qt: positive = away from user (zoom in); InputManager expects the opposite
        self._input.handle_wheel(-delta, pos.x(), pos.y())
        event.accept()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return

        pos = event.position()
        hit = self._scene.hit_test(self.mapToScene(pos.toPoint()))
        self._press_pos = pos
        self._press_hit = hit

        if hit.kind == HIT_NODE:
            self._drag_node = hit.key
            self._drag_moved = False
            self._input.set_pan_enabled(False)
            self._vm.begin_drag(hit.key)
        elif hit.kind == HIT_PLATE:
            count = self._clicks.click(hit.click_key)
            self._vm.on_plate_click(hit.key, count)
        else:
            if self._input.handle_down(pos.x(), pos.y(), on_background=True):
                self.viewport().setCursor(Qt.CursorShape.ClosedHandCursor)
        event.accept()

    def mouseDoubleClickEvent(self, event: QMouseEvent):
        # Qt replaces the second press with this event; count it ourselves
        self.mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()

        if self._drag_node is not None:
            if not self._drag_moved and self._distance_from_press(pos) > self.DRAG_THRESHOLD_PX:
                self._drag_moved = True
            if self._drag_moved:
                world = self._scene.to_world(self.mapToScene(pos.toPoint()))
                self._vm.drag_node(self._drag_node, world.x(), world.y())
            return

        if self._input.dragging:
            self._input.handle_move(pos.x(), pos.y())
            return

        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return

        pos = event.position()
        if self._drag_node is not None:
            node_id = self._drag_node
            self._drag_node = None
            self._vm.end_drag(node_id)
            self._input.set_pan_enabled(True)
            if not self._drag_moved:
                count = self._clicks.click(self._press_hit.click_key)
                self._vm.on_node_click(node_id, count)
        elif self._press_hit.kind != HIT_PLATE:
            self._input.handle_up()
            self.viewport().unsetCursor()
            if self._distance_from_press(pos) < self.CLICK_TOLERANCE_PX:
                count = self._clicks.click(BACKGROUND.click_key)
                self._vm.on_background_click(count)

        self._press_pos = None
        event.accept()

    def focusOutEvent(self, event):
        if self._drag_node is None:
            self._input.handle_cancel()
        super().focusOutEvent(event)

    def _distance_from_press(self, pos: QPointF) -> float:
        if self._press_pos is None:
            return math.inf
        return math.hypot(pos.x() - self._press_pos.x(), pos.y() - self._press_pos.y())
