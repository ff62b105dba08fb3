"""
Tests for MapCanvas pointer routing.

Drives the real view with synthetic mouse events and checks how presses
and releases turn into drags, clicks and selection changes.
"""

import pytest

from depmap_core.domain import DependencyGraph, GraphEdge, GraphNode, SelectionKind
from depmap_app.views.graph.click_tracker import ClickState


def sample_graph():
    """a.ts imports b.ts; c.ts stands alone in lib/."""
    nodes = [
        GraphNode(node_id="0", label="a.ts", directory="root", full_path="/w/a.ts"),
        GraphNode(node_id="1", label="b.ts", directory="root", full_path="/w/b.ts"),
        GraphNode(node_id="2", label="c.ts", directory="lib", full_path="/w/lib/c.ts"),
    ]
    return DependencyGraph(nodes=nodes, edges=[GraphEdge("0", "1")])


@pytest.fixture
def canvas(qapp):
    from depmap_app.viewmodels import GraphVM
    from depmap_app.views.graph import MapCanvas

    vm = GraphVM()
    view = MapCanvas(vm)
    view.resize(800, 600)
    view.show()
    qapp.processEvents()

    vm.load_graph(sample_graph(), intro=False)
    # Settle so nodes sit still and apart
    vm.layout.run(1000)
    yield view, vm

    vm.layout.stop()
    view.close()


def node_point(view, node_id):
    """Viewport position of a node's centre."""
    item = view.map_scene.node_item(node_id)
    return view.mapFromScene(item.scenePos())


def click(view, point):
    from PyQt6.QtCore import Qt
    from PyQt6.QtTest import QTest

    QTest.mouseClick(view.viewport(), Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, point)


def move(view, point):
    """Send a left-button-held move to the viewport."""
    from PyQt6.QtCore import QEvent, QPointF, Qt
    from PyQt6.QtGui import QMouseEvent
    from PyQt6.QtWidgets import QApplication

    local = QPointF(point)
    event = QMouseEvent(
        QEvent.Type.MouseMove,
        local,
        QPointF(view.viewport().mapToGlobal(point)),
        Qt.MouseButton.NoButton,
        Qt.MouseButton.LeftButton,
        Qt.KeyboardModifier.NoModifier,
    )
    QApplication.sendEvent(view.viewport(), event)


class TestNodeClicks:

    def test_second_click_on_same_node_selects(self, canvas):
        canvas, vm = canvas
        click(canvas, node_point(canvas, "1"))
        assert vm.selection.is_empty

        click(canvas, node_point(canvas, "1"))
        assert vm.selection.kind == SelectionKind.NODE
        assert vm.selection.node_id == "1"
        assert vm.selection.neighbors == frozenset({"0"})

    def test_clicks_on_different_nodes_do_not_select(self, canvas):
        canvas, vm = canvas
        click(canvas, node_point(canvas, "0"))
        click(canvas, node_point(canvas, "2"))
        assert vm.selection.is_empty

    def test_pan_restored_after_node_click(self, canvas):
        canvas, _ = canvas
        click(canvas, node_point(canvas, "0"))
        assert canvas.input_manager.pan_enabled
        assert not canvas.input_manager.dragging


class TestNodeDrag:

    def test_small_move_does_not_drag(self, canvas):
        from PyQt6.QtCore import QPoint, Qt
        from PyQt6.QtTest import QTest
        canvas, vm = canvas
        start = node_point(canvas, "2")
        QTest.mousePress(canvas.viewport(), Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, start)
        move(canvas, start + QPoint(2, 0))
        assert not vm.layout.node("2").pinned

        QTest.mouseRelease(canvas.viewport(), Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, start)
        # Counted as a click, not a drag
        assert canvas.click_tracker.state_of(("node", "2")) is ClickState.ARMED

    def test_move_past_threshold_pins_node(self, canvas):
        from PyQt6.QtCore import QPoint, Qt
        from PyQt6.QtTest import QTest
        canvas, vm = canvas
        start = node_point(canvas, "2")
        target = start + QPoint(40, 25)
        QTest.mousePress(canvas.viewport(), Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, start)
        move(canvas, target)

        node = vm.layout.node("2")
        assert node.pinned
        world = canvas.map_scene.to_world(canvas.mapToScene(target))
        assert (node.fx, node.fy) == (pytest.approx(world.x()), pytest.approx(world.y()))
        assert not canvas.input_manager.pan_enabled

        QTest.mouseRelease(canvas.viewport(), Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, target)
        assert not node.pinned
        assert canvas.input_manager.pan_enabled
        # A drag is not a click
        assert canvas.click_tracker.state_of(("node", "2")) is ClickState.IDLE
        assert vm.selection.is_empty


class TestBackgroundClicks:

    def test_background_click_clears_selection(self, canvas):
        from PyQt6.QtCore import QPoint
        canvas, vm = canvas
        vm.select_node("0")
        assert not vm.selection.is_empty

        corner = QPoint(canvas.viewport().width() - 5, canvas.viewport().height() - 5)
        click(canvas, corner)
        assert vm.selection.is_empty

    def test_background_double_click_requests_overview(self, canvas):
        from PyQt6.QtCore import QPoint
        canvas, vm = canvas
        cameras = []
        vm.camera_requested.connect(lambda *args: cameras.append(args))

        corner = QPoint(canvas.viewport().width() - 5, canvas.viewport().height() - 5)
        click(canvas, corner)
        click(canvas, corner)
        assert cameras == [(0.0, 0.0, 1.0)]
