"""
Tests for map styling rules and scene hit testing.
"""

import pytest

from depmap_core.domain import GraphEdge, GraphNode, SelectionState
from depmap_core.services import RegionGeometry


NODES = [
    GraphNode(node_id="a", label="a.ts", directory="root", full_path="/w/a.ts"),
    GraphNode(node_id="b", label="b.ts", directory="lib", full_path="/w/lib/b.ts"),
    GraphNode(node_id="c", label="c.ts", directory="app", full_path="/w/app/c.ts"),
]
EDGES = [GraphEdge("a", "b")]


class TestStyleManager:

    @pytest.fixture
    def styles(self):
        from depmap_app.views.graph.style_manager import StyleManager, Theme
        return StyleManager(Theme.LIGHT)

    def test_node_selection_styles(self, styles):
        selection = SelectionState.for_node("b", {"a"})
        a, b, c = (styles.node_style(n, selection) for n in NODES)

        assert b.scale == 1.6
        assert b.fill.name().upper() == "#D62828"
        assert a.scale == 1.3
        assert a.fill.name().upper() == "#0077B6"
        assert (c.scale, c.alpha) == (0.8, 0.35)

    def test_no_selection(self, styles):
        style = styles.node_style(NODES[0], SelectionState.empty())
        assert (style.scale, style.alpha) == (1.0, 1.0)

    def test_cluster_styles(self, styles):
        selection = SelectionState.for_cluster("lib")
        member = styles.node_style(NODES[1], selection)
        other = styles.node_style(NODES[0], selection)
        assert member.scale == 1.2
        assert other.alpha == 0.25

        assert styles.plate_style("lib", "#112233", selection).fill_alpha == 0.35
        assert styles.plate_style("app", "#112233", selection).fill_alpha == 0.15

    def test_edge_styles(self, styles):
        edge = EDGES[0]
        plain = styles.edge_style(edge, "root", "lib", SelectionState.empty())
        assert (plain.width, plain.alpha) == (1.5, 0.2)

        internal = styles.edge_style(edge, "lib", "lib", SelectionState.empty())
        assert (internal.width, internal.alpha) == (2.0, 0.35)

        touching = styles.edge_style(edge, "root", "lib", SelectionState.for_node("b", {"a"}))
        assert (touching.width, touching.alpha) == (3.5, 1.0)

        unrelated = styles.edge_style(edge, "root", "lib", SelectionState.for_node("c", set()))
        assert unrelated.alpha == 0.15

    def test_toggle_theme(self, styles):
        from depmap_app.views.graph.style_manager import Theme

        assert styles.toggle_theme() == Theme.DARK
        assert styles.color("EDGE").name().upper() == "#DDDDDD"


class TestHitTest:

    POSITIONS = {"a": (0.0, 0.0), "b": (200.0, 0.0), "c": (100.0, 200.0)}

    @pytest.fixture
    def scene(self, qapp):
        from depmap_app.views.graph import MapScene
        from depmap_app.views.graph.camera import CameraState
        from depmap_app.views.graph.style_manager import StyleManager

        scene = MapScene(StyleManager())
        scene.set_graph(NODES, EDGES)
        scene.set_camera(CameraState(0.0, 0.0, 1.0))
        directories = {n.node_id: n.directory for n in NODES}
        landforms = RegionGeometry().compute(self.POSITIONS, directories)
        scene.render(self.POSITIONS, landforms, SelectionState.empty())
        return scene

    def test_node_hit(self, scene):
        from PyQt6.QtCore import QPointF
        from depmap_app.views.graph.scene import HIT_NODE

        target = scene.hit_test(QPointF(200.0, 0.0))
        assert (target.kind, target.key) == (HIT_NODE, "b")

    def test_plate_hit_inside_landmass(self, scene):
        from PyQt6.QtCore import QPointF
        from depmap_app.views.graph.scene import HIT_PLATE

        target = scene.hit_test(QPointF(100.0, 60.0))
        assert target.kind == HIT_PLATE
        assert target.key in {"root", "lib", "app"}

    def test_background_outside_landmass(self, scene):
        from PyQt6.QtCore import QPointF
        from depmap_app.views.graph.scene import HIT_BACKGROUND

        assert scene.hit_test(QPointF(1500.0, 1500.0)).kind == HIT_BACKGROUND

    def test_items_created(self, scene):
        assert len(scene.node_items()) == 3
        assert sorted(p.directory for p in scene.plate_items()) == ["app", "lib", "root"]
