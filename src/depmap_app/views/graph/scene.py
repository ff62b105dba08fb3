"""
MapScene - QGraphicsScene holding the three map layers.

Layers, bottom to top: regions (landmass with clipped plates), edges,
nodes. All of them live under one WorldItem that carries the camera.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from PyQt6.QtWidgets import QGraphicsScene
from PyQt6.QtCore import QPointF
from PyQt6.QtGui import QBrush

from depmap_core.domain.models import (
    GraphEdge,
    GraphNode,
    Landforms,
    Positions,
    SelectionState,
)

from .camera import CameraState
from .style_manager import StyleManager
from .items import WorldItem, NodeItem, EdgeLayerItem, LandmassItem, PlateItem


# Hit target kinds
HIT_NODE = "node"
HIT_PLATE = "plate"
HIT_BACKGROUND = "background"


@dataclass(frozen=True)
class HitTarget:
    """What lies under a point: a node, a plate, or the background."""
    kind: str
    key: Optional[str] = None

    @property
    def click_key(self):
        """Key for per-target click tracking."""
        return (self.kind, self.key)


BACKGROUND = HitTarget(HIT_BACKGROUND)


class MapScene(QGraphicsScene):
    """
    Scene for the dependency map.

    Items are created once per graph in set_graph() and updated in place
    by render() on every layout tick.
    """

    Z_REGIONS = 0
    Z_EDGES = 1
    Z_NODES = 2

    def __init__(self, style_manager: StyleManager, parent=None):
        super().__init__(parent)
        self._style = style_manager

        self._world = WorldItem()
        self.addItem(self._world)

        self._landmass = LandmassItem()
        self._landmass.setParentItem(self._world)
        self._landmass.setZValue(self.Z_REGIONS)
        self._landmass.setVisible(False)

        self._edge_layer = EdgeLayerItem()
        self._edge_layer.setParentItem(self._world)
        self._edge_layer.setZValue(self.Z_EDGES)

        # Item lookups
        self._node_items: Dict[str, NodeItem] = {}
        self._plate_items: Dict[str, PlateItem] = {}

        # Graph data
        self._nodes: List[GraphNode] = []
        self._edges: List[GraphEdge] = []
        self._directories: Dict[str, str] = {}

        self.apply_theme()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def world(self) -> WorldItem:
        return self._world

    @property
    def landmass_item(self) -> LandmassItem:
        return self._landmass

    @property
    def edge_layer(self) -> EdgeLayerItem:
        return self._edge_layer

    def node_item(self, node_id: str) -> Optional[NodeItem]:
        return self._node_items.get(node_id)

    def plate_item(self, directory: str) -> Optional[PlateItem]:
        return self._plate_items.get(directory)

    def node_items(self) -> List[NodeItem]:
        return list(self._node_items.values())

    def plate_items(self) -> List[PlateItem]:
        return list(self._plate_items.values())

    # -------------------------------------------------------------------------
    # Graph Building
    # -------------------------------------------------------------------------

    def clear_graph(self):
        for item in self._node_items.values():
            self.removeItem(item)
        for item in self._plate_items.values():
            self.removeItem(item)
        self._node_items.clear()
        self._plate_items.clear()
        self._edge_layer.set_segments([])
        self._landmass.setVisible(False)
        self._nodes = []
        self._edges = []
        self._directories = {}

    def set_graph(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]):
        """Replace all node items for a new graph."""
        self.clear_graph()
        self._nodes = list(nodes)
        self._edges = list(edges)
        self._directories = {n.node_id: n.directory for n in self._nodes}

        for node in self._nodes:
            item = NodeItem(
                node_id=node.node_id,
                label=node.label,
                directory=node.directory,
                path=node.full_path,
                style_manager=self._style,
            )
            item.setParentItem(self._world)
            item.setZValue(self.Z_NODES)
            item.setPos(node.x, node.y)
            self._node_items[node.node_id] = item

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def apply_theme(self):
        self.setBackgroundBrush(QBrush(self._style.background_color()))
        self._landmass.set_color(self._style.landmass_color())

    def set_camera(self, camera: CameraState):
        self._world.setPos(camera.x, camera.y)
        self._world.setScale(camera.scale)

    def render(self, positions: Positions, landforms: Landforms, selection: SelectionState):
        """Redraw all three layers from a positions snapshot."""
        self._render_regions(landforms, selection)
        self._render_edges(positions, selection)
        self._render_nodes(positions, selection)

    def _render_regions(self, landforms: Landforms, selection: SelectionState):
        if landforms.landmass is None:
            self._landmass.setVisible(False)
        else:
            self._landmass.set_points(landforms.landmass.polygon)
            self._landmass.setVisible(True)

        seen = set()
        for plate in landforms.plates:
            seen.add(plate.region_id)
            item = self._plate_items.get(plate.region_id)
            if item is None:
                item = PlateItem(plate.region_id, plate.color, parent=self._landmass)
                self._plate_items[plate.region_id] = item
            item.set_points(plate.polygon)
            item.apply_style(self._style.plate_style(plate.region_id, plate.color, selection))

        for directory in [d for d in self._plate_items if d not in seen]:
            self.removeItem(self._plate_items.pop(directory))

    def _render_edges(self, positions: Positions, selection: SelectionState):
        segments = []
        for edge in self._edges:
            source = positions.get(edge.source)
            target = positions.get(edge.target)
            if source is None or target is None:
                continue
            style = self._style.edge_style(
                edge,
                self._directories.get(edge.source, ""),
                self._directories.get(edge.target, ""),
                selection,
            )
            segments.append((source[0], source[1], target[0], target[1], style))
        self._edge_layer.set_segments(segments)

    def _render_nodes(self, positions: Positions, selection: SelectionState):
        for node in self._nodes:
            item = self._node_items.get(node.node_id)
            if item is None:
                continue
            pos = positions.get(node.node_id)
            if pos is not None:
                item.setPos(pos[0], pos[1])
            item.apply_style(self._style.node_style(node, selection))

    # -------------------------------------------------------------------------
    # Hit Testing
    # -------------------------------------------------------------------------

    def hit_test(self, scene_pos: QPointF) -> HitTarget:
        """Topmost node, else a plate inside the landmass, else background."""
        for item in self.items(scene_pos):
            if isinstance(item, NodeItem):
                return HitTarget(HIT_NODE, item.node_id)

        world_pos = self._world.mapFromScene(scene_pos)
        if not self._landmass.isVisible() or not self._landmass.contains_world_point(
            world_pos.x(), world_pos.y()
        ):
            return BACKGROUND

        for item in self.items(scene_pos):
            if isinstance(item, PlateItem):
                return HitTarget(HIT_PLATE, item.directory)
        return BACKGROUND

    def to_world(self, scene_pos: QPointF) -> QPointF:
        return self._world.mapFromScene(scene_pos)
