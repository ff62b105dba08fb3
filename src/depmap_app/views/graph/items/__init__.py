"""
QGraphicsItem subclasses for the dependency map.
"""

from .world_item import WorldItem
from .node_item import NodeItem
from .edge_layer import EdgeLayerItem
from .region_item import LandmassItem, PlateItem

__all__ = ["WorldItem", "NodeItem", "EdgeLayerItem", "LandmassItem", "PlateItem"]
