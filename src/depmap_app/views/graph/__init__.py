"""
Map visualization package - QGraphicsView-based dependency map.

This package provides:
- Three-layer rendering (regions, edges, nodes) with selection styling
- Pan, anchored wheel zoom and node dragging
- Per-target double-click detection and eased camera moves
"""

from .canvas import MapCanvas
from .scene import MapScene

__all__ = ["MapCanvas", "MapScene"]
