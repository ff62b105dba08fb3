"""
Region items: the landmass and the directory plates clipped inside it.
"""

from typing import List, Optional, Tuple, TYPE_CHECKING

from PyQt6.QtWidgets import QGraphicsItem, QGraphicsPolygonItem
from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QBrush, QColor, QPen, QPolygonF

if TYPE_CHECKING:
    from ..style_manager import PlateStyle


def to_polygon(points: List[Tuple[float, float]]) -> QPolygonF:
    return QPolygonF([QPointF(x, y) for x, y in points])


class LandmassItem(QGraphicsPolygonItem):
    """
    Padded hull around every node. Plates are its children and are clipped
    to its outline.
    """

    def __init__(self):
        super().__init__()
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemClipsChildrenToShape, True)
        self.setPen(QPen(Qt.PenStyle.NoPen))
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)

    def set_points(self, points: List[Tuple[float, float]]):
        self.setPolygon(to_polygon(points))

    def set_color(self, color: QColor):
        self.setBrush(QBrush(color))

    def contains_world_point(self, x: float, y: float) -> bool:
        return self.polygon().containsPoint(QPointF(x, y), Qt.FillRule.OddEvenFill)


class PlateItem(QGraphicsPolygonItem):
    """Voronoi cell for one directory."""

    def __init__(self, directory: str, color: str, parent: Optional[QGraphicsItem] = None):
        super().__init__(parent)
        self.directory = directory
        self.base_color = color
        self.setToolTip(directory)

    def set_points(self, points: List[Tuple[float, float]]):
        self.setPolygon(to_polygon(points))

    def apply_style(self, plate_style: "PlateStyle"):
        fill = QColor(plate_style.fill)
        fill.setAlphaF(plate_style.fill_alpha)
        stroke = QColor(plate_style.stroke)
        stroke.setAlphaF(plate_style.stroke_alpha)

        pen = QPen(stroke, plate_style.stroke_width)
        pen.setCosmetic(True)
        self.setBrush(QBrush(fill))
        self.setPen(pen)
