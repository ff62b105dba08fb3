"""
Edge layer QGraphicsItem.

Draws every edge in one item, between the region layer and the nodes.
"""

from typing import List, Optional, Tuple, TYPE_CHECKING

from PyQt6.QtWidgets import QGraphicsItem, QStyleOptionGraphicsItem, QWidget
from PyQt6.QtCore import Qt, QRectF, QPointF
from PyQt6.QtGui import QPainter, QPainterPath, QPen, QColor

if TYPE_CHECKING:
    from ..style_manager import EdgeStyle


EdgeSegment = Tuple[float, float, float, float, "EdgeStyle"]


class EdgeLayerItem(QGraphicsItem):
    """
    Non-interactive item holding styled line segments.

    Its shape is empty, so hit tests fall through to whatever is below.
    """

    def __init__(self):
        super().__init__()
        self._segments: List[EdgeSegment] = []
        self._bounds = QRectF()
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setAcceptHoverEvents(False)

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    def set_segments(self, segments: List[EdgeSegment]):
        self.prepareGeometryChange()
        self._segments = segments

        if segments:
            xs = [s[0] for s in segments] + [s[2] for s in segments]
            ys = [s[1] for s in segments] + [s[3] for s in segments]
            pad = 4.0
            self._bounds = QRectF(
                min(xs) - pad, min(ys) - pad,
                max(xs) - min(xs) + 2 * pad, max(ys) - min(ys) + 2 * pad,
            )
        else:
            self._bounds = QRectF()
        self.update()

    def boundingRect(self) -> QRectF:
        return self._bounds

    def shape(self) -> QPainterPath:
        return QPainterPath()

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: Optional[QWidget] = None,
    ):
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        for x1, y1, x2, y2, style in self._segments:
            color = QColor(style.color)
            color.setAlphaF(style.alpha)
            pen = QPen(color, style.width)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(pen)
            painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))
