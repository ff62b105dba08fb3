"""
Node QGraphicsItem.

Renders one source file as a settlement: a circle with a haloed label.
"""

from typing import Optional, TYPE_CHECKING

from PyQt6.QtWidgets import QGraphicsItem, QStyleOptionGraphicsItem, QWidget
from PyQt6.QtCore import Qt, QRectF, QPointF
from PyQt6.QtGui import QPainter, QPainterPath, QBrush, QPen, QFontMetrics

if TYPE_CHECKING:
    from ..style_manager import StyleManager, NodeStyle


class NodeItem(QGraphicsItem):
    """
    QGraphicsItem for rendering a file node.

    Styling (scale, opacity, colours) comes from StyleManager.node_style and
    is pushed in via apply_style() each render.
    """

    def __init__(
        self,
        node_id: str,
        label: str,
        directory: str,
        path: str,
        style_manager: "StyleManager",
    ):
        super().__init__()

        self.node_id = node_id
        self.label = label
        self.directory = directory
        self.path = path
        self._style = style_manager
        self._node_style: Optional["NodeStyle"] = None

        # State
        self._hovered = False

        self.setAcceptHoverEvents(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setToolTip(f"{label}\n{directory}")

    # -------------------------------------------------------------------------
    # State Properties
    # -------------------------------------------------------------------------

    @property
    def hovered(self) -> bool:
        return self._hovered

    @property
    def radius(self) -> float:
        return self._style.style.node_radius

    def apply_style(self, node_style: "NodeStyle"):
        self._node_style = node_style
        if self.scale() != node_style.scale:
            self.setScale(node_style.scale)
        if self.opacity() != node_style.alpha:
            self.setOpacity(node_style.alpha)
        self.update()

    # -------------------------------------------------------------------------
    # QGraphicsItem Interface
    # -------------------------------------------------------------------------

    def boundingRect(self) -> QRectF:
        """Circle plus the label area below it."""
        r = self.radius + 4
        label_w = max(60.0, len(self.label) * 7.0)
        label_h = 18.0
        offset = self._style.style.label_offset
        return QRectF(-label_w / 2, -r, label_w, r + offset + label_h)

    def shape(self) -> QPainterPath:
        """Hit area is the circle only."""
        path = QPainterPath()
        r = self.radius + 1
        path.addEllipse(QPointF(0, 0), r, r)
        return path

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: Optional[QWidget] = None,
    ):
        if self._node_style is None:
            return

        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        r = self.radius

        if self._hovered:
            painter.setPen(QPen(self._style.color("CYAN"), 2))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawEllipse(QPointF(0, 0), r + 3, r + 3)

        painter.setPen(QPen(self._node_style.stroke, self._style.style.node_stroke))
        painter.setBrush(QBrush(self._node_style.fill))
        painter.drawEllipse(QPointF(0, 0), r, r)

        self._draw_label(painter)

    def _draw_label(self, painter: QPainter):
        """Label centred under the circle with a halo outline."""
        font = self._style.get_font()
        fm = QFontMetrics(font)
        width = fm.horizontalAdvance(self.label)
        baseline = self._style.style.label_offset + fm.ascent()

        path = QPainterPath()
        path.addText(QPointF(-width / 2, baseline), font, self.label)

        halo = QPen(self._style.color("HALO"), self._style.style.label_halo)
        halo.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.strokePath(path, halo)
        painter.fillPath(path, QBrush(self._style.color("DARK")))

    # -------------------------------------------------------------------------
    # Hover Events
    # -------------------------------------------------------------------------

    def hoverEnterEvent(self, event):
        self._hovered = True
        self.update()
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        self._hovered = False
        self.update()
        super().hoverLeaveEvent(event)
