"""
Root container for everything drawn in world coordinates.
"""

from typing import Optional

from PyQt6.QtWidgets import QGraphicsItem, QStyleOptionGraphicsItem, QWidget
from PyQt6.QtCore import QRectF
from PyQt6.QtGui import QPainter


class WorldItem(QGraphicsItem):
    """
    Invisible parent whose position and scale are the camera.

    Children are laid out in world units; moving or scaling this item pans
    and zooms the whole map at once.
    """

    def __init__(self):
        super().__init__()
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemHasNoContents, True)

    def boundingRect(self) -> QRectF:
        return QRectF()

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: Optional[QWidget] = None,
    ):
        pass
