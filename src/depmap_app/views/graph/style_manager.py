"""
Style manager for the dependency map.

Centralizes palettes, sizes, fonts, and the selection-dependent styling
rules for nodes, edges and plates.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from PyQt6.QtGui import QColor, QFont

from depmap_core.domain.enums import SelectionKind
from depmap_core.domain.models import GraphEdge, GraphNode, SelectionState


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class Palette:
    """Named colours for one theme."""
    RED: str
    BLUE: str
    CYAN: str
    NAVY: str
    BEIGE: str
    GRAY: str
    DARK: str
    PAPER: str
    LAND: str
    STROKE: str
    HALO: str
    EDGE: str


LIGHT_PALETTE = Palette(
    RED="#D62828", BLUE="#0077B6", CYAN="#00B4D8", NAVY="#03045E",
    BEIGE="#FDFCDC", GRAY="#ADB5BD", DARK="#212529", PAPER="#F8F9FA",
    LAND="#E9ECEF", STROKE="#333333", HALO="#FFFFFF", EDGE="#000000",
)

DARK_PALETTE = Palette(
    RED="#FF6B6B", BLUE="#4D96FF", CYAN="#6BCB77", NAVY="#2C3E50",
    BEIGE="#222222", GRAY="#888888", DARK="#DDDDDD", PAPER="#050505",
    LAND="#161616", STROKE="#FFFFFF", HALO="#000000", EDGE="#DDDDDD",
)

PALETTES = {Theme.LIGHT: LIGHT_PALETTE, Theme.DARK: DARK_PALETTE}


@dataclass
class NodeStyle:
    scale: float = 1.0
    alpha: float = 1.0
    fill: QColor = field(default_factory=lambda: QColor("#FFFFFF"))
    stroke: QColor = field(default_factory=lambda: QColor("#333333"))


@dataclass
class EdgeStyle:
    width: float = 1.5
    alpha: float = 0.2
    color: QColor = field(default_factory=lambda: QColor("#000000"))


@dataclass
class PlateStyle:
    fill: QColor
    fill_alpha: float
    stroke: QColor
    stroke_alpha: float
    stroke_width: float = 1.0


@dataclass
class MapStyle:
    """Fixed sizes for the map."""
    node_radius: float = 6.0
    node_stroke: float = 1.5
    label_offset: float = 8.0
    label_halo: float = 3.0
    font_family: str = "monospace"
    font_size: int = 9


class StyleManager:
    """Manages all styling for the map visualization."""

    def __init__(self, theme: Theme = Theme.DARK, style: Optional[MapStyle] = None):
        self.style = style or MapStyle()
        self._theme = theme
        self._font: Optional[QFont] = None

    # -------------------------------------------------------------------------
    # Theme
    # -------------------------------------------------------------------------

    @property
    def theme(self) -> Theme:
        return self._theme

    @theme.setter
    def theme(self, value: Theme):
        self._theme = value

    @property
    def palette(self) -> Palette:
        return PALETTES[self._theme]

    @property
    def is_dark(self) -> bool:
        return self._theme == Theme.DARK

    def toggle_theme(self) -> Theme:
        self._theme = Theme.LIGHT if self.is_dark else Theme.DARK
        return self._theme

    def color(self, name: str) -> QColor:
        """Palette colour by name, e.g. color('RED')."""
        return QColor(getattr(self.palette, name))

    def get_font(self) -> QFont:
        # Created lazily: QFont needs a running QGuiApplication
        if self._font is None:
            self._font = QFont(self.style.font_family, self.style.font_size)
            self._font.setStyleHint(QFont.StyleHint.Monospace)
        return self._font

    # -------------------------------------------------------------------------
    # Node Styling
    # -------------------------------------------------------------------------

    def node_style(self, node: GraphNode, selection: SelectionState) -> NodeStyle:
        pal = self.palette
        result = NodeStyle(fill=QColor("#FFFFFF"), stroke=QColor(pal.STROKE))

        if selection.kind == SelectionKind.NODE:
            if node.node_id == selection.node_id:
                result.scale = 1.6
                result.fill = QColor(pal.RED)
                result.stroke = QColor(pal.RED)
            elif node.node_id in selection.neighbors:
                result.scale = 1.3
                result.fill = QColor(pal.BLUE)
                result.stroke = QColor(pal.BLUE)
            else:
                result.alpha = 0.35
                result.scale = 0.8

        elif selection.kind == SelectionKind.CLUSTER:
            if node.directory == selection.cluster:
                result.scale = 1.2
                result.stroke = QColor(pal.DARK)
            else:
                result.alpha = 0.25

        return result

    # -------------------------------------------------------------------------
    # Edge Styling
    # -------------------------------------------------------------------------

    def edge_style(
        self,
        edge: GraphEdge,
        source_dir: str,
        target_dir: str,
        selection: SelectionState,
    ) -> EdgeStyle:
        result = EdgeStyle(color=QColor(self.palette.EDGE))
        same_directory = source_dir == target_dir

        if selection.kind == SelectionKind.NODE:
            if selection.node_id in (edge.source, edge.target):
                result.alpha = 1.0
                result.width = 3.5
            else:
                result.alpha = 0.15

        elif selection.kind == SelectionKind.CLUSTER:
            if same_directory and source_dir == selection.cluster:
                result.alpha = 0.7
                result.width = 2.5
            else:
                result.alpha = 0.15

        elif same_directory:
            result.alpha = 0.35
            result.width = 2.0

        return result

    # -------------------------------------------------------------------------
    # Region Styling
    # -------------------------------------------------------------------------

    def plate_style(self, directory: str, color: str, selection: SelectionState) -> PlateStyle:
        selected = selection.kind == SelectionKind.CLUSTER and selection.cluster == directory
        return PlateStyle(
            fill=QColor(color),
            fill_alpha=0.35 if selected else 0.15,
            stroke=QColor("#000000"),
            stroke_alpha=0.5 if selected else 0.2,
        )

    def landmass_color(self) -> QColor:
        return QColor(self.palette.LAND)

    def background_color(self) -> QColor:
        return QColor(self.palette.PAPER)
