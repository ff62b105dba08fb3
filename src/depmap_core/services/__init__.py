"""
Services for depmap core: scanning, resolution, graph building, layout
and region geometry.
"""

from .scanner import WorkspaceScanner, ScanProgress
from .resolver import ImportResolver, resolve_import
from .graph_builder import GraphBuilder, BuildProgress
from .layout import ForceLayout
from .geometry import RegionGeometry, color_for_name
from .cache import GraphCache

__all__ = [
    "WorkspaceScanner",
    "ScanProgress",
    "ImportResolver",
    "resolve_import",
    "GraphBuilder",
    "BuildProgress",
    "ForceLayout",
    "RegionGeometry",
    "color_for_name",
    "GraphCache",
]
