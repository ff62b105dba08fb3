"""
Domain models for depmap.

Contains DTOs, enums, and data structures used throughout the application.
"""

from .models import (
    ROOT_DIRECTORY,
    FileRecord,
    GraphNode,
    GraphEdge,
    BuildFailure,
    DependencyGraph,
    Region,
    Landforms,
    SelectionState,
)
from .enums import (
    Language,
    RegionType,
    SelectionKind,
)

__all__ = [
    # Models
    "ROOT_DIRECTORY",
    "FileRecord",
    "GraphNode",
    "GraphEdge",
    "BuildFailure",
    "DependencyGraph",
    "Region",
    "Landforms",
    "SelectionState",
    # Enums
    "Language",
    "RegionType",
    "SelectionKind",
]
