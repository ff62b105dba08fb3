"""
depmap core - headless library for mapping a codebase's dependencies.

Extracts imports, resolves them to files, builds the dependency graph,
lays it out with a force simulation and derives the map regions.
It has no UI dependencies and can be embedded in other applications.
"""

__version__ = "0.1.0"
__author__ = "depmap contributors"

# Lazy imports to avoid loading everything at once
def __getattr__(name):
    if name == "LocalFS":
        from .adapters.local_fs import LocalFS
        return LocalFS
    elif name == "DepMapConfig":
        from .config import DepMapConfig
        return DepMapConfig
    elif name == "GraphBuilder":
        from .services.graph_builder import GraphBuilder
        return GraphBuilder
    elif name == "ForceLayout":
        from .services.layout import ForceLayout
        return ForceLayout
    elif name == "RegionGeometry":
        from .services.geometry import RegionGeometry
        return RegionGeometry
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "__version__",
    "LocalFS",
    "DepMapConfig",
    "GraphBuilder",
    "ForceLayout",
    "RegionGeometry",
]
