"""
Domain models (DTOs) for depmap.

These are pure data classes with no filesystem or Qt dependencies.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Tuple, FrozenSet

from .enums import RegionType, SelectionKind


# Directory label used for files that sit directly in the workspace root
ROOT_DIRECTORY = "root"

Point = Tuple[float, float]
Positions = Dict[str, Point]


@dataclass(frozen=True)
class FileRecord:
    """A source file discovered in the workspace."""
    path: str                    # Absolute, normalized path
    label: str                   # Basename
    language: str                # Normalized language identifier
    directory: str               # Parent dir relative to root ("root" for the root itself)


@dataclass
class GraphNode:
    """
    One source file as a graph vertex.

    The layout fields (x, y, vx, vy, fx, fy) are written only by ForceLayout.
    """
    node_id: str
    label: str
    directory: str
    full_path: str
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def pinned(self) -> bool:
        return self.fx is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the rendering host (positions are placeholders)."""
        return {
            "id": self.node_id,
            "position": {"x": 0, "y": 0},
            "data": {
                "label": self.label,
                "fullPath": self.full_path,
                "directory": self.directory,
            },
        }


@dataclass(frozen=True)
class GraphEdge:
    """A directed import: source imports target."""
    source: str
    target: str

    @property
    def edge_id(self) -> str:
        return f"e{self.source}-{self.target}"

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.edge_id, "source": self.source, "target": self.target}


@dataclass(frozen=True)
class BuildFailure:
    """A file that could not contribute edges."""
    path: str
    message: str


@dataclass
class DependencyGraph:
    """Result of one graph build."""
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)
    failures: List[BuildFailure] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def node_by_id(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        """The `{nodes, edges}` hand-off structure."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


@dataclass
class Region:
    """A derived map polygon (plate or landmass)."""
    region_id: str
    polygon: List[Point]
    color: str
    region_type: RegionType

    @property
    def path(self) -> List[Point]:
        return self.polygon


@dataclass
class Landforms:
    """All regions derived from one layout tick."""
    landmass: Optional[Region] = None
    plates: List[Region] = field(default_factory=list)
    centroids: Dict[str, Point] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.landmass is None and not self.plates


@dataclass(frozen=True)
class SelectionState:
    """
    At most one selected node (with its neighbors) or one selected cluster.
    """
    kind: SelectionKind = SelectionKind.NONE
    node_id: Optional[str] = None
    neighbors: FrozenSet[str] = frozenset()
    cluster: Optional[str] = None

    @classmethod
    def empty(cls) -> "SelectionState":
        return cls()

    @classmethod
    def for_node(cls, node_id: str, neighbors) -> "SelectionState":
        return cls(kind=SelectionKind.NODE, node_id=node_id, neighbors=frozenset(neighbors))

    @classmethod
    def for_cluster(cls, directory: str) -> "SelectionState":
        return cls(kind=SelectionKind.CLUSTER, cluster=directory)

    @property
    def is_empty(self) -> bool:
        return self.kind == SelectionKind.NONE
