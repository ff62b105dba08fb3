"""
Region geometry - tectonic plates and the landmass.

Plates are Voronoi cells around directory centroids, clipped to a fixed
box. The landmass is the convex hull of every node padded into a square.
Everything here is a read-only consumer of node positions.
"""

import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..domain.enums import RegionType
from ..domain.models import ROOT_DIRECTORY, GraphNode, Landforms, Point, Region

logger = logging.getLogger(__name__)

Bounds = Tuple[float, float, float, float]  # xmin, ymin, xmax, ymax

_EPS = 1e-9


def color_for_name(name: str) -> str:
    """
    Deterministic '#RRGGBB' colour for a directory name.

    32-bit string hash (h = c + (h << 5) - h), low 24 bits as RGB.
    """
    h = 0
    for ch in name:
        h = (ord(ch) + ((h << 5) - h)) & 0xFFFFFFFF
    return f"#{h & 0xFFFFFF:06X}"


# -----------------------------------------------------------------------------
# Polygon helpers
# -----------------------------------------------------------------------------

def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points: Sequence[Point]) -> List[Point]:
    """Counter-clockwise hull (monotone chain). Fewer than 3 distinct points give []."""
    pts = sorted(set((float(x), float(y)) for x, y in points))
    if len(pts) < 3:
        return []

    lower: List[Point] = []
    for p in pts:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: List[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    hull = lower[:-1] + upper[:-1]
    return hull if len(hull) >= 3 else []


def clip_half_plane(polygon: List[Point], a: float, b: float, c: float) -> List[Point]:
    """Keep the part of a convex polygon where a*x + b*y <= c (Sutherland-Hodgman)."""
    if not polygon:
        return []

    out: List[Point] = []
    n = len(polygon)
    for i in range(n):
        cur = polygon[i]
        nxt = polygon[(i + 1) % n]
        cur_val = a * cur[0] + b * cur[1] - c
        nxt_val = a * nxt[0] + b * nxt[1] - c
        cur_in = cur_val <= _EPS
        nxt_in = nxt_val <= _EPS

        if cur_in:
            out.append(cur)
        if cur_in != nxt_in:
            t = cur_val / (cur_val - nxt_val)
            out.append((cur[0] + t * (nxt[0] - cur[0]), cur[1] + t * (nxt[1] - cur[1])))
    return out


def voronoi_cells(sites: Sequence[Point], bounds: Bounds) -> List[List[Point]]:
    """
    One clipped Voronoi cell per site, in site order.

    Each cell is the bounding box cut by the perpendicular bisector against
    every other site. Coincident sites share the same cell.
    """
    xmin, ymin, xmax, ymax = bounds
    box = [(xmin, ymin), (xmax, ymin), (xmax, ymax), (xmin, ymax)]

    cells: List[List[Point]] = []
    for i, (sx, sy) in enumerate(sites):
        cell = list(box)
        for j, (ox, oy) in enumerate(sites):
            if i == j:
                continue
            a = ox - sx
            b = oy - sy
            if abs(a) < _EPS and abs(b) < _EPS:
                continue
            c = (ox * ox + oy * oy - sx * sx - sy * sy) / 2
            cell = clip_half_plane(cell, a, b, c)
            if not cell:
                break
        cells.append(cell)
    return cells


def point_in_polygon(x: float, y: float, polygon: Sequence[Point]) -> bool:
    """Even-odd ray casting."""
    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


# -----------------------------------------------------------------------------
# Region computation
# -----------------------------------------------------------------------------

class RegionGeometry:
    """
    Computes Landforms from a positions snapshot.

    Holds no state between calls; regions are recomputed from scratch.
    """

    BOUNDS: Bounds = (-2000.0, -2000.0, 4000.0, 4000.0)
    LANDMASS_PADDING = 80.0
    LANDMASS_ID = "global_landmass"
    LANDMASS_COLOR = "#111111"

    def __init__(
        self,
        color_fn: Callable[[str], str] = color_for_name,
        bounds: Optional[Bounds] = None,
        padding: Optional[float] = None,
    ):
        self.color_fn = color_fn
        self.bounds = bounds or self.BOUNDS
        self.padding = self.LANDMASS_PADDING if padding is None else padding

    def compute(
        self,
        positions: Mapping[str, Point],
        directories: Mapping[str, str],
    ) -> Landforms:
        """
        Args:
            positions: node id -> (x, y)
            directories: node id -> directory label

        Returns:
            Landforms; empty when fewer than three nodes exist
        """
        if len(positions) < 3:
            return Landforms()

        centroids = self.centroids(positions, directories)
        plates = self._plates(centroids)
        landmass = self._landmass(positions.values())
        return Landforms(landmass=landmass, plates=plates, centroids=centroids)

    def compute_for_nodes(self, nodes: Sequence[GraphNode]) -> Landforms:
        positions = {n.node_id: (n.x, n.y) for n in nodes}
        directories = {n.node_id: n.directory for n in nodes}
        return self.compute(positions, directories)

    def centroids(
        self,
        positions: Mapping[str, Point],
        directories: Mapping[str, str],
    ) -> Dict[str, Point]:
        """Mean position per directory, in first-seen order."""
        sums: Dict[str, List[float]] = {}
        for node_id, (x, y) in positions.items():
            directory = directories.get(node_id) or ROOT_DIRECTORY
            acc = sums.setdefault(directory, [0.0, 0.0, 0])
            acc[0] += x
            acc[1] += y
            acc[2] += 1
        return {d: (sx / n, sy / n) for d, (sx, sy, n) in sums.items()}

    def _plates(self, centroids: Dict[str, Point]) -> List[Region]:
        names = list(centroids.keys())
        cells = voronoi_cells([centroids[d] for d in names], self.bounds)

        plates = []
        for directory, cell in zip(names, cells):
            if len(cell) < 3:
                logger.debug("Degenerate plate for %s", directory)
                continue
            plates.append(Region(
                region_id=directory,
                polygon=cell,
                color=self.color_fn(directory),
                region_type=RegionType.PLATE,
            ))
        return plates

    def _landmass(self, points) -> Optional[Region]:
        pad = self.padding
        padded: List[Point] = []
        for x, y in points:
            padded.extend([
                (x - pad, y - pad),
                (x + pad, y - pad),
                (x + pad, y + pad),
                (x - pad, y + pad),
            ])

        hull = convex_hull(padded)
        if not hull:
            return None
        return Region(
            region_id=self.LANDMASS_ID,
            polygon=hull,
            color=self.LANDMASS_COLOR,
            region_type=RegionType.LANDMASS,
        )
