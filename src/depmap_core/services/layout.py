"""
Force Layout - continuous force-directed placement with directory clusters.

Forces per tick, in order: link springs, many-body repulsion, centering,
collision, and a pull toward each directory's anchor. Energy (alpha)
decays toward alpha_target; the simulation stops once alpha < alpha_min
and restarts on set_data() or drag_start().
"""

import logging
import math
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..domain.models import GraphEdge, GraphNode, Point, Positions

logger = logging.getLogger(__name__)


TickCallback = Callable[[Positions], None]


class ForceLayout:
    """
    Owns node positions while a graph is displayed.

    Nodes are GraphNode objects; only this class writes their x/y/vx/vy/fx/fy.
    Readers get a copy of the positions via snapshot() or the tick callback.
    """

    LINK_DISTANCE = 80.0
    CHARGE_STRENGTH = -200.0
    COLLIDE_RADIUS = 30.0
    COLLIDE_ITERATIONS = 2
    CLUSTER_STRENGTH = 0.5
    INITIAL_SPREAD = 100.0

    ALPHA_MIN = 0.001
    ALPHA_DECAY = 1 - math.pow(0.001, 1 / 300)
    VELOCITY_DECAY = 0.4
    DRAG_ALPHA_TARGET = 0.3

    def __init__(self, on_tick: Optional[TickCallback] = None, seed: int = 0):
        """
        Args:
            on_tick: Called with a positions snapshot after every tick
            seed: Seed for initial placement and jiggle
        """
        self.on_tick = on_tick
        self._rng = random.Random(seed)

        self._nodes: List[GraphNode] = []
        self._edges: List[GraphEdge] = []
        self._index: Dict[str, int] = {}
        self._anchors: Dict[str, Point] = {}

        # Link force precomputation
        self._link_src = np.zeros(0, dtype=int)
        self._link_tgt = np.zeros(0, dtype=int)
        self._link_strength = np.zeros(0)
        self._link_bias = np.zeros(0)
        self._anchor_x = np.zeros(0)
        self._anchor_y = np.zeros(0)

        self.alpha = 0.0
        self.alpha_target = 0.0
        self._running = False
        self._tick_count = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> List[GraphNode]:
        return self._nodes

    @property
    def edges(self) -> List[GraphEdge]:
        return self._edges

    @property
    def anchors(self) -> Dict[str, Point]:
        return dict(self._anchors)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def node(self, node_id: str) -> GraphNode:
        return self._nodes[self._index[node_id]]

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def set_data(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> None:
        """Replace the working set and restart at full energy."""
        self._nodes = list(nodes)
        self._edges = list(edges)
        self._index = {n.node_id: i for i, n in enumerate(self._nodes)}

        for node in self._nodes:
            node.x = self._rng.random() * self.INITIAL_SPREAD
            node.y = self._rng.random() * self.INITIAL_SPREAD
            node.vx = node.vy = 0.0
            node.fx = node.fy = None

        self._init_links()
        self._init_anchors()

        self.alpha = 1.0
        self.alpha_target = 0.0
        self._tick_count = 0
        self._running = bool(self._nodes)
        logger.debug("Layout reset: %d nodes, %d edges, %d clusters",
                     len(self._nodes), len(self._edges), len(self._anchors))

    def drag_start(self) -> None:
        """Hold the graph warm while a node is dragged."""
        self.alpha_target = self.DRAG_ALPHA_TARGET
        self.restart()

    def drag_move(self, node_id: str, x: float, y: float) -> None:
        """Pin a node exactly at (x, y)."""
        node = self.node(node_id)
        node.fx = x
        node.fy = y

    def drag_end(self, node_id: str) -> None:
        """Release the energy floor and unpin the node."""
        self.alpha_target = 0.0
        node = self.node(node_id)
        node.fx = None
        node.fy = None

    def restart(self) -> None:
        if self._nodes:
            self._running = True

    def stop(self) -> None:
        self._running = False

    def tick(self) -> bool:
        """
        Advance one step if running and notify on_tick.

        Returns:
            Whether the simulation is still running afterwards
        """
        if not self._running:
            return False

        self._step()
        self._tick_count += 1

        if self.on_tick:
            self.on_tick(self.snapshot())

        if self.alpha < self.ALPHA_MIN:
            self._running = False
        return self._running

    def run(self, max_ticks: int = 300) -> int:
        """Tick synchronously until settled or max_ticks. Returns ticks run."""
        ticks = 0
        while ticks < max_ticks and self.tick():
            ticks += 1
        return ticks

    def snapshot(self) -> Positions:
        return {n.node_id: (n.x, n.y) for n in self._nodes}

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def _init_links(self) -> None:
        src = []
        tgt = []
        for edge in self._edges:
            if edge.source not in self._index or edge.target not in self._index:
                raise KeyError(f"Edge {edge.edge_id} references an unknown node")
            src.append(self._index[edge.source])
            tgt.append(self._index[edge.target])

        self._link_src = np.array(src, dtype=int)
        self._link_tgt = np.array(tgt, dtype=int)

        count = np.zeros(len(self._nodes))
        np.add.at(count, self._link_src, 1)
        np.add.at(count, self._link_tgt, 1)

        if len(src):
            cs = count[self._link_src]
            ct = count[self._link_tgt]
            self._link_bias = cs / (cs + ct)
            self._link_strength = 1.0 / np.minimum(cs, ct)
        else:
            self._link_bias = np.zeros(0)
            self._link_strength = np.zeros(0)

    def _init_anchors(self) -> None:
        """Place one anchor per directory evenly around a circle."""
        directories: List[str] = []
        for node in self._nodes:
            if node.directory not in directories:
                directories.append(node.directory)

        count = len(directories)
        radius = max(100.0, count * 40.0)
        self._anchors = {}
        for i, directory in enumerate(directories):
            angle = (i / count) * 2 * math.pi
            self._anchors[directory] = (math.cos(angle) * radius, math.sin(angle) * radius)

        self._anchor_x = np.array([self._anchors[n.directory][0] for n in self._nodes])
        self._anchor_y = np.array([self._anchors[n.directory][1] for n in self._nodes])

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def _jiggle(self) -> float:
        return (self._rng.random() - 0.5) * 1e-6

    def _step(self) -> None:
        self.alpha += (self.alpha_target - self.alpha) * self.ALPHA_DECAY
        alpha = self.alpha

        x = np.array([n.x for n in self._nodes], dtype=float)
        y = np.array([n.y for n in self._nodes], dtype=float)
        vx = np.array([n.vx for n in self._nodes], dtype=float)
        vy = np.array([n.vy for n in self._nodes], dtype=float)

        self._apply_links(x, y, vx, vy, alpha)
        self._apply_charge(x, y, vx, vy, alpha)

        # Centering shifts positions, not velocities
        x -= x.mean()
        y -= y.mean()

        for _ in range(self.COLLIDE_ITERATIONS):
            self._apply_collide(x, y, vx, vy)

        vx += (self._anchor_x - x) * self.CLUSTER_STRENGTH * alpha
        vy += (self._anchor_y - y) * self.CLUSTER_STRENGTH * alpha

        for i, node in enumerate(self._nodes):
            if node.fx is None:
                node.vx = vx[i] * (1 - self.VELOCITY_DECAY)
                node.x = x[i] + node.vx
            else:
                node.x = node.fx
                node.vx = 0.0
            if node.fy is None:
                node.vy = vy[i] * (1 - self.VELOCITY_DECAY)
                node.y = y[i] + node.vy
            else:
                node.y = node.fy
                node.vy = 0.0

    def _apply_links(self, x, y, vx, vy, alpha: float) -> None:
        if not len(self._link_src):
            return
        s, t = self._link_src, self._link_tgt
        dx = x[t] + vx[t] - x[s] - vx[s]
        dy = y[t] + vy[t] - y[s] - vy[s]
        zero = (dx == 0) & (dy == 0)
        if zero.any():
            dx[zero] = [self._jiggle() for _ in range(int(zero.sum()))]

        dist = np.sqrt(dx * dx + dy * dy)
        k = (dist - self.LINK_DISTANCE) / dist * alpha * self._link_strength
        dx *= k
        dy *= k

        b = self._link_bias
        np.subtract.at(vx, t, dx * b)
        np.subtract.at(vy, t, dy * b)
        np.add.at(vx, s, dx * (1 - b))
        np.add.at(vy, s, dy * (1 - b))

    def _apply_charge(self, x, y, vx, vy, alpha: float) -> None:
        n = len(x)
        if n < 2:
            return
        dx = x[None, :] - x[:, None]
        dy = y[None, :] - y[:, None]
        dist2 = dx * dx + dy * dy
        np.fill_diagonal(dist2, np.inf)

        coincident = dist2 == 0
        if coincident.any():
            dist2[coincident] = 1e-12

        # Soften very close pairs (distance floor of 1)
        close = dist2 < 1.0
        dist2[close] = np.sqrt(dist2[close])

        w = self.CHARGE_STRENGTH * alpha / dist2
        vx += (dx * w).sum(axis=1)
        vy += (dy * w).sum(axis=1)

    def _apply_collide(self, x, y, vx, vy) -> None:
        n = len(x)
        if n < 2:
            return
        px = x + vx
        py = y + vy
        dx = px[:, None] - px[None, :]
        dy = py[:, None] - py[None, :]
        dist2 = dx * dx + dy * dy
        min_dist = self.COLLIDE_RADIUS * 2

        overlap = dist2 < min_dist * min_dist
        np.fill_diagonal(overlap, False)
        if not overlap.any():
            return

        coincident = overlap & (dist2 == 0)
        if coincident.any():
            rows, cols = np.nonzero(np.triu(coincident))
            for i, j in zip(rows, cols):
                jx = self._jiggle()
                dx[i, j], dx[j, i] = jx, -jx
            dist2 = dx * dx + dy * dy

        dist = np.sqrt(np.where(overlap, dist2, 1.0))
        k = np.where(overlap, (min_dist - dist) / dist, 0.0)

        # Equal radii: each side of a pair moves half the overlap
        vx += (dx * k * 0.5).sum(axis=1)
        vy += (dy * k * 0.5).sum(axis=1)
