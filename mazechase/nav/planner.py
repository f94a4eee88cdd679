from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from ..actions import Move, PathMode

if TYPE_CHECKING:
    from .graph import MazeGraph

# Distance reported for invalid or disconnected node pairs
UNREACHABLE = 1_000_000


class PathPlanner:
    """
    Pathfinding utility over the MazeGraph.

    Distances are unweighted hop counts. Breadth-first distance tables are
    cached per source node, so repeated queries during search are cheap.
    """

    def __init__(self, graph: MazeGraph):
        self.graph = graph
        self._dist_cache: dict[int, dict[int, int]] = {}

    def distances_from(self, source: int) -> dict[int, int]:
        cached = self._dist_cache.get(source)
        if cached is not None:
            return cached

        dist: dict[int, int] = {source: 0}
        queue = deque([source])
        while queue:
            cur = queue.popleft()
            for nxt in self.graph.nodes[cur].neighbours.values():
                if nxt not in dist:
                    dist[nxt] = dist[cur] + 1
                    queue.append(nxt)

        self._dist_cache[source] = dist
        return dist

    def distance(self, a: int, b: int) -> int:
        if not (self.graph.is_valid(a) and self.graph.is_valid(b)):
            return UNREACHABLE
        return self.distances_from(a).get(b, UNREACHABLE)

    def next_move(self, start: int, target: int, last_move: Move | None, mode: PathMode) -> Move:
        """Legal move from ``start`` that closes (TOWARD) or opens (AWAY) the path distance."""
        moves = self.graph.possible_moves(start, last_move)
        if not moves:
            return Move.NEUTRAL

        best_move = moves[0]
        best_dist: int | None = None
        for move in moves:
            d = self.distance(self.graph.neighbour(start, move), target)
            if best_dist is None:
                better = True
            elif mode == PathMode.TOWARD:
                better = d < best_dist
            else:
                better = d > best_dist
            if better:
                best_move, best_dist = move, d
        return best_move
