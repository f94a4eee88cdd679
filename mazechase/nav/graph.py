from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from ..actions import DIRECTIONS, Move
from ..constants import UNKNOWN_POSITION

WALL = "#"
PILL = "."
POWER_PILL = "o"
EVADER_START = "P"
PURSUER_START = "G"

Cell = tuple[int, int]  # (y, x)


@dataclass
class MazeNode:
    index: int
    cell: Cell
    neighbours: dict[Move, int] = field(default_factory=dict)  # move -> node index

    @property
    def num_exits(self) -> int:
        return len(self.neighbours)

    @property
    def is_corridor(self) -> bool:
        return self.num_exits == 2


class MazeGraph:
    """
    Node graph of the open cells of an ASCII maze.

    Every non-wall cell becomes a node, indexed in row-major order. Edges join
    orthogonally adjacent open cells.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.nodes: list[MazeNode] = []
        self.index_by_cell: dict[Cell, int] = {}
        self.pills: list[int] = []
        self.power_pills: list[int] = []
        self.evader_start: int = UNKNOWN_POSITION
        self.pursuer_start: int = UNKNOWN_POSITION

    @classmethod
    def from_layout(cls, layout: str | list[str]) -> MazeGraph:
        lines = layout.strip("\n").splitlines() if isinstance(layout, str) else list(layout)
        if not lines:
            raise ValueError("maze layout is empty")
        width = max(len(line) for line in lines)
        grid = np.array([list(line.ljust(width, WALL)) for line in lines], dtype="<U1")
        graph = cls(width=width, height=grid.shape[0])

        open_mask = grid != WALL
        for y, x in np.argwhere(open_mask):
            cell = (int(y), int(x))
            idx = len(graph.nodes)
            graph.nodes.append(MazeNode(idx, cell))
            graph.index_by_cell[cell] = idx

            ch = grid[cell]
            if ch == PILL:
                graph.pills.append(idx)
            elif ch == POWER_PILL:
                graph.power_pills.append(idx)
            elif ch == EVADER_START:
                graph.evader_start = idx
            elif ch == PURSUER_START:
                graph.pursuer_start = idx

        if not graph.nodes:
            raise ValueError("maze layout has no open cells")
        if graph.evader_start == UNKNOWN_POSITION:
            raise ValueError(f"maze layout needs an evader start '{EVADER_START}'")
        if graph.pursuer_start == UNKNOWN_POSITION:
            raise ValueError(f"maze layout needs a pursuer start '{PURSUER_START}'")

        for node in graph.nodes:
            y, x = node.cell
            for move in DIRECTIONS:
                dy, dx = move.delta
                nidx = graph.index_by_cell.get((y + dy, x + dx))
                if nidx is not None:
                    node.neighbours[move] = nidx

        return graph

    def __len__(self) -> int:
        return len(self.nodes)

    def is_valid(self, index: int) -> bool:
        return 0 <= index < len(self.nodes)

    def neighbour(self, index: int, move: Move) -> int:
        if not self.is_valid(index) or move is Move.NEUTRAL:
            return UNKNOWN_POSITION
        return self.nodes[index].neighbours.get(move, UNKNOWN_POSITION)

    def possible_moves(self, index: int, last_move: Move | None = None) -> list[Move]:
        """Exits from ``index``.

        Reversing ``last_move`` is only forbidden in corridors; junctions and
        dead ends allow it.
        """
        if not self.is_valid(index):
            return []
        node = self.nodes[index]
        moves = list(node.neighbours)
        if last_move is not None and last_move is not Move.NEUTRAL and node.is_corridor:
            back = last_move.opposite()
            moves = [m for m in moves if m is not back]
        return moves

    def is_junction(self, index: int) -> bool:
        return self.is_valid(index) and self.nodes[index].num_exits > 2
