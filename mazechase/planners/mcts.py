"""Monte-Carlo tree search over joint (pursuer, evader) moves.

Each decision builds a fresh tree rooted at the pursuer's position and the
believed evader position, then repeats

1. Select: descend by UCT until a leaf (unvisited children score +inf)
2. Expand: one child per valid (own move, evader move) pair
3. Simulate: replay the path on a clone holding the evader at its believed
   node, then random plies
4. Backpropagate: add the rollout value to every node up to the root

and finally plays the most visited root child. The tree is an arena of nodes
addressed by integer index, discarded when the decision returns.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from ..actions import Move
from ..config import MCTSConfig
from ..constants import EVADER_ID, UNKNOWN_POSITION
from ..rewards import RewardModel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..env.belief import BeliefState
    from ..env.protocol import Environment

logger = logging.getLogger(__name__)

ROOT = 0


@dataclass
class SearchNode:
    parent: int | None
    move: Move  # Own move that led here; NEUTRAL at the root
    agent_position: int
    opponent_position: int
    opponent_move: Move = Move.NEUTRAL
    visits: int = 0
    score: float = 0.0
    children: list[int] = field(default_factory=list)
    expanded: bool = False

    @property
    def mean_score(self) -> float:
        return self.score / self.visits if self.visits else 0.0


class SearchTree:
    """Arena of SearchNodes; index 0 is the root."""

    def __init__(self, agent_position: int, opponent_position: int, last_move: Move | None):
        self.root_last_move = last_move
        self.nodes: list[SearchNode] = [SearchNode(None, Move.NEUTRAL, agent_position, opponent_position)]

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def root(self) -> SearchNode:
        return self.nodes[ROOT]

    def add_child(self, parent: int, move: Move, opponent_move: Move, agent_pos: int, opponent_pos: int) -> int:
        idx = len(self.nodes)
        self.nodes.append(SearchNode(parent, move, agent_pos, opponent_pos, opponent_move))
        self.nodes[parent].children.append(idx)
        return idx

    def heading(self, idx: int) -> Move | None:
        """Own move that reached ``idx``; the agent's last move at the root."""
        return self.root_last_move if idx == ROOT else self.nodes[idx].move

    def is_terminal(self, idx: int) -> bool:
        node = self.nodes[idx]
        return node.expanded and not node.children

    def path_to(self, idx: int) -> list[int]:
        """Node indices from the first move below the root down to ``idx``."""
        path: list[int] = []
        cur: int | None = idx
        while cur is not None and cur != ROOT:
            path.append(cur)
            cur = self.nodes[cur].parent
        path.reverse()
        return path

    def backpropagate(self, idx: int, value: float) -> None:
        cur: int | None = idx
        while cur is not None:
            node = self.nodes[cur]
            node.visits += 1
            node.score += value
            cur = node.parent


def uct_score(parent_visits: int, child_visits: int, exploitation: float, c: float) -> float:
    """UCT value of a child. Unvisited children always come first."""
    if child_visits == 0:
        return math.inf
    return exploitation + c * math.sqrt(2.0 * math.log(parent_visits) / child_visits)


@dataclass(frozen=True)
class ChildStats:
    move: Move
    opponent_move: Move
    visits: int
    score: float


@dataclass(frozen=True)
class SearchStats:
    iterations: int
    root_visits: int
    tree_size: int
    children: tuple[ChildStats, ...]
    chosen: Move
    cut_short: bool  # Deadline stopped the search early
    elapsed_s: float


class MCTSPlanner:
    """Per-decision tree search for one pursuer."""

    def __init__(
        self,
        agent_id: str,
        config: MCTSConfig | None = None,
        rewards: RewardModel | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.agent_id = agent_id
        self.config = config or MCTSConfig()
        if self.config.exploitation not in ("proximity", "mean"):
            raise ValueError(f"unknown exploitation mode {self.config.exploitation!r}")
        if self.config.rollout_score not in ("final", "cumulative"):
            raise ValueError(f"unknown rollout score mode {self.config.rollout_score!r}")
        self.rewards = rewards or RewardModel()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.last_search: SearchStats | None = None

    def reset(self) -> None:
        self.last_search = None

    # ------------------------------------------------------------------ search

    def decide(self, belief: BeliefState, env: Environment, *, deadline: float | None = None) -> Move:
        start = time.monotonic()
        tree = SearchTree(env.position_of(self.agent_id), belief.position, env.last_move_of(self.agent_id))
        self.rewards.reward(env.snapshot())

        iterations = 0
        cut_short = False
        # Without a believed evader position there is nothing to expand against.
        budget = max(1, self.config.num_simulations) if belief.is_known else 0
        for _ in range(budget):
            # At least one iteration runs so the root gets a chance to expand.
            if iterations > 0 and deadline is not None and time.monotonic() >= deadline:
                cut_short = True
                break
            leaf = self.select(tree, env)
            node = self.expand(tree, leaf, env)
            value = self.simulate(tree, node, env)
            tree.backpropagate(node, value)
            iterations += 1

        best = self.best_root_child(tree)
        move = Move.NEUTRAL if best is None else tree.nodes[best].move

        self.last_search = SearchStats(
            iterations=iterations,
            root_visits=tree.root.visits,
            tree_size=len(tree),
            children=tuple(
                ChildStats(n.move, n.opponent_move, n.visits, n.score)
                for n in (tree.nodes[c] for c in tree.root.children)
            ),
            chosen=move,
            cut_short=cut_short,
            elapsed_s=time.monotonic() - start,
        )
        self._log_search(self.last_search)
        return move

    def select(self, tree: SearchTree, env: Environment) -> int:
        idx = ROOT
        while tree.nodes[idx].children and not tree.is_terminal(idx):
            idx = self.best_uct_child(tree, idx, env)
        return idx

    def best_uct_child(self, tree: SearchTree, idx: int, env: Environment) -> int:
        parent = tree.nodes[idx]
        best_child = parent.children[0]
        best_value = -math.inf
        for c in parent.children:
            child = tree.nodes[c]
            if child.visits == 0:
                return c
            value = uct_score(parent.visits, child.visits, self.exploitation(child, env), self.config.uct_constant)
            if value > best_value:
                best_value = value
                best_child = c
        return best_child

    def exploitation(self, node: SearchNode, env: Environment) -> float:
        if self.config.exploitation == "mean":
            return node.mean_score
        # Closer simulated positions are better for a pursuer
        return 1.0 / (1.0 + env.shortest_path_distance(node.agent_position, node.opponent_position))

    def expand(self, tree: SearchTree, idx: int, env: Environment) -> int:
        """Expand ``idx`` if it never was; return the node to simulate from."""
        node = tree.nodes[idx]
        if node.expanded:
            return idx
        node.expanded = True

        own_moves = env.legal_moves(node.agent_position, tree.heading(idx))
        opponent_moves = env.legal_moves(node.opponent_position)
        for move in own_moves:
            agent_pos = env.neighbor(node.agent_position, move)
            if agent_pos == UNKNOWN_POSITION:
                continue
            for opp_move in opponent_moves:
                opp_pos = env.neighbor(node.opponent_position, opp_move)
                if opp_pos == UNKNOWN_POSITION:
                    continue
                tree.add_child(idx, move, opp_move, agent_pos, opp_pos)

        if not node.children:
            return idx
        return node.children[0]

    def simulate(self, tree: SearchTree, idx: int, env: Environment) -> float:
        cfg = self.config
        # Start from the believed evader position, never the true one
        sim = env.clone(opponent_at=tree.root.opponent_position)

        # Replay the joint moves that lead to this node
        for step in tree.path_to(idx):
            node = tree.nodes[step]
            sim.advance(node.opponent_move, {self.agent_id: node.move})
            outcome = self._outcome(sim)
            if outcome is not None:
                return outcome

        node = tree.nodes[idx]
        opponent_pos = node.opponent_position
        value = self.rewards.evaluate(sim.snapshot())
        total = 0.0
        for _ in range(cfg.rollout_depth):
            own_pos = sim.position_of(self.agent_id)
            own_move = self._random_move(sim.legal_moves(own_pos, sim.last_move_of(self.agent_id)))
            opponent_move = self._random_move(sim.legal_moves(opponent_pos))
            nxt = sim.neighbor(opponent_pos, opponent_move)
            if nxt != UNKNOWN_POSITION:
                opponent_pos = nxt

            sim.advance(opponent_move, {self.agent_id: own_move})
            outcome = self._outcome(sim)
            if outcome is not None:
                return outcome

            value = self.rewards.evaluate(sim.snapshot())
            total += value

        return total if cfg.rollout_score == "cumulative" else value

    def _outcome(self, sim: Environment) -> float | None:
        if sim.was_captured():
            return self.config.capture_score
        if sim.is_terminal():
            return self.config.escape_score
        return None

    def _random_move(self, moves: Sequence[Move]) -> Move:
        if not moves:
            return Move.NEUTRAL
        return moves[int(self.rng.integers(len(moves)))]

    @staticmethod
    def best_root_child(tree: SearchTree) -> int | None:
        """Most visited root child; the first one wins ties."""
        best: int | None = None
        best_visits = -1
        for c in tree.root.children:
            visits = tree.nodes[c].visits
            if visits > best_visits:
                best, best_visits = c, visits
        return best

    def _log_search(self, stats: SearchStats) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug(
            f"{self.agent_id}: {stats.iterations} iterations, root visits {stats.root_visits}, "
            f"{len(stats.children)} children, tree size {stats.tree_size}"
            + (" (deadline hit)" if stats.cut_short else "")
        )
        for child in stats.children:
            logger.debug(
                f"  {child.move.name}/{child.opponent_move.name}: "
                f"visits={child.visits} score={child.score:.2f}"
            )
        logger.debug(f"{self.agent_id}: best move {stats.chosen.name}")
