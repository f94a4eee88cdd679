from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

import numpy as np

from ..actions import PlannerKind
from ..comms.messenger import Messenger
from ..config import AgentConfig, BeliefConfig
from ..constants import NUM_PURSUERS, TEAM_TICK_THRESHOLD, pursuer_id
from .pursuer import PursuerAgent

if TYPE_CHECKING:
    from ..actions import Move
    from ..env.protocol import ObservableEnvironment

logger = logging.getLogger(__name__)


class PursuerTeam:
    """
    One PursuerAgent per pursuer, sharing a messenger for the current match.

    Each agent gets its own random generator spawned from the team seed, so a
    seeded team replays a match exactly.
    """

    def __init__(
        self,
        planner: PlannerKind | None = None,
        tick_threshold: int | None = None,
        config: AgentConfig | None = None,
        pursuer_ids: list[str] | None = None,
        seed: int | None = None,
    ):
        config = config or AgentConfig(belief=BeliefConfig(tick_threshold=TEAM_TICK_THRESHOLD))
        if planner is not None:
            config = replace(config, planner=planner)
        if tick_threshold is not None:
            config = replace(config, belief=BeliefConfig(tick_threshold=tick_threshold))
        self.config = config
        self.pursuer_ids = pursuer_ids or [pursuer_id(i) for i in range(NUM_PURSUERS)]
        rngs = [np.random.default_rng(s) for s in np.random.SeedSequence(seed).spawn(len(self.pursuer_ids))]
        self.agents: dict[str, PursuerAgent] = {
            pid: PursuerAgent(pid, self.config, rng=rng) for pid, rng in zip(self.pursuer_ids, rngs)
        }
        self.messenger = Messenger()

    def new_match(self) -> None:
        """Fresh messenger and beliefs; learned values are kept."""
        self.messenger = Messenger()
        for agent in self.agents.values():
            agent.new_match()
        logger.info(f"new match for {len(self.agents)} pursuers ({self.config.planner.name})")

    def get_moves(self, env: ObservableEnvironment, deadline: float | None = None) -> dict[str, Move]:
        """Moves of the pursuers that need one this tick."""
        moves: dict[str, Move] = {}
        for pid, agent in self.agents.items():
            move = agent.get_move(env.observed_by(pid), self.messenger, deadline)
            if move is not None:
                moves[pid] = move
        return moves
