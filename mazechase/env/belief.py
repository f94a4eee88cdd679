"""Belief tracking for a single pursuer.

A pursuer only sees the evader inside its sensor range. Between sightings it
keeps the last known position, refreshed by sightings relayed over the team
messenger, until the information is older than the tick threshold.

Sources, strongest first:
- Direct observation this tick (always wins, and is relayed to the team)
- Newest relayed sighting strictly between the held tick and now
- Held belief, until it goes stale
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..actions import MessageType
from ..comms.messenger import Messenger, Sighting
from ..config import BeliefConfig
from ..constants import LEVEL_START_TICKS, UNKNOWN_POSITION, UNKNOWN_TICK

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BeliefState:
    position: int = UNKNOWN_POSITION
    tick_observed: int = UNKNOWN_TICK

    @property
    def is_known(self) -> bool:
        return self.position != UNKNOWN_POSITION


UNKNOWN_BELIEF = BeliefState()


class BeliefTracker:
    """Owns one pursuer's estimate of where the evader is."""

    def __init__(self, agent_id: str, config: BeliefConfig | None = None):
        self.agent_id = agent_id
        self.config = config or BeliefConfig()
        self.state = UNKNOWN_BELIEF

    def reset(self) -> None:
        self.state = UNKNOWN_BELIEF

    def is_stale(self, current_tick: int) -> bool:
        return current_tick - self.state.tick_observed >= self.config.tick_threshold

    def observe(
        self,
        self_position: int,
        direct_sighting: int,
        current_tick: int,
        messenger: Messenger | None = None,
    ) -> BeliefState:
        """Fold this tick's evidence into the belief and return it."""
        if current_tick <= LEVEL_START_TICKS or self.is_stale(current_tick):
            if self.state.is_known:
                logger.debug(f"{self.agent_id}: dropping belief from tick {self.state.tick_observed}")
            self.state = UNKNOWN_BELIEF

        if direct_sighting != UNKNOWN_POSITION:
            self.state = BeliefState(position=int(direct_sighting), tick_observed=int(current_tick))
            if messenger is not None:
                messenger.publish(self.agent_id, direct_sighting, current_tick, MessageType.OPPONENT_SEEN)
            return self.state

        if messenger is not None:
            relayed = self._newest_relayed(messenger.read(self.agent_id), current_tick)
            if relayed is not None:
                logger.debug(
                    f"{self.agent_id} at {self_position}: adopting sighting from {relayed.sender} "
                    f"pos={relayed.position} tick={relayed.tick}"
                )
                self.state = BeliefState(position=relayed.position, tick_observed=relayed.tick)

        return self.state

    def _newest_relayed(self, messages: tuple[Sighting, ...], current_tick: int) -> Sighting | None:
        # Max tick wins; equal ticks keep the earliest published message.
        best: Sighting | None = None
        for msg in messages:
            if msg.message_type != MessageType.OPPONENT_SEEN:
                continue
            if not (self.state.tick_observed < msg.tick < current_tick):
                continue
            if best is None or msg.tick > best.tick:
                best = msg
        return best
