"""Team messenger shared by the pursuers of one match.

The channel is an append-only log. Every published message gets the next
sequence number, readers always see messages in publish order, and nothing is
ever removed, so readers filter by tick and type themselves.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from ..actions import MessageType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sighting:
    """A published observation of the evader."""

    sender: str
    position: int
    tick: int
    message_type: MessageType = MessageType.OPPONENT_SEEN
    recipient: str | None = None  # None broadcasts to the whole team
    seq: int = 0

    def visible_to(self, receiver: str) -> bool:
        if self.sender == receiver:
            return False
        return self.recipient is None or self.recipient == receiver


class Messenger:
    """Append-only, lock-guarded message log scoped to a single match."""

    def __init__(self) -> None:
        self._log: list[Sighting] = []
        self._lock = threading.Lock()

    def publish(
        self,
        sender: str,
        position: int,
        tick: int,
        message_type: MessageType = MessageType.OPPONENT_SEEN,
        recipient: str | None = None,
    ) -> Sighting:
        with self._lock:
            msg = Sighting(
                sender=sender,
                position=int(position),
                tick=int(tick),
                message_type=message_type,
                recipient=recipient,
                seq=len(self._log),
            )
            self._log.append(msg)
        logger.debug(f"{sender} published {message_type.name} pos={position} tick={tick} seq={msg.seq}")
        return msg

    def read(self, receiver: str) -> tuple[Sighting, ...]:
        """All messages visible to ``receiver`` since the channel was created."""
        with self._lock:
            snapshot = tuple(self._log)
        return tuple(m for m in snapshot if m.visible_to(receiver))

    def __len__(self) -> int:
        with self._lock:
            return len(self._log)
