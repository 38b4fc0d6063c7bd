"""
The Lobby Directory seam.

Lobbies (creating, joining, picking colors) are managed elsewhere. The match service only needs to know
who plays which color and whether the match has started, and tells the directory when a match starts or ends.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from chess_match.core.shared_types import Color

logger = logging.getLogger(__name__)


class LobbyDirectory(Protocol):
    def players(self, match_id: str) -> dict[Color, str]:
        """Slot binding: the identity playing each color. Empty if the match is unknown."""
        ...

    def is_started(self, match_id: str) -> bool: ...

    def mark_started(self, match_id: str) -> None: ...

    def mark_ended(self, match_id: str) -> None: ...


@dataclass
class Lobby:
    players: dict[Color, str] = field(default_factory=dict)
    started: bool = False


class InMemoryLobbyDirectory:
    """
    Minimal directory for running the service on its own (and in tests).
    Slots get bound with `bind()`; everything else about lobbies is out of scope here.
    """

    def __init__(self) -> None:
        self._lobbies: dict[str, Lobby] = {}

    def bind(self, match_id: str, color: Color, player: str) -> None:
        lobby = self._lobbies.setdefault(match_id, Lobby())
        lobby.players[color] = player
        logger.debug("Bound %s to %s in lobby %s", player, color, match_id)

    def players(self, match_id: str) -> dict[Color, str]:
        lobby = self._lobbies.get(match_id)
        return dict(lobby.players) if lobby else {}

    def is_started(self, match_id: str) -> bool:
        lobby = self._lobbies.get(match_id)
        return lobby is not None and lobby.started

    def mark_started(self, match_id: str) -> None:
        self._lobbies.setdefault(match_id, Lobby()).started = True

    def mark_ended(self, match_id: str) -> None:
        lobby = self._lobbies.get(match_id)
        if lobby is not None:
            lobby.started = False
