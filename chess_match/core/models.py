"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)

Everything in here is plain JSON-safe data (strings, ints, lists, dicts).
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PieceData = dict[str, str]  # {"id", "type", "color", "position"}


@dataclass
class GameModel:
    """Transport-safe representation of one match's game state used between API, Service, DB, and Game layers."""

    pieces: list[PieceData]
    active_player: PieceColor
    captured_pieces: dict[PieceColor, list[PieceData]] = field(
        default_factory=lambda: {"white": [], "black": []}
    )
    status: Optional[str] = None
    last_move: Optional[dict[str, str]] = None
    time_control: Optional[dict[str, int]] = None
    time_remaining: Optional[dict[PieceColor, int]] = None
