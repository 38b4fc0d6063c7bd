"""
Per-match chess clock.

The clock does not run by itself: the client calls `tick()` once per elapsed second for the side whose time is running.
The increment is handed out once per accepted move (see GameState.apply_move), not per tick.
"""

from dataclasses import dataclass, replace
from typing import Self

from chess_match.core.exceptions import InvalidTimeControlError
from chess_match.core.shared_types import Color

MINUTES_RANGE = (1, 60)
INCREMENT_RANGE = (0, 60)


@dataclass(frozen=True)
class TimeControl:
    """Fixed at the start of a match."""

    minutes: int
    increment: int = 0

    def __post_init__(self) -> None:
        if not MINUTES_RANGE[0] <= self.minutes <= MINUTES_RANGE[1]:
            raise InvalidTimeControlError(
                f"Minutes must be between {MINUTES_RANGE[0]} and {MINUTES_RANGE[1]}.",
                minutes=self.minutes,
            )
        if not INCREMENT_RANGE[0] <= self.increment <= INCREMENT_RANGE[1]:
            raise InvalidTimeControlError(
                f"Increment must be between {INCREMENT_RANGE[0]} and {INCREMENT_RANGE[1]}.",
                increment=self.increment,
            )

    @property
    def initial_seconds(self) -> int:
        return self.minutes * 60


@dataclass(frozen=True)
class TimeRemaining:
    """Seconds left on each side's clock"""

    white: int
    black: int

    @classmethod
    def from_time_control(cls, time_control: TimeControl) -> Self:
        return cls(time_control.initial_seconds, time_control.initial_seconds)

    def of(self, color: Color) -> int:
        return self.white if color == Color.WHITE else self.black

    def with_seconds(self, color: Color, seconds: int) -> Self:
        return replace(self, **{str(color): seconds})

    def decrement(self, color: Color, seconds: int = 1) -> Self:
        """Never goes below zero."""
        return self.with_seconds(color, max(0, self.of(color) - seconds))

    def add(self, color: Color, seconds: int) -> Self:
        return self.with_seconds(color, self.of(color) + seconds)

    def flagged(self) -> list[Color]:
        """The side(s) that ran out of time"""
        return [color for color in Color if self.of(color) <= 0]
