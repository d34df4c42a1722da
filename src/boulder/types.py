"""Core types for the boulder simulation."""

from enum import IntEnum
from typing import NewType

from pydantic import BaseModel


class Direction(IntEnum):
    """4-direction movement enum."""

    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4

    @property
    def reverse(self) -> "Direction":
        """The opposite direction."""
        return _REVERSE[self]

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        """Parse a case-insensitive direction name ("up", "Left", ...)."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}") from None


_REVERSE: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Single-letter codes used by scripted action sequences
DIRECTION_CODES: dict[str, Direction] = {
    "U": Direction.UP,
    "D": Direction.DOWN,
    "L": Direction.LEFT,
    "R": Direction.RIGHT,
}


# Linear tile index: x + y * width, row 0 is the bottom row
GridPos = NewType("GridPos", int)


def offset(pos: GridPos, direction: Direction, width: int) -> GridPos:
    """Return the index one step from pos in direction.

    No bounds checking: callers rely on the map border being impassable.
    """
    if direction is Direction.UP:
        return GridPos(pos + width)
    if direction is Direction.DOWN:
        return GridPos(pos - width)
    if direction is Direction.LEFT:
        return GridPos(pos - 1)
    return GridPos(pos + 1)


def to_xy(pos: GridPos, width: int) -> tuple[int, int]:
    """Split a linear index into (x, y)."""
    return pos % width, pos // width


def from_xy(x: int, y: int, width: int) -> GridPos:
    """Build a linear index from (x, y)."""
    return GridPos(x + y * width)


class Action(BaseModel, frozen=True):
    """A player action for one tick."""

    direction: Direction
    fire: bool = False

    def __str__(self) -> str:
        if self.fire:
            return f"FIRE+{self.direction.name}"
        return self.direction.name


def parse_actions(script: str) -> list[list[Action]]:
    """Parse a scripted action string into per-tick action lists.

    Each character is one tick: U/D/L/R for a move, "." for no action.
    Whitespace is ignored.

    Raises:
        ValueError: On an unknown character.
    """
    ticks: list[list[Action]] = []
    for ch in script:
        if ch.isspace():
            continue
        if ch == ".":
            ticks.append([])
            continue
        direction = DIRECTION_CODES.get(ch.upper())
        if direction is None:
            raise ValueError(f"Unknown action code: {ch!r}")
        ticks.append([Action(direction=direction)])
    return ticks
