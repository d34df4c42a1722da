"""Tile kinds and their capability predicates."""

from enum import Enum

from pydantic import BaseModel

from .types import Direction


class TileKind(str, Enum):
    """Closed set of tile kinds."""

    EMPTY = "empty"
    PLAYER = "player"
    DIRT = "dirt"
    ROCK = "rock"
    WALL = "wall"
    DIAMOND = "diamond"
    STEEL = "steel"
    CREATURE = "creature"

    @property
    def code(self) -> int:
        """Compact numeric code used in kind arrays."""
        return KIND_CODES[self]


# Kind -> uint8 code for array snapshots
KIND_CODES: dict[TileKind, int] = {kind: i for i, kind in enumerate(TileKind)}

# Define sets for O(1) lookup
_FALLING_KINDS = frozenset({TileKind.ROCK, TileKind.DIAMOND})
_ROLLED_ON_KINDS = frozenset({TileKind.ROCK, TileKind.DIAMOND, TileKind.WALL})
_STEPPABLE_KINDS = frozenset({TileKind.EMPTY, TileKind.DIRT, TileKind.DIAMOND})
_PUSHABLE_KINDS = frozenset({TileKind.ROCK})
_IMPASSABLE_KINDS = frozenset({TileKind.STEEL, TileKind.WALL})


class Tile(BaseModel, frozen=True):
    """Immutable tile value.

    Only creatures use counter and direction; every other kind leaves them
    at their defaults so tiles of the same kind compare equal.
    """

    kind: TileKind
    counter: int = 0
    direction: Direction | None = None

    @classmethod
    def creature(cls, direction: Direction, counter: int = 0) -> "Tile":
        """Create a creature tile."""
        return cls(kind=TileKind.CREATURE, counter=counter, direction=direction)

    def with_counter(self, counter: int) -> "Tile":
        """Return copy with updated counter."""
        return self.model_copy(update={"counter": counter})

    @property
    def can_fall(self) -> bool:
        return self.kind in _FALLING_KINDS

    @property
    def can_be_rolled_on(self) -> bool:
        return self.kind in _ROLLED_ON_KINDS

    @property
    def can_be_bounced_on(self) -> bool:
        return self.kind is not TileKind.PLAYER

    @property
    def can_be_stepped_on(self) -> bool:
        return self.kind in _STEPPABLE_KINDS

    @property
    def can_be_pushed(self) -> bool:
        return self.kind in _PUSHABLE_KINDS

    @property
    def is_empty(self) -> bool:
        return self.kind is TileKind.EMPTY

    @property
    def is_impassable(self) -> bool:
        """Whether this tile may form part of the map border."""
        return self.kind in _IMPASSABLE_KINDS

    @property
    def is_player(self) -> bool:
        return self.kind is TileKind.PLAYER

    @property
    def is_creature(self) -> bool:
        return self.kind is TileKind.CREATURE

    def __str__(self) -> str:
        if self.kind is TileKind.CREATURE:
            return f"creature({self.direction.name.lower()}, {self.counter})"
        return self.kind.value


EMPTY = Tile(kind=TileKind.EMPTY)
PLAYER = Tile(kind=TileKind.PLAYER)
DIRT = Tile(kind=TileKind.DIRT)
ROCK = Tile(kind=TileKind.ROCK)
WALL = Tile(kind=TileKind.WALL)
DIAMOND = Tile(kind=TileKind.DIAMOND)
STEEL = Tile(kind=TileKind.STEEL)
