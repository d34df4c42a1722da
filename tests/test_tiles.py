"""Tests for tile kinds and predicates."""

import pytest

from boulder.tiles import (
    DIAMOND,
    DIRT,
    EMPTY,
    PLAYER,
    ROCK,
    STEEL,
    WALL,
    Tile,
    TileKind,
)
from boulder.types import Direction

CREATURE = Tile.creature(Direction.LEFT)
ALL_TILES = [EMPTY, PLAYER, DIRT, ROCK, WALL, DIAMOND, STEEL, CREATURE]


def kinds_where(predicate: str) -> set[TileKind]:
    return {tile.kind for tile in ALL_TILES if getattr(tile, predicate)}


class TestPredicates:
    """Capability predicates over every tile kind."""

    def test_can_fall(self):
        assert kinds_where("can_fall") == {TileKind.ROCK, TileKind.DIAMOND}

    def test_can_be_rolled_on(self):
        assert kinds_where("can_be_rolled_on") == {
            TileKind.ROCK,
            TileKind.DIAMOND,
            TileKind.WALL,
        }

    def test_can_be_bounced_on(self):
        """Everything except the player."""
        assert kinds_where("can_be_bounced_on") == set(TileKind) - {TileKind.PLAYER}

    def test_can_be_stepped_on(self):
        assert kinds_where("can_be_stepped_on") == {
            TileKind.EMPTY,
            TileKind.DIRT,
            TileKind.DIAMOND,
        }

    def test_is_empty(self):
        assert kinds_where("is_empty") == {TileKind.EMPTY}

    def test_can_be_pushed(self):
        assert kinds_where("can_be_pushed") == {TileKind.ROCK}

    def test_is_impassable(self):
        assert kinds_where("is_impassable") == {TileKind.STEEL, TileKind.WALL}


class TestCreature:
    """Tests for the creature variant."""

    def test_creature_fields(self):
        tile = Tile.creature(Direction.UP, counter=2)
        assert tile.kind is TileKind.CREATURE
        assert tile.direction is Direction.UP
        assert tile.counter == 2

    def test_with_counter_returns_new_value(self):
        """Updating the counter leaves the original tile untouched."""
        tile = Tile.creature(Direction.UP)
        bumped = tile.with_counter(1)
        assert tile.counter == 0
        assert bumped.counter == 1
        assert bumped.direction is Direction.UP

    def test_equality_includes_state(self):
        assert Tile.creature(Direction.UP) == Tile.creature(Direction.UP)
        assert Tile.creature(Direction.UP) != Tile.creature(Direction.DOWN)
        assert Tile.creature(Direction.UP) != Tile.creature(Direction.UP, counter=1)

    def test_immutable(self):
        with pytest.raises(Exception):
            CREATURE.counter = 5  # type: ignore

    def test_str(self):
        assert str(Tile.creature(Direction.LEFT, counter=1)) == "creature(left, 1)"
        assert str(ROCK) == "rock"


class TestKindCodes:
    def test_codes_are_distinct(self):
        codes = [kind.code for kind in TileKind]
        assert len(set(codes)) == len(codes)
        assert TileKind.EMPTY.code == 0
