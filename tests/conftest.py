"""Shared test fixtures for boulder tests."""

import textwrap

import pytest

from boulder.grid import GridState
from boulder.maps import format_grid, parse_map


class FixedRandomSource:
    """Random source that always picks the same index and records each call."""

    def __init__(self, index: int):
        self.index = index
        self.calls: list[int] = []

    def pick(self, n: int) -> int:
        self.calls.append(n)
        assert self.index < n, f"Fixed pick {self.index} out of range for {n}"
        return self.index


class ScriptedRandomSource:
    """Random source that replays a list of picks."""

    def __init__(self, picks: list[int]):
        self.picks = list(picks)
        self.calls: list[int] = []

    def pick(self, n: int) -> int:
        self.calls.append(n)
        return self.picks.pop(0)


def cave(text: str) -> str:
    """Normalize an indented map literal to map text."""
    return textwrap.dedent(text).strip("\n") + "\n"


def make_grid(text: str) -> GridState:
    """Build a grid from an indented map literal."""
    return GridState.from_map(parse_map(cave(text)))


def dump(grid: GridState) -> str:
    """Text dump of grid for comparison with cave() literals."""
    return format_grid(grid)


@pytest.fixture
def always_left() -> FixedRandomSource:
    """Random source that always picks the first option."""
    return FixedRandomSource(0)


@pytest.fixture
def always_right() -> FixedRandomSource:
    """Random source that always picks the second option."""
    return FixedRandomSource(1)


@pytest.fixture
def open_cave() -> GridState:
    """7x6 cave with an open 5x4 interior and the player at (1, 1)."""
    return make_grid(
        """
        #######
        #     #
        #     #
        #     #
        #s    #
        #######
        """
    )


@pytest.fixture
def push_row() -> GridState:
    """Player, rock, then open space to the right."""
    return make_grid(
        """
        #######
        #so   #
        #######
        """
    )
