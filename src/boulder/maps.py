"""Text map loading and dumping.

Map files hold one line per row with the bottom row last, so the file's
last line becomes internal row 0. Legend:

    s  player (exactly one)
    #  steel
    %  wall
    .  dirt
    o  rock
    *  diamond

Any other character is empty space.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

import structlog
from pydantic import BaseModel

from .exceptions import MapFormatError, MapLoadError
from .tiles import DIAMOND, DIRT, EMPTY, PLAYER, ROCK, STEEL, WALL, Tile, TileKind
from .types import Direction, GridPos, from_xy

if TYPE_CHECKING:
    from .grid import GridState

logger = structlog.get_logger()


_CHAR_TILES: dict[str, Tile] = {
    "s": PLAYER,
    "#": STEEL,
    "%": WALL,
    ".": DIRT,
    "o": ROCK,
    "*": DIAMOND,
}

_TILE_CHARS: dict[TileKind, str] = {
    tile.kind: ch for ch, tile in _CHAR_TILES.items()
}
_TILE_CHARS[TileKind.EMPTY] = " "

_CREATURE_CHARS: dict[Direction, str] = {
    Direction.UP: "^",
    Direction.DOWN: "v",
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
}


class MapDescription(BaseModel, frozen=True):
    """Parsed map: flat tiles (row 0 at the bottom) and start position."""

    tiles: tuple[Tile, ...]
    width: int
    height: int
    start_pos: int

    def with_creatures(
        self, placements: Iterable[tuple[int, int, Direction]]
    ) -> "MapDescription":
        """Return copy with creatures placed at (x, y, direction).

        Raises:
            MapLoadError: If a placement is outside the map or not on an
                empty tile.
        """
        tiles = list(self.tiles)
        for x, y, direction in placements:
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise MapLoadError(f"Creature at ({x}, {y}) is outside the map")
            pos = from_xy(x, y, self.width)
            if not tiles[pos].is_empty:
                raise MapLoadError(
                    f"Creature at ({x}, {y}) would replace {tiles[pos]}"
                )
            tiles[pos] = Tile.creature(direction)
        return self.model_copy(update={"tiles": tuple(tiles)})


def parse_map(text: str) -> MapDescription:
    """Parse map text into a MapDescription.

    Args:
        text: Map rows, top row first, separated by "\n" (a trailing "\r"
            on each row and one trailing newline are ignored).

    Raises:
        MapFormatError: If the map is empty, lines differ in length, or there
            is not exactly one start position.
    """
    # Rows end at "\n" only; every other character is a tile
    lines = [line.rstrip("\r") for line in text.split("\n")]
    if lines[-1] == "":
        lines.pop()
    if not any(lines):
        raise MapFormatError("Map is empty")

    width = len(lines[0])
    height = len(lines)
    tiles: list[Tile] = [EMPTY] * (width * height)
    start: GridPos | None = None

    for y, line in enumerate(reversed(lines)):
        if len(line) != width:
            raise MapFormatError(
                f"Lines not equal length: row {y} has {len(line)} "
                f"characters, expected {width}"
            )
        for x, ch in enumerate(line):
            pos = from_xy(x, y, width)
            tile = _CHAR_TILES.get(ch, EMPTY)
            if tile.is_player:
                if start is not None:
                    raise MapFormatError("Multiple starting positions found")
                start = pos
            tiles[pos] = tile

    if start is None:
        raise MapFormatError("No start position found")

    return MapDescription(
        tiles=tuple(tiles), width=width, height=height, start_pos=start
    )


def load_map(path: Path) -> MapDescription:
    """Load a map file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MapFormatError: If the map text is malformed.
    """
    text = Path(path).read_text(encoding="utf-8")
    description = parse_map(text)
    logger.info(
        "map_loaded",
        path=str(path),
        width=description.width,
        height=description.height,
    )
    return description


def maps_dir() -> Path:
    """Directory holding bundled map files."""
    return Path(__file__).parent / "data" / "maps"


def find_map(name: str) -> Path:
    """Find a map file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .txt
    2. data/maps/{name}.txt (bundled)
    3. data/maps/{name}

    Raises:
        FileNotFoundError: If the map is not found.
    """
    if "/" in name or name.endswith(".txt"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Map file not found: {name}")

    directory = maps_dir()
    for candidate in (directory / f"{name}.txt", directory / name):
        if candidate.exists():
            return candidate

    raise FileNotFoundError(
        f"Map '{name}' not found in {directory}. Available maps: {list_maps()}"
    )


def list_maps() -> list[str]:
    """List bundled map names."""
    directory = maps_dir()
    if not directory.exists():
        return []
    return sorted(p.stem for p in directory.glob("*.txt"))


def tile_char(tile: Tile) -> str:
    """Character used for tile in a text dump."""
    if tile.is_creature:
        return _CREATURE_CHARS[tile.direction]
    return _TILE_CHARS[tile.kind]


def format_grid(grid: "GridState") -> str:
    """Dump a grid as map text, top row first.

    Creatures are drawn as direction arrows, which parse_map reads back as
    empty space.
    """
    rows = []
    for y in reversed(range(grid.height)):
        rows.append(
            "".join(
                tile_char(grid.get_tile(from_xy(x, y, grid.width)))
                for x in range(grid.width)
            )
        )
    return "\n".join(rows) + "\n"
