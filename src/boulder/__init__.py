"""Boulder tick simulation core."""

from .exceptions import (
    BoulderError,
    InvariantError,
    MapBorderError,
    MapFormatError,
    MapLoadError,
)
from .grid import GridState, validate_border
from .input import Button, InputTracker
from .maps import MapDescription, find_map, format_grid, load_map, parse_map
from .movement import apply_creature, apply_gravity, resolve_player_actions
from .rng import NumpyRandomSource, RandomSource
from .tick import Session, TickConfig, TickLoop, run_tick, run_ticks, sweep_grid
from .tiles import Tile, TileKind
from .types import Action, Direction, GridPos, parse_actions

__all__ = [
    # Types
    "Action",
    "Direction",
    "GridPos",
    "parse_actions",
    # Tiles
    "Tile",
    "TileKind",
    # Grid
    "GridState",
    "validate_border",
    # Maps
    "MapDescription",
    "parse_map",
    "load_map",
    "find_map",
    "format_grid",
    # Movement
    "resolve_player_actions",
    "apply_gravity",
    "apply_creature",
    # Tick
    "run_tick",
    "sweep_grid",
    "run_ticks",
    "Session",
    "TickConfig",
    "TickLoop",
    # Input
    "Button",
    "InputTracker",
    # Random
    "RandomSource",
    "NumpyRandomSource",
    # Exceptions
    "BoulderError",
    "MapLoadError",
    "MapFormatError",
    "MapBorderError",
    "InvariantError",
]
