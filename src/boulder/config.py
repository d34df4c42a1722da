"""Session configuration loading from TOML files."""

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from .maps import MapDescription, find_map, load_map
from .rng import NumpyRandomSource, RandomSource
from .tick import Session, TickConfig
from .types import Direction


class CreatureConfig(BaseModel):
    """Creature placement from TOML."""

    x: int
    y: int
    direction: Literal["up", "down", "left", "right"] = "left"


class SessionConfig(BaseModel):
    """Session settings from TOML."""

    map: str = "01"
    tick_duration_ms: int = Field(default=125, gt=0)
    seed: int | None = None
    check_invariants: bool = False


class Config(BaseModel):
    """Complete configuration for a play session."""

    session: SessionConfig = Field(default_factory=SessionConfig)
    creatures: list[CreatureConfig] = Field(default_factory=list)

    def tick_config(self) -> TickConfig:
        """Tick loop timing for this config."""
        return TickConfig(tick_duration_ms=self.session.tick_duration_ms)


def load_config(config_path: Path) -> Config:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return Config.model_validate(data)


def configs_dir() -> Path:
    """Directory holding bundled config files."""
    return Path(__file__).parent / "data" / "configs"


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. data/configs/{name}.toml (bundled)

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    config_path = configs_dir() / f"{name}.toml"
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir()}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    directory = configs_dir()
    if not directory.exists():
        return []
    return sorted(p.stem for p in directory.glob("*.toml"))


def config_to_map(config: Config) -> MapDescription:
    """Load the configured map and place its creatures.

    Raises:
        FileNotFoundError: If the map is not found.
        MapLoadError: If the map is malformed or a creature can't be placed.
    """
    description = load_map(find_map(config.session.map))
    return description.with_creatures(
        (c.x, c.y, Direction.from_name(c.direction)) for c in config.creatures
    )


def config_to_session(config: Config, rng: RandomSource | None = None) -> Session:
    """Build a Session from config.

    Args:
        config: Session configuration.
        rng: Random source; defaults to one seeded from config.

    Raises:
        FileNotFoundError: If the map is not found.
        MapLoadError: If the map or creature placements are invalid.
    """
    return Session(
        config_to_map(config),
        rng=rng or NumpyRandomSource(config.session.seed),
        check_invariants=config.session.check_invariants,
    )
