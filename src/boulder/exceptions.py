"""Custom exceptions for the boulder simulation."""


class BoulderError(Exception):
    """Base exception for boulder errors."""

    pass


class MapLoadError(BoulderError):
    """Raised when a map cannot be turned into a valid grid."""

    pass


class MapFormatError(MapLoadError):
    """Raised when map text is malformed (ragged lines, bad start)."""

    pass


class MapBorderError(MapLoadError):
    """Raised when the map border is not fully enclosed by Steel or Wall."""

    pass


class InvariantError(BoulderError):
    """Raised when grid state contradicts an engine invariant.

    Indicates a bug in tick resolution, never a recoverable condition.
    """

    pass
