"""
Value types for the geohash16 scheme.

This module defines the coordinate and cell representations returned by
the decoder, and the working domain the bisection runs over. The domain
is not global: the scheme covers latitude [6, 36] and longitude [68, 98].
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


# Compass directions. Cardinals are primitive steps; diagonals compose two.
NORTH = "n"
EAST = "e"
SOUTH = "s"
WEST = "w"

CARDINALS: Tuple[str, ...] = (NORTH, EAST, SOUTH, WEST)
DIRECTIONS: Tuple[str, ...] = ("n", "ne", "e", "se", "s", "sw", "w", "nw")


@dataclass(frozen=True)
class Coordinate:
    """A (latitude, longitude) pair in degrees."""

    lat: float
    lon: float

    def as_tuple(self) -> Tuple[float, float]:
        return self.lat, self.lon


@dataclass(frozen=True)
class Cell:
    """
    The rectangle implied by a geohash.

    Corners are strictly ordered: sw.lat < ne.lat and sw.lon < ne.lon.
    """

    sw: Coordinate
    ne: Coordinate

    def __post_init__(self):
        if not (self.sw.lat < self.ne.lat and self.sw.lon < self.ne.lon):
            raise ValueError(f"Invalid cell: sw={self.sw}, ne={self.ne}")

    @property
    def lat_span(self) -> float:
        """Height of the cell in degrees of latitude."""
        return self.ne.lat - self.sw.lat

    @property
    def lon_span(self) -> float:
        """Width of the cell in degrees of longitude."""
        return self.ne.lon - self.sw.lon

    @property
    def center(self) -> Coordinate:
        """Unrounded midpoint of the cell."""
        return Coordinate(
            (self.sw.lat + self.ne.lat) / 2,
            (self.sw.lon + self.ne.lon) / 2,
        )

    def contains(self, lat: float, lon: float) -> bool:
        """Check if (lat, lon) lies within the cell, edges included."""
        return (
            self.sw.lat <= lat <= self.ne.lat
            and self.sw.lon <= lon <= self.ne.lon
        )

    def contains_cell(self, other: Cell) -> bool:
        """Check if another cell lies entirely within this one."""
        return (
            self.contains(other.sw.lat, other.sw.lon)
            and self.contains(other.ne.lat, other.ne.lon)
        )


@dataclass(frozen=True)
class Domain:
    """Working rectangle that the first bisection starts from."""

    lat_min: float = 6.0
    """Southern edge of the domain."""

    lat_max: float = 36.0
    """Northern edge of the domain."""

    lon_min: float = 68.0
    """Western edge of the domain."""

    lon_max: float = 98.0
    """Eastern edge of the domain."""

    max_precision: int = 12
    """Longest hash tried when encoding without an explicit precision."""

    def __post_init__(self):
        if self.lat_min >= self.lat_max:
            raise ValueError("lat_min must be less than lat_max")
        if self.lon_min >= self.lon_max:
            raise ValueError("lon_min must be less than lon_max")
        if self.max_precision < 1:
            raise ValueError("max_precision must be at least 1")

    def as_cell(self) -> Cell:
        return Cell(
            Coordinate(self.lat_min, self.lon_min),
            Coordinate(self.lat_max, self.lon_max),
        )


DEFAULT_DOMAIN = Domain()
