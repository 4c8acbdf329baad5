"""
geohash16: base-16 geohashes over a bounded latitude/longitude region.

This package encodes (lat, lon) coordinates as short strings whose
prefixes name nested rectangular cells, decodes them back to cells and
centre points, finds neighbouring cells, and indexes keyed points by cell.
"""

__version__ = "0.1.0"

from .errors import (
    GeohashError,
    InvalidInput,
    InvalidGeohash,
    InvalidEncoding,
    InvalidDirection,
    OutOfRange,
)
from .domain import Coordinate, Cell, Domain, DEFAULT_DOMAIN, CARDINALS, DIRECTIONS
from .bitcodec import BASE16, hex_to_binary, binary_to_hex
from .geohash import encode, decode, bounds, adjacent, neighbours
from .index import GeohashIndex, IndexConfig

__all__ = [
    "GeohashError",
    "InvalidInput",
    "InvalidGeohash",
    "InvalidEncoding",
    "InvalidDirection",
    "OutOfRange",
    "Coordinate",
    "Cell",
    "Domain",
    "DEFAULT_DOMAIN",
    "CARDINALS",
    "DIRECTIONS",
    "BASE16",
    "hex_to_binary",
    "binary_to_hex",
    "encode",
    "decode",
    "bounds",
    "adjacent",
    "neighbours",
    "GeohashIndex",
    "IndexConfig",
]
