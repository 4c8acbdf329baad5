"""
Geohash encoding, decoding, bounds and neighbour lookup.

A geohash is built by repeatedly bisecting the working domain, alternating
between longitude and latitude (longitude first). Each bisection records
one bit: 1 if the coordinate lies above the midpoint, 0 otherwise. Every
4 bits become one symbol of the base-16 alphabet.

Neighbours are found without touching coordinates at all: the hash is
split back into its longitude and latitude bit streams, the relevant one
is treated as an integer and stepped by one, and the streams are merged
again.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Tuple
import math

from .bitcodec import (
    BITS_PER_SYMBOL,
    binary_to_hex,
    deinterleave,
    hex_to_binary,
    interleave,
)
from .domain import (
    Cell,
    Coordinate,
    Domain,
    DEFAULT_DOMAIN,
    NORTH,
    EAST,
    SOUTH,
    WEST,
)
from .errors import InvalidDirection, InvalidGeohash, InvalidInput, OutOfRange


# (longitude step, latitude step) per cardinal direction
_STEPS: Dict[str, Tuple[int, int]] = {
    NORTH: (0, 1),
    EAST: (1, 0),
    SOUTH: (0, -1),
    WEST: (-1, 0),
}


def _to_number(value, name: str) -> float:
    """Coerce a value to float, raising InvalidInput if it is not numeric."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} is not a number: {value!r}") from None
    if math.isnan(number):
        raise InvalidInput(f"{name} is not a number: {value!r}")
    return number


def _bisect(value: float, lo: float, hi: float) -> Tuple[str, float, float]:
    """
    Halve [lo, hi] toward the half containing value.

    A value equal to the midpoint goes to the lower half.

    Returns:
        Tuple of (bit, new_lo, new_hi)
    """
    mid = (lo + hi) / 2
    if value > mid:
        return "1", mid, hi
    return "0", lo, mid


def _narrow(bit: str, lo: float, hi: float) -> Tuple[float, float]:
    """Inverse of _bisect: keep the half of [lo, hi] selected by bit."""
    mid = (lo + hi) / 2
    if bit == "1":
        return mid, hi
    return lo, mid


def _round_half_away_from_zero(x: float, places: int) -> float:
    """
    Round to a number of decimal places, with ties going away from zero.

    Works on the exact binary value of x, so 17.25 rounds to 17.3 where
    the built-in round() would give 17.2.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(x).quantize(quantum, rounding=ROUND_HALF_UP))


def _decimal_places(span: float) -> int:
    # ⌊2 - log10(Δ°)⌋ decimal places
    return math.floor(2 - math.log10(span))


def _encode(lat: float, lon: float, precision: float, domain: Domain) -> str:
    lat_min, lat_max = domain.lat_min, domain.lat_max
    lon_min, lon_max = domain.lon_min, domain.lon_max

    symbols = []
    bits = []
    even_bit = True

    while len(symbols) < precision:
        if even_bit:
            bit, lon_min, lon_max = _bisect(lon, lon_min, lon_max)
        else:
            bit, lat_min, lat_max = _bisect(lat, lat_min, lat_max)
        bits.append(bit)
        even_bit = not even_bit

        if len(bits) == BITS_PER_SYMBOL:
            symbols.append(binary_to_hex("".join(bits)))
            bits = []

    return "".join(symbols)


def encode(
    lat,
    lon,
    precision: Optional[int] = None,
    *,
    domain: Domain = DEFAULT_DOMAIN,
) -> str:
    """
    Encode a coordinate as a geohash.

    Precision is not capped. Work and memory grow with it, so a huge value
    such as 1e9 runs until memory is exhausted; hashes longer than the
    domain can resolve in floating point are produced but cannot be
    decoded. Callers keep precision within 1..12.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        precision: Number of symbols in the result. If omitted, the shortest
            hash (up to domain.max_precision) whose decoded centre equals
            (lat, lon) exactly is returned, or the longest one if none does.
        domain: Working rectangle to bisect

    Returns:
        Lowercase geohash

    Raises:
        InvalidInput: if lat, lon or precision is not a number
    """
    lat = _to_number(lat, "lat")
    lon = _to_number(lon, "lon")

    if precision is None:
        # Every shorter hash is a prefix of the longest one
        full = _encode(lat, lon, domain.max_precision, domain)
        for p in range(1, domain.max_precision + 1):
            candidate = full[:p]
            if decode(candidate, domain=domain).as_tuple() == (lat, lon):
                return candidate
        return full

    precision = _to_number(precision, "precision")
    if math.isinf(precision):
        raise InvalidInput(f"precision is not finite: {precision!r}")

    return _encode(lat, lon, precision, domain)


def bounds(geohash: str, *, domain: Domain = DEFAULT_DOMAIN) -> Cell:
    """
    Return the cell covered by a geohash.

    Args:
        geohash: Hash over the base-16 alphabet (any case)
        domain: Working rectangle the hash was encoded against

    Returns:
        Cell with south-west and north-east corners

    Raises:
        InvalidGeohash: if the hash is empty, has an invalid symbol, or is
            longer than floating point can resolve within the domain
    """
    if not isinstance(geohash, str) or not geohash:
        raise InvalidGeohash(f"Invalid geohash {geohash!r}")

    lat_min, lat_max = domain.lat_min, domain.lat_max
    lon_min, lon_max = domain.lon_min, domain.lon_max

    for i, bit in enumerate(hex_to_binary(geohash)):
        if i % 2 == 0:
            lo, hi = _narrow(bit, lon_min, lon_max)
            shrunk = lo < hi and (lo, hi) != (lon_min, lon_max)
            lon_min, lon_max = lo, hi
        else:
            lo, hi = _narrow(bit, lat_min, lat_max)
            shrunk = lo < hi and (lo, hi) != (lat_min, lat_max)
            lat_min, lat_max = lo, hi
        # Past one ulp the midpoint rounds onto a bound
        if not shrunk:
            raise InvalidGeohash(
                f"Geohash {geohash!r} is too long to resolve: cell stopped "
                f"shrinking after {i + 1} bits"
            )

    return Cell(Coordinate(lat_min, lon_min), Coordinate(lat_max, lon_max))


def decode(geohash: str, *, domain: Domain = DEFAULT_DOMAIN) -> Coordinate:
    """
    Decode a geohash to the centre of its cell.

    Each axis is rounded to ⌊2 - log10(span)⌋ decimal places, so coarse
    cells decode to coarse coordinates.

    Raises:
        InvalidGeohash: if the hash is empty, has an invalid symbol, or is
            too long to resolve
    """
    cell = bounds(geohash, domain=domain)
    center = cell.center

    lat = _round_half_away_from_zero(center.lat, _decimal_places(cell.lat_span))
    lon = _round_half_away_from_zero(center.lon, _decimal_places(cell.lon_span))

    return Coordinate(lat, lon)


def _step_axis(bits: str, delta: int, axis: str) -> str:
    """
    Step one axis' bit stream by delta cells.

    Raises:
        OutOfRange: if the result does not fit in the same number of bits
    """
    if delta == 0:
        return bits

    value = int(bits, 2) + delta
    if value < 0 or value >= 2 ** len(bits):
        raise OutOfRange(f"Cannot step {axis} by {delta:+d}: outside the domain")
    return format(value, "b")


def adjacent(geohash: str, direction: str) -> str:
    """
    Return the geohash of the same-sized cell next to this one.

    Args:
        geohash: Hash over the base-16 alphabet (any case)
        direction: One of 'n', 'e', 's', 'w'

    Returns:
        Lowercase geohash of the same length

    Raises:
        InvalidGeohash: if the hash is empty or has an invalid symbol
        InvalidDirection: if direction is not a cardinal direction
        OutOfRange: if the neighbour lies outside the working domain
    """
    if not isinstance(geohash, str) or not geohash:
        raise InvalidGeohash(f"Invalid geohash {geohash!r}")

    key = direction.lower() if isinstance(direction, str) else direction
    if key not in _STEPS:
        raise InvalidDirection(f"Invalid direction {direction!r}")
    d_lon, d_lat = _STEPS[key]

    lon_bits, lat_bits = deinterleave(hex_to_binary(geohash))
    lon_bits = _step_axis(lon_bits, d_lon, "longitude")
    lat_bits = _step_axis(lat_bits, d_lat, "latitude")

    return binary_to_hex(interleave(lon_bits, lat_bits))


def neighbours(geohash: str) -> Dict[str, str]:
    """
    Return all 8 cells around a geohash, keyed n, ne, e, se, s, sw, w, nw.

    Diagonals are found by stepping north or south first, then east or west.
    Any step leaving the domain raises OutOfRange; no partial result is
    returned.
    """
    north = adjacent(geohash, NORTH)
    south = adjacent(geohash, SOUTH)

    return {
        "n": north,
        "ne": adjacent(north, EAST),
        "e": adjacent(geohash, EAST),
        "se": adjacent(south, EAST),
        "s": south,
        "sw": adjacent(south, WEST),
        "w": adjacent(geohash, WEST),
        "nw": adjacent(north, WEST),
    }
