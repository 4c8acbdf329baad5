"""
Conversion between the base-16 alphabet and bit strings.

Each alphabet symbol carries exactly 4 bits. Bits of a hash alternate
between longitude and latitude, longitude first, so the even positions
of the flat bit string belong to longitude and the odd ones to latitude.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from .errors import InvalidEncoding, InvalidGeohash


BASE16 = "0123456789abcdef"

BITS_PER_SYMBOL = 4

HEX_BINARY_MAP: Mapping[str, str] = MappingProxyType(
    {symbol: format(i, "04b") for i, symbol in enumerate(BASE16)}
)

BINARY_HEX_MAP: Mapping[str, str] = MappingProxyType(
    {bits: symbol for symbol, bits in HEX_BINARY_MAP.items()}
)


def hex_to_binary(geohash: str) -> str:
    """
    Expand a geohash into its flat bit string.

    Args:
        geohash: Hash over the base-16 alphabet (any case)

    Returns:
        String of '0'/'1' characters, 4 per symbol
    """
    bits = []
    for symbol in geohash.lower():
        try:
            bits.append(HEX_BINARY_MAP[symbol])
        except KeyError:
            raise InvalidGeohash(f"Invalid geohash symbol {symbol!r}") from None
    return "".join(bits)


def binary_to_hex(bits: str) -> str:
    """
    Pack a bit string into alphabet symbols, 4 bits at a time.

    Args:
        bits: String of '0'/'1' characters, length a multiple of 4

    Returns:
        Lowercase geohash
    """
    if len(bits) % BITS_PER_SYMBOL != 0:
        raise InvalidEncoding(
            f"Bit string length {len(bits)} is not a multiple of {BITS_PER_SYMBOL}"
        )

    symbols = []
    for i in range(0, len(bits), BITS_PER_SYMBOL):
        group = bits[i:i + BITS_PER_SYMBOL]
        try:
            symbols.append(BINARY_HEX_MAP[group])
        except KeyError:
            raise InvalidEncoding(f"Invalid bit group {group!r}") from None
    return "".join(symbols)


def deinterleave(bits: str) -> Tuple[str, str]:
    """Split a flat bit string into (longitude_bits, latitude_bits)."""
    return bits[0::2], bits[1::2]


def _leftpad(bits: str, width: int) -> str:
    return "0" * (width - len(bits)) + bits


def interleave(lon_bits: str, lat_bits: str) -> str:
    """
    Merge longitude and latitude bit strings, longitude bit first.

    The shorter string is left-padded with zeros to the length of the
    longer one.
    """
    width = max(len(lon_bits), len(lat_bits))
    lon_bits = _leftpad(lon_bits, width)
    lat_bits = _leftpad(lat_bits, width)
    return "".join(lon + lat for lon, lat in zip(lon_bits, lat_bits))
