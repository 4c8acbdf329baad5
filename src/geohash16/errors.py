"""
Error types raised by geohash16.

All errors derive from ValueError so that callers catching the usual
"bad value" exception keep working.
"""


class GeohashError(ValueError):
    """Base class for all geohash16 errors."""


class InvalidInput(GeohashError):
    """Latitude, longitude or precision could not be parsed as a number."""


class InvalidGeohash(GeohashError):
    """Geohash is empty or contains a symbol outside the alphabet."""


class InvalidEncoding(GeohashError):
    """Binary string cannot be packed into alphabet symbols."""


class InvalidDirection(GeohashError):
    """Direction is not one of the cardinal directions n, e, s, w."""


class OutOfRange(GeohashError):
    """Neighbour arithmetic stepped outside the working domain."""
