"""
Geohash encoding and decoding.

A geohash is a Z-order (Morton) curve over the earth: it bisects the
longitude range [-180, 180] and the latitude range [-90, 90] in turn,
starting with longitude, writing one bit per bisection and 5 bits per
base-32 character. The curve starts at (-90, -180) and ends at (90, 180).
Removing characters from the end of a hash gives the enclosing, less
precise cell.

Cell sizes for a precision of n characters:
    height = 180 / 2**floor(5n / 2) degrees
    width  = 360 / 2**ceil(5n / 2) degrees
"""

from typing import Optional

from .digits import check_geohash, encode_digit, decode_digit, MAX_DIGIT, ALPHABET
from .geometry import Geopoint, Geobox


DEFAULT_PRECISION = 8
BITS_PER_DIGIT = 5


def encode(point: Geopoint, precision: int = DEFAULT_PRECISION) -> str:
    """
    Calculate the geohash of a point.

    Args:
        point: Location to encode
        precision: Number of geohash characters

    Returns:
        Geohash string of length precision
    """
    if precision < 0:
        raise ValueError(f"precision must be non-negative: {precision}")

    min_lat, max_lat = -90.0, 90.0
    min_lon, max_lon = -180.0, 180.0

    chars = []
    longitude_bit = True
    for _ in range(precision):
        digit = 0
        for _ in range(BITS_PER_DIGIT):
            if longitude_bit:
                mid = (min_lon + max_lon) / 2
                if point.longitude >= mid:
                    bit = 1
                    min_lon = mid
                else:
                    bit = 0
                    max_lon = mid
            else:
                mid = (min_lat + max_lat) / 2
                if point.latitude >= mid:
                    bit = 1
                    min_lat = mid
                else:
                    bit = 0
                    max_lat = mid
            digit = (digit << 1) | bit
            longitude_bit = not longitude_bit
        chars.append(encode_digit(digit))
    return "".join(chars)


def decode_box(geohash: str) -> Geobox:
    """
    Calculate the bounding box of a geohash.

    The empty geohash is the whole globe.

    Args:
        geohash: Geohash string

    Returns:
        Geobox covered by the hash
    """
    north, south = 90.0, -90.0
    east, west = 180.0, -180.0

    longitude_bit = True
    for char in geohash:
        digit = decode_digit(char)
        for shift in range(BITS_PER_DIGIT - 1, -1, -1):
            bit = (digit >> shift) & 1
            if longitude_bit:
                mid = (east + west) / 2
                if bit:
                    west = mid
                else:
                    east = mid
            else:
                mid = (north + south) / 2
                if bit:
                    south = mid
                else:
                    north = mid
            longitude_bit = not longitude_bit

    return Geobox(north=north, south=south, east=east, west=west)


def decode(geohash: str) -> Geopoint:
    """Return the point at the center of the geohash box."""
    return decode_box(geohash).center()


def increment(geohash: str) -> Optional[str]:
    """
    Return the geohash immediately following this one at the same precision.

    The hash is treated as a base-32 counter: the last digit is bumped and
    overflowing digits roll over to '0', carrying into the prefix.

    Examples:
        increment('38z') returns '390'
        increment('z') returns None

    Args:
        geohash: Geohash string

    Returns:
        The successor hash, or None if geohash is the last one
    """
    check_geohash(geohash)
    chars = list(geohash)
    for i in range(len(chars) - 1, -1, -1):
        digit = decode_digit(chars[i])
        if digit < MAX_DIGIT:
            chars[i] = encode_digit(digit + 1)
            return "".join(chars)
        chars[i] = ALPHABET[0]
    return None
