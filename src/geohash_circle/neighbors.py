"""
Geohash topology: adjacent cells, quadrants and sub-regions.

Odd and even length geohashes end in characters whose bits start on
different axes (longitude for odd positions counted from 1, latitude for
even ones), so every lookup here depends on the parity of the hash length.
The neighbor tables are symmetric: an even-length hash steps north with
the odd-length east table, east with the north table, and likewise for
south and west.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .codec import decode_box
from .digits import check_geohash, encode_digit, decode_digit
from .geometry import Geopoint
from .geohash_set import GeohashSet


class Direction(str, Enum):
    """Compass directions used for neighbors, halves and quadrants."""
    NORTH = "n"
    SOUTH = "s"
    EAST = "e"
    WEST = "w"
    NORTHEAST = "ne"
    NORTHWEST = "nw"
    SOUTHEAST = "se"
    SOUTHWEST = "sw"


CARDINALS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)
DIAGONALS = (Direction.NORTHEAST, Direction.NORTHWEST, Direction.SOUTHEAST, Direction.SOUTHWEST)

DirectionLike = Union[Direction, str]

# Each index maps to the neighboring digit for odd-length hashes; border digits wrap
ODD_NORTH_NEIGHBOR = "238967debc01fg45kmstqrwxuvhjyznp"
ODD_SOUTH_NEIGHBOR = "bc01fg45238967deuvhjyznpkmstqrwx"
ODD_EAST_NEIGHBOR = "14365h7k9dcfesgujnmqp0r2twvyx8zb"
ODD_WEST_NEIGHBOR = "p0r21436x8zb9dcf5h7kjnmqesgutwvy"

# Digits on the edge of their parent cell, for odd-length hashes
ODD_NORTH_BORDER = "bcfguvyz"
ODD_SOUTH_BORDER = "0145hjnp"
ODD_EAST_BORDER = "prxz"
ODD_WEST_BORDER = "028b"

# (direction, odd) -> (neighbor table, border digits)
_NEIGHBOR_TABLES: Dict[Tuple[Direction, bool], Tuple[str, str]] = {
    (Direction.NORTH, True): (ODD_NORTH_NEIGHBOR, ODD_NORTH_BORDER),
    (Direction.NORTH, False): (ODD_EAST_NEIGHBOR, ODD_EAST_BORDER),
    (Direction.SOUTH, True): (ODD_SOUTH_NEIGHBOR, ODD_SOUTH_BORDER),
    (Direction.SOUTH, False): (ODD_WEST_NEIGHBOR, ODD_WEST_BORDER),
    (Direction.EAST, True): (ODD_EAST_NEIGHBOR, ODD_EAST_BORDER),
    (Direction.EAST, False): (ODD_NORTH_NEIGHBOR, ODD_NORTH_BORDER),
    (Direction.WEST, True): (ODD_WEST_NEIGHBOR, ODD_WEST_BORDER),
    (Direction.WEST, False): (ODD_SOUTH_NEIGHBOR, ODD_SOUTH_BORDER),
}

# (direction, odd) -> digit ranges of the appended character covering that half
_HALF_RANGES: Dict[Tuple[Direction, bool], Tuple[Tuple[int, int], ...]] = {
    (Direction.NORTH, True): ((16, 31),),
    (Direction.NORTH, False): ((8, 15), (24, 31)),
    (Direction.SOUTH, True): ((0, 15),),
    (Direction.SOUTH, False): ((0, 7), (16, 23)),
    (Direction.EAST, True): ((8, 15), (24, 31)),
    (Direction.EAST, False): ((16, 31),),
    (Direction.WEST, True): ((0, 7), (16, 23)),
    (Direction.WEST, False): ((0, 15),),
}

# (direction, odd) -> digit range of the appended character covering that quadrant
_QUARTER_RANGES: Dict[Tuple[Direction, bool], Tuple[int, int]] = {
    (Direction.NORTHEAST, True): (24, 31),
    (Direction.NORTHEAST, False): (24, 31),
    (Direction.NORTHWEST, True): (16, 23),
    (Direction.NORTHWEST, False): (8, 15),
    (Direction.SOUTHEAST, True): (8, 15),
    (Direction.SOUTHEAST, False): (16, 23),
    (Direction.SOUTHWEST, True): (0, 7),
    (Direction.SOUTHWEST, False): (0, 7),
}

# digit // 8 -> quadrant, for characters at even and odd 0-based positions
_EVEN_QUADRANTS = (Direction.SOUTHWEST, Direction.NORTHWEST, Direction.SOUTHEAST, Direction.NORTHEAST)
_ODD_QUADRANTS = (Direction.SOUTHWEST, Direction.SOUTHEAST, Direction.NORTHWEST, Direction.NORTHEAST)


def _coerce_direction(direction: DirectionLike, allowed: Tuple[Direction, ...]) -> Direction:
    try:
        value = Direction(direction)
    except ValueError:
        raise ValueError(f"Unsupported geohash direction: {direction!r}") from None
    if value not in allowed:
        names = ", ".join(d.value for d in allowed)
        raise ValueError(f"Direction {value.value!r} not allowed here, expected one of: {names}")
    return value


def neighbor(geohash: str, direction: DirectionLike) -> Optional[str]:
    """
    Return the adjacent geohash in a cardinal direction.

    Walks back from the last character: a digit on the border of its
    parent cell in that direction wraps around, and the carry moves the
    parent one cell over as well. East and west wrap around the globe;
    north of the north pole and south of the south pole there is nothing.

    Args:
        geohash: Non-empty geohash string
        direction: One of Direction.NORTH, SOUTH, EAST or WEST

    Returns:
        The neighboring geohash, or None past a pole
    """
    direction = _coerce_direction(direction, CARDINALS)
    if not geohash:
        raise ValueError("The empty geohash covers the globe and has no neighbors")
    check_geohash(geohash)

    chars = list(geohash)
    for i in range(len(chars) - 1, -1, -1):
        table, border = _NEIGHBOR_TABLES[(direction, (i + 1) % 2 == 1)]
        char = chars[i]
        on_border = char in border
        if on_border and i == 0 and direction in (Direction.NORTH, Direction.SOUTH):
            return None
        chars[i] = table[decode_digit(char)]
        if not on_border:
            break
    return "".join(chars)


def neighbors(geohash: str) -> Dict[Direction, Optional[str]]:
    """
    Return all eight neighbors of a geohash keyed by direction.

    Diagonals step north or south first, then east or west. Directions
    past a pole map to None.
    """
    north = neighbor(geohash, Direction.NORTH)
    south = neighbor(geohash, Direction.SOUTH)
    return {
        Direction.NORTH: north,
        Direction.SOUTH: south,
        Direction.EAST: neighbor(geohash, Direction.EAST),
        Direction.WEST: neighbor(geohash, Direction.WEST),
        Direction.NORTHEAST: neighbor(north, Direction.EAST) if north else None,
        Direction.NORTHWEST: neighbor(north, Direction.WEST) if north else None,
        Direction.SOUTHEAST: neighbor(south, Direction.EAST) if south else None,
        Direction.SOUTHWEST: neighbor(south, Direction.WEST) if south else None,
    }


def quadrant(geohash: str, precision: Optional[int] = None) -> Optional[Direction]:
    """
    Return the quadrant of an ancestor cell that contains this geohash.

    The ancestor is the prefix of length precision; precision 0 gives the
    quadrant of the whole globe. By default the immediate parent is used.

    Examples:
        '00' is in the southwest quadrant of '0'
        'drt2zm8h1t3v' is in the northeast quadrant of 'drt2zm8h1t3'
        '9345' is northwest on the globe (precision 0)

    Args:
        geohash: Geohash string
        precision: Length of the ancestor hash

    Returns:
        One of the diagonal directions, or None if precision is not
        shorter than the hash
    """
    if precision is None:
        if not geohash:
            return None
        precision = len(geohash) - 1
    check_geohash(geohash)
    if precision < 0:
        raise ValueError(f"precision must be non-negative: {precision}")
    if precision >= len(geohash):
        return None

    quadrants = _ODD_QUADRANTS if precision % 2 else _EVEN_QUADRANTS
    return quadrants[decode_digit(geohash[precision]) // 8]


def halve(geohash: str, direction: DirectionLike) -> GeohashSet:
    """
    Cut a geohash into the half on one side.

    Depending on parity the half is one run of 16 child digits or two
    runs of 8.

    Args:
        geohash: Geohash string
        direction: One of Direction.NORTH, SOUTH, EAST or WEST

    Returns:
        GeohashSet of child ranges one character longer than geohash
    """
    direction = _coerce_direction(direction, CARDINALS)
    check_geohash(geohash)
    region = GeohashSet()
    for first, last in _HALF_RANGES[(direction, len(geohash) % 2 == 1)]:
        region.add_range(geohash + encode_digit(first), geohash + encode_digit(last))
    return region


def quarter(geohash: str, direction: DirectionLike) -> GeohashSet:
    """
    Reduce a geohash to the region of one quadrant.

    Args:
        geohash: Geohash string
        direction: One of Direction.NORTHEAST, NORTHWEST, SOUTHEAST or SOUTHWEST

    Returns:
        GeohashSet holding a single range of 8 children
    """
    direction = _coerce_direction(direction, DIAGONALS)
    check_geohash(geohash)
    first, last = _QUARTER_RANGES[(direction, len(geohash) % 2 == 1)]
    region = GeohashSet()
    region.add_range(geohash + encode_digit(first), geohash + encode_digit(last))
    return region


def contains(geohash: str, point: Geopoint) -> bool:
    """Check if the point lies within the geohash box, edges included."""
    return decode_box(geohash).contains(point)
