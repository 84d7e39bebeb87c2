"""
geohash-circle: geohash algebra and proximity regions.

This package encodes latitude/longitude points as geohashes, derives
neighboring cells, quadrants and half/quarter sub-regions, collects them
into geohash sets that render as SQL range predicates, and grows those
sets in circles around a point for proximity search.
"""

__version__ = "0.1.0"

from .digits import ALPHABET, check_geohash, encode_digit, decode_digit
from .geometry import EARTH_RADIUS, Geopoint, Geobox, normalize_longitude
from .units import km_to_miles, miles_to_km
from .codec import DEFAULT_PRECISION, encode, decode_box, decode, increment
from .geohash_set import GeohashRange, GeohashSet
from .neighbors import Direction, neighbor, neighbors, quadrant, halve, quarter, contains
from .circle import CircleConfig, GeohashCircle, circle_for_radius

__all__ = [
    "ALPHABET",
    "encode_digit",
    "decode_digit",
    "check_geohash",
    "EARTH_RADIUS",
    "Geopoint",
    "Geobox",
    "normalize_longitude",
    "km_to_miles",
    "miles_to_km",
    "DEFAULT_PRECISION",
    "encode",
    "decode_box",
    "decode",
    "increment",
    "GeohashRange",
    "GeohashSet",
    "Direction",
    "neighbor",
    "neighbors",
    "quadrant",
    "halve",
    "quarter",
    "contains",
    "CircleConfig",
    "GeohashCircle",
    "circle_for_radius",
]
