"""
Geographic primitives: points on the earth and latitude/longitude boxes.

Latitudes run from -90 (south pole) to +90 (north pole), longitudes from
-180 to +180 with 0 at the Greenwich meridian. Points outside those ranges
are rejected; use Geopoint.coerce() or normalize_longitude() to bring
untrusted input into range first.

Distances are great-circle distances on a sphere of mean earth radius,
in kilometers.
"""

from __future__ import annotations
from dataclasses import dataclass
import math


EARTH_RADIUS = 6371.0  # mean radius in km

# Below this the meridian intersection formula divides by (nearly) zero
_DEGENERATE_EPSILON = 1e-12


def normalize_longitude(lon: float) -> float:
    """
    Wrap a longitude into [-180, 180].

    Longitudes produced by arithmetic (e.g. a box grown across the
    antimeridian) name a real place, just expressed strangely.
    """
    while lon > 180.0:
        lon -= 360.0
    while lon < -180.0:
        lon += 360.0
    return lon


@dataclass(frozen=True)
class Geopoint:
    """A location on the earth denoted by latitude and longitude in degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        if math.isnan(self.latitude) or not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range [-90, 90]: {self.latitude}")
        if math.isnan(self.longitude) or not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range [-180, 180]: {self.longitude}")

    @classmethod
    def coerce(cls, latitude: float, longitude: float) -> Geopoint:
        """
        Build a point from coordinates that may be out of range.

        Latitude is clamped to the poles and longitude is wrapped into
        [-180, 180]. NaN and infinite values are still rejected.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
        """
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise ValueError(f"Coordinates must be finite: {latitude}, {longitude}")
        return cls(max(-90.0, min(90.0, latitude)), normalize_longitude(longitude))

    def geohash(self, precision: int = 8) -> str:
        """Encode this point as a geohash of the given number of characters."""
        # codec builds on Geopoint, so it is imported late
        from .codec import encode
        return encode(self, precision)

    def distance_to_point(self, point: Geopoint) -> float:
        """
        Great-circle distance to another point in kilometers.

        Uses the spherical law of cosines, accurate to about a meter
        with 64-bit floats.
        """
        lat1 = math.radians(self.latitude)
        lon1 = math.radians(self.longitude)
        lat2 = math.radians(point.latitude)
        lon2 = math.radians(point.longitude)

        cos_angle = (math.sin(lat1) * math.sin(lat2) +
                     math.cos(lat1) * math.cos(lat2) * math.cos(lon1 - lon2))
        # rounding can push identical points just past 1
        cos_angle = max(-1.0, min(1.0, cos_angle))
        return math.acos(cos_angle) * EARTH_RADIUS

    def distance_to_latitude(self, latitude: float) -> float:
        """Distance in kilometers to a line of latitude, along this meridian."""
        return self.distance_to_point(Geopoint(latitude, self.longitude))

    def distance_to_longitude(self, longitude: float) -> float:
        """
        Shortest distance in kilometers to a line of longitude.

        The closest point lies where the great circle through this point,
        perpendicular to the meridian, crosses it. That great circle passes
        through the equatorial point 90 degrees east of the meridian, which
        gives the crossing latitude by the standard "latitude of a great
        circle at a given longitude" formula.

        Args:
            longitude: Meridian in degrees; values past +/-180 are wrapped

        Returns:
            Distance in kilometers
        """
        longitude = normalize_longitude(longitude)
        lon3 = math.radians(longitude)

        lat1 = math.radians(self.latitude)
        lon1 = math.radians(self.longitude)

        # equatorial point perpendicular to the meridian's great circle
        lat2 = 0.0
        lon2 = lon3 + math.pi / 2

        if abs(math.sin(lon1 - lon2)) < _DEGENERATE_EPSILON:
            # a quarter circle away from the meridian: the pole of our hemisphere is closest
            lat3 = math.pi / 2 if self.latitude >= 0 else -math.pi / 2
        elif math.pi / 2 - abs(lat1) < _DEGENERATE_EPSILON:
            # every meridian touches the pole
            return 0.0
        else:
            lat3 = math.atan(
                (math.sin(lat1) * math.cos(lat2) * math.sin(lon3 - lon2) -
                 math.sin(lat2) * math.cos(lat1) * math.sin(lon3 - lon1)) /
                (math.cos(lat1) * math.cos(lat2) * math.sin(lon1 - lon2))
            )

        return self.distance_to_point(Geopoint(math.degrees(lat3), longitude))

    def __str__(self) -> str:
        return f"{self.latitude:.6f} {self.longitude:.6f}"


@dataclass(frozen=True)
class Geobox:
    """
    An axis-aligned latitude/longitude box.

    Edges are inclusive. East and west may run past +/-180 when a box is
    grown across the antimeridian; the corner and center accessors wrap
    those longitudes back into range.
    """
    north: float
    south: float
    east: float
    west: float

    def __post_init__(self):
        if self.south > self.north or self.west > self.east:
            raise ValueError(
                f"Invalid box: north={self.north}, south={self.south}, "
                f"east={self.east}, west={self.west}"
            )

    @classmethod
    def from_corners(cls, p1: Geopoint, p2: Geopoint) -> Geobox:
        """Build the box spanned by two opposite corners, in any order."""
        return cls(
            north=max(p1.latitude, p2.latitude),
            south=min(p1.latitude, p2.latitude),
            east=max(p1.longitude, p2.longitude),
            west=min(p1.longitude, p2.longitude),
        )

    @property
    def height(self) -> float:
        """Latitude span in degrees."""
        return self.north - self.south

    @property
    def width(self) -> float:
        """Longitude span in degrees."""
        return self.east - self.west

    def contains(self, point: Geopoint) -> bool:
        """Check if the point lies within the box, edges included."""
        return (self.south <= point.latitude <= self.north and
                self.west <= point.longitude <= self.east)

    def center(self) -> Geopoint:
        return self._point((self.north + self.south) / 2, (self.east + self.west) / 2)

    def northeast(self) -> Geopoint:
        return self._point(self.north, self.east)

    def northwest(self) -> Geopoint:
        return self._point(self.north, self.west)

    def southeast(self) -> Geopoint:
        return self._point(self.south, self.east)

    def southwest(self) -> Geopoint:
        return self._point(self.south, self.west)

    @staticmethod
    def _point(lat: float, lon: float) -> Geopoint:
        return Geopoint.coerce(lat, lon)

    def __str__(self) -> str:
        return (f"[({self.north:.4f} {self.east:.4f}) "
                f"({self.south:.4f} {self.west:.4f})]")
