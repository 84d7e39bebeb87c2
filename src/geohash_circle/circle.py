"""
Geohash sets in widening circles around a center point.

A circle starts as the single geohash holding its center. Each expansion
drops a character of precision: the covering set becomes the enclosing
ancestor cell plus the half cells (and one quarter cell) of its neighbors
on the side of the ancestor where the center lies, so the center ends up
at least half a cell from every edge. max_radius is the distance from the
center to the nearest edge of that region: every point within it is in
the set, while points in the set may still lie outside the circle (the
corners).

NOTE: This does not work well near the poles and should not be relied on
there. Neighbors past a pole do not exist, so the region stops growing on
that side, and longitude distances shrink to nothing at the pole itself.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from .codec import DEFAULT_PRECISION, decode_box, encode
from .geometry import Geobox, Geopoint
from .geohash_set import GeohashSet
from .neighbors import Direction, halve, neighbor, quadrant, quarter


logger = logging.getLogger(__name__)


@dataclass
class CircleConfig:
    """Configuration for geohash circles."""

    min_precision: int = 1
    """Precision below which a circle refuses to expand."""

    sql_column: str = "geohash"
    """Column name used by geohash_sql() when none is given."""

    def __post_init__(self):
        if self.min_precision < 1:
            raise ValueError("min_precision must be at least 1")
        if not self.sql_column:
            raise ValueError("sql_column must not be empty")


class GeohashCircle:
    """
    An expanding geohash region around a center geohash.
    """

    def __init__(self, center_geohash: str, config: Optional[CircleConfig] = None):
        """
        Create a circle centered on a geohash.

        Args:
            center_geohash: Geohash whose box center is the circle center
            config: Circle configuration
        """
        if not center_geohash:
            raise ValueError("center_geohash must not be empty")

        self.config = config or CircleConfig()
        self.center_geohash = center_geohash
        self._precision = len(center_geohash)

        self._bounds = decode_box(center_geohash)
        self._center = self._bounds.center()

        # Begin with a set including only the box itself
        self._geohash_set = GeohashSet()
        self._geohash_set.add(center_geohash)

        # distance to the east edge of the starting cell
        self._max_radius = self._center.distance_to_longitude(self._bounds.east)

    @classmethod
    def from_point(
        cls,
        point: Geopoint,
        precision: int = DEFAULT_PRECISION,
        config: Optional[CircleConfig] = None,
    ) -> "GeohashCircle":
        """Create a circle around the geohash of a point."""
        return cls(encode(point, precision), config)

    @property
    def precision(self) -> int:
        """Length of the ancestor geohash currently covering the center."""
        return self._precision

    @property
    def center(self) -> Geopoint:
        return self._center

    @property
    def bounds(self) -> Geobox:
        """Box covered by the current set."""
        return self._bounds

    @property
    def geohash_set(self) -> GeohashSet:
        return self._geohash_set

    @property
    def max_radius(self) -> float:
        """
        Maximum reliable radius in kilometers for a query built from this circle.
        """
        return self._max_radius

    def distance_to_point(self, point: Geopoint) -> float:
        """Distance in kilometers from the circle center to a point."""
        return self._center.distance_to_point(point)

    def contains(self, point: Geopoint) -> bool:
        """Check if the point is inside the circle's geohash set."""
        return self._geohash_set.contains(point)

    def geohash_sql(self, column: Optional[str] = None) -> str:
        """Return a SQL condition covering the circle's geohash set."""
        return self._geohash_set.build_sql(column or self.config.sql_column)

    def expand(self, amount: int = 1) -> bool:
        """
        Grow the circle by dropping characters of precision.

        Args:
            amount: Number of characters to drop

        Returns:
            True if the circle grew, False if it is already at the
            minimum precision
        """
        if amount < 1:
            raise ValueError(f"amount must be at least 1: {amount}")
        if self._precision <= self.config.min_precision:
            logger.debug(
                "Circle around %s not expanded: already at precision %d",
                self.center_geohash, self._precision,
            )
            return False
        self._precision = max(self._precision - amount, self.config.min_precision)

        # shrink the geohash, grow the box
        ancestor = self.center_geohash[:self._precision]
        box = decode_box(ancestor)
        dlat = box.height
        dlon = box.width
        north, south, east, west = box.north, box.south, box.east, box.west

        region = GeohashSet()
        region.add(ancestor)

        side = quadrant(self.center_geohash, self._precision)
        if side in (Direction.NORTHEAST, Direction.NORTHWEST):
            north_hash = neighbor(ancestor, Direction.NORTH)
            if north_hash:
                region.add_set(halve(north_hash, Direction.SOUTH))
                if side is Direction.NORTHEAST:
                    corner = neighbor(north_hash, Direction.EAST)
                    region.add_set(quarter(corner, Direction.SOUTHWEST))
                else:
                    corner = neighbor(north_hash, Direction.WEST)
                    region.add_set(quarter(corner, Direction.SOUTHEAST))
                north += dlat / 2
        else:
            south_hash = neighbor(ancestor, Direction.SOUTH)
            if south_hash:
                region.add_set(halve(south_hash, Direction.NORTH))
                if side is Direction.SOUTHEAST:
                    corner = neighbor(south_hash, Direction.EAST)
                    region.add_set(quarter(corner, Direction.NORTHWEST))
                else:
                    corner = neighbor(south_hash, Direction.WEST)
                    region.add_set(quarter(corner, Direction.NORTHEAST))
                south -= dlat / 2

        if side in (Direction.NORTHEAST, Direction.SOUTHEAST):
            region.add_set(halve(neighbor(ancestor, Direction.EAST), Direction.WEST))
            east += dlon / 2
        else:
            region.add_set(halve(neighbor(ancestor, Direction.WEST), Direction.EAST))
            west -= dlon / 2

        self._geohash_set = region
        self._bounds = Geobox(north=north, south=south, east=east, west=west)

        radius = min(self._center.distance_to_longitude(east),
                     self._center.distance_to_longitude(west))
        if north < 90:
            radius = min(radius, self._center.distance_to_latitude(north))
        if south > -90:
            radius = min(radius, self._center.distance_to_latitude(south))
        self._max_radius = radius

        logger.debug(
            "Expanded circle around %s to precision %d (%s side), max radius %.3f km",
            self.center_geohash, self._precision, side.value, radius,
        )
        return True


def circle_for_radius(
    point: Geopoint,
    radius_km: float,
    precision: int = DEFAULT_PRECISION,
    config: Optional[CircleConfig] = None,
) -> GeohashCircle:
    """
    Build a circle around a point that reliably covers a radius.

    Starts at the given precision and expands until max_radius reaches
    radius_km. If the circle hits the minimum precision first, it is
    returned as is and its max_radius is smaller than requested.

    Args:
        point: Circle center
        radius_km: Wanted radius in kilometers
        precision: Starting geohash precision
        config: Circle configuration

    Returns:
        The expanded GeohashCircle
    """
    if radius_km < 0:
        raise ValueError(f"radius_km must be non-negative: {radius_km}")

    circle = GeohashCircle.from_point(point, precision, config)
    while circle.max_radius < radius_km:
        if not circle.expand():
            logger.warning(
                "Circle around %s covers only %.3f km of the requested %.3f km",
                point, circle.max_radius, radius_km,
            )
            break
    return circle
