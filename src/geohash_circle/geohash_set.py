"""
Collections of geohashes and geohash ranges.

A range is a closed run [first, last] of same-length geohashes in the
order produced by increment(). Consecutive hashes in that order are
neighboring cells on the Z-order curve, so a range covers a region and
maps onto a single string range predicate in SQL.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from .codec import decode_box, increment
from .digits import check_geohash
from .geometry import Geopoint


@dataclass(frozen=True)
class GeohashRange:
    """
    An inclusive run of geohashes of one precision.

    Membership tests enumerate the run, so ranges are kept short: the
    ones built by halve() and quarter() span at most 16 hashes.
    """
    first: str
    last: str

    def __post_init__(self):
        check_geohash(self.first)
        check_geohash(self.last)
        if len(self.first) != len(self.last):
            raise ValueError(
                f"Range ends differ in precision: {self.first!r}, {self.last!r}"
            )
        if self.first > self.last:
            raise ValueError(f"Invalid range: {self.first!r} > {self.last!r}")

    def iter_hashes(self) -> Iterator[str]:
        """Iterate over every geohash in the range, in order."""
        current = self.first
        while current is not None and current <= self.last:
            yield current
            current = increment(current)

    def contains(self, point: Geopoint) -> bool:
        return any(decode_box(geohash).contains(point) for geohash in self.iter_hashes())

    def __str__(self) -> str:
        return f"[{self.first}-{self.last}]"


Entry = Union[str, GeohashRange]


class GeohashSet:
    """
    An ordered collection of geohashes and geohash ranges.

    Entries keep insertion order and are not deduplicated or merged.
    """

    def __init__(self):
        self._entries: List[Entry] = []

    def add(self, geohash: str) -> None:
        check_geohash(geohash)
        self._entries.append(geohash)

    def add_range(self, first: str, last: str) -> None:
        self._entries.append(GeohashRange(first, last))

    def add_set(self, other: GeohashSet) -> None:
        """Append every entry of another set."""
        self._entries.extend(other._entries)

    def contains(self, point: Geopoint) -> bool:
        """
        Check if the point falls within any hash box of the set.

        Args:
            point: Location to test

        Returns:
            True if some entry contains the point, edges included
        """
        for entry in self._entries:
            if isinstance(entry, GeohashRange):
                if entry.contains(point):
                    return True
            elif decode_box(entry).contains(point):
                return True
        return False

    def optimize(self) -> None:
        """Coalesce adjacent and overlapping entries. Not implemented."""
        raise NotImplementedError("GeohashSet.optimize has no merge policy yet")

    def export(self) -> List[Union[str, Tuple[str, str]]]:
        """
        Return the entries as plain values.

        Ranges are exported as (first, last) tuples.
        """
        return [
            (entry.first, entry.last) if isinstance(entry, GeohashRange) else entry
            for entry in self._entries
        ]

    def build_sql(self, column: str = "geohash") -> str:
        """
        Build a SQL condition selecting rows whose geohash falls in the set.

        Each entry becomes a half-open string range on the column; the upper
        bound is the successor of the entry's last hash and is left out when
        there is none. The column name is inserted verbatim, callers must
        control it.

        Args:
            column: Name of the geohash column

        Returns:
            Clauses joined with OR, each parenthesized
        """
        if not self._entries:
            return "(1 = 0)"

        clauses = []
        for entry in self._entries:
            if isinstance(entry, GeohashRange):
                start, end = entry.first, increment(entry.last)
            else:
                start, end = entry, increment(entry)
            clause = f"{column} >= '{start}'"
            if end is not None:
                clause += f" AND {column} < '{end}'"
            clauses.append(clause)
        return "(" + ") OR (".join(clauses) + ")"

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __str__(self) -> str:
        return "{" + ", ".join(str(entry) for entry in self._entries) + "}"
