"""Tests running generated SQL conditions against DuckDB."""

import pytest
import duckdb

from geohash_circle.circle import GeohashCircle
from geohash_circle.codec import decode, encode
from geohash_circle.digits import ALPHABET
from geohash_circle.geohash_set import GeohashSet
from geohash_circle.neighbors import Direction, halve, neighbors, quarter


AREA = "dr"


@pytest.fixture
def places():
    """
    In-memory table of points around AREA.

    One point at the center of every 3 character cell of AREA and its eight
    neighbors, stored with a 12 character geohash.
    """
    cells = [AREA] + [cell for cell in neighbors(AREA).values() if cell]
    points = [decode(cell + digit) for cell in cells for digit in ALPHABET]

    con = duckdb.connect(":memory:")
    con.execute("CREATE TABLE places (id INTEGER, geohash VARCHAR)")
    con.executemany(
        "INSERT INTO places VALUES (?, ?)",
        [(i, encode(point, 12)) for i, point in enumerate(points)],
    )
    yield con, points
    con.close()


def select_ids(con, condition):
    rows = con.execute(f"SELECT id FROM places WHERE {condition} ORDER BY id").fetchall()
    return [row[0] for row in rows]


def expected_ids(points, region):
    return [i for i, point in enumerate(points) if region.contains(point)]


class TestBuildSqlInDuckDB:
    """Tests that SQL conditions select exactly the points a set contains."""

    @pytest.mark.parametrize("direction", ["n", "s", "e", "w"])
    def test_halves(self, places, direction):
        con, points = places
        region = halve(AREA, Direction(direction))
        ids = select_ids(con, region.build_sql())
        assert ids == expected_ids(points, region)
        assert len(ids) == 16

    @pytest.mark.parametrize("direction", ["ne", "nw", "se", "sw"])
    def test_quarters(self, places, direction):
        con, points = places
        region = quarter(AREA, Direction(direction))
        ids = select_ids(con, region.build_sql())
        assert ids == expected_ids(points, region)
        assert len(ids) == 8

    def test_whole_cells(self, places):
        con, points = places
        region = GeohashSet()
        region.add(AREA)
        region.add("dq")
        ids = select_ids(con, region.build_sql())
        assert ids == expected_ids(points, region)
        assert len(ids) == 64

    def test_circle(self, places):
        """Test the region of a circle grown to the size of AREA."""
        con, points = places
        circle = GeohashCircle("drt2zm8e")
        assert circle.expand(6)
        assert circle.precision == 2

        ids = select_ids(con, circle.geohash_sql())
        assert ids == expected_ids(points, circle)
        # the ancestor cell plus half of each neighboring side and a quarter corner
        assert len(ids) == 32 + 16 + 16 + 8

    def test_empty_set(self, places):
        con, _ = places
        assert select_ids(con, GeohashSet().build_sql()) == []


class TestOpenUpperBound:
    """Tests for ranges ending at the last geohash."""

    def test_last_hash(self):
        con = duckdb.connect(":memory:")
        con.execute("CREATE TABLE places (id INTEGER, geohash VARCHAR)")
        con.executemany(
            "INSERT INTO places VALUES (?, ?)",
            [(1, "zzzzzzzzzzzz"), (2, "zzb000000000"), (3, "zy0000000000"), (4, "s00000000000")],
        )
        region = GeohashSet()
        region.add("zz")
        try:
            assert select_ids(con, region.build_sql()) == [1, 2]
        finally:
            con.close()
