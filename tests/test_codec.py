"""Tests for geohash encoding, decoding and successors."""

import itertools
import math

import pytest
from geohash_circle.codec import DEFAULT_PRECISION, decode, decode_box, encode, increment
from geohash_circle.digits import ALPHABET
from geohash_circle.geometry import Geobox, Geopoint


# (latitude, longitude, 12 character geohash), edge cases and internal places
ENCODINGS = [
    (0.0, 0.0, "s00000000000"),
    (45.0, 90.0, "y00000000000"),
    (45.0, -90.0, "f00000000000"),
    (-45.0, 90.0, "q00000000000"),
    (-45.0, -90.0, "600000000000"),
    (90.0, 180.0, "zzzzzzzzzzzz"),
    (90.0, -180.0, "bpbpbpbpbpbp"),
    (-90.0, 180.0, "pbpbpbpbpbpb"),
    (-90.0, -180.0, "000000000000"),
    (42.350072, -71.047656, "drt2zm8ej9eg"),
    (38.898632, -77.036541, "dqcjqcr8yqxd"),
    (-23.442503, -58.443832, "6ey6wh6t808q"),
    (47.516231, 14.550072, "u26q7454172n"),
    (19.856270, 102.495496, "w78buqdznjj0"),
]

CASES = [
    (lat, lon, precision, geohash[:precision])
    for lat, lon, geohash in ENCODINGS
    for precision in (1, 2, 5, 8, 12)
]


def cell_size(precision):
    """Return (height, width) in degrees of a geohash cell."""
    slices = precision * 5 / 2
    return 180 / (1 << math.floor(slices)), 360 / (1 << math.ceil(slices))


class TestEncode:
    """Tests for encode."""

    @pytest.mark.parametrize("lat,lon,precision,geohash", CASES)
    def test_encode(self, lat, lon, precision, geohash):
        assert encode(Geopoint(lat, lon), precision) == geohash

    def test_default_precision(self):
        """Test that the default precision is 8 characters."""
        assert DEFAULT_PRECISION == 8
        assert encode(Geopoint(42.350072, -71.047656)) == "drt2zm8e"

    def test_zero_precision(self):
        assert encode(Geopoint(10.0, 10.0), 0) == ""

    def test_negative_precision(self):
        with pytest.raises(ValueError):
            encode(Geopoint(10.0, 10.0), -1)


class TestDecode:
    """Tests for decode_box and decode."""

    @pytest.mark.parametrize("lat,lon,precision,geohash", CASES)
    def test_box_contains_point(self, lat, lon, precision, geohash):
        box = decode_box(geohash)
        assert box.south <= lat <= box.north
        assert box.west <= lon <= box.east

    @pytest.mark.parametrize("lat,lon,precision,geohash", CASES)
    def test_box_size(self, lat, lon, precision, geohash):
        """Test that the box size matches the precision."""
        dlat, dlon = cell_size(precision)
        box = decode_box(geohash)
        assert abs(box.north - box.south - dlat) < 0.0001
        assert abs(box.east - box.west - dlon) < 0.0001

    @pytest.mark.parametrize("lat,lon,precision,geohash", CASES)
    def test_round_trip(self, lat, lon, precision, geohash):
        """Test that the decoded point is within half a cell of the original."""
        dlat, dlon = cell_size(precision)
        point = decode(geohash)
        assert abs(point.latitude - lat) < dlat / 2 + 0.0001
        assert abs(point.longitude - lon) < dlon / 2 + 0.0001

    def test_empty_is_globe(self):
        assert decode_box("") == Geobox(north=90.0, south=-90.0, east=180.0, west=-180.0)
        assert decode("") == Geopoint(0.0, 0.0)

    def test_single_character(self):
        assert decode_box("s") == Geobox(north=45.0, south=0.0, east=45.0, west=0.0)
        assert decode("s") == Geopoint(22.5, 22.5)

    @pytest.mark.parametrize("geohash", ["a", "dra", "DRT", "dr t"])
    def test_invalid_character(self, geohash):
        """Test that malformed hashes fail instead of decoding to a wrong box."""
        with pytest.raises(ValueError):
            decode_box(geohash)


class TestIncrement:
    """Tests for increment."""

    def test_examples(self):
        assert increment("38z") == "390"
        assert increment("z") is None

    def test_simple(self):
        assert increment("0") == "1"
        assert increment("9") == "b"
        assert increment("dr") == "ds"

    def test_carry(self):
        assert increment("bz") == "c0"
        assert increment("3zz") == "400"

    def test_last_hash(self):
        assert increment("zz") is None
        assert increment("zzzzzzzzzzzz") is None

    def test_empty(self):
        assert increment("") is None

    @pytest.mark.parametrize("geohash", ["3a", "a0", "3A0", "b-z"])
    def test_invalid_character(self, geohash):
        """Test that a bad character is rejected wherever it appears."""
        with pytest.raises(ValueError):
            increment(geohash)

    def test_visits_every_hash(self):
        """Test that successors from '00' walk every 2 character hash in order."""
        visited = []
        current = "00"
        while current is not None:
            visited.append(current)
            current = increment(current)

        expected = ["".join(pair) for pair in itertools.product(ALPHABET, repeat=2)]
        assert visited == expected
        assert len(set(visited)) == 32 ** 2
