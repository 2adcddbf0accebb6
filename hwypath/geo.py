"""Geospatial helpers shared across routing modules."""

from __future__ import annotations

import math
from dataclasses import dataclass

# Radius of the Earth in statute miles.
EARTH_RADIUS_MILES = 3963.1
# Coordinates closer than this (in degrees, per component) compare equal.
COORDINATE_TOLERANCE = 0.00001


def great_circle_miles(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
) -> float:
    """Return the great-circle distance between two lat/lng points in miles."""
    return Coordinate(lat1, lng1).distance_to(Coordinate(lat2, lng2))


@dataclass(frozen=True, slots=True, eq=False)
class Coordinate:
    """Latitude/longitude pair that compares equal within a small tolerance.

    Tolerance equality is symmetric and reflexive but not transitive: `a == b`
    and `b == c` does not imply `a == c` when the components sit near the
    tolerance boundary. Instances are unhashable for the same reason.
    """

    lat: float
    lng: float

    __hash__ = None  # type: ignore[assignment]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return (
            abs(other.lat - self.lat) < COORDINATE_TOLERANCE
            and abs(other.lng - self.lng) < COORDINATE_TOLERANCE
        )

    def __str__(self) -> str:
        return f"({self.lat},{self.lng})"

    def distance_to(self, other: Coordinate) -> float:
        """Return the spherical law of cosines distance to `other` in miles."""
        # The formula is unstable near zero distance.
        if self == other:
            return 0.0

        rlat1 = math.radians(self.lat)
        rlng1 = math.radians(self.lng)
        rlat2 = math.radians(other.lat)
        rlng2 = math.radians(other.lng)

        cosine = (
            math.cos(rlat1) * math.cos(rlng1) * math.cos(rlat2) * math.cos(rlng2)
            + math.cos(rlat1) * math.sin(rlng1) * math.cos(rlat2) * math.sin(rlng2)
            + math.sin(rlat1) * math.sin(rlat2)
        )
        return math.acos(max(-1.0, min(1.0, cosine))) * EARTH_RADIUS_MILES

    def lonlat(self) -> tuple[float, float]:
        """Return the `(lon, lat)` pair used by GeoJSON and shapely."""
        return (self.lng, self.lat)
