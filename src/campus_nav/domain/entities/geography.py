from dataclasses import dataclass
from math import isfinite

from campus_nav.domain.errors import InvalidCoordinateError


# Core geometry types, decimal degrees (WGS84)
@dataclass(frozen=True)
class GeoPoint:
    lon: float
    lat: float

    def __post_init__(self):
        if not (isfinite(self.lon) and isfinite(self.lat)):
            raise InvalidCoordinateError(f"non-finite coordinate ({self.lon}, {self.lat})")
        if not -180.0 <= self.lon <= 180.0:
            raise InvalidCoordinateError(f"longitude {self.lon} outside [-180, 180]")
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidCoordinateError(f"latitude {self.lat} outside [-90, 90]")

    @classmethod
    def from_lng_lat(cls, pair) -> "GeoPoint":
        # GeoJSON positions may carry a third (altitude) member
        return cls(float(pair[0]), float(pair[1]))

    def to_lng_lat(self) -> list[float]:
        return [self.lon, self.lat]


Pt = GeoPoint | tuple[float, float]


def to_geo_point(p: Pt) -> GeoPoint:
    return p if isinstance(p, GeoPoint) else GeoPoint(float(p[0]), float(p[1]))


@dataclass(frozen=True)
class NamedLocation:
    """A selectable destination: display name + coordinate."""

    name: str
    point: GeoPoint
