from collections.abc import Sequence

import numpy as np

from campus_nav.domain.entities.geography import GeoPoint
from campus_nav.domain.errors import EmptyPathError
from campus_nav.domain.mechanics.mechanics_distance import haversine_m_many
from campus_nav.domain.path_index import PathIndex


def match_index(path: PathIndex | Sequence[GeoPoint], target: GeoPoint) -> int:
    """
    Index of the path point closest (great-circle) to target.

    Linear scan; on ties the lowest index wins (np.argmin returns the first minimum).
    """
    if isinstance(path, PathIndex):
        lons, lats = path.lons, path.lats
    else:
        if len(path) == 0:
            raise EmptyPathError("cannot match against an empty path")
        lons = np.array([p.lon for p in path], dtype=float)
        lats = np.array([p.lat for p in path], dtype=float)
    return int(np.argmin(haversine_m_many(lons, lats, target)))


class NearestPointMatcher:
    """Matcher bound to one PathIndex; what RouteSession holds."""

    def __init__(self, path: PathIndex):
        self.path = path

    def match(self, target: GeoPoint) -> int:
        return match_index(self.path, target)

    def match_pair(self, start: GeoPoint, end: GeoPoint) -> tuple[int, int]:
        return self.match(start), self.match(end)
