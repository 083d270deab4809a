from collections.abc import Sequence

from campus_nav.domain.entities.geography import GeoPoint
from campus_nav.domain.errors import IndexOutOfRangeError
from campus_nav.domain.path_index import PathIndex

SubPath = tuple[GeoPoint, ...]


def extract(path: PathIndex | Sequence[GeoPoint], start: int, end: int) -> SubPath:
    """
    Contiguous run of points between two path indices, inclusive, oriented start -> end.

    start <= end gives path[start..end] forward; start > end gives path[end..start]
    reversed, so the result always begins at path[start].
    """
    points = path.points if isinstance(path, PathIndex) else tuple(path)
    n = len(points)
    for i in (start, end):
        if not 0 <= i < n:
            raise IndexOutOfRangeError(f"index {i} outside path of length {n}")
    if start <= end:
        return points[start : end + 1]
    return points[end : start + 1][::-1]


class SubPathExtractor:
    def __init__(self, path: PathIndex):
        self.path = path

    def extract(self, start: int, end: int) -> SubPath:
        return extract(self.path, start, end)
