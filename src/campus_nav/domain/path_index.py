# campus_nav/domain/path_index.py
import json
import logging
import os
from collections.abc import Iterable, Iterator, Mapping

import numpy as np
from pydantic import ValidationError

from campus_nav.domain.entities.geography import GeoPoint
from campus_nav.domain.errors import EmptyPathError, IndexOutOfRangeError
from campus_nav.domain.geojson_lines import flatten_lines

log = logging.getLogger("campus_nav.path")

PathSource = str | os.PathLike | Mapping


class PathIndex:
    """
    The static walkway polyline, loaded once and never mutated.

    Points are kept both as a tuple of GeoPoint (for slicing) and as read-only
    lon/lat arrays (for vectorised distance scans). Safe to share between any
    number of sessions.
    """

    __slots__ = ("_points", "_lons", "_lats")

    def __init__(self, points: Iterable[GeoPoint]):
        pts = tuple(points)
        if not pts:
            raise EmptyPathError("path has no points")
        self._points = pts
        self._lons = np.fromiter((p.lon for p in pts), dtype=float, count=len(pts))
        self._lats = np.fromiter((p.lat for p in pts), dtype=float, count=len(pts))
        self._lons.setflags(write=False)
        self._lats.setflags(write=False)

    # ------------- Loading -----------------------------

    @classmethod
    def load(cls, source: PathSource) -> "PathIndex":
        """
        Build the index from a GeoJSON file path, GeoJSON text (a str starting
        with "{") or an already parsed document.

        LineString and MultiLineString components are concatenated in file order.
        Unreadable or malformed sources raise EmptyPathError, same as a source
        with zero coordinates.
        """
        if isinstance(source, str) and source.lstrip().startswith("{"):
            return cls.from_geojson_text(source)
        if not isinstance(source, (str, os.PathLike, Mapping)):
            raise EmptyPathError(f"unsupported path source {_describe(source)}")
        try:
            doc = source if isinstance(source, Mapping) else _read_json(source)
            points = flatten_lines(doc)
        except (OSError, ValueError, ValidationError, AttributeError, TypeError) as exc:
            # json.JSONDecodeError and InvalidCoordinateError are ValueErrors
            raise EmptyPathError(f"unusable path source {_describe(source)}: {exc}") from exc
        if not points:
            raise EmptyPathError(f"path source {_describe(source)} has no line coordinates")
        log.debug("loaded %d path points from %s", len(points), _describe(source))
        return cls(points)

    @classmethod
    def from_geojson_text(cls, text: str) -> "PathIndex":
        try:
            doc = json.loads(text)
        except ValueError as exc:
            raise EmptyPathError(f"malformed GeoJSON: {exc}") from exc
        if not isinstance(doc, Mapping):
            raise EmptyPathError("GeoJSON root must be an object")
        return cls.load(doc)

    # ------------- Read-only accessors -----------------

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[GeoPoint]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"PathIndex(n={len(self._points)})"

    def point_at(self, i: int) -> GeoPoint:
        self.check_index(i)
        return self._points[i]

    def check_index(self, i: int) -> None:
        if not 0 <= i < len(self._points):
            raise IndexOutOfRangeError(f"index {i} outside path of length {len(self._points)}")

    @property
    def points(self) -> tuple[GeoPoint, ...]:
        return self._points

    @property
    def lons(self) -> np.ndarray:
        return self._lons

    @property
    def lats(self) -> np.ndarray:
        return self._lats


def _read_json(path) -> Mapping:
    with open(os.fspath(path), encoding="utf-8") as fp:
        doc = json.load(fp)
    if not isinstance(doc, Mapping):
        raise ValueError("GeoJSON root must be an object")
    return doc


def _describe(source) -> str:
    if isinstance(source, Mapping):
        return "<mapping>"
    if isinstance(source, (str, os.PathLike)):
        return repr(os.fspath(source))
    return f"<{type(source).__name__}>"
