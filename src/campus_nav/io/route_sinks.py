# io/route_sinks.py
import json
import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from campus_nav.app.protocols import RouteSink
from campus_nav.domain.entities.geography import GeoPoint
from campus_nav.io.geojson import feature_collection, line_feature

log = logging.getLogger("campus_nav.sinks")


def route_feature_collection(route: Sequence[GeoPoint]) -> dict[str, Any]:
    """
    The route as a line-layer source document: one LineString feature,
    or an empty FeatureCollection when there is nothing to draw.
    """
    if not route:
        return feature_collection([])
    return feature_collection([line_feature(route)])


class MemorySink:
    def __init__(self):
        self.routes: list[tuple[GeoPoint, ...]] = []

    def write(self, route: Sequence[GeoPoint]) -> None:
        self.routes.append(tuple(route))

    @property
    def latest(self) -> tuple[GeoPoint, ...]:
        return self.routes[-1] if self.routes else ()


class GeoJsonFileSink:
    """Rewrites one file with the latest route on every update."""

    def __init__(self, file: str | os.PathLike):
        self.file = os.fspath(file)

    def write(self, route: Sequence[GeoPoint]) -> None:
        tmp = self.file + ".tmp"
        with open(tmp, "w", encoding="utf-8") as fp:
            json.dump(route_feature_collection(route), fp)
        os.replace(tmp, self.file)


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp
        self.seq = 0

    def write(self, route: Sequence[GeoPoint]) -> None:
        self.seq += 1
        coords = [p.to_lng_lat() for p in route]
        rec = {"seq": self.seq, "points": len(route), "coordinates": coords}
        self.fp.write(json.dumps(rec) + "\n")


class RouteRecorder:
    def __init__(self, *sinks: RouteSink):
        self.sinks = sinks

    def emit(self, route: Sequence[GeoPoint]) -> None:
        for s in self.sinks:
            try:
                s.write(route)
            except Exception:
                # a broken sink must not stop navigation
                log.exception("route sink %s failed", type(s).__name__)
