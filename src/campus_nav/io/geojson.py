# campus_nav/io/geojson.py
from collections.abc import Iterable, Mapping
from typing import Any

from campus_nav.domain.entities.geography import GeoPoint


def line_feature(points: Iterable[GeoPoint], **properties) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": [p.to_lng_lat() for p in points]},
        "properties": properties,
    }


def feature_collection(features: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}
