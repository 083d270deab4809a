# campus_nav/domain/geojson_lines.py
from collections.abc import Iterator, Mapping, Sequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from campus_nav.domain.entities.geography import GeoPoint

# [lon, lat] or [lon, lat, alt]
Position = Annotated[list[float], Field(min_length=2, max_length=3)]


class LineStringModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    type: Literal["LineString"]
    coordinates: list[Position]


class MultiLineStringModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    type: Literal["MultiLineString"]
    coordinates: list[list[Position]]


class FeatureModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    type: Literal["Feature"]
    geometry: dict[str, Any] | None = None
    properties: dict[str, Any] | None = None


class FeatureCollectionModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    type: Literal["FeatureCollection"]
    features: list[FeatureModel] = Field(default_factory=list)


def iter_geometries(doc: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    """Yield the raw geometry objects of a FeatureCollection, Feature or bare geometry."""
    kind = doc.get("type")
    if kind == "FeatureCollection":
        for feature in FeatureCollectionModel.model_validate(doc).features:
            if feature.geometry is not None:
                yield feature.geometry
    elif kind == "Feature":
        feature = FeatureModel.model_validate(doc)
        if feature.geometry is not None:
            yield feature.geometry
    elif kind == "GeometryCollection":
        yield from doc.get("geometries") or ()
    else:
        yield doc


def line_positions(geometry: Mapping[str, Any]) -> Iterator[Sequence[float]]:
    kind = geometry.get("type")
    if kind == "LineString":
        yield from LineStringModel.model_validate(geometry).coordinates
    elif kind == "MultiLineString":
        for line in MultiLineStringModel.model_validate(geometry).coordinates:
            yield from line
    # Point / Polygon / ... carry no walkway geometry


def flatten_lines(doc: Mapping[str, Any]) -> list[GeoPoint]:
    """Concatenate every line component's points in file order."""
    return [
        GeoPoint.from_lng_lat(pos) for geom in iter_geometries(doc) for pos in line_positions(geom)
    ]
