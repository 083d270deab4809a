# runtime/registries.py
from collections.abc import Callable
from typing import Any

from campus_nav.app.protocols import RouteSink
from campus_nav.config.models import (
    GeoJsonFileSourceModel,
    GeoJsonSinkModel,
    InlinePathSourceModel,
    JsonlSinkModel,
    MemorySinkModel,
    PathSourceUnion,
    SinkUnion,
)
from campus_nav.domain.entities.geography import GeoPoint
from campus_nav.domain.errors import EmptyPathError, InvalidCoordinateError
from campus_nav.domain.path_index import PathIndex
from campus_nav.io.route_sinks import GeoJsonFileSink, JsonlSink, MemorySink

PathSourceFactory = Callable[[PathSourceUnion, dict], PathIndex]
SinkFactory = Callable[[SinkUnion, dict], RouteSink]

_path_source_registry: dict[str, PathSourceFactory] = {}
_sink_registry: dict[str, SinkFactory] = {}


# ------------------- Path sources ---------------------------


def register_path_source(kind: str):
    def deco(fn: PathSourceFactory):
        _path_source_registry[kind] = fn
        return fn

    return deco


def make_path(cfg: PathSourceUnion, *, deps: dict | None = None) -> PathIndex:
    """Raises EmptyPathError when the source yields no points."""
    try:
        factory = _path_source_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown path source kind {cfg.kind!r}") from None
    return factory(cfg, deps if deps is not None else {})


def describe_path_source(cfg: PathSourceUnion) -> str:
    return cfg.file if isinstance(cfg, GeoJsonFileSourceModel) else cfg.kind


@register_path_source("geojson")
def _make_geojson(cfg: GeoJsonFileSourceModel, deps):
    return PathIndex.load(cfg.file)


@register_path_source("inline")
def _make_inline(cfg: InlinePathSourceModel, deps):
    try:
        points = [GeoPoint(lon, lat) for lon, lat in cfg.coordinates]
    except InvalidCoordinateError as exc:
        raise EmptyPathError(f"unusable inline path: {exc}") from exc
    return PathIndex(points)


# ------------------- Route sinks ---------------------------


def register_sink(kind: str):
    def deco(fn: SinkFactory):
        _sink_registry[kind] = fn
        return fn

    return deco


def make_sink(cfg: SinkUnion, *, deps: dict | None = None) -> RouteSink:
    try:
        factory = _sink_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown sink kind {cfg.kind!r}") from None
    return factory(cfg, deps if deps is not None else {})


@register_sink("memory")
def _make_memory(cfg: MemorySinkModel, deps):
    return MemorySink()


@register_sink("geojson")
def _make_geojson_sink(cfg: GeoJsonSinkModel, deps):
    return GeoJsonFileSink(cfg.file)


@register_sink("jsonl")
def _make_jsonl(cfg: JsonlSinkModel, deps: dict[str, Any]):
    if cfg.file is None:
        return JsonlSink()
    # the owner (App.close) closes streams it finds in deps["closables"]
    fp = open(cfg.file, "a", encoding="utf-8")
    deps.setdefault("closables", []).append(fp)
    return JsonlSink(fp)
