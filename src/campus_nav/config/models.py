import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _expand(v: str) -> str:
    return os.path.expandvars(os.path.expanduser(v))


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- PATH SOURCES ---------------------


class GeoJsonFileSourceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["geojson"] = "geojson"
    file: str = "paths.geojson"

    @field_validator("file")
    @classmethod
    def _expand_file(cls, v: str) -> str:
        return _expand(v)


class InlinePathSourceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["inline"] = "inline"
    coordinates: list[tuple[float, float]] = Field(default_factory=list)  # [lon, lat]

    @field_validator("coordinates")
    @classmethod
    def _finite(cls, v):
        if any(not (isfinite(lon) and isfinite(lat)) for lon, lat in v):
            raise ValueError("coordinates must be finite")
        return v


PathSourceUnion = Annotated[
    GeoJsonFileSourceModel | InlinePathSourceModel, Field(discriminator="kind")
]


# ----------------- LOCATIONS ---------------------


class LocationEntryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class LocationsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file: str | None = "locations.json"
    entries: list[LocationEntryModel] = Field(default_factory=list)  # appended after file entries

    @field_validator("file")
    @classmethod
    def _expand_file(cls, v: str | None) -> str | None:
        return None if v is None else _expand(v)


# ----------------- SESSION ---------------------


class SessionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # 0 => recompute on every fix
    min_move_m: float = Field(default=0.0, ge=0.0)


# ----------------- ROUTE SINKS ---------------------


class MemorySinkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["memory"] = "memory"


class GeoJsonSinkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["geojson"] = "geojson"
    file: str

    @field_validator("file")
    @classmethod
    def _expand_file(cls, v: str) -> str:
        return _expand(v)


class JsonlSinkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["jsonl"] = "jsonl"
    file: str | None = None  # None => stdout

    @field_validator("file")
    @classmethod
    def _expand_file(cls, v: str | None) -> str | None:
        return None if v is None else _expand(v)


SinkUnion = Annotated[
    MemorySinkModel | GeoJsonSinkModel | JsonlSinkModel, Field(discriminator="kind")
]


# ------------------------------------------------------------------


class NavigatorModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "campus"
    session_id: str = "local"
    path: PathSourceUnion = Field(default_factory=GeoJsonFileSourceModel)
    locations: LocationsModel = Field(default_factory=LocationsModel)
    session: SessionModel = Field(default_factory=SessionModel)
    log: LogModel = Field(default_factory=LogModel)
    sinks: list[SinkUnion] = Field(default_factory=list)
