# campus_nav/io/inputs.py
import json
import logging
import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from campus_nav.domain.entities.geography import GeoPoint, NamedLocation

log = logging.getLogger("campus_nav.inputs")


class LocationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    def to_named_location(self) -> NamedLocation:
        return NamedLocation(self.name, GeoPoint(self.longitude, self.latitude))


class LocationsDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")
    locations: list[LocationRecord]


def parse_locations(doc) -> list[NamedLocation]:
    return [r.to_named_location() for r in LocationsDocument.model_validate(doc).locations]


def load_locations(file: str | os.PathLike) -> list[NamedLocation]:
    """
    Read {"locations": [{"name", "latitude", "longitude"}, ...]}.
    An unreadable or malformed file gives an empty list: the picker shows nothing.
    """
    try:
        with open(os.fspath(file), encoding="utf-8") as fp:
            doc = json.load(fp)
        return parse_locations(doc)
    except (OSError, ValueError, ValidationError) as exc:
        log.error("locations unavailable from %s: %s", os.fspath(file), exc)
        return []
