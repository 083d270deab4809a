# campus_nav/domain/catalog.py
from collections.abc import Iterable, Iterator

from campus_nav.domain.entities.geography import NamedLocation
from campus_nav.domain.errors import UnknownLocationError


class LocationCatalog:
    """Selectable destinations in source order. Duplicate names: the first one wins lookup."""

    def __init__(self, locations: Iterable[NamedLocation] = ()):
        self._items = tuple(locations)
        self._by_name: dict[str, NamedLocation] = {}
        for loc in self._items:
            self._by_name.setdefault(loc.name, loc)

    def __iter__(self) -> Iterator[NamedLocation]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def names(self) -> list[str]:
        return [loc.name for loc in self._items]

    def get(self, name: str) -> NamedLocation:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownLocationError(name) from None
