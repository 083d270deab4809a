from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from campus_nav.domain.entities.geography import GeoPoint, NamedLocation


@runtime_checkable
class RouteSink(Protocol):
    """
    Consumer of computed routes (a map line layer, a file, a test buffer).
    Receives the full ordered point sequence on every change; an empty
    sequence means "no route drawn".
    """

    def write(self, route: Sequence[GeoPoint]) -> None: ...


@runtime_checkable
class RouteIngress(Protocol):
    def update_position(self, p: GeoPoint) -> None: ...
    def select_destination(self, loc: NamedLocation) -> None: ...
    def clear_destination(self) -> None: ...
