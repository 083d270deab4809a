# app/hooks.py
from typing import Protocol

from campus_nav.domain.entities.geography import GeoPoint, NamedLocation


class SessionHooks(Protocol):
    def path_loaded(self, *, points: int, source: str): ...
    def path_unavailable(self, *, source: str, reason: str): ...
    def destination_selected(self, loc: NamedLocation, *, state: str): ...
    def destination_cleared(self, *, state: str): ...
    def first_fix(self, p: GeoPoint): ...
    def route_computed(self, *, start_idx: int, end_idx: int, points: int, ms: float): ...
    def route_reused(self, *, moved_m: float, min_move_m: float): ...
    def route_unavailable(self, *, reason: str): ...
    def error(self, where: str, *, exc: BaseException, **kw): ...


class NoopHooks:
    def path_loaded(self, **_):
        pass

    def path_unavailable(self, **_):
        pass

    def destination_selected(self, *_, **__):
        pass

    def destination_cleared(self, **_):
        pass

    def first_fix(self, *_, **__):
        pass

    def route_computed(self, **_):
        pass

    def route_reused(self, **_):
        pass

    def route_unavailable(self, **_):
        pass

    def error(self, *_, **__):
        pass
