# campus_nav/app/session.py
import time
from enum import Enum

from campus_nav.app.hooks import NoopHooks, SessionHooks
from campus_nav.domain.catalog import LocationCatalog
from campus_nav.domain.entities.geography import GeoPoint, NamedLocation
from campus_nav.domain.errors import NoFixError
from campus_nav.domain.mechanics.mechanics_distance import haversine_m
from campus_nav.domain.mechanics.mechanics_extractors import SubPath, SubPathExtractor
from campus_nav.domain.mechanics.mechanics_matchers import NearestPointMatcher
from campus_nav.domain.path_index import PathIndex
from campus_nav.io.route_sinks import RouteRecorder


class SessionState(Enum):
    IDLE = "idle"  # no destination
    AWAITING_FIX = "awaiting_fix"  # destination, no position yet
    ROUTED = "routed"  # both known


class RouteSession:
    """
    Position + destination + the sub-path between them.

    Single writer: callers must not invoke the update methods concurrently
    (see PositionFeed for a serialising ingress). Every recompute is a fresh
    match + extract over the static path; the previous route is never consulted.

    path=None means the path source was unusable; every call still succeeds and
    current_sub_path stays empty.
    """

    def __init__(
        self,
        path: PathIndex | None,
        *,
        recorder: RouteRecorder | None = None,
        hooks: SessionHooks | None = None,
        min_move_m: float = 0.0,
    ):
        if min_move_m < 0:
            raise ValueError("min_move_m must be >= 0")
        self.path = path
        self.matcher = NearestPointMatcher(path) if path is not None else None
        self.extractor = SubPathExtractor(path) if path is not None else None
        self.recorder = recorder
        self.hooks = hooks or NoopHooks()
        self.min_move_m = min_move_m

        self.current_position: GeoPoint | None = None
        self.selected_destination: NamedLocation | None = None
        self.current_sub_path: SubPath = ()
        self._routed_from: GeoPoint | None = None

    # ------------- Read-only views -----------------------

    @property
    def state(self) -> SessionState:
        if self.selected_destination is None:
            return SessionState.IDLE
        if self.current_position is None:
            return SessionState.AWAITING_FIX
        return SessionState.ROUTED

    @property
    def has_fix(self) -> bool:
        return self.current_position is not None

    @property
    def route_available(self) -> bool:
        return self.path is not None

    def recenter_target(self) -> GeoPoint:
        if self.current_position is None:
            raise NoFixError("waiting for GPS")
        return self.current_position

    # ------------- Transitions ---------------------------

    def select_destination(self, loc: NamedLocation) -> SubPath:
        self.selected_destination = loc
        self.hooks.destination_selected(loc, state=self.state.value)
        if self.current_position is not None:
            self._recompute()
        return self.current_sub_path

    def select_destination_by_name(self, catalog: LocationCatalog, name: str) -> SubPath:
        return self.select_destination(catalog.get(name))

    def update_position(self, p: GeoPoint) -> SubPath:
        first = self.current_position is None
        self.current_position = p
        if first:
            self.hooks.first_fix(p)
        if self.selected_destination is None:
            return self.current_sub_path
        if self.min_move_m > 0 and self._routed_from is not None:
            moved = haversine_m(self._routed_from, p)
            if moved < self.min_move_m:
                self.hooks.route_reused(moved_m=moved, min_move_m=self.min_move_m)
                return self.current_sub_path
        self._recompute()
        return self.current_sub_path

    def clear_destination(self) -> None:
        had_route = bool(self.current_sub_path)
        self.selected_destination = None
        self.current_sub_path = ()
        self._routed_from = None
        self.hooks.destination_cleared(state=self.state.value)
        if had_route:
            self._publish()

    # -----------------------------------------------------

    def _recompute(self) -> None:
        start, dest = self.current_position, self.selected_destination
        if self.matcher is None:
            self.current_sub_path = ()
            self.hooks.route_unavailable(reason="no_path")
            return
        t0 = time.perf_counter()
        i, j = self.matcher.match_pair(start, dest.point)
        self.current_sub_path = self.extractor.extract(i, j)
        self._routed_from = start
        self.hooks.route_computed(
            start_idx=i,
            end_idx=j,
            points=len(self.current_sub_path),
            ms=(time.perf_counter() - t0) * 1000,
        )
        self._publish()

    def _publish(self) -> None:
        if self.recorder is not None:
            self.recorder.emit(self.current_sub_path)
