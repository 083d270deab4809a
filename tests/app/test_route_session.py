# tests/app/test_route_session.py
import pytest

from campus_nav.app.hooks import NoopHooks
from campus_nav.app.session import RouteSession, SessionState
from campus_nav.domain.catalog import LocationCatalog
from campus_nav.domain.entities.geography import GeoPoint, NamedLocation
from campus_nav.domain.errors import NoFixError, UnknownLocationError
from campus_nav.domain.path_index import PathIndex
from campus_nav.io.route_sinks import MemorySink, RouteRecorder

P0 = GeoPoint(28.010, -26.190)
P1 = GeoPoint(28.012, -26.189)
P2 = GeoPoint(28.014, -26.188)
P3 = GeoPoint(28.016, -26.187)


class TraceHooks(NoopHooks):
    def __init__(self):
        self.trace = []

    def first_fix(self, p):
        self.trace.append(("first_fix", p))

    def route_computed(self, *, start_idx, end_idx, points, ms):
        self.trace.append(("route_computed", start_idx, end_idx, points))

    def route_reused(self, *, moved_m, min_move_m):
        self.trace.append(("route_reused",))

    def route_unavailable(self, *, reason):
        self.trace.append(("route_unavailable", reason))

    def names(self):
        return [t[0] for t in self.trace]


@pytest.fixture
def path() -> PathIndex:
    return PathIndex([P0, P1, P2, P3])


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def session(path, sink) -> RouteSession:
    return RouteSession(path, recorder=RouteRecorder(sink))


# ---------- States


def test_starts_idle(session: RouteSession):
    assert session.state is SessionState.IDLE
    assert session.current_sub_path == ()
    assert not session.has_fix


def test_destination_before_fix_awaits_fix(session: RouteSession, sink: MemorySink):
    session.select_destination(NamedLocation("Library", P3))
    assert session.state is SessionState.AWAITING_FIX
    assert session.current_sub_path == ()
    assert sink.routes == []

    session.update_position(GeoPoint(28.0101, -26.1901))
    assert session.state is SessionState.ROUTED
    assert session.current_sub_path == (P0, P1, P2, P3)
    assert sink.latest == (P0, P1, P2, P3)


def test_position_without_destination_stays_idle(session: RouteSession, sink: MemorySink):
    out = session.update_position(P1)
    assert out == ()
    assert session.state is SessionState.IDLE
    assert session.current_position == P1
    assert sink.routes == []


def test_destination_after_fix_routes_immediately(session: RouteSession):
    session.update_position(P3)
    out = session.select_destination(NamedLocation("Main gate", GeoPoint(28.0099, -26.1902)))
    assert session.state is SessionState.ROUTED
    # reversed: starts at the user's end of the path
    assert out == (P3, P2, P1, P0)
    assert session.current_sub_path[0] == P3


def test_clear_destination(session: RouteSession, sink: MemorySink):
    session.update_position(P0)
    session.select_destination(NamedLocation("Hall", P2))
    assert session.current_sub_path == (P0, P1, P2)
    session.clear_destination()
    assert session.state is SessionState.IDLE
    assert session.selected_destination is None
    assert session.current_sub_path == ()
    assert session.current_position == P0
    assert sink.latest == ()  # renderer told to erase the line


def test_clear_without_route_publishes_nothing(session: RouteSession, sink: MemorySink):
    session.select_destination(NamedLocation("Hall", P2))
    session.clear_destination()
    assert sink.routes == []
    assert session.state is SessionState.IDLE


# ---------- Recompute on every fix


def test_route_follows_the_user(session: RouteSession):
    session.select_destination(NamedLocation("Hall", P3))
    assert session.update_position(P0) == (P0, P1, P2, P3)
    assert session.update_position(P1) == (P1, P2, P3)
    assert session.update_position(P3) == (P3,)
    assert session.update_position(P2) == (P2, P3)


def test_same_position_twice_is_idempotent(session: RouteSession, sink: MemorySink):
    session.select_destination(NamedLocation("Hall", P2))
    first = session.update_position(GeoPoint(28.0121, -26.1889))
    second = session.update_position(GeoPoint(28.0121, -26.1889))
    assert first == second == (P1, P2)
    assert len(sink.routes) == 2


def test_new_destination_replaces_route(session: RouteSession):
    session.update_position(P1)
    assert session.select_destination(NamedLocation("A", P3)) == (P1, P2, P3)
    assert session.select_destination(NamedLocation("B", P0)) == (P1, P0)


def test_sub_path_only_contains_path_points(path: PathIndex, session: RouteSession):
    session.select_destination(NamedLocation("Off path", GeoPoint(28.03, -26.17)))
    for p in [GeoPoint(27.99, -26.21), GeoPoint(28.013, -26.1885), GeoPoint(28.0, -26.0)]:
        session.update_position(p)
        assert set(session.current_sub_path) <= set(path.points)


# ---------- Hooks, fix & recenter


def test_first_fix_fires_once(path: PathIndex):
    hooks = TraceHooks()
    s = RouteSession(path, hooks=hooks)
    with pytest.raises(NoFixError):
        s.recenter_target()
    s.update_position(P0)
    s.update_position(P1)
    assert hooks.names().count("first_fix") == 1
    assert s.has_fix
    assert s.recenter_target() == P1


def test_route_computed_reports_indices(path: PathIndex):
    hooks = TraceHooks()
    s = RouteSession(path, hooks=hooks)
    s.update_position(P3)
    s.select_destination(NamedLocation("Gate", P1))
    assert ("route_computed", 3, 1, 3) in hooks.trace


def test_select_by_name(session: RouteSession):
    catalog = LocationCatalog([NamedLocation("Library", P3), NamedLocation("Gate", P0)])
    session.update_position(P1)
    assert session.select_destination_by_name(catalog, "Gate") == (P1, P0)
    with pytest.raises(UnknownLocationError):
        session.select_destination_by_name(catalog, "Pool")
    # failed lookup leaves the previous destination in place
    assert session.selected_destination.name == "Gate"


# ---------- Optional movement threshold


def test_min_move_threshold_reuses_route(path: PathIndex):
    hooks = TraceHooks()
    s = RouteSession(path, hooks=hooks, min_move_m=50.0)
    s.select_destination(NamedLocation("Hall", P3))
    s.update_position(P0)
    nudge = GeoPoint(28.0101, -26.1900)  # ~10 m
    assert s.update_position(nudge) == (P0, P1, P2, P3)
    assert s.current_position == nudge
    assert hooks.names().count("route_computed") == 1
    assert hooks.names()[-1] == "route_reused"

    assert s.update_position(P2) == (P2, P3)
    assert hooks.names().count("route_computed") == 2


def test_min_move_does_not_block_destination_change(path: PathIndex):
    s = RouteSession(path, min_move_m=1_000.0)
    s.update_position(P1)
    s.select_destination(NamedLocation("A", P3))
    assert s.select_destination(NamedLocation("B", P0)) == (P1, P0)


def test_negative_threshold_rejected(path: PathIndex):
    with pytest.raises(ValueError):
        RouteSession(path, min_move_m=-1.0)


# ---------- No path available


def test_no_path_never_crashes():
    hooks = TraceHooks()
    sink = MemorySink()
    s = RouteSession(None, recorder=RouteRecorder(sink), hooks=hooks)
    assert not s.route_available
    s.update_position(P0)
    s.select_destination(NamedLocation("Hall", P3))
    s.update_position(P1)
    assert s.current_sub_path == ()
    assert s.state is SessionState.ROUTED
    assert ("route_unavailable", "no_path") in hooks.trace
    s.clear_destination()
    assert s.current_sub_path == ()
    assert sink.routes == []


# ---------- Shared path across sessions


def test_sessions_share_a_path_independently(path: PathIndex):
    a, b = RouteSession(path), RouteSession(path)
    a.update_position(P0)
    b.update_position(P3)
    a.select_destination(NamedLocation("X", P2))
    b.select_destination(NamedLocation("X", P2))
    assert a.current_sub_path == (P0, P1, P2)
    assert b.current_sub_path == (P3, P2)
