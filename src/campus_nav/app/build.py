# campus_nav/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass, field

from campus_nav.app.hooks import NoopHooks, SessionHooks
from campus_nav.app.protocols import RouteSink
from campus_nav.app.session import RouteSession
from campus_nav.config.models import NavigatorModel
from campus_nav.domain.catalog import LocationCatalog
from campus_nav.domain.entities.geography import GeoPoint, NamedLocation
from campus_nav.domain.errors import EmptyPathError
from campus_nav.domain.path_index import PathIndex
from campus_nav.io.inputs import load_locations
from campus_nav.io.route_sinks import RouteRecorder
from campus_nav.io.session_logging import SessionLogging
from campus_nav.runtime.registries import describe_path_source, make_path, make_sink


@dataclass
class App:
    config: NavigatorModel
    path: PathIndex | None
    catalog: LocationCatalog
    session: RouteSession
    sinks: list[RouteSink]
    hooks: SessionHooks
    closables: list = field(default_factory=list)

    def new_session(self) -> RouteSession:
        """Another independent session over the same (read-only) path."""
        return RouteSession(
            self.path,
            recorder=RouteRecorder(*self.sinks),
            hooks=self.hooks,
            min_move_m=self.config.session.min_move_m,
        )

    def close(self) -> None:
        for fp in self.closables:
            fp.close()
        self.closables.clear()


def build(cfg: NavigatorModel | Mapping, *, use_logging: bool = True) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, NavigatorModel) else NavigatorModel.model_validate(cfg)

    hooks: SessionHooks = (
        SessionLogging(session_id=model.session_id, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 1) Static path; unusable source => no route, never a crash
    source = describe_path_source(model.path)
    try:
        path = make_path(model.path)
        hooks.path_loaded(points=len(path), source=source)
    except EmptyPathError as exc:
        path = None
        hooks.path_unavailable(source=source, reason=str(exc))

    # 2) Destinations: file entries first, then inline ones
    locations: list[NamedLocation] = []
    if model.locations.file is not None:
        locations.extend(load_locations(model.locations.file))
    locations.extend(
        NamedLocation(e.name, GeoPoint(e.longitude, e.latitude)) for e in model.locations.entries
    )
    catalog = LocationCatalog(locations)

    # 3) Output sinks
    deps: dict = {}
    sinks = [make_sink(s, deps=deps) for s in model.sinks]

    session = RouteSession(
        path,
        recorder=RouteRecorder(*sinks),
        hooks=hooks,
        min_move_m=model.session.min_move_m,
    )
    return App(model, path, catalog, session, sinks, hooks, deps.get("closables", []))
