# io/session_logging.py
import json
import logging
import sys

from campus_nav.app.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def default_json_logger(name="campus_nav", level="INFO", stream=None):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class SessionLogging(NoopHooks):
    """
    Structured logs for path loading and route-session transitions.
    Per-fix events (route_computed, route_reused) only go out at DEBUG.
    """

    def __init__(
        self,
        session_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.session_id, self.debug = session_id, debug
        self.log = logger or default_json_logger(level="DEBUG" if debug else level)
        self.fixes = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"session_id": self.session_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # path lifecycle

    def path_loaded(self, *, points: int, source: str):
        self._emit("INFO", "path_loaded", points=points, source=source)

    def path_unavailable(self, *, source: str, reason: str):
        self._emit("WARNING", "path_unavailable", source=source, reason=reason)

    # session transitions

    def destination_selected(self, loc, *, state: str):
        self._emit(
            "INFO",
            "destination_selected",
            name=loc.name,
            lon=loc.point.lon,
            lat=loc.point.lat,
            state=state,
        )

    def destination_cleared(self, *, state: str):
        self._emit("INFO", "destination_cleared", state=state)

    def first_fix(self, p):
        self._emit("INFO", "first_fix", lon=p.lon, lat=p.lat)

    def route_computed(self, *, start_idx: int, end_idx: int, points: int, ms: float):
        self.fixes += 1
        if self.debug:
            self._emit(
                "DEBUG",
                "route_computed",
                start_idx=start_idx,
                end_idx=end_idx,
                points=points,
                ms=ms,
                n=self.fixes,
            )

    def route_reused(self, *, moved_m: float, min_move_m: float):
        if self.debug:
            self._emit("DEBUG", "route_reused", moved_m=moved_m, min_move_m=min_move_m)

    def route_unavailable(self, *, reason: str):
        self._emit("WARNING", "route_unavailable", reason=reason)

    def error(self, where: str, *, exc: BaseException, **kw):
        self._emit(
            "ERROR", "session_error", where=where, error=str(exc), error_type=type(exc).__name__, **kw
        )
