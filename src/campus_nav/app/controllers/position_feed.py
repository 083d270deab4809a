# campus_nav/app/controllers/position_feed.py
import logging
import queue
import threading
from collections.abc import Callable

from campus_nav.app.hooks import NoopHooks, SessionHooks
from campus_nav.app.protocols import RouteIngress
from campus_nav.domain.entities.geography import GeoPoint, NamedLocation

log = logging.getLogger("campus_nav.feed")

_STOP = object()


class PositionFeed:
    """
    Single-writer queue in front of a RouteSession.

    Location callbacks and UI handlers may call submit_* from any thread;
    one worker drains the queue in arrival order, so the session only ever
    sees one update at a time.
    """

    def __init__(
        self,
        session: RouteIngress,
        *,
        hooks: SessionHooks | None = None,
        maxsize: int = 0,
        name: str = "position-feed",
    ):
        self.session = session
        self.hooks = hooks or getattr(session, "hooks", None) or NoopHooks()
        self.q: queue.Queue = queue.Queue(maxsize=maxsize)
        self.failures = 0
        self.name = name
        self._t: threading.Thread | None = None
        self._stop_pending = False

    def start(self) -> "PositionFeed":
        if self._t is not None and self._stop_pending:
            # the old worker still owns the queue until it reaches its stop marker
            self._t.join()
            self._t, self._stop_pending = None, False
        if self._t is None:
            self._t = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._t.start()
        return self

    def __enter__(self) -> "PositionFeed":
        return self.start()

    def __exit__(self, *exc) -> None:
        self.stop()

    # ------------- Producers ----------------------------

    def submit_position(self, p: GeoPoint) -> None:
        self.q.put((self.session.update_position, (p,)))

    def submit_destination(self, loc: NamedLocation) -> None:
        self.q.put((self.session.select_destination, (loc,)))

    def submit_clear(self) -> None:
        self.q.put((self.session.clear_destination, ()))

    def submit(self, fn: Callable, *args) -> None:
        self.q.put((fn, args))

    # ------------- Worker --------------------------------

    def drain(self) -> None:
        """Block until every submitted update has been applied."""
        self.q.join()

    def stop(self, timeout: float = 1.0) -> None:
        if self._t is None:
            return
        if not self._stop_pending:
            self.q.put(_STOP)
            self._stop_pending = True
        self._t.join(timeout=timeout)
        if not self._t.is_alive():
            self._t, self._stop_pending = None, False

    def _run(self) -> None:
        while True:
            item = self.q.get()
            try:
                if item is _STOP:
                    return
                fn, args = item
                fn(*args)
            except Exception as exc:
                # keep draining; one bad sample must not stall the feed
                self.failures += 1
                if type(self.hooks) is NoopHooks:
                    log.exception("position feed update failed")
                else:
                    self.hooks.error("position_feed", exc=exc)
            finally:
                self.q.task_done()
