"""
Session state: one route plus the identity counter feeding it.

The session is the only place new stops get identities, so every stop on
the route carries an id that is unique for the life of the session.
"""

from typing import Optional, Tuple

import structlog

from .models import Stop
from .route import Route
from .sample import SAMPLE_STOPS

logger = structlog.get_logger(__name__)


class IdentityCounter:
    """Monotonic stop identity source."""

    def __init__(self, start: int = 1):
        self._start = start
        self._next = start

    @property
    def peek(self) -> int:
        return self._next

    def take(self) -> int:
        value = self._next
        self._next += 1
        return value

    def reset(self) -> None:
        self._next = self._start


class RouteSession:
    """Owns the route being edited and the counter that names its stops."""

    def __init__(self, route: Optional[Route] = None, counter: Optional[IdentityCounter] = None):
        self.route = route if route is not None else Route()
        self.counter = counter if counter is not None else IdentityCounter()

    def create_stop(self, name: str, passengers: int = 0,
                    dist_to_next: float = 0.0, time_to_next: float = 0.0) -> Stop:
        """Build a stop with a fresh identity without inserting it.

        Model validation runs before an identity is consumed, so a rejected
        stop leaves the counter untouched.
        """
        stop = Stop(
            id=self.counter.peek,
            name=name,
            passengers=passengers,
            dist_to_next=dist_to_next,
            time_to_next=time_to_next,
        )
        self.counter.take()
        return stop

    def add_stop_end(self, name: str, passengers: int = 0,
                     dist_to_next: float = 0.0, time_to_next: float = 0.0) -> Stop:
        stop = self.create_stop(name, passengers, dist_to_next, time_to_next)
        return self.route.insert_end(stop)

    def add_stop_after(self, after_name: str, name: str, passengers: int = 0,
                       dist_to_next: float = 0.0,
                       time_to_next: float = 0.0) -> Tuple[Stop, Optional[Stop]]:
        """Insert after the first stop named ``after_name``.

        Returns the new stop and the stop it follows; the second item is None
        when ``after_name`` was not found and the stop went to the end.
        """
        stop = self.create_stop(name, passengers, dist_to_next, time_to_next)
        existing = self.route.find_by_name(after_name)
        self.route.insert_after(existing, stop)
        return stop, existing

    def add_stop_at(self, position: int, name: str, passengers: int = 0,
                    dist_to_next: float = 0.0, time_to_next: float = 0.0) -> Stop:
        stop = self.create_stop(name, passengers, dist_to_next, time_to_next)
        return self.route.insert_at_position(stop, position)

    def reset(self, reset_ids: bool = False) -> None:
        """Clear the route, optionally restarting identities at 1."""
        self.route.clear()
        if reset_ids:
            self.counter.reset()
        logger.debug("session_reset", reset_ids=reset_ids)

    def populate_sample(self) -> None:
        """Replace the route with the demo route; identities restart at 1."""
        self.reset(reset_ids=True)
        for name, passengers, dist, time in SAMPLE_STOPS:
            self.add_stop_end(name, passengers, dist, time)
        logger.info("sample_route_populated", stops=len(self.route))


__all__ = ["IdentityCounter", "RouteSession"]
