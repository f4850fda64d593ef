"""
Distance and time metrics computed by walking a route.

Every walk is forward only. On a directed cycle the trip B -> A is the rest
of the lap left over by A -> B, so the two generally differ and always sum
to the route total.
"""

from typing import Optional

import structlog

from .models import TravelTotals
from .route import Route

logger = structlog.get_logger(__name__)


def total_distance_time(route: Route) -> TravelTotals:
    """Sum of every leg over one full lap; (0, 0) for an empty route."""
    distance = 0.0
    time = 0.0
    for stop in route:
        distance += stop.dist_to_next
        time += stop.time_to_next
    return TravelTotals(distance, time)


def distance_between(route: Route, a_name: str, b_name: str) -> Optional[TravelTotals]:
    """Forward distance and time from stop ``a_name`` to stop ``b_name``.

    Returns None when either name is missing. When both names resolve to the
    same stop the result is (0, 0).
    """
    start = route.find_by_name(a_name)
    target = route.find_by_name(b_name)
    if start is None or target is None:
        logger.debug("distance_lookup_missed", start=a_name, end=b_name)
        return None
    if start.id == target.id:
        return TravelTotals()

    distance = 0.0
    time = 0.0
    for stop in route.walk_from(start):
        if stop.id == target.id:
            return TravelTotals(distance, time)
        distance += stop.dist_to_next
        time += stop.time_to_next

    logger.warning("distance_target_unreachable", start=a_name, end=b_name)
    return None


__all__ = ["total_distance_time", "distance_between"]
