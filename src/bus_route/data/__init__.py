"""
Route data module.

Usage:
    from bus_route.data import RouteSession, total_distance_time

    session = RouteSession()
    session.populate_sample()
    totals = total_distance_time(session.route)
    print(f"{totals.distance:.2f} km, {totals.time:.2f} min")
"""

from .models import (
    BaseDataModel,
    Stop,
    TravelTotals,
    NAME_MAX_LENGTH,
)

from .route import Route

from .session import (
    IdentityCounter,
    RouteSession,
)

from .metrics import (
    total_distance_time,
    distance_between,
)

from .persistence import (
    HEADER,
    PersistenceResult,
    parse_record,
    split_record,
    save_route,
    load_route,
)

from .sample import SAMPLE_STOPS

__all__ = [
    # Models
    "BaseDataModel",
    "Stop",
    "TravelTotals",
    "NAME_MAX_LENGTH",

    # Structure
    "Route",
    "IdentityCounter",
    "RouteSession",

    # Metrics
    "total_distance_time",
    "distance_between",

    # Persistence
    "HEADER",
    "PersistenceResult",
    "parse_record",
    "split_record",
    "save_route",
    "load_route",

    # Demo data
    "SAMPLE_STOPS",
]
