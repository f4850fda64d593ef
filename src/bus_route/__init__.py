"""
Bus Route Simulator.

A single bus route modelled as a cyclic sequence of stops, with metrics,
CSV persistence and an interactive menu shell.
"""

from .exceptions import RouteError, PersistenceError, MalformedRecordError
from .data import (
    Stop,
    TravelTotals,
    Route,
    RouteSession,
    total_distance_time,
    distance_between,
    save_route,
    load_route,
)

__version__ = "1.0.0"

__all__ = [
    "RouteError",
    "PersistenceError",
    "MalformedRecordError",
    "Stop",
    "TravelTotals",
    "Route",
    "RouteSession",
    "total_distance_time",
    "distance_between",
    "save_route",
    "load_route",
]
