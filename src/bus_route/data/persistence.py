"""
CSV persistence for routes.

File layout, one header row then one row per stop in head-forward order::

    id,name,passengers,dist_to_next,time_to_next
    1,Central Station,12,2.500000,6.000000

Saving and loading never raise for I/O problems or bad rows; both return a
``PersistenceResult`` describing what happened.

Every physical line is parsed on its own, so a damaged row never swallows
the rows after it.

Loading clears the session's route as soon as the file is open, before any
row is read. A file that opens but turns out to be empty or unreadable
therefore leaves the route empty.
"""

import csv
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

import structlog
from pydantic import ValidationError

from ..exceptions import MalformedRecordError, PersistenceError
from .models import Stop
from .route import Route
from .session import RouteSession

logger = structlog.get_logger(__name__)

PathLike = Union[str, Path]

HEADER: List[str] = Stop.csv_headers()


@dataclass
class PersistenceResult:
    """Outcome of a save or load."""
    success: bool
    path: str
    rows_written: int = 0
    rows_loaded: int = 0
    rows_skipped: int = 0
    error: Optional[str] = None

    @property
    def summary(self) -> str:
        """Generate summary string."""
        if not self.success:
            return f"Failed: {self.error}"
        if self.rows_written:
            return f"Saved {self.rows_written} stops to {self.path}"
        text = f"Loaded {self.rows_loaded} stops from {self.path}"
        if self.rows_skipped:
            text += f" ({self.rows_skipped} malformed rows skipped)"
        return text


def parse_record(row: List[str], line_number: int) -> Tuple[str, int, float, float]:
    """Validate one data row and return (name, passengers, distance, time).

    The id column must hold an integer but its value is discarded. Fields
    after the fifth are ignored.
    """
    if len(row) < len(HEADER):
        raise MalformedRecordError(line_number, f"expected {len(HEADER)} fields, got {len(row)}")

    id_text, name, passengers_text, dist_text, time_text = row[:len(HEADER)]
    try:
        int(id_text.strip())
    except ValueError:
        raise MalformedRecordError(line_number, f"bad id {id_text!r}")
    if not name:
        raise MalformedRecordError(line_number, "empty name")
    try:
        passengers = int(passengers_text.strip())
    except ValueError:
        raise MalformedRecordError(line_number, f"bad passenger count {passengers_text!r}")
    try:
        dist = float(dist_text)
        time = float(time_text)
    except ValueError:
        raise MalformedRecordError(line_number, "bad distance or time")
    if not (math.isfinite(dist) and math.isfinite(time)):
        raise MalformedRecordError(line_number, "distance and time must be finite")

    return name, passengers, dist, time


def _quotes_closed(text: str) -> bool:
    """False if a field opens with a quote that is still open at end of line."""
    quoted = False
    field_start = True
    i = 0
    while i < len(text):
        ch = text[i]
        if quoted:
            if ch == '"':
                if text[i + 1:i + 2] == '"':
                    i += 1
                else:
                    quoted = False
        elif ch == '"' and field_start:
            quoted = True
        field_start = not quoted and ch == ","
        i += 1
    return not quoted


def split_record(line: str, line_number: int) -> List[str]:
    """Split one physical line into fields.

    Fully quoted fields, as written by ``save_route``, are unquoted. Quote
    characters anywhere else stay part of the text. A quote that is never
    closed makes the line malformed; it never spills into the next line.
    """
    text = line.rstrip("\r\n")
    if '"' not in text:
        return text.split(",")
    if not _quotes_closed(text):
        raise MalformedRecordError(line_number, "unterminated quoted field")
    try:
        return next(csv.reader([text], strict=True))
    except csv.Error:
        return text.split(",")


def write_route(route: Route, handle) -> int:
    """Write header and stops to an open text handle; returns rows written."""
    writer = csv.writer(handle, lineterminator="\n")
    writer.writerow(HEADER)
    count = 0
    for stop in route:
        writer.writerow(stop.to_csv_row())
        count += 1
    return count


def save_route(route: Route, path: PathLike) -> PersistenceResult:
    """Save ``route`` to ``path``. Fails on an empty route or an unwritable path."""
    target = str(path)
    if route.is_empty:
        logger.info("save_skipped_empty_route", path=target)
        return PersistenceResult(success=False, path=target, error="No route to save.")

    try:
        with open(target, "w", newline="", encoding="utf-8") as handle:
            written = write_route(route, handle)
    except OSError as e:
        logger.error("save_failed", path=target, error=str(e))
        return PersistenceResult(success=False, path=target, error=str(e))

    logger.info("route_saved", path=target, stops=written)
    return PersistenceResult(success=True, path=target, rows_written=written)


def read_route(session: RouteSession, handle) -> Tuple[int, int]:
    """Append every well-formed row of an open handle to the session's route.

    Returns (loaded, skipped). Raises PersistenceError if the header row is
    missing.
    """
    if not handle.readline():
        raise PersistenceError("missing header row")

    loaded = 0
    skipped = 0
    for line_number, line in enumerate(handle, start=2):
        if not line.strip("\r\n"):
            continue
        try:
            row = split_record(line, line_number)
            name, passengers, dist, time = parse_record(row, line_number)
            stop = session.create_stop(name, passengers, dist, time)
        except MalformedRecordError as e:
            logger.warning("malformed_record_skipped", line=e.line_number, reason=e.reason)
            skipped += 1
            continue
        except ValidationError as e:
            logger.warning(
                "malformed_record_skipped", line=line_number,
                reason=f"{e.error_count()} validation errors",
            )
            skipped += 1
            continue
        session.route.insert_end(stop)
        loaded += 1
    return loaded, skipped


def load_route(session: RouteSession, path: PathLike) -> PersistenceResult:
    """Replace the session's route with the stops stored in ``path``.

    Ids in the file are ignored; every loaded stop gets a fresh identity
    from the session. If the file cannot be opened the route is left as it
    was; once it is open the route is cleared before parsing starts.
    """
    source = str(path)
    try:
        handle = open(source, "r", newline="", encoding="utf-8")
    except OSError as e:
        logger.error("load_failed", path=source, error=str(e))
        return PersistenceResult(success=False, path=source, error=str(e))

    with handle:
        if not session.route.is_empty:
            logger.warning("route_cleared_before_load", path=source, discarded=len(session.route))
        session.route.clear()
        try:
            loaded, skipped = read_route(session, handle)
        except (PersistenceError, UnicodeDecodeError) as e:
            logger.error("load_failed", path=source, error=str(e))
            return PersistenceResult(success=False, path=source, error=str(e))

    logger.info("route_loaded", path=source, stops=loaded, skipped=skipped)
    return PersistenceResult(
        success=True, path=source, rows_loaded=loaded, rows_skipped=skipped
    )


__all__ = [
    "HEADER",
    "PersistenceResult",
    "parse_record",
    "split_record",
    "write_route",
    "save_route",
    "read_route",
    "load_route",
]
