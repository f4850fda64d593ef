"""
Interactive menu shell.

A thin adapter: every menu choice reads its inputs through ``prompts`` and
makes one or two calls on the session, route, metrics or persistence
modules, then reports the outcome on a rich console.
"""

from typing import Callable, Dict, Optional

import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import BaseConfig, get_settings
from ..data import (
    Route,
    RouteSession,
    Stop,
    distance_between,
    load_route,
    save_route,
    total_distance_time,
)
from .prompts import Reader, read_float, read_int, read_line

logger = structlog.get_logger(__name__)

MENU_ITEMS = [
    ("1", "View full route"),
    ("2", "Search stop by name"),
    ("3", "Insert stop (end)"),
    ("4", "Insert stop (after a stop)"),
    ("5", "Insert stop (position)"),
    ("6", "Delete stop by name"),
    ("7", "Passengers waiting at a stop"),
    ("8", "Total distance & time"),
    ("9", "Distance & time between two stops"),
    ("10", "Save route to CSV"),
    ("11", "Load route from CSV"),
    ("12", "Populate sample route (demo)"),
    ("0", "Exit"),
]


def route_table(route: Route, precision: int = 2, title: str = "Full route") -> Table:
    """Render a route as a rich table in head-forward order."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Passengers", justify="right")
    table.add_column("dist_to_next (km)", justify="right")
    table.add_column("time_to_next (min)", justify="right")

    for position, stop in enumerate(route, start=1):
        table.add_row(
            str(position),
            str(stop.id),
            escape(stop.name),
            str(stop.passengers),
            f"{stop.dist_to_next:.{precision}f}",
            f"{stop.time_to_next:.{precision}f}",
        )
    return table


class RouteShell:
    """Numbered menu driving a ``RouteSession``."""

    def __init__(self, session: Optional[RouteSession] = None,
                 console: Optional[Console] = None,
                 reader: Optional[Reader] = None,
                 settings: Optional[BaseConfig] = None):
        self.session = session if session is not None else RouteSession()
        self.console = console if console is not None else Console()
        self.reader = reader if reader is not None else self.console.input
        self.settings = settings if settings is not None else get_settings()
        self.precision = self.settings.display_precision
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.view_route,
            "2": self.search_stop,
            "3": self.insert_end,
            "4": self.insert_after,
            "5": self.insert_at_position,
            "6": self.delete_stop,
            "7": self.passengers_at_stop,
            "8": self.total_metrics,
            "9": self.pairwise_metrics,
            "10": self.save,
            "11": self.load,
            "12": self.populate_sample,
        }

    @property
    def route(self) -> Route:
        return self.session.route

    # ------------------------------------------------------------------
    # loop
    # ------------------------------------------------------------------

    def print_menu(self) -> None:
        self.console.print("\n[bold cyan]--- Bus Route Simulator ---[/bold cyan]")
        for key, label in MENU_ITEMS:
            self.console.print(f"{key}) {label}", markup=False)

    def run(self) -> None:
        """Loop until the user exits or input ends; the route is cleared on exit."""
        while True:
            self.print_menu()
            try:
                choice = self.reader("Choose option: ").strip()
            except EOFError:
                choice = "0"
            logger.debug("menu_choice", choice=choice)
            if choice == "0":
                self.exit()
                return
            action = self._actions.get(choice)
            if action is None:
                self.console.print("Unknown option.")
                continue
            action()

    def exit(self) -> None:
        self.console.print("Exiting. Clearing route...")
        self.session.reset()
        logger.info("shell_exited")

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _say(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False)

    def _read_stop_fields(self):
        passengers = read_int(self.reader, self.console,
                              "Enter waiting passengers (int): ", minimum=0)
        dist = read_float(self.reader, self.console,
                          "Enter distance to next stop (km): ", minimum=0.0)
        time = read_float(self.reader, self.console,
                          "Enter time to next stop (min): ", minimum=0.0)
        return passengers, dist, time

    def _read_name(self, prompt: str) -> str:
        return read_line(self.reader, prompt)

    def _file_name(self, prompt: str) -> str:
        default = self.settings.default_route_file
        name = read_line(self.reader, f"{prompt} (default {default}): ").strip()
        return name or default

    # ------------------------------------------------------------------
    # actions
    # ------------------------------------------------------------------

    def view_route(self) -> None:
        if self.route.is_empty:
            self._say("Route is empty.")
            return
        self.console.print(route_table(self.route, self.precision))

    def search_stop(self) -> None:
        stop = self.route.find_by_name(self._read_name("Enter stop name: "))
        if stop is None:
            self._say("Stop not found.")
        else:
            self._say(stop.describe(self.precision))

    def insert_end(self) -> None:
        name = self._read_name("Enter new stop name: ")
        passengers, dist, time = self._read_stop_fields()
        self.session.add_stop_end(name, passengers, dist, time)
        self._say("Inserted at end.")

    def insert_after(self) -> None:
        name = self._read_name("Enter new stop name: ")
        after = self._read_name("Insert after which stop (name)? ")
        passengers, dist, time = self._read_stop_fields()
        _, existing = self.session.add_stop_after(after, name, passengers, dist, time)
        if existing is None:
            self._say("After-stop not found; appended at end.")
        else:
            self._say(f'Inserted after "{existing.name}"')

    def insert_at_position(self) -> None:
        name = self._read_name("Enter new stop name: ")
        position = read_int(self.reader, self.console, "Enter position (1-based): ")
        passengers, dist, time = self._read_stop_fields()
        stop = self.session.add_stop_at(position, name, passengers, dist, time)
        self._say(f"Inserted at position {self.route.position_of(stop)}.")

    def delete_stop(self) -> None:
        if self.route.delete_by_name(self._read_name("Enter stop name to delete: ")):
            self._say("Deleted.")
        else:
            self._say("Stop not found.")

    def passengers_at_stop(self) -> None:
        stop: Optional[Stop] = self.route.find_by_name(self._read_name("Enter stop name: "))
        if stop is None:
            self._say("Stop not found.")
        else:
            self._say(f'Passengers waiting at "{stop.name}": {stop.passengers}')

    def total_metrics(self) -> None:
        totals = total_distance_time(self.route)
        p = self.precision
        self._say(f"Total distance of route: {totals.distance:.{p}f} km")
        self._say(f"Total time of route: {totals.time:.{p}f} minutes")

    def pairwise_metrics(self) -> None:
        start = self._read_name("Start stop name: ")
        end = self._read_name("End stop name: ")
        if start == end:
            self._say("Same stop. Distance=0, Time=0")
            return
        totals = distance_between(self.route, start, end)
        if totals is None:
            self._say("One or both stops not found or unreachable.")
            return
        p = self.precision
        self._say(f'Distance from "{start}" to "{end}": {totals.distance:.{p}f} km')
        self._say(f"Time: {totals.time:.{p}f} minutes")

    def save(self) -> None:
        result = save_route(self.route, self._file_name("Filename to save"))
        if result.success:
            self._say(f"Saved to {result.path}")
        else:
            self._say(f"Save failed: {result.error}")

    def load(self) -> None:
        result = load_route(self.session, self._file_name("Filename to load"))
        if not result.success:
            self._say("Load failed.")
            return
        self._say(f"Loaded from {result.path}")
        if result.rows_skipped:
            self._say(f"Skipped {result.rows_skipped} malformed rows.")

    def populate_sample(self) -> None:
        self.session.populate_sample()
        self._say("Sample route populated.")


__all__ = ["MENU_ITEMS", "RouteShell", "route_table"]
