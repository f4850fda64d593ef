"""
Interactive shell and command line for the Bus Route Simulator.
"""

from .shell import MENU_ITEMS, RouteShell, route_table

__all__ = ["MENU_ITEMS", "RouteShell", "route_table"]
