"""
Line and number input for the interactive shell.

Numbers are read the way a C ``strtol``/``strtod`` prompt reads them: a
leading numeric prefix is accepted (``"12 people"`` -> 12), an empty line
means 0, and anything without a numeric prefix is reprompted.
"""

import math
import re
from typing import Callable, Optional

from rich.console import Console

Reader = Callable[[str], str]

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def parse_int_prefix(text: str) -> Optional[int]:
    match = _INT_PREFIX.match(text)
    if not match:
        return None
    return int(match.group(1))


def parse_float_prefix(text: str) -> Optional[float]:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    value = float(match.group(1))
    if not math.isfinite(value):
        return None
    return value


def read_line(reader: Reader, prompt: str) -> str:
    """Read one line; end of input reads as an empty line."""
    try:
        return reader(prompt).rstrip("\r\n")
    except EOFError:
        return ""


def read_int(reader: Reader, console: Console, prompt: str,
             minimum: Optional[int] = None) -> int:
    while True:
        text = read_line(reader, prompt)
        if not text:
            return 0
        value = parse_int_prefix(text)
        if value is None:
            console.print("Invalid integer, try again.")
        elif minimum is not None and value < minimum:
            console.print(f"Value must be at least {minimum}, try again.")
        else:
            return value


def read_float(reader: Reader, console: Console, prompt: str,
               minimum: Optional[float] = None) -> float:
    while True:
        text = read_line(reader, prompt)
        if not text:
            return 0.0
        value = parse_float_prefix(text)
        if value is None:
            console.print("Invalid number, try again.")
        elif minimum is not None and value < minimum:
            console.print(f"Value must be at least {minimum:g}, try again.")
        else:
            return value


__all__ = [
    "Reader",
    "parse_int_prefix",
    "parse_float_prefix",
    "read_line",
    "read_int",
    "read_float",
]
