"""
Data models for the Bus Route Simulator.

A ``Stop`` is the value object stored in a route: identity, display name,
waiting passengers and the weights of the leg *leaving* the stop towards its
successor. Stops are frozen once created; the route replaces or removes them
but never edits them in place.
"""

from dataclasses import dataclass
from typing import List, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    field_validator,
)


# Longest stop name kept; longer names are cut, never rejected.
NAME_MAX_LENGTH = 63


class BaseDataModel(BaseModel):
    """Base model with common functionality for all data models."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def csv_headers(cls) -> List[str]:
        """Get CSV headers for this model."""
        return list(cls.model_fields.keys())


class Stop(BaseDataModel):
    """A bus stop together with the leg to the next stop on the route."""

    CSV_PRECISION: ClassVar[int] = 6

    id: int = Field(
        ...,
        ge=1,
        description="Session-unique identity, assigned at insertion"
    )
    name: str = Field(
        ...,
        description="Display name, not required to be unique"
    )
    passengers: NonNegativeInt = Field(
        0,
        description="Passengers waiting at the stop"
    )
    dist_to_next: NonNegativeFloat = Field(
        0.0,
        description="Kilometres to the next stop"
    )
    time_to_next: NonNegativeFloat = Field(
        0.0,
        description="Minutes to the next stop"
    )

    @field_validator("name", mode="before")
    @classmethod
    def bound_name(cls, v):
        """Truncate names to NAME_MAX_LENGTH characters."""
        if v is None:
            return ""
        return str(v)[:NAME_MAX_LENGTH]

    def matches_name(self, name: str) -> bool:
        """ASCII case-insensitive exact comparison, independent of locale."""
        return _ascii_fold(self.name) == _ascii_fold(name)

    def describe(self, precision: int = 2) -> str:
        """One-line description used by the interactive shell."""
        return (
            f'ID:{self.id}  Name:"{self.name}"  Passengers:{self.passengers}  '
            f"dist_to_next:{self.dist_to_next:.{precision}f} km  "
            f"time_to_next:{self.time_to_next:.{precision}f} min"
        )

    def to_csv_row(self) -> List[str]:
        """Export as a CSV row with fixed precision numeric fields."""
        p = self.CSV_PRECISION
        return [
            str(self.id),
            self.name,
            str(self.passengers),
            f"{self.dist_to_next:.{p}f}",
            f"{self.time_to_next:.{p}f}",
        ]


@dataclass(frozen=True)
class TravelTotals:
    """Accumulated distance (km) and time (minutes) along a stretch of route."""
    distance: float = 0.0
    time: float = 0.0

    def __add__(self, other: "TravelTotals") -> "TravelTotals":
        return TravelTotals(self.distance + other.distance, self.time + other.time)

    def as_tuple(self):
        return (self.distance, self.time)


_ASCII_FOLD = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _ascii_fold(text: str) -> str:
    return text.translate(_ASCII_FOLD)


__all__ = ["BaseDataModel", "Stop", "TravelTotals", "NAME_MAX_LENGTH"]
