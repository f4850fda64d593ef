import pytest
from pydantic import ValidationError

from bus_route.data import NAME_MAX_LENGTH, Stop, TravelTotals


def test_long_name_is_truncated():
    stop = Stop(id=1, name="x" * 200, passengers=0, dist_to_next=0, time_to_next=0)
    assert len(stop.name) == NAME_MAX_LENGTH


def test_defaults():
    stop = Stop(id=3, name="Depot")
    assert stop.passengers == 0
    assert stop.dist_to_next == 0.0
    assert stop.time_to_next == 0.0


@pytest.mark.parametrize("field", ["passengers", "dist_to_next", "time_to_next"])
def test_negative_values_rejected(field):
    values = dict(id=1, name="A", passengers=1, dist_to_next=1.0, time_to_next=1.0)
    values[field] = -1
    with pytest.raises(ValidationError):
        Stop(**values)


def test_stop_is_frozen():
    stop = Stop(id=1, name="A")
    with pytest.raises(ValidationError):
        stop.passengers = 5


def test_describe():
    stop = Stop(id=4, name="Library", passengers=3, dist_to_next=0.9, time_to_next=2)
    assert stop.describe() == (
        'ID:4  Name:"Library"  Passengers:3  '
        "dist_to_next:0.90 km  time_to_next:2.00 min"
    )


def test_csv_row_uses_six_decimals():
    stop = Stop(id=2, name="Market Road", passengers=5, dist_to_next=1.2, time_to_next=3)
    assert stop.to_csv_row() == ["2", "Market Road", "5", "1.200000", "3.000000"]
    assert Stop.csv_headers() == ["id", "name", "passengers", "dist_to_next", "time_to_next"]


def test_matches_name_folds_ascii_only():
    stop = Stop(id=1, name="Park Lane")
    assert stop.matches_name("PARK lane")
    assert not stop.matches_name("Park")


def test_travel_totals_add():
    assert (TravelTotals(1.0, 2.0) + TravelTotals(3.0, 4.0)).as_tuple() == (4.0, 6.0)
