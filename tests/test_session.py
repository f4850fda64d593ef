import pytest
from pydantic import ValidationError

from bus_route.data import SAMPLE_STOPS, IdentityCounter, RouteSession


def test_identities_are_monotonic_and_never_reused(session):
    ids = [session.add_stop_end(f"S{i}").id for i in range(3)]
    session.route.delete_by_name("S2")
    ids.append(session.add_stop_end("S3").id)
    assert ids == [1, 2, 3, 4]


def test_clear_does_not_reset_identities(abc_session):
    abc_session.reset()
    assert abc_session.route.is_empty
    assert abc_session.add_stop_end("New").id == 4


def test_reset_with_ids_restarts_counter(abc_session):
    abc_session.reset(reset_ids=True)
    assert abc_session.add_stop_end("New").id == 1


def test_rejected_stop_does_not_consume_identity(session):
    with pytest.raises(ValidationError):
        session.create_stop("Bad", passengers=-1)
    assert session.add_stop_end("Good").id == 1


def test_add_stop_after_found(abc_session):
    stop, existing = abc_session.add_stop_after("a", "X", 1, 1.0, 1.0)
    assert existing.name == "A"
    assert abc_session.route.names() == ["A", "X", "B", "C"]
    assert abc_session.route.successor(existing) == stop


def test_add_stop_after_missing_falls_back_to_end(abc_session):
    stop, existing = abc_session.add_stop_after("Nowhere", "X")
    assert existing is None
    assert abc_session.route.tail == stop


def test_add_stop_at_position_one(abc_session):
    stop = abc_session.add_stop_at(1, "D")
    assert abc_session.route.head == stop
    assert abc_session.route.names() == ["D", "A", "B", "C"]


def test_populate_sample_replaces_route_and_resets_ids(abc_session):
    abc_session.populate_sample()
    route = abc_session.route
    assert route.names() == [name for name, _, _, _ in SAMPLE_STOPS]
    assert [stop.id for stop in route] == [1, 2, 3, 4, 5]
    central = route.find_by_name("Central Station")
    assert (central.passengers, central.dist_to_next, central.time_to_next) == (12, 2.5, 6.0)


def test_counter_peek_and_take():
    counter = IdentityCounter(start=10)
    assert counter.peek == 10
    assert counter.take() == 10
    assert counter.peek == 11
    counter.reset()
    assert counter.take() == 10


def test_sessions_are_independent():
    first, second = RouteSession(), RouteSession()
    first.add_stop_end("A")
    first.add_stop_end("B")
    assert second.add_stop_end("A").id == 1
    assert len(second.route) == 1
