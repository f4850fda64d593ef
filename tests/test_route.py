import pytest

from bus_route.data import Route, RouteSession, Stop, TravelTotals, total_distance_time


def snapshot(route):
    return [(s.id, s.name, s.passengers, s.dist_to_next, s.time_to_next) for s in route]


def make_stop(stop_id, name, dist=1.0, time=1.0, passengers=0):
    return Stop(id=stop_id, name=name, passengers=passengers,
                dist_to_next=dist, time_to_next=time)


def test_empty_route():
    route = Route()
    assert route.is_empty
    assert len(route) == 0
    assert route.head is None
    assert route.tail is None
    assert list(route) == []
    assert route.find_by_name("A") is None
    assert route.find_by_id(1) is None


def test_insert_end_on_empty_route_makes_self_cycle():
    route = Route()
    stop = route.insert_end(make_stop(1, "A"))
    assert route.head == stop
    assert route.tail == stop
    assert route.successor(stop) == stop
    assert route.predecessor(stop) == stop


def test_insert_end_appends_before_head(abc_session):
    route = abc_session.route
    assert route.names() == ["A", "B", "C"]
    assert route.head.name == "A"
    assert route.tail.name == "C"
    assert route.successor(route.tail) == route.head


@pytest.mark.parametrize("count", [1, 2, 5, 17])
def test_cyclic_closure(count):
    session = RouteSession()
    for i in range(count):
        session.add_stop_end(f"S{i}", i, 1.0, 1.0)
    route = session.route
    current = route.head
    for _ in range(len(route)):
        current = route.successor(current)
    assert current == route.head
    # walking backwards closes the cycle too
    for _ in range(len(route)):
        current = route.predecessor(current)
    assert current == route.head


def test_insert_end_then_find_returns_fresh_identity(abc_session):
    seen = {stop.id for stop in abc_session.route}
    stop = abc_session.add_stop_end("Depot", 0, 0.5, 1.0)
    found = abc_session.route.find_by_name("Depot")
    assert found == stop
    assert found.id not in seen


def test_insert_after_splices_after_target(abc_session):
    route = abc_session.route
    a = route.find_by_name("A")
    route.insert_after(a, make_stop(99, "X"))
    assert route.names() == ["A", "X", "B", "C"]


def test_insert_after_tail_lands_before_head(abc_session):
    route = abc_session.route
    route.insert_after(route.tail, make_stop(99, "X"))
    assert route.names() == ["A", "B", "C", "X"]
    assert route.head.name == "A"


def test_insert_after_missing_target_appends_at_end(abc_session):
    route = abc_session.route
    route.insert_after(None, make_stop(98, "X"))
    assert route.names() == ["A", "B", "C", "X"]


def test_insert_after_foreign_stop_appends_at_end(abc_session):
    route = abc_session.route
    stranger = make_stop(500, "Elsewhere")
    route.insert_after(stranger, make_stop(98, "X"))
    assert route.names() == ["A", "B", "C", "X"]


def test_insert_after_on_empty_route():
    route = Route()
    route.insert_after(None, make_stop(1, "A"))
    assert route.names() == ["A"]
    assert route.head.name == "A"


def test_insert_at_position_one_becomes_head(abc_session):
    route = abc_session.route
    d = route.insert_at_position(make_stop(99, "D"), 1)
    assert route.head == d
    assert route.names() == ["D", "A", "B", "C"]
    assert route.predecessor(d).name == "C"
    assert route.successor(route.tail) == d


@pytest.mark.parametrize("pos", [0, -3])
def test_insert_at_position_below_one_becomes_head(abc_session, pos):
    route = abc_session.route
    route.insert_at_position(make_stop(99, "D"), pos)
    assert route.names() == ["D", "A", "B", "C"]


def test_insert_at_position_on_empty_route_becomes_head():
    route = Route()
    route.insert_at_position(make_stop(1, "A"), 7)
    assert route.names() == ["A"]
    assert route.head.name == "A"


@pytest.mark.parametrize("pos, expected", [
    (2, ["A", "D", "B", "C"]),
    (3, ["A", "B", "D", "C"]),
    (4, ["A", "B", "C", "D"]),
])
def test_insert_at_position_middle(abc_session, pos, expected):
    route = abc_session.route
    stop = route.insert_at_position(make_stop(99, "D"), pos)
    assert route.names() == expected
    assert route.position_of(stop) == pos


@pytest.mark.parametrize("pos", [5, 10, 1000])
def test_insert_at_position_past_length_clamps_to_end(abc_session, pos):
    route = abc_session.route
    route.insert_at_position(make_stop(99, "D"), pos)
    assert route.names() == ["A", "B", "C", "D"]
    assert route.head.name == "A"


def test_find_by_name_ignores_ascii_case(abc_session):
    route = abc_session.route
    abc_session.add_stop_end("Central Station", 3, 1.0, 1.0)
    assert route.find_by_name("central STATION").name == "Central Station"
    assert route.find_by_name("b").name == "B"


def test_find_by_name_is_exact_not_prefix(abc_session):
    abc_session.add_stop_end("Market Road", 3, 1.0, 1.0)
    assert abc_session.route.find_by_name("Market") is None
    assert abc_session.route.find_by_name("Market Road ") is None


def test_find_by_name_does_not_fold_non_ascii():
    session = RouteSession()
    session.add_stop_end("ÉCOLE", 0, 1.0, 1.0)
    assert session.route.find_by_name("école") is None
    assert session.route.find_by_name("ÉcOLE").name == "ÉCOLE"


def test_find_by_name_returns_first_match_in_traversal_order(abc_session):
    route = abc_session.route
    first = route.find_by_name("B")
    abc_session.add_stop_end("b", 1, 1.0, 1.0)
    assert route.find_by_name("B") == first


def test_find_by_id(abc_session):
    route = abc_session.route
    b = route.find_by_name("B")
    assert route.find_by_id(b.id) == b
    assert route.find_by_id(12345) is None


def test_delete_missing_name_leaves_route_unchanged(abc_session):
    route = abc_session.route
    before = snapshot(route)
    assert route.delete_by_name("Nowhere") is False
    assert snapshot(route) == before
    assert route.head.name == "A"


def test_delete_on_empty_route():
    assert Route().delete_by_name("A") is False


def test_delete_sole_stop_empties_route(session):
    session.add_stop_end("Only", 1, 2.0, 3.0)
    assert session.route.delete_by_name("only") is True
    assert session.route.is_empty
    assert session.route.head is None
    assert session.route.find_by_name("Only") is None
    assert total_distance_time(session.route) == TravelTotals(0.0, 0.0)


def test_delete_head_advances_head(abc_session):
    route = abc_session.route
    assert route.delete_by_name("A") is True
    assert route.head.name == "B"
    assert route.names() == ["B", "C"]
    assert route.successor(route.tail) == route.head


def test_delete_middle_keeps_neighbour_weights(abc_session):
    route = abc_session.route
    a = route.find_by_name("A")
    assert route.delete_by_name("B") is True
    assert route.names() == ["A", "C"]
    # A's leg still carries the weights it had towards B
    after = route.find_by_name("A")
    assert (after.dist_to_next, after.time_to_next) == (a.dist_to_next, a.time_to_next)
    assert route.successor(after).name == "C"


def test_delete_removes_first_match_only(abc_session):
    abc_session.add_stop_end("a", 9, 1.0, 1.0)
    route = abc_session.route
    assert route.delete_by_name("A") is True
    assert route.names() == ["B", "C", "a"]


def test_deleted_slot_is_reused_with_new_identity(abc_session):
    route = abc_session.route
    old_b = route.find_by_name("B")
    route.delete_by_name("B")
    new = abc_session.add_stop_end("B", 1, 1.0, 1.0)
    assert new.id != old_b.id
    assert route.names() == ["A", "C", "B"]
    assert route.successor(route.tail) == route.head


def test_clear_empties_route(abc_session):
    route = abc_session.route
    route.clear()
    assert route.is_empty
    assert len(route) == 0
    assert route.find_by_name("A") is None
    abc_session.add_stop_end("Z", 0, 1.0, 1.0)
    assert route.names() == ["Z"]


def test_walk_from_starts_at_stop(abc_session):
    route = abc_session.route
    b = route.find_by_name("B")
    assert [s.name for s in route.walk_from(b)] == ["B", "C", "A"]
    assert list(route.walk_from(make_stop(404, "Ghost"))) == []


def test_contains(abc_session):
    route = abc_session.route
    assert route.find_by_name("A") in route
    assert make_stop(404, "Ghost") not in route
    assert "A" not in route


def test_duplicate_identity_rejected(abc_session):
    route = abc_session.route
    a = route.find_by_name("A")
    with pytest.raises(ValueError):
        route.insert_end(make_stop(a.id, "Copy"))
