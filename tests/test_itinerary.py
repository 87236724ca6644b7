import math
from collections import namedtuple

from itinerary import item_position, parse_coordinate, route_length, sequence


def _item(item_id, lat=None, lng=None):
    return {"id": item_id, "lat": lat, "lng": lng}


def test_sequence_empty_input():
    assert sequence([]) == []


def test_sequence_visits_nearest_first_and_appends_unlocated():
    items = [_item("A", 0, 0), _item("B", 10, 10), _item("C", 1, 1), _item("D")]
    assert sequence(items) == ["A", "C", "B", "D"]


def test_sequence_without_coordinates_keeps_input_order():
    assert sequence([_item("A"), _item("B")]) == ["A", "B"]


def test_sequence_collinear_points():
    items = [_item("A", 0, 0), _item("B", 5, 0), _item("C", 10, 0), _item("D", 2, 0)]
    assert sequence(items) == ["A", "D", "B", "C"]


def test_single_located_item_leads_unlocated_items():
    items = [_item("X"), _item("Y", 3, 4), _item("Z")]
    assert sequence(items) == ["Y", "X", "Z"]


def test_ties_go_to_earliest_remaining_item():
    items = [_item("start", 0, 0), _item("east", 0, 1), _item("north", 1, 0), _item("west", 0, -1)]
    assert sequence(items) == ["start", "east", "north", "west"]


def test_start_is_first_located_item_even_if_far_away():
    items = [_item("none"), _item("far", 100, 100), _item("a", 0, 0), _item("b", 0, 1)]
    assert sequence(items) == ["far", "b", "a", "none"]


def test_partial_or_malformed_coordinates_are_unlocated():
    items = [
        _item("half", 1.0, None),
        _item("text", "north", 2.0),
        _item("nan", float("nan"), 0.0),
        _item("inf", float("inf"), 0.0),
        _item("flag", True, False),
        _item("ok", 0.0, 0.0),
    ]
    assert sequence(items) == ["ok", "half", "text", "nan", "inf", "flag"]


def test_numeric_strings_count_as_coordinates():
    items = [_item("a", "0", "0"), _item("b", "5", "5"), _item("c", "1", "1")]
    assert sequence(items) == ["a", "c", "b"]


def test_objects_with_attributes_are_accepted():
    Place = namedtuple("Place", ["id", "lat", "lng"])
    places = [Place(1, 0.0, 0.0), Place(2, 9.0, 9.0), Place(3, 1.0, 1.0), Place(4, None, None)]
    assert sequence(places) == [1, 3, 2, 4]


def test_result_is_permutation_and_deterministic():
    items = [_item(i, (i * 7) % 5, (i * 3) % 4) if i % 3 else _item(i) for i in range(12)]
    first = sequence(items)
    assert sorted(first) == list(range(12))
    assert sequence(items) == first


def test_input_is_not_mutated():
    items = [_item("A", 0, 0), _item("B", 2, 2), _item("C", 1, 1)]
    snapshot = [dict(i) for i in items]
    sequence(items)
    assert items == snapshot


def test_parse_coordinate():
    assert parse_coordinate(1) == 1.0
    assert parse_coordinate("2.5") == 2.5
    assert parse_coordinate(None) is None
    assert parse_coordinate("abc") is None
    assert parse_coordinate(float("-inf")) is None


def test_item_position_requires_both_values():
    assert item_position(_item("a", 1, 2)) == (1.0, 2.0)
    assert item_position(_item("a", 1, None)) is None


def test_route_length_skips_unlocated_items():
    items = [_item("A", 0, 0), _item("B"), _item("C", 3, 4), _item("D", 3, 0)]
    assert math.isclose(route_length(items), 9.0)


def test_large_finite_coordinates_are_ordered():
    items = [_item("A", 0, 0), _item("B", 1e200, 0), _item("C", 1, 0)]
    assert sequence(items) == ["A", "C", "B"]


def test_distances_beyond_float_range_do_not_raise():
    items = [_item("start", -1e308, 0), _item("far", 1e308, 0), _item("near", -1e308, 1)]
    assert sequence(items) == ["start", "near", "far"]


def test_integers_too_large_for_float_are_unlocated():
    items = [_item("huge", 10 ** 400, 0), _item("A", 0, 0), _item("B", 3, 0), _item("C", 1, 0)]
    assert parse_coordinate(10 ** 400) is None
    assert sequence(items) == ["A", "C", "B", "huge"]
