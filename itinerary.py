"""
Nearest-neighbour visiting order for plan itineraries.

Coordinates are treated as planar; this is a route suggestion for a handful
of places, not a great-circle optimiser.
"""

import math
from collections.abc import Mapping
from typing import Iterable, List, Optional, Tuple


def _item_fields(item):
    """Return (id, lat, lng) from a mapping or an object such as an Idea row."""
    if isinstance(item, Mapping):
        return item.get("id"), item.get("lat"), item.get("lng")
    return getattr(item, "id", None), getattr(item, "lat", None), getattr(item, "lng", None)


def parse_coordinate(value) -> Optional[float]:
    """Return a finite float for numeric input, else None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def item_position(item) -> Optional[Tuple[float, float]]:
    """(lat, lng) when both coordinates are valid; a single bad value disqualifies the pair."""
    _, lat, lng = _item_fields(item)
    lat = parse_coordinate(lat)
    lng = parse_coordinate(lng)
    if lat is None or lng is None:
        return None
    return lat, lng


def planar_distance(a, b) -> float:
    # hypot saturates to inf instead of raising on huge differences
    return math.hypot(a[0] - b[0], a[1] - b[1])


def sequence(items: Iterable) -> List:
    """
    Order item ids greedily by nearest neighbour.

    Starts at the first located item, then repeatedly moves to the closest
    remaining located item (ties go to the earliest one). Items without a
    usable position follow in their original order.
    """
    located = []
    unlocated = []
    for item in items:
        item_id = _item_fields(item)[0]
        position = item_position(item)
        if position is None:
            unlocated.append(item_id)
        else:
            located.append((item_id, position))

    if len(located) < 2:
        return [item_id for item_id, _ in located] + unlocated

    current_id, current = located[0]
    remaining = located[1:]
    ordered = [current_id]
    while remaining:
        # min() keeps the first of equal keys, which gives the earliest-position tie-break
        best_idx = min(range(len(remaining)), key=lambda idx: planar_distance(current, remaining[idx][1]))
        current_id, current = remaining.pop(best_idx)
        ordered.append(current_id)

    return ordered + unlocated


def route_length(items: Iterable) -> float:
    """Total planar hop distance over the located items, in the given order."""
    positions = [p for p in (item_position(item) for item in items) if p is not None]
    return sum(planar_distance(a, b) for a, b in zip(positions, positions[1:]))
