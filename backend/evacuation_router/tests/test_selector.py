from services.safety import is_safe
from services.selector import find_nearest_safe_destination, select_nearest

from conftest import make_destination, make_fire


def test_empty_catalog_returns_none(la_start):
    assert find_nearest_safe_destination(la_start, [], []) is None


def test_no_fires_picks_geometrically_nearest(la_start, la_shelters, dodger_shelter):
    # Dodger ~2.66 km, convention center ~2.93 km
    assert find_nearest_safe_destination(la_start, la_shelters, []) == dodger_shelter
    assert find_nearest_safe_destination(la_start, list(reversed(la_shelters)), []) == dodger_shelter


def test_fire_at_shelter_within_reach_of_start_blocks_everything(la_start, la_shelters, fire_at_dodger):
    # The fire is also inside the 5 km radius of the start point
    assert find_nearest_safe_destination(la_start, la_shelters, [fire_at_dodger]) is None


def test_fire_at_shelter_with_smaller_radius_selects_other(
    la_start, la_shelters, fire_at_dodger, convention_shelter
):
    chosen = find_nearest_safe_destination(la_start, la_shelters, [fire_at_dodger], 2000)
    assert chosen == convention_shelter


def test_never_returns_an_unsafe_destination(la_start):
    destinations = [
        make_destination("a", 34.08, -118.24),
        make_destination("b", 34.20, -118.40),
        make_destination("c", 33.90, -118.10),
        make_destination("d", 34.50, -117.90),
    ]
    fires = [make_fire(34.19, -118.41), make_fire(34.09, -118.24)]
    chosen = find_nearest_safe_destination(la_start, destinations, fires, 3000)
    assert chosen is not None
    assert is_safe(la_start, chosen.location, fires, 3000)
    assert chosen.id == "c"


def test_ties_keep_input_order(la_start):
    first = make_destination("first", 34.06, -118.24)
    second = make_destination("second", 34.06, -118.24)
    assert find_nearest_safe_destination(la_start, [first, second], []) is first
    assert find_nearest_safe_destination(la_start, [second, first], []) is second


def test_closed_destinations_are_still_eligible(la_start):
    closed = make_destination("closed", 34.051, -118.24, is_open=False)
    open_ = make_destination("open", 34.10, -118.24)
    assert find_nearest_safe_destination(la_start, [closed, open_], []) is closed


def test_select_nearest_alias():
    assert select_nearest is find_nearest_safe_destination
