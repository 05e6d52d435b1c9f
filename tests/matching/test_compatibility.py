"""Tests for the mutual age/distance compatibility predicate."""

from itertools import permutations

import pytest

from people import BOSTON, LA, NYC, PEOPLE, make_user
from mentormatch.domain import Location
from mentormatch.matching.compatibility import (
    find_candidates,
    haversine_km,
    is_compatible,
)


def _loc(coords):
    lat, lon = coords
    return Location(city="x", country="US", latitude=lat, longitude=lon)


def test_haversine_zero_for_same_point():
    assert haversine_km(_loc(NYC), _loc(NYC)) == 0.0


def test_haversine_known_distances():
    """NYC→LA is roughly 3,936 km and NYC→Boston roughly 306 km."""

    assert 3900 < haversine_km(_loc(NYC), _loc(LA)) < 3980
    assert 300 < haversine_km(_loc(NYC), _loc(BOSTON)) < 310


def test_haversine_is_symmetric():
    assert haversine_km(_loc(NYC), _loc(LA)) == haversine_km(_loc(LA), _loc(NYC))


def test_alice_and_bob_are_compatible():
    alice = make_user("alice")
    bob = make_user("bob")

    assert is_compatible(alice, bob)
    assert is_compatible(bob, alice)


def test_eve_is_too_far_from_alice():
    assert not is_compatible(make_user("alice"), make_user("eve"))


def test_candidate_outside_current_users_age_range_is_excluded():
    assert not is_compatible(make_user("alice"), make_user("david"))


def test_current_user_outside_candidates_age_range_is_excluded():
    """Nina only accepts mentors aged 32+, Alice is 30."""

    assert not is_compatible(make_user("alice"), make_user("nina"))


@pytest.mark.parametrize(
    "age,expected",
    [(24, False), (25, True), (30, True), (35, True), (36, False)],
)
def test_age_window_is_inclusive(age, expected):
    alice = make_user("alice")
    candidate = make_user("iris", age=age)

    assert is_compatible(alice, candidate) is expected


def test_zero_max_distance_on_both_sides_ignores_distance():
    assert is_compatible(make_user("henry"), make_user("grace"))


def test_zero_max_distance_on_one_side_still_honours_the_other():
    """Grace accepts any distance, but Alice's 50 km limit still applies."""

    assert not is_compatible(make_user("alice"), make_user("grace"))
    assert not is_compatible(make_user("grace"), make_user("alice"))


@pytest.mark.parametrize("limit,expected", [(300, False), (310, True)])
def test_distance_limit_boundary(limit, expected):
    frank = make_user("frank", max_distance=limit)
    boston_mentee = make_user("iris", city="Boston", latitude=BOSTON[0], longitude=BOSTON[1], max_distance=0)

    assert is_compatible(frank, boston_mentee) is expected


def test_compatibility_is_symmetric_for_every_pair():
    users = [make_user(name) for name in PEOPLE]
    for a, b in permutations(users, 2):
        assert is_compatible(a, b) == is_compatible(b, a), (a.id, b.id)


def test_unlimited_distance_never_fails_on_distance():
    names = ["leo", "maria", "henry", "grace", "oscar", "bob"]
    users = [make_user(name, max_distance=0) for name in names]
    for a, b in permutations(users, 2):
        ages_ok = (
            a.preferences.min_age <= b.age <= a.preferences.max_age
            and b.preferences.min_age <= a.age <= b.preferences.max_age
        )
        assert is_compatible(a, b) == ages_ok


def test_find_candidates_preserves_pool_order():
    alice = make_user("alice")
    pool = [make_user(name) for name in ["oscar", "david", "bob", "eve", "carol", "karen", "iris"]]

    result = find_candidates(alice, pool)

    assert [u.id for u in result] == ["user-oscar", "user-bob", "user-carol", "user-iris"]


def test_find_candidates_keeps_duplicates():
    alice = make_user("alice")
    bob = make_user("bob")

    assert find_candidates(alice, [bob, bob]) == [bob, bob]


def test_find_candidates_empty_pool():
    assert find_candidates(make_user("alice"), []) == []
