"""Mutual age and distance compatibility between two users."""

from __future__ import annotations

import math
from typing import Iterable

from mentormatch.domain import Location, User

EARTH_RADIUS_KM = 6371.0


def haversine_km(origin: Location, destination: Location) -> float:
    """Great-circle distance in kilometers between two coordinates in degrees."""

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(destination.longitude - origin.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Rounding can push h marginally past 1 for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def accepts_age(user: User, other: User) -> bool:
    """Whether ``other.age`` falls inside ``user``'s inclusive age window."""

    return user.preferences.min_age <= other.age <= user.preferences.max_age


def accepts_distance(user: User, distance_km: float) -> bool:
    """Whether ``user`` tolerates ``distance_km``. A limit of 0 means unlimited."""

    max_distance = user.preferences.max_distance
    if max_distance == 0:
        return True
    return distance_km <= max_distance


def is_compatible(a: User, b: User) -> bool:
    """Return True when each user satisfies the other's age and distance limits.

    Both directions are always evaluated, so the result is symmetric in ``a`` and ``b``.
    """

    if not (accepts_age(a, b) and accepts_age(b, a)):
        return False

    if a.preferences.max_distance == 0 and b.preferences.max_distance == 0:
        return True

    distance_km = haversine_km(a.location, b.location)
    return accepts_distance(a, distance_km) and accepts_distance(b, distance_km)


def find_candidates(current: User, pool: Iterable[User]) -> list[User]:
    """Filter ``pool`` to users compatible with ``current``, keeping input order.

    Args:
        current: User the candidates are being found for
        pool: Potential candidates, normally every user of the opposite role

    Returns:
        Compatible users in the order they appear in ``pool``. No sorting or
        de-duplication is applied.
    """

    return [candidate for candidate in pool if is_compatible(current, candidate)]


__all__ = [
    "EARTH_RADIUS_KM",
    "accepts_age",
    "accepts_distance",
    "find_candidates",
    "haversine_km",
    "is_compatible",
]
