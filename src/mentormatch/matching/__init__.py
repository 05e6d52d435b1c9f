"""Matching and interaction engine."""

from mentormatch.matching.compatibility import find_candidates, haversine_km, is_compatible
from mentormatch.matching.connections import match_and_save
from mentormatch.matching.discovery import discover, list_incoming_likes
from mentormatch.matching.matches import canonical_pair, create_match, list_mutual_matches, on_swipe
from mentormatch.matching.profiles import create_profile
from mentormatch.matching.service import get_connection_matches, swipe
from mentormatch.matching.swipes import has_liked, record_swipe

__all__ = [
    "canonical_pair",
    "create_match",
    "create_profile",
    "discover",
    "find_candidates",
    "get_connection_matches",
    "has_liked",
    "haversine_km",
    "is_compatible",
    "list_incoming_likes",
    "list_mutual_matches",
    "match_and_save",
    "on_swipe",
    "record_swipe",
    "swipe",
]
