"""Shared squad fixtures.

The default squad is a 4-4-2 where element id == squad position:
    1 GKP | 2-5 DEF | 6-9 MID | 10-11 FWD | bench: 12 GKP, 13 DEF, 14 MID, 15 FWD
Element 9 is captain and 8 vice-captain.
"""

import pytest

from fplive.constants import DEFENDER, FORWARD, GOALKEEPER, MIDFIELDER
from fplive.models import ElementType, FixtureStatus, LivePlayerStat, Pick

DEFAULT_ROLES = {
    GOALKEEPER: (1, 12),
    DEFENDER: (2, 3, 4, 5, 13),
    MIDFIELDER: (6, 7, 8, 9, 14),
    FORWARD: (10, 11, 15),
}


def build_squad(captain=9, vice_captain=8, elements=None):
    """15 picks; ``elements`` maps position -> element id (default: same number)."""
    elements = elements or {}
    picks = []
    for position in range(1, 16):
        element = elements.get(position, position)
        picks.append(
            Pick(
                element=element,
                position=position,
                is_captain=element == captain,
                is_vice_captain=element == vice_captain,
                multiplier=(2 if element == captain else 1) if position <= 11 else 0,
            )
        )
    return picks


def build_element_types(roles=None):
    """Player id -> ElementType from a role id -> player ids mapping."""
    roles = roles or DEFAULT_ROLES
    return {
        element: ElementType.default(type_id)
        for type_id, elements in roles.items()
        for element in elements
    }


def build_live(overrides=None, elements=range(1, 16), minutes=90, points=2):
    """Everyone plays ``minutes`` and scores ``points`` unless overridden."""
    overrides = overrides or {}
    live = {}
    for element in elements:
        fields = {'minutes': minutes, 'total_points': points, **overrides.get(element, {})}
        live[element] = LivePlayerStat(element=element, **fields)
    return live


@pytest.fixture
def squad():
    return build_squad()


@pytest.fixture
def element_types():
    return build_element_types()


@pytest.fixture
def finished_fixtures():
    return {element: FixtureStatus('finished', 90) for element in range(1, 16)}
