"""Build the scorer's lookup tables from validated FPL payloads."""

import logging
from typing import Iterable, Optional

from .constants import FINISHED, FIXTURE_STATES, LIVE, NOT_STARTED
from .models import ElementType, FixtureStatus, LivePlayerStat, Pick, default_element_types
from .schemas import BootstrapStatic, EntryPicksResponse, FixturePayload, LiveEventResponse

logger = logging.getLogger('fplive.live_data')

# Lower rank = less advanced; used to pick a player's fixture in double gameweeks
_STATUS_RANK = {state: rank for rank, state in enumerate(FIXTURE_STATES)}


def build_live_stats_map(live: LiveEventResponse) -> dict[int, LivePlayerStat]:
    """Player id -> LivePlayerStat."""
    return {element.id: element.to_model() for element in live.elements}


def build_role_table(bootstrap: BootstrapStatic) -> dict[int, ElementType]:
    """Role id -> ElementType, topped up with the defaults for missing roles."""
    table = default_element_types()
    for element_type in bootstrap.element_types:
        table[element_type.id] = element_type.to_model()
    return table


def build_element_type_map(bootstrap: BootstrapStatic) -> dict[int, ElementType]:
    """Player id -> ElementType (the player's role and its bounds)."""
    roles = build_role_table(bootstrap)
    return {element.id: roles[element.element_type] for element in bootstrap.elements}


def fixture_status(fixture: FixturePayload) -> FixtureStatus:
    """
    Map an FPL fixture to its lifecycle state.

    A provisionally finished fixture counts as finished: bonus is
    confirmed from that point.
    """
    if fixture.finished or fixture.finished_provisional:
        return FixtureStatus(FINISHED, fixture.minutes)
    if fixture.started:
        return FixtureStatus(LIVE, fixture.minutes)
    return FixtureStatus(NOT_STARTED, 0)


def build_fixture_status_map(
    fixtures: Iterable[FixturePayload],
    bootstrap: BootstrapStatic,
    gameweek: Optional[int] = None,
) -> dict[int, FixtureStatus]:
    """
    Player id -> status of the fixture that player's team is playing.

    Args:
        fixtures: Fixtures (only those in ``gameweek`` are used when given)
        bootstrap: Bootstrap data for player -> team lookups
        gameweek: Gameweek to restrict to

    Returns:
        Dict of player id -> FixtureStatus. Players whose team has no
        fixture are left out (the scorer treats them as not started).
        In a double gameweek the least advanced fixture wins, so bonus
        is only trusted once both matches allow it.

    Note:
        Bonus already confirmed in a finished first match is deferred too:
        a player on 60+ minutes has the bonus taken out of their base
        points and it is only credited back once the second fixture is
        finished (or live past the reliability threshold).
    """
    team_status: dict[int, FixtureStatus] = {}

    for fixture in fixtures:
        if gameweek is not None and fixture.event != gameweek:
            continue
        status = fixture_status(fixture)
        for team in (fixture.team_h, fixture.team_a):
            current = team_status.get(team)
            if current is None or _STATUS_RANK[status.status] < _STATUS_RANK[current.status]:
                team_status[team] = status

    statuses = {
        element.id: team_status[element.team]
        for element in bootstrap.elements
        if element.team in team_status
    }
    logger.debug(f'Fixture status for {len(statuses)} players across {len(team_status)} teams')
    return statuses


def build_picks(picks: EntryPicksResponse) -> list[Pick]:
    """Squad picks sorted by position."""
    return sorted((p.to_model() for p in picks.picks), key=lambda p: p.position)
