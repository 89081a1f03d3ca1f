"""Squad scoring engine that ties autosubs, bonus, and captaincy together."""

import logging
from typing import Hashable, Mapping, Optional

from .autosub import build_lineup, find_substitutions
from .models import (
    DEFAULT_RULES,
    ElementType,
    FixtureStatus,
    LivePlayerStat,
    Pick,
    ScoringRules,
    SquadScore,
)
from .scoring import score_player

logger = logging.getLogger('fplive.scorer')


def score_squad(
    picks: list[Pick],
    live_stats: Mapping[int, LivePlayerStat],
    fixture_statuses: Mapping[int, FixtureStatus],
    element_types: Mapping[int, ElementType],
    rules: Optional[ScoringRules] = None,
) -> SquadScore:
    """
    Score a squad for a gameweek with a full breakdown.

    Autosubs run first; then each of the 11 realized starters is scored
    as base points + credited bonus, times the captain multiplier. Bench
    players never count. Starters without live stats score 0.

    Args:
        picks: The squad's 15 picks
        live_stats: Player id -> live stats
        fixture_statuses: Player id -> status of that player's fixture
        element_types: Player id -> role record
        rules: Scoring rules (defaults if None)

    Returns:
        SquadScore with realized line-up, per-starter points and total
    """
    rules = rules or DEFAULT_RULES

    substitutions = find_substitutions(picks, live_stats, element_types, rules)
    lineup = build_lineup(picks, substitutions)
    subbed_in = {bench_pick.element for _, bench_pick in substitutions}

    result = SquadScore(
        lineup=lineup,
        substitutions=[(starter.element, bench_pick.element) for starter, bench_pick in substitutions],
    )

    for pick in lineup:
        if not pick.is_starter:
            continue
        player_points = score_player(
            pick,
            live_stats.get(pick.element),
            fixture_statuses.get(pick.element),
            rules,
            from_bench=pick.element in subbed_in,
        )
        result.players.append(player_points)
        result.total += player_points.total_points

    result.total = max(0, result.total)
    return result


def compute_squad_points(
    picks: list[Pick],
    live_stats: Mapping[int, LivePlayerStat],
    fixture_statuses: Mapping[int, FixtureStatus],
    element_types: Mapping[int, ElementType],
    rules: Optional[ScoringRules] = None,
) -> int:
    """
    Compute a squad's total gameweek points.

    Pure and idempotent: identical inputs always give the identical total.
    """
    return score_squad(picks, live_stats, fixture_statuses, element_types, rules).total


def score_squads(
    squads: Mapping[Hashable, list[Pick]],
    live_stats: Mapping[int, LivePlayerStat],
    fixture_statuses: Mapping[int, FixtureStatus],
    element_types: Mapping[int, ElementType],
    rules: Optional[ScoringRules] = None,
) -> dict[Hashable, SquadScore]:
    """
    Score many squads against the same gameweek data.

    Args:
        squads: Label (entry id, manager, ...) -> picks

    Returns:
        Dict mapping label to SquadScore
    """
    results = {}
    for label, picks in squads.items():
        score = score_squad(picks, live_stats, fixture_statuses, element_types, rules)
        logger.debug(f'{label}: {score.total} pts ({len(score.substitutions)} autosubs)')
        results[label] = score
    return results
