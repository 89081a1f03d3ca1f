"""Scoring functions for a single player's live gameweek points."""

from typing import Optional

from .constants import BONUS_RELIABLE_MINUTES, FINISHED, LIVE
from .models import DEFAULT_RULES, FixtureStatus, LivePlayerStat, Pick, PlayerPoints, ScoringRules, to_int


def _bonus_is_provisional(stat: LivePlayerStat, rules: ScoringRules) -> bool:
    """True when the upstream total still carries bonus that must be stripped."""
    return (
        rules.apply_bonus
        and rules.bonus_reliable_at_60
        and to_int(stat.minutes) < BONUS_RELIABLE_MINUTES
    )


def compute_player_points(stat: LivePlayerStat, rules: ScoringRules = DEFAULT_RULES) -> int:
    """
    Compute a player's base points from live stats.

    Scoring:
        - Starts from the upstream total_points figure
        - Under 60 minutes (with bonus gating on): raw bonus is removed,
          since the upstream total includes bonus that is not yet final
        - Never negative

    Args:
        stat: Player's live stat record
        rules: Active scoring rules

    Returns:
        Non-negative base points
    """
    points = to_int(stat.total_points)

    if _bonus_is_provisional(stat, rules):
        points -= to_int(stat.bonus)

    return max(0, points)


def resolve_bonus(
    bonus: int,
    fixture_status: str,
    elapsed_minutes: int,
    rules: ScoringRules = DEFAULT_RULES,
) -> int:
    """
    Decide how much of a player's bonus counts as final.

    Bonus is final once the fixture is finished, or while live when the
    60 minute gate is off or the match has reached 60 minutes. Before that
    the bonus points system ranking can still change.

    Args:
        bonus: Raw bonus value from live stats
        fixture_status: 'not_started', 'live' or 'finished'
        elapsed_minutes: Minutes elapsed in the player's fixture
        rules: Active scoring rules
    """
    if not rules.apply_bonus:
        return 0

    bonus = max(0, to_int(bonus))

    if fixture_status == FINISHED:
        return bonus

    if fixture_status == LIVE and (
        not rules.bonus_reliable_at_60 or to_int(elapsed_minutes) >= BONUS_RELIABLE_MINUTES
    ):
        return bonus

    return 0


def apply_captaincy(pick: Pick, points: int, rules: ScoringRules = DEFAULT_RULES) -> int:
    """Multiply points by the captain multiplier if the pick is captain."""
    if pick.is_captain:
        return points * rules.captain_multiplier
    return points


def score_player(
    pick: Pick,
    stat: Optional[LivePlayerStat],
    fixture: Optional[FixtureStatus] = None,
    rules: ScoringRules = DEFAULT_RULES,
    from_bench: bool = False,
) -> PlayerPoints:
    """
    Finalize one starter's points: base + credited bonus, then captaincy.

    The credited bonus comes only from resolve_bonus(). Any bonus still
    carried inside the base (players on 60+ minutes) is taken out first so
    the same bonus is never counted twice.

    Args:
        pick: The realized pick occupying a starting slot
        stat: Live stats for the pick's player (None if not found)
        fixture: Fixture status of the player's match (None = not started)
        rules: Active scoring rules
        from_bench: Whether the pick came on as an automatic substitute

    Returns:
        PlayerPoints breakdown
    """
    multiplier = rules.captain_multiplier if pick.is_captain else 1

    if stat is None:
        return PlayerPoints(
            element=pick.element,
            position=pick.position,
            multiplier=multiplier,
            from_bench=from_bench,
        )

    fixture = fixture or FixtureStatus()

    base = compute_player_points(stat, rules)
    if not _bonus_is_provisional(stat, rules):
        base = max(0, base - max(0, to_int(stat.bonus)))

    bonus = resolve_bonus(stat.bonus, fixture.status, fixture.elapsed, rules)
    total = apply_captaincy(pick, base + bonus, rules)

    return PlayerPoints(
        element=pick.element,
        position=pick.position,
        base_points=base,
        bonus=bonus,
        multiplier=multiplier,
        total_points=total,
        from_bench=from_bench,
        found_in_stats=True,
    )
