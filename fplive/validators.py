"""Validation functions for formations, squads, and scoring results."""

from collections import Counter
from typing import Iterable, Mapping, Optional

from .constants import BENCH_POSITIONS, FALLBACK_ELEMENT_TYPE, SQUAD_SIZE, STARTING_XI_SIZE
from .models import ElementType, Pick, PlayerPoints, SquadScore, default_element_types


def role_bounds(type_id: int, bounds: Mapping[int, ElementType]) -> tuple[int, int]:
    """(min, max) starters allowed for a role, falling back to the default table."""
    element_type = bounds.get(type_id) or ElementType.default(type_id)
    return element_type.squad_min_play, element_type.squad_max_play


def element_type_for(element: int, element_types: Mapping[int, ElementType]) -> ElementType:
    """Role record for a player, defaulting to midfielder when unknown."""
    return element_types.get(element) or ElementType.default(FALLBACK_ELEMENT_TYPE)


def count_roles(
    picks: Iterable[Pick], element_types: Mapping[int, ElementType]
) -> Counter:
    """Count role ids among the given picks."""
    return Counter(element_type_for(p.element, element_types).id for p in picks)


def is_valid_formation(
    role_counts: Mapping[int, int],
    bounds: Mapping[int, ElementType],
    leaving_role: int,
    entering_role: int,
) -> bool:
    """
    Check that swapping one role for another keeps the eleven legal.

    Only roles whose count changes are checked: the leaving role must not
    drop below its minimum and the entering role must not exceed its
    maximum. A like-for-like swap never changes the shape.

    Args:
        role_counts: Running role id -> count for the current eleven
        bounds: Role id -> ElementType carrying min/max play
        leaving_role: Role id of the starter being replaced
        entering_role: Role id of the bench player coming on

    Returns:
        True if the substitution is allowed
    """
    if leaving_role == entering_role:
        return True

    leaving_min, _ = role_bounds(leaving_role, bounds)
    _, entering_max = role_bounds(entering_role, bounds)

    if role_counts.get(leaving_role, 0) - 1 < leaving_min:
        return False
    if role_counts.get(entering_role, 0) + 1 > entering_max:
        return False

    return True


def validate_formation(
    picks: Iterable[Pick], element_types: Mapping[int, ElementType]
) -> list[str]:
    """
    Check a starting eleven's role composition against role bounds.

    Args:
        picks: Squad picks (only positions 1-11 are considered)
        element_types: Player id -> ElementType

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    starters = [p for p in picks if p.is_starter]
    counts = count_roles(starters, element_types)

    bounds = default_element_types()
    for pick in starters:
        element_type = element_type_for(pick.element, element_types)
        bounds[element_type.id] = element_type

    for type_id in sorted(bounds):
        element_type = bounds[type_id]
        count = counts.get(type_id, 0)
        if not element_type.squad_min_play <= count <= element_type.squad_max_play:
            errors.append(
                f'{count} {element_type.singular_name_short} in starting XI '
                f'(allowed {element_type.squad_min_play}-{element_type.squad_max_play})'
            )

    return errors


def validate_squad(picks: list[Pick]) -> list[str]:
    """
    Validate the shape of a squad's picks.

    Checks:
    - Exactly 15 picks
    - Positions are a permutation of 1-15
    - No player picked twice
    - Exactly one captain, at most one vice-captain, not the same player

    Args:
        picks: Squad picks for a gameweek

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if len(picks) != SQUAD_SIZE:
        errors.append(f'Squad has {len(picks)} picks (expected {SQUAD_SIZE})')

    positions = sorted(p.position for p in picks)
    if positions != list(range(1, SQUAD_SIZE + 1)):
        errors.append(f'Squad positions are not a permutation of 1-{SQUAD_SIZE}: {positions}')

    elements = Counter(p.element for p in picks)
    duplicates = sorted(e for e, n in elements.items() if n > 1)
    if duplicates:
        errors.append(f'Squad has duplicate players: {", ".join(str(d) for d in duplicates)}')

    captains = [p for p in picks if p.is_captain]
    if len(captains) != 1:
        errors.append(f'Squad has {len(captains)} captains (expected 1)')

    vice_captains = [p for p in picks if p.is_vice_captain]
    if len(vice_captains) > 1:
        errors.append(f'Squad has {len(vice_captains)} vice-captains (max 1)')
    elif captains and vice_captains and captains[0].element == vice_captains[0].element:
        errors.append(f'Player {captains[0].element} is both captain and vice-captain')

    return errors


def validate_squad_score(
    label: str,
    score: SquadScore,
    zero_share_threshold: float = 0.5,
    max_total: int = 250,
) -> list[str]:
    """
    Check that a squad's score looks sane.

    Sanity checks:
    - Realized line-up has 11 starters and keeps the bench slots
    - Total within a plausible range (0 to max_total)
    - Total equals the sum of the starters' finalized points
    - Share of zero-point starters not unusually large

    Args:
        label: Name used in messages (e.g. entry id or manager)
        score: SquadScore from score_squad()
        zero_share_threshold: Warn when more than this share of starters scored 0
        max_total: Warn above this total

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    starters = [p for p in score.lineup if p.is_starter]
    if score.lineup and len(starters) != STARTING_XI_SIZE:
        warnings.append(f'{label} line-up has {len(starters)} starters (expected {STARTING_XI_SIZE})')
    bench = sorted(p.position for p in score.lineup if not p.is_starter)
    if score.lineup and tuple(bench) != BENCH_POSITIONS:
        warnings.append(f'{label} bench positions are {bench}')

    if score.total < 0:
        warnings.append(f'{label} scored {score.total} pts (negative total - check for scoring bug)')
    elif score.total > max_total:
        warnings.append(f'{label} scored {score.total} pts (unusually high - check for scoring bug)')

    player_sum = sum(p.total_points for p in score.players)
    if player_sum != score.total:
        warnings.append(f'{label} player sum ({player_sum}) != total ({score.total})')

    if score.players:
        zero_count = sum(1 for p in score.players if p.total_points == 0)
        share = zero_count / len(score.players)
        if share > zero_share_threshold:
            warnings.append(
                f'{label} has {zero_count}/{len(score.players)} starters on 0 pts '
                f'(check live data coverage)'
            )

    return warnings


def validate_player_points(points: PlayerPoints, max_points: Optional[int] = 60) -> list[str]:
    """Flag a single starter's finalized points if they look implausible."""
    warnings = []
    if points.total_points < 0:
        warnings.append(f'Player {points.element} has negative points: {points.total_points}')
    if max_points is not None and points.total_points > max_points:
        warnings.append(
            f'Player {points.element} scored {points.total_points} pts (unusually high)'
        )
    if points.total_points != (points.base_points + points.bonus) * points.multiplier:
        warnings.append(
            f'Player {points.element} breakdown ({points.base_points}+{points.bonus})'
            f'x{points.multiplier} != total ({points.total_points})'
        )
    return warnings


def validate_all_scores(
    squad_scores: Mapping[str, SquadScore],
    element_types: Optional[Mapping[int, ElementType]] = None,
) -> tuple[list[str], list[str]]:
    """
    Validate all squad scores for a gameweek.

    Args:
        squad_scores: Dict of label -> SquadScore
        element_types: Player id -> ElementType; when given, each realized
            starting eleven is also checked for a legal formation

    Returns:
        Tuple of (errors, warnings)
        - errors: Problems with the realized line-ups
        - warnings: Issues to review but not block publishing
    """
    errors: list[str] = []
    warnings: list[str] = []

    for label, score in squad_scores.items():
        for message in validate_squad(score.lineup):
            errors.append(f'{label}: {message}')
        if element_types is not None:
            for message in validate_formation(score.lineup, element_types):
                errors.append(f'{label}: {message}')
        for player_points in score.players:
            warnings.extend(validate_player_points(player_points))
        warnings.extend(validate_squad_score(label, score))

    return errors, warnings
