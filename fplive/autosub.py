"""Automatic substitutions for non-playing starters."""

import logging
from dataclasses import replace
from typing import Mapping, Optional

from .models import DEFAULT_RULES, ElementType, LivePlayerStat, Pick, ScoringRules, to_int
from .validators import count_roles, element_type_for, is_valid_formation

logger = logging.getLogger('fplive.autosub')


def _minutes(pick: Pick, live_stats: Mapping[int, LivePlayerStat]) -> int:
    stat = live_stats.get(pick.element)
    return to_int(stat.minutes) if stat is not None else 0


def _role_table(
    picks: list[Pick], element_types: Mapping[int, ElementType]
) -> dict[int, ElementType]:
    """Role id -> ElementType for every role present in the squad."""
    table: dict[int, ElementType] = {}
    for pick in picks:
        element_type = element_type_for(pick.element, element_types)
        table.setdefault(element_type.id, element_type)
    return table


def _substitute(starter: Pick, bench_pick: Pick) -> tuple[Pick, Pick]:
    """
    Swap a bench player into a starter's slot.

    The substitute takes the starter's position, captaincy flags and
    multiplier; the starter drops to the vacated bench slot with the bench
    player's flags.
    """
    incoming = replace(
        bench_pick,
        position=starter.position,
        is_captain=starter.is_captain,
        is_vice_captain=starter.is_vice_captain,
        multiplier=starter.multiplier,
    )
    outgoing = replace(
        starter,
        position=bench_pick.position,
        is_captain=bench_pick.is_captain,
        is_vice_captain=bench_pick.is_vice_captain,
        multiplier=bench_pick.multiplier,
    )
    return incoming, outgoing


def find_substitutions(
    picks: list[Pick],
    live_stats: Mapping[int, LivePlayerStat],
    element_types: Mapping[int, ElementType],
    rules: ScoringRules = DEFAULT_RULES,
) -> list[tuple[Pick, Pick]]:
    """
    Work out which bench players replace which non-playing starters.

    Starters are processed in position order. A starter with 0 minutes is
    replaced by the first unused bench player (bench order 12, 13, 14, 15)
    who has played and whose role keeps the formation legal. Role counts
    are updated after every accepted substitution.

    Args:
        picks: The squad's 15 picks
        live_stats: Player id -> live stats (missing = 0 minutes)
        element_types: Player id -> role record
        rules: Active scoring rules

    Returns:
        List of (starter, bench_pick) pairs in the order they were made
    """
    if not rules.apply_autosubs:
        return []

    starters = sorted((p for p in picks if p.is_starter), key=lambda p: p.position)
    bench = sorted((p for p in picks if not p.is_starter), key=lambda p: p.position)

    bounds = _role_table(picks, element_types)
    role_counts = count_roles(starters, element_types)
    used_bench: set[int] = set()
    substitutions: list[tuple[Pick, Pick]] = []

    for starter in starters:
        if _minutes(starter, live_stats) > 0:
            continue

        leaving_role = element_type_for(starter.element, element_types).id
        chosen: Optional[Pick] = None

        for bench_pick in bench:
            if bench_pick.position in used_bench:
                continue
            if _minutes(bench_pick, live_stats) <= 0:
                continue

            entering_role = element_type_for(bench_pick.element, element_types).id
            if not is_valid_formation(role_counts, bounds, leaving_role, entering_role):
                logger.debug(
                    f'Rejected sub {bench_pick.element} for {starter.element}: '
                    f'role {entering_role} for {leaving_role} breaks formation'
                )
                continue

            chosen = bench_pick
            role_counts[leaving_role] -= 1
            role_counts[entering_role] += 1
            break

        if chosen is None:
            logger.debug(f'No eligible substitute for {starter.element} (position {starter.position})')
            continue

        used_bench.add(chosen.position)
        substitutions.append((starter, chosen))
        logger.debug(
            f'Autosub: {chosen.element} (bench {chosen.position}) '
            f'replaces {starter.element} (position {starter.position})'
        )

    return substitutions


def apply_auto_subs(
    picks: list[Pick],
    live_stats: Mapping[int, LivePlayerStat],
    element_types: Mapping[int, ElementType],
    rules: ScoringRules = DEFAULT_RULES,
) -> list[Pick]:
    """
    Produce the realized line-up after automatic substitutions.

    Every original squad position stays occupied by exactly one player:
    substitutes move into the vacated starting slots and the replaced
    starters drop into the bench slots they came from. Unused bench picks
    are kept as they were.

    Args:
        picks: The squad's 15 picks
        live_stats: Player id -> live stats
        element_types: Player id -> role record
        rules: Active scoring rules

    Returns:
        New list of picks sorted by position (input unchanged when
        autosubs are disabled or nobody needs replacing)
    """
    if not rules.apply_autosubs:
        return list(picks)

    return build_lineup(picks, find_substitutions(picks, live_stats, element_types, rules))


def build_lineup(picks: list[Pick], substitutions: list[tuple[Pick, Pick]]) -> list[Pick]:
    """Apply (starter, bench_pick) swaps to a squad, sorted by position."""
    by_position = {p.position: p for p in picks}

    for starter, bench_pick in substitutions:
        incoming, outgoing = _substitute(starter, bench_pick)
        by_position[incoming.position] = incoming
        by_position[outgoing.position] = outgoing

    return [by_position[position] for position in sorted(by_position)]
