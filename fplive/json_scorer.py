"""JSON replay scoring.

Scores squads from saved FPL payload files (bootstrap-static, fixtures,
event live) plus a squads file, without touching the network.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .live_data import build_element_type_map, build_fixture_status_map, build_live_stats_map
from .models import Pick, ScoringRules, SquadScore
from .schemas import BootstrapStatic, FixturePayload, LiveEventResponse, SquadsFile
from .scorer import score_squads
from .utils import parse_payload, read_payload_file, write_json
from .validators import validate_all_scores

logger = logging.getLogger('fplive.json_scorer')


def load_fixtures(fixtures_path: str | Path) -> list[FixturePayload]:
    """Load a saved ``fixtures/`` payload (a JSON list)."""
    data = read_payload_file(fixtures_path)
    if not isinstance(data, list):
        raise ValueError(f'Fixtures file {fixtures_path} must contain a JSON list')
    return [parse_payload(f, FixturePayload, str(fixtures_path)) for f in data]


def load_squads(squads_path: str | Path, gameweek: Optional[int] = None) -> dict[str, list[Pick]]:
    """Load the squads file: label -> picks sorted by position."""
    squads_file = read_payload_file(squads_path, SquadsFile)

    if gameweek is not None and squads_file.gameweek not in (None, gameweek):
        logger.warning(
            f"Squads file gameweek ({squads_file.gameweek}) doesn't match expected gameweek ({gameweek})"
        )

    return {
        label: sorted((p.to_model() for p in picks), key=lambda p: p.position)
        for label, picks in squads_file.squads.items()
    }


def score_gameweek_from_json(
    live_path: str | Path,
    bootstrap_path: str | Path,
    fixtures_path: str | Path,
    squads_path: str | Path,
    gameweek: Optional[int] = None,
    rules: Optional[ScoringRules] = None,
) -> dict[str, SquadScore]:
    """
    Score every squad in a squads file against saved gameweek payloads.

    Args:
        live_path: Saved ``event/{gw}/live/`` payload
        bootstrap_path: Saved ``bootstrap-static/`` payload
        fixtures_path: Saved ``fixtures/`` payload
        squads_path: Squads file (see SquadsFile)
        gameweek: Gameweek being scored (filters fixtures when given)
        rules: Scoring rules (defaults if None)

    Returns:
        Dict mapping squad label to SquadScore
    """
    live = read_payload_file(live_path, LiveEventResponse)
    bootstrap = read_payload_file(bootstrap_path, BootstrapStatic)
    fixtures = load_fixtures(fixtures_path)
    squads = load_squads(squads_path, gameweek)

    logger.info(f'Scoring {len(squads)} squads against {len(live.elements)} live players')

    element_types = build_element_type_map(bootstrap)
    results = score_squads(
        squads,
        build_live_stats_map(live),
        build_fixture_status_map(fixtures, bootstrap, gameweek),
        element_types,
        rules,
    )

    errors, warnings = validate_all_scores(results, element_types)
    for message in errors:
        logger.error(message)
    for message in warnings:
        logger.warning(message)

    return results


def save_gameweek_scores(
    output_path: str | Path,
    gameweek: int,
    results: dict[Any, SquadScore],
) -> dict[str, Any]:
    """Save scored squads to JSON, ranked by total.

    Returns:
        The data written
    """
    squads_data = []

    for label, score in results.items():
        squads_data.append(
            {
                'label': str(label),
                'total_points': score.total,
                'autosubs': [{'out': out, 'in': sub_in} for out, sub_in in score.substitutions],
                'players': [
                    {
                        'element': p.element,
                        'position': p.position,
                        'base_points': p.base_points,
                        'bonus': p.bonus,
                        'multiplier': p.multiplier,
                        'points': p.total_points,
                        'from_bench': p.from_bench,
                    }
                    for p in score.players
                ],
            }
        )

    squads_data.sort(key=lambda s: s['total_points'], reverse=True)
    for rank, squad in enumerate(squads_data, 1):
        squad['rank'] = rank

    week_data = {
        'gameweek': gameweek,
        'scored_at': datetime.now(timezone.utc).isoformat(),
        'squads': squads_data,
    }

    write_json(output_path, week_data)
    logger.info(f'Scores saved to {output_path}')
    return week_data
