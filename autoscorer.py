#!/usr/bin/env python3
"""
FPLive Autoscorer CLI

Scores FPL squads for a gameweek with live bonus gating, automatic
substitutions and captaincy.

Local replay files come from {data-dir}/gw_{N}/ (bootstrap.json,
fixtures.json, live.json, squads.json). Pass --entry to score entries
straight from the FPL API instead.

Usage:
    python autoscorer.py --gameweek 12
    python autoscorer.py --gameweek 12 --entry 164475 --entry 148669
    python autoscorer.py --gameweek 12 --no-autosubs --output scores/gw_12.json
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from fplive import (
    FPLDataFetcher,
    get_rules,
    load_rules,
    save_gameweek_scores,
    score_gameweek_from_json,
    score_squads,
)
from fplive.logging_config import setup_logging


def main():
    parser = argparse.ArgumentParser(description="FPLive gameweek autoscorer")
    parser.add_argument(
        "--gameweek", "-g",
        type=int,
        required=True,
        help="Gameweek number to score",
    )
    parser.add_argument(
        "--data-dir", "-d",
        default="data",
        help="Path to data directory with saved gameweek payloads",
    )
    parser.add_argument(
        "--entry", "-e",
        type=int,
        action="append",
        default=[],
        help="FPL entry id to fetch and score live (repeatable)",
    )
    parser.add_argument(
        "--rules", "-r",
        default=None,
        help="Scoring rules JSON file (defaults to data/scoring_rules.json)",
    )
    parser.add_argument(
        "--no-autosubs",
        action="store_true",
        help="Disable automatic substitutions",
    )
    parser.add_argument(
        "--no-bonus",
        action="store_true",
        help="Do not award bonus points",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for scored gameweek JSON",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors",
    )

    args = parser.parse_args()

    logger = setup_logging(level=logging.WARNING if args.quiet else logging.INFO)

    rules = load_rules(args.rules) if args.rules else get_rules()
    if args.no_autosubs:
        rules = replace(rules, apply_autosubs=False)
    if args.no_bonus:
        rules = replace(rules, apply_bonus=False)

    if args.entry:
        fetcher = FPLDataFetcher(args.gameweek)
        squads = {str(entry_id): fetcher.get_picks(entry_id) for entry_id in args.entry}
        results = score_squads(
            squads,
            fetcher.live_stats,
            fetcher.fixture_statuses,
            fetcher.element_types,
            rules,
        )
    else:
        gw_dir = Path(args.data_dir) / f"gw_{args.gameweek}"
        paths = {name: gw_dir / f"{name}.json" for name in ("live", "bootstrap", "fixtures", "squads")}
        missing = [str(p) for p in paths.values() if not p.exists()]
        if missing:
            logger.error(f"Missing gameweek files: {', '.join(missing)}")
            sys.exit(1)

        results = score_gameweek_from_json(
            live_path=paths["live"],
            bootstrap_path=paths["bootstrap"],
            fixtures_path=paths["fixtures"],
            squads_path=paths["squads"],
            gameweek=args.gameweek,
            rules=rules,
        )

    logger.info("=" * 60)
    logger.info(f"GAMEWEEK {args.gameweek} SCORES")
    logger.info("=" * 60)

    ranked = sorted(results.items(), key=lambda item: item[1].total, reverse=True)
    for rank, (label, score) in enumerate(ranked, 1):
        subs = f" ({len(score.substitutions)} autosubs)" if score.substitutions else ""
        logger.info(f"  {rank}. {label}: {score.total} pts{subs}")

    if args.output:
        save_gameweek_scores(args.output, args.gameweek, results)


if __name__ == "__main__":
    main()
