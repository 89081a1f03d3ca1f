"""Scoring rules configuration management."""

import logging
from functools import lru_cache
from pathlib import Path

from .models import ScoringRules
from .schemas import ScoringRulesConfig
from .utils import read_payload_file

logger = logging.getLogger('fplive.config')

DEFAULT_RULES_PATH = Path(__file__).parent.parent / 'data' / 'scoring_rules.json'


def load_rules(path: Path | str) -> ScoringRules:
    """
    Load scoring rules from a JSON file.

    Fields left out of the file keep their defaults (autosubs on, bonus on,
    bonus reliable at 60 minutes, captain multiplier 2).

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has an invalid structure
    """
    return read_payload_file(path, ScoringRulesConfig).to_rules()


@lru_cache(maxsize=1)
def get_rules() -> ScoringRules:
    """
    Load scoring rules from data/scoring_rules.json.

    Rules are cached after first load. A missing file means the default
    rules.

    Example:
        from fplive.config import get_rules
        rules = get_rules()
        print(f"Captain multiplier: {rules.captain_multiplier}")
    """
    if not DEFAULT_RULES_PATH.exists():
        logger.debug(f'No rules file at {DEFAULT_RULES_PATH}, using defaults')
        return ScoringRules()
    return load_rules(DEFAULT_RULES_PATH)


def clear_config_cache() -> None:
    """Clear the cached rules so the next get_rules() re-reads the file."""
    get_rules.cache_clear()
