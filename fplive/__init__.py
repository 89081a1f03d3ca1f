from .models import (
    ElementType,
    FixtureStatus,
    LivePlayerStat,
    Pick,
    PlayerPoints,
    ScoringRules,
    SquadScore,
    DEFAULT_RULES,
)
from .scoring import (
    compute_player_points,
    resolve_bonus,
    apply_captaincy,
    score_player,
)
from .validators import (
    is_valid_formation,
    validate_formation,
    validate_squad,
    validate_squad_score,
    validate_all_scores,
)
from .autosub import apply_auto_subs, find_substitutions
from .scorer import compute_squad_points, score_squad, score_squads
from .config import get_rules, load_rules
from .data_fetcher import FPLDataFetcher
from .json_scorer import score_gameweek_from_json, save_gameweek_scores

__all__ = [
    # Models
    'ElementType',
    'FixtureStatus',
    'LivePlayerStat',
    'Pick',
    'PlayerPoints',
    'ScoringRules',
    'SquadScore',
    'DEFAULT_RULES',
    # Per-player scoring
    'compute_player_points',
    'resolve_bonus',
    'apply_captaincy',
    'score_player',
    # Validation
    'is_valid_formation',
    'validate_formation',
    'validate_squad',
    'validate_squad_score',
    'validate_all_scores',
    # Autosubs
    'apply_auto_subs',
    'find_substitutions',
    # Squad scoring
    'compute_squad_points',
    'score_squad',
    'score_squads',
    # Configuration
    'get_rules',
    'load_rules',
    # Live API / JSON replay
    'FPLDataFetcher',
    'score_gameweek_from_json',
    'save_gameweek_scores',
]
