"""Data models for the FPLive scoring engine."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .constants import (
    DEFAULT_CAPTAIN_MULTIPLIER,
    DEFAULT_ELEMENT_TYPES,
    FALLBACK_ELEMENT_TYPE,
    NOT_STARTED,
    STARTING_XI_SIZE,
)


def to_number(value: Any) -> float:
    """Coerce a raw stat value to a number; None, NaN and junk become 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def to_int(value: Any) -> int:
    """Coerce a raw counting stat to an int (truncating)."""
    return int(to_number(value))


@dataclass(frozen=True)
class ExplainEntry:
    """One line of the upstream points explanation, e.g. ('goals_scored', 5, 1)."""
    identifier: str
    points: int = 0
    value: float = 0


@dataclass(frozen=True)
class LivePlayerStat:
    """A player's live match performance for one gameweek."""
    element: int
    minutes: int = 0
    goals_scored: int = 0
    assists: int = 0
    clean_sheets: int = 0
    goals_conceded: int = 0
    own_goals: int = 0
    penalties_saved: int = 0
    penalties_missed: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    saves: int = 0
    bonus: int = 0
    bps: int = 0
    influence: float = 0.0
    creativity: float = 0.0
    threat: float = 0.0
    ict_index: float = 0.0
    starts: int = 0
    expected_goals: float = 0.0
    expected_assists: float = 0.0
    expected_goal_involvements: float = 0.0
    expected_goals_conceded: float = 0.0
    total_points: int = 0
    explain: Tuple[ExplainEntry, ...] = ()

    @classmethod
    def from_dict(cls, element: int, stats: Mapping[str, Any], explain=None) -> 'LivePlayerStat':
        """
        Build a stat record from an FPL-style ``stats`` dict.

        Missing or malformed numeric fields are stored as zero.

        Args:
            element: Player identifier
            stats: Raw stats mapping (e.g. ``{'minutes': 90, 'total_points': 6}``)
            explain: Optional iterable of ExplainEntry
        """
        values: Dict[str, Any] = {}
        for name, stat_field in cls.__dataclass_fields__.items():
            if name in ('element', 'explain'):
                continue
            raw = stats.get(name)
            values[name] = float(to_number(raw)) if stat_field.type is float else to_int(raw)
        return cls(element=element, explain=tuple(explain or ()), **values)


@dataclass(frozen=True)
class Pick:
    """One slot of a manager's 15-player squad."""
    element: int
    position: int  # 1-11 starting XI, 12-15 bench (bench order = sub priority)
    is_captain: bool = False
    is_vice_captain: bool = False
    multiplier: int = 1

    @property
    def is_starter(self) -> bool:
        return self.position <= STARTING_XI_SIZE


@dataclass(frozen=True)
class ElementType:
    """A player role and its starting-eleven count bounds."""
    id: int
    singular_name: str
    singular_name_short: str
    squad_select: int
    squad_min_play: int
    squad_max_play: int

    @classmethod
    def default(cls, type_id: int = FALLBACK_ELEMENT_TYPE) -> 'ElementType':
        """Default record for a role id (unknown ids get the midfielder record)."""
        if type_id not in DEFAULT_ELEMENT_TYPES:
            type_id = FALLBACK_ELEMENT_TYPE
        name, short, select, min_play, max_play = DEFAULT_ELEMENT_TYPES[type_id]
        return cls(type_id, name, short, select, min_play, max_play)


def default_element_types() -> Dict[int, ElementType]:
    """Role id -> ElementType for the standard four roles."""
    return {type_id: ElementType.default(type_id) for type_id in DEFAULT_ELEMENT_TYPES}


@dataclass(frozen=True)
class FixtureStatus:
    """Lifecycle state of the match a player is involved in."""
    status: str = NOT_STARTED  # not_started -> live -> finished
    elapsed: int = 0


@dataclass(frozen=True)
class ScoringRules:
    """Tunable scoring behaviour; every field defaults to the classic rules."""
    apply_autosubs: bool = True
    apply_bonus: bool = True
    bonus_reliable_at_60: bool = True
    captain_multiplier: int = DEFAULT_CAPTAIN_MULTIPLIER


DEFAULT_RULES = ScoringRules()


@dataclass(frozen=True)
class PlayerPoints:
    """Finalized points for one realized starter."""
    element: int
    position: int
    base_points: int = 0
    bonus: int = 0
    multiplier: int = 1
    total_points: int = 0
    from_bench: bool = False
    found_in_stats: bool = False


@dataclass
class SquadScore:
    """Container for a squad's gameweek score breakdown."""
    lineup: List[Pick] = field(default_factory=list)
    players: List[PlayerPoints] = field(default_factory=list)
    substitutions: List[Tuple[int, int]] = field(default_factory=list)  # (out, in)
    total: int = 0

    def player(self, element: int) -> Optional[PlayerPoints]:
        for player_points in self.players:
            if player_points.element == element:
                return player_points
        return None
