"""Pydantic schemas for FPL API payloads and scoring configuration."""

from dataclasses import replace
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .constants import GOALKEEPER, SQUAD_SIZE
from .models import (
    ElementType,
    ExplainEntry,
    LivePlayerStat,
    Pick,
    ScoringRules,
    to_int,
    to_number,
)


class LiveStatsPayload(BaseModel):
    """The ``stats`` block of one element in ``event/{gw}/live/``."""

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

    @field_validator(
        'influence',
        'creativity',
        'threat',
        'ict_index',
        'expected_goals',
        'expected_assists',
        'expected_goal_involvements',
        'expected_goals_conceded',
        mode='before',
    )
    @classmethod
    def coerce_metric(cls, v):
        """FPL sends metrics as strings like '12.4'; junk becomes 0."""
        return float(to_number(v))

    @field_validator(
        'minutes',
        'goals_scored',
        'assists',
        'clean_sheets',
        'goals_conceded',
        'own_goals',
        'penalties_saved',
        'penalties_missed',
        'yellow_cards',
        'red_cards',
        'saves',
        'bonus',
        'bps',
        'starts',
        'total_points',
        mode='before',
    )
    @classmethod
    def coerce_count(cls, v):
        """Missing or malformed counting stats become 0."""
        return to_int(v)

    class Config:
        extra = 'ignore'


class ExplainStatPayload(BaseModel):
    """One scoring line of the upstream explanation."""

    identifier: str
    points: int = 0
    value: float = 0

    class Config:
        extra = 'ignore'


class ExplainFixturePayload(BaseModel):
    """Points explanation for one fixture."""

    fixture: int | None = None
    stats: list[ExplainStatPayload] = Field(default_factory=list)

    class Config:
        extra = 'ignore'


class LiveElement(BaseModel):
    """A player entry in the live event payload."""

    id: int = Field(..., ge=1)
    stats: LiveStatsPayload = Field(default_factory=LiveStatsPayload)
    explain: list[ExplainFixturePayload] = Field(default_factory=list)

    class Config:
        extra = 'ignore'

    def to_model(self) -> LivePlayerStat:
        explain = [
            ExplainEntry(identifier=s.identifier, points=s.points, value=s.value)
            for fixture in self.explain
            for s in fixture.stats
        ]
        return LivePlayerStat.from_dict(self.id, self.stats.model_dump(), explain)


class LiveEventResponse(BaseModel):
    """Complete ``event/{gw}/live/`` payload."""

    elements: list[LiveElement]

    class Config:
        extra = 'ignore'


class PickPayload(BaseModel):
    """A pick in ``entry/{id}/event/{gw}/picks/``."""

    element: int = Field(..., ge=1)
    position: int = Field(..., ge=1, le=SQUAD_SIZE)
    is_captain: bool = False
    is_vice_captain: bool = False
    multiplier: int = Field(default=1, ge=0, le=3)

    class Config:
        extra = 'ignore'

    def to_model(self) -> Pick:
        return Pick(
            element=self.element,
            position=self.position,
            is_captain=self.is_captain,
            is_vice_captain=self.is_vice_captain,
            multiplier=self.multiplier,
        )


class EntryPicksResponse(BaseModel):
    """Complete picks payload for one entry and gameweek."""

    picks: list[PickPayload]
    active_chip: str | None = None

    @field_validator('picks')
    @classmethod
    def validate_unique_positions(cls, v):
        """Ensure no two picks claim the same squad position."""
        positions = [p.position for p in v]
        if len(positions) != len(set(positions)):
            raise ValueError(f'Duplicate squad positions: {sorted(positions)}')
        return v

    class Config:
        extra = 'ignore'


class ElementTypePayload(BaseModel):
    """A role in ``bootstrap-static/`` ``element_types``."""

    id: int = Field(..., ge=GOALKEEPER)
    singular_name: str = Field(..., min_length=1)
    singular_name_short: str = Field(..., min_length=1)
    squad_select: int = Field(..., ge=0)
    squad_min_play: int = Field(..., ge=0)
    squad_max_play: int = Field(..., ge=0)

    class Config:
        extra = 'ignore'

    def to_model(self) -> ElementType:
        return ElementType(
            id=self.id,
            singular_name=self.singular_name,
            singular_name_short=self.singular_name_short,
            squad_select=self.squad_select,
            squad_min_play=self.squad_min_play,
            squad_max_play=self.squad_max_play,
        )


class BootstrapElement(BaseModel):
    """A player in ``bootstrap-static/`` ``elements``."""

    id: int = Field(..., ge=1)
    element_type: int = Field(..., ge=GOALKEEPER)
    team: int
    web_name: str = ''

    class Config:
        extra = 'ignore'


class BootstrapStatic(BaseModel):
    """The parts of ``bootstrap-static/`` the scorer needs."""

    element_types: list[ElementTypePayload]
    elements: list[BootstrapElement] = Field(default_factory=list)

    class Config:
        extra = 'ignore'


class FixturePayload(BaseModel):
    """A fixture from ``fixtures/``."""

    id: int
    event: int | None = None
    team_h: int
    team_a: int
    started: bool | None = False
    finished: bool = False
    finished_provisional: bool = False
    minutes: int = 0

    @field_validator('minutes', mode='before')
    @classmethod
    def coerce_minutes(cls, v):
        return to_int(v)

    class Config:
        extra = 'ignore'


class ScoringRulesConfig(BaseModel):
    """Scoring rule overrides; absent fields keep the defaults."""

    apply_autosubs: bool | None = None
    apply_bonus: bool | None = None
    bonus_reliable_at_60: bool | None = None
    captain_multiplier: int | None = Field(default=None, ge=1, le=3)

    class Config:
        extra = 'forbid'

    def to_rules(self, base: ScoringRules | None = None) -> ScoringRules:
        """Overlay the configured fields on ``base`` (defaults if None)."""
        base = base or ScoringRules()
        overrides: dict[str, Any] = self.model_dump(exclude_none=True)
        return replace(base, **overrides)


class SquadsFile(BaseModel):
    """Replay file: squads to score keyed by label (entry id, manager, ...)."""

    gameweek: int | None = Field(default=None, ge=1, le=38)
    squads: dict[str, list[PickPayload]]

    @field_validator('squads')
    @classmethod
    def validate_squad_sizes(cls, v):
        """Ensure every squad has 15 picks."""
        for label, picks in v.items():
            if len(picks) != SQUAD_SIZE:
                raise ValueError(f'Squad {label} has {len(picks)} picks (expected {SQUAD_SIZE})')
        return v

    class Config:
        extra = 'forbid'
