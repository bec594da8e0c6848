# courtside/models/types.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel
from typing_extensions import TypedDict

League = Literal["nba", "ncaa_mb"]


class _Frozen(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class GameStatus(str, Enum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    FINAL = "final"


class ShotType(str, Enum):
    THREE_POINT = "THREE_POINT"
    FREE_THROW = "FREE_THROW"
    DUNK = "DUNK"
    LAYUP = "LAYUP"
    ALLEY_OOP = "ALLEY_OOP"
    HOOK = "HOOK"
    JUMP_SHOT = "JUMP_SHOT"


class LeadersShape(str, Enum):
    EMPTY = "empty"
    FLAT = "flat"
    TEAM_GROUPED = "team_grouped"
    UNKNOWN = "unknown"


# -----------------------------------------------------------
# Scoreboard
# -----------------------------------------------------------
class TeamSide(_Frozen):
    team_id: Optional[str] = None
    display_name: str = ""
    short_name: str = ""
    abbreviation: str = ""
    logo_url: str = ""
    score: Optional[int] = None
    record: str = ""
    rank: Optional[int] = None


class Game(_Frozen):
    id: Optional[str] = None
    league: League
    name: str = ""
    short_name: str = ""
    date: Optional[datetime] = None
    status: GameStatus
    status_text: str = ""
    period: int = 0
    clock: str = ""
    venue: str = ""
    networks: List[str]
    odds: Optional[str] = None
    home: TeamSide
    away: TeamSide

    @computed_field
    @property
    def is_scheduled(self) -> bool:
        return self.status is GameStatus.SCHEDULED

    @computed_field
    @property
    def is_live(self) -> bool:
        return self.status is GameStatus.LIVE

    @computed_field
    @property
    def is_final(self) -> bool:
        return self.status is GameStatus.FINAL


class Linescores(_Frozen):
    headers: List[str]
    home: List[Optional[int]]
    away: List[Optional[int]]


# -----------------------------------------------------------
# Summary: leaders + box score
# -----------------------------------------------------------
class LeaderEntry(_Frozen):
    player_name: str
    team_abbreviation: str = ""
    statistic_name: str = ""
    display_value: str = ""
    headshot_url: Optional[str] = None


class PlayerLine(_Frozen):
    athlete_id: Optional[str] = None
    short_name: str
    display_name: str = ""
    headshot_url: Optional[str] = None
    team_abbreviation: str = ""
    is_starter: bool = False
    did_not_play: bool = False
    stats: Dict[str, str]


class TeamBoxScore(_Frozen):
    team_abbreviation: str = ""
    team_name: str = ""
    players: List[PlayerLine]


class AthleteRef(_Frozen):
    display_name: str = ""
    short_name: str = ""
    headshot_url: Optional[str] = None
    team_abbreviation: str = ""


# -----------------------------------------------------------
# Play-by-play
# -----------------------------------------------------------
class Play(_Frozen):
    sequence: int
    period_number: int = 0
    period_label: str = "PRE"
    clock_display: str = ""
    team_abbreviation: Optional[str] = None
    description: str = ""
    is_scoring_play: bool = False
    score_value: int = 0
    away_score_after: int = 0
    home_score_after: int = 0
    primary_participant_name: Optional[str] = None
    primary_participant_headshot: Optional[str] = None
    shot_type: Optional[ShotType] = None


class Snapshot(_Frozen):
    away_score: int
    home_score: int
    period_label: str
    clock_display: str = ""
    play_text: str = ""
    team_abbreviation: str = ""
    momentum: float = 0.0


class FirstScorer(_Frozen):
    player_name: Optional[str] = None
    team_abbreviation: Optional[str] = None
    description: str = ""
    headshot_url: Optional[str] = None
    away_score: int
    home_score: int
    period_label: str = ""
    clock_display: str = ""
    shot_type: ShotType = ShotType.JUMP_SHOT


class PlayFeed(_Frozen):
    plays: List[Play]
    snapshots: List[Snapshot]
    first_scorer: Optional[FirstScorer] = None


# -----------------------------------------------------------
# Route envelopes
# -----------------------------------------------------------
class GameDetail(TypedDict):
    game: Game
    plays: List[Play]
    snapshots: List[Snapshot]
    firstScorer: Optional[FirstScorer]
    leaders: List[LeaderEntry]
    boxScore: List[TeamBoxScore]
    spotlight: List[PlayerLine]
    linescores: Optional[Linescores]


class FirstPointsRow(TypedDict):
    game: Game
    firstScorer: Optional[FirstScorer]
