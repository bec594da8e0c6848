# courtside/services/plays.py
"""
Play-by-play feed.

ESPN's summary `plays` list is oldest-first. From it we derive, in one pass
each and without any state outside the call:

  - the normalized Play sequence (cumulative scores carried forward)
  - scoring Snapshots for the momentum tracker
  - the first scorer
  - a shot type per scoring play, guessed from the play text
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from courtside.models.types import AthleteRef, FirstScorer, Play, PlayFeed, ShotType, Snapshot
from courtside.services.games import as_dict, as_list, period_label, to_int, to_str

logger = logging.getLogger("courtside.plays")

# Momentum never divides by less than this, so a 2-0 start is not a full swing.
MOMENTUM_FLOOR = 20

# First match wins; the order is part of the contract.
SHOT_PATTERNS: Tuple[Tuple[ShotType, Tuple[str, ...]], ...] = (
    (ShotType.THREE_POINT, ("three point", "three-point", "3-pt", "3pt")),
    (ShotType.FREE_THROW, ("free throw",)),
    (ShotType.DUNK, ("dunk",)),
    (ShotType.LAYUP, ("layup",)),
    (ShotType.ALLEY_OOP, ("alley",)),
    (ShotType.HOOK, ("hook",)),
)


def classify_shot_type(description: Optional[str]) -> ShotType:
    """Case-insensitive substring match in SHOT_PATTERNS order, else JUMP_SHOT."""
    text = (description or "").lower()
    for shot_type, needles in SHOT_PATTERNS:
        if any(n in text for n in needles):
            return shot_type
    return ShotType.JUMP_SHOT


# -----------------------------------------------------------
# Field readers (period and clock come as objects or scalars)
# -----------------------------------------------------------
def _period(raw: Dict[str, Any]) -> int:
    value = raw.get("period")
    if isinstance(value, dict):
        value = value.get("number")
    n = to_int(value)
    return n if n is not None and n > 0 else 0


def _clock(raw: Dict[str, Any]) -> str:
    value = raw.get("clock")
    if isinstance(value, dict):
        value = value.get("displayValue")
    return to_str(value)


def _team_abbr(raw: Dict[str, Any], teams: Mapping[str, str]) -> Optional[str]:
    team = as_dict(raw.get("team"))
    abbr = to_str(team.get("abbreviation"))
    if not abbr and team.get("id") is not None:
        abbr = teams.get(to_str(team.get("id")), "")
    return abbr or None


def _participant(raw: Dict[str, Any], athletes: Mapping[str, AthleteRef]) -> Tuple[Optional[str], Optional[str]]:
    """(name, headshot) of the first listed participant."""
    participants = as_list(raw.get("participants"))
    if not participants:
        return None, None
    athlete = as_dict(as_dict(participants[0]).get("athlete"))
    name = to_str(athlete.get("displayName") or athlete.get("shortName"))
    headshot = as_dict(athlete.get("headshot")).get("href")
    ref = athletes.get(to_str(athlete.get("id")))
    if ref is not None:
        name = name or ref.display_name or ref.short_name
        headshot = headshot or ref.headshot_url
    return name or None, headshot if isinstance(headshot, str) and headshot else None


# -----------------------------------------------------------
# Derivations
# -----------------------------------------------------------
def normalize_plays(
    raw_plays: Any,
    athletes: Optional[Mapping[str, AthleteRef]] = None,
    teams: Optional[Mapping[str, str]] = None,
) -> List[Play]:
    """
    Raw plays -> Play, feed order preserved.

    Scores are cumulative and carried forward from the last play that had
    them (0-0 before the first). A score lower than the running value is
    ignored so the sequence never goes down.
    """
    athletes = athletes or {}
    teams = teams or {}
    away, home = 0, 0
    out: List[Play] = []

    for seq, item in enumerate(as_list(raw_plays)):
        if not isinstance(item, dict):
            logger.debug("skipping non-object play at index %d", seq)
            continue
        raw = item

        raw_away, raw_home = to_int(raw.get("awayScore")), to_int(raw.get("homeScore"))
        if (raw_away is not None and raw_away < away) or (raw_home is not None and raw_home < home):
            logger.debug("play %d: score went down to %s-%s, keeping %d-%d", seq, raw_away, raw_home, away, home)
        away = max(away, raw_away or 0)
        home = max(home, raw_home or 0)

        period = _period(raw)
        description = to_str(raw.get("text") or raw.get("description"))
        scoring = bool(raw.get("scoringPlay"))
        name, headshot = _participant(raw, athletes)

        out.append(
            Play(
                sequence=seq,
                period_number=period,
                period_label=period_label(period),
                clock_display=_clock(raw),
                team_abbreviation=_team_abbr(raw, teams),
                description=description,
                is_scoring_play=scoring,
                score_value=to_int(raw.get("scoreValue")) or 0,
                away_score_after=away,
                home_score_after=home,
                primary_participant_name=name,
                primary_participant_headshot=headshot,
                shot_type=classify_shot_type(description) if scoring else None,
            )
        )
    return out


def build_snapshots(plays: Sequence[Play]) -> List[Snapshot]:
    """
    START (0-0) followed by one Snapshot per scoring play, in feed order.

    momentum = (home - away) / max(largest |home - away| so far, MOMENTUM_FLOOR)
    """
    snapshots = [Snapshot(away_score=0, home_score=0, period_label="START")]
    max_abs_diff = 0

    for play in plays:
        if not play.is_scoring_play:
            continue
        diff = play.home_score_after - play.away_score_after
        max_abs_diff = max(max_abs_diff, abs(diff))
        snapshots.append(
            Snapshot(
                away_score=play.away_score_after,
                home_score=play.home_score_after,
                period_label=play.period_label,
                clock_display=play.clock_display,
                play_text=play.description,
                team_abbreviation=play.team_abbreviation or "",
                momentum=diff / max(max_abs_diff, MOMENTUM_FLOOR),
            )
        )
    return snapshots


def first_scorer(plays: Sequence[Play]) -> Optional[FirstScorer]:
    """First scoring play in feed order, or None while nobody has scored."""
    play = next((p for p in plays if p.is_scoring_play), None)
    if play is None:
        return None
    return FirstScorer(
        player_name=play.primary_participant_name,
        team_abbreviation=play.team_abbreviation,
        description=play.description,
        headshot_url=play.primary_participant_headshot,
        away_score=play.away_score_after,
        home_score=play.home_score_after,
        period_label=play.period_label,
        clock_display=play.clock_display,
        shot_type=play.shot_type or classify_shot_type(play.description),
    )


def process_plays(
    raw_plays: Any,
    athletes: Optional[Mapping[str, AthleteRef]] = None,
    teams: Optional[Mapping[str, str]] = None,
) -> PlayFeed:
    plays = normalize_plays(raw_plays, athletes=athletes, teams=teams)
    return PlayFeed(
        plays=plays,
        snapshots=build_snapshots(plays),
        first_scorer=first_scorer(plays),
    )


def group_plays_by_period(plays: Sequence[Play], newest_first: bool = False) -> Dict[str, List[Play]]:
    """
    Bucket plays under PRE / Q1..Q4 / OT1.. labels. Buckets appear in the
    order they are met while walking the feed in the requested direction.
    """
    ordered = list(reversed(plays)) if newest_first else list(plays)
    groups: Dict[str, List[Play]] = {}
    for play in ordered:
        groups.setdefault(play.period_label, []).append(play)
    return groups
