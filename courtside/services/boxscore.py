# courtside/services/boxscore.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from courtside.models.types import AthleteRef, PlayerLine, TeamBoxScore
from courtside.services.games import as_dict, as_list, to_int, to_str

logger = logging.getLogger("courtside.boxscore")

STAT_CODES = ("MIN", "PTS", "REB", "AST", "STL", "BLK", "TO", "FG")

# A block with this many columns or fewer is a summary row, not the player table.
# Inferred from observed payloads, not an ESPN contract.
MAIN_BLOCK_MIN_COLUMNS = 3


def select_main_statistics(statistics: Any) -> Dict[str, Any]:
    """
    Pick the player table out of a team's `statistics` list: the block with
    the most column names, provided it has more than MAIN_BLOCK_MIN_COLUMNS;
    otherwise the first block. Empty dict when there is nothing to pick.
    """
    blocks = [as_dict(s) for s in as_list(statistics)]
    if not blocks:
        return {}

    best: Optional[Dict[str, Any]] = None
    for block in blocks:
        n = len(as_list(block.get("names")))
        if n > MAIN_BLOCK_MIN_COLUMNS and (best is None or n > len(as_list(best.get("names")))):
            best = block
    return best if best is not None else blocks[0]


def _athlete_fields(entry: Dict[str, Any]) -> Dict[str, Any]:
    athlete = as_dict(entry.get("athlete"))
    headshot = as_dict(athlete.get("headshot")).get("href")
    display = to_str(athlete.get("displayName"))
    return {
        "athlete_id": to_str(athlete.get("id")) or None,
        "display_name": display,
        "short_name": to_str(athlete.get("shortName")) or display,
        "headshot_url": headshot if isinstance(headshot, str) and headshot else None,
    }


def normalize_box_score(raw_team_stats: Any) -> List[PlayerLine]:
    """
    One team's ESPN box score block -> PlayerLine rows, in roster order.

    Column headers (`names`) and the athletes with their parallel `stats`
    arrays live inside one element of `statistics`. Only stat codes present
    in that team's `names` are projected; DNP players are left out.
    """
    team_stats = as_dict(raw_team_stats)
    main = select_main_statistics(team_stats.get("statistics"))
    names = [to_str(n) for n in as_list(main.get("names"))]

    # roster moved between API revisions; fall back to the team level
    athletes = as_list(main.get("athletes")) or as_list(team_stats.get("athletes"))
    if not athletes:
        return []

    # resolve column positions once per team
    columns = {code: names.index(code) for code in STAT_CODES if code in names}
    team_abbr = to_str(as_dict(team_stats.get("team")).get("abbreviation"))

    lines: List[PlayerLine] = []
    for raw in athletes:
        entry = as_dict(raw)
        if entry.get("didNotPlay"):
            continue
        fields = _athlete_fields(entry)
        if not fields["short_name"]:
            logger.debug("dropping box score row without athlete name for %s", team_abbr)
            continue

        values = as_list(entry.get("stats"))
        stats = {
            code: to_str(values[idx])
            for code, idx in columns.items()
            if idx < len(values) and values[idx] is not None
        }
        lines.append(
            PlayerLine(
                team_abbreviation=team_abbr,
                is_starter=bool(entry.get("starter")),
                did_not_play=False,
                stats=stats,
                **fields,
            )
        )
    return lines


def normalize_box_scores(raw_players: Any) -> List[TeamBoxScore]:
    """All teams from summary `boxscore.players`."""
    out: List[TeamBoxScore] = []
    for raw in as_list(raw_players):
        team = as_dict(as_dict(raw).get("team"))
        out.append(
            TeamBoxScore(
                team_abbreviation=to_str(team.get("abbreviation")),
                team_name=to_str(team.get("displayName") or team.get("abbreviation")),
                players=normalize_box_score(raw),
            )
        )
    return out


def top_performers(lines: List[PlayerLine], limit: int = 12) -> List[PlayerLine]:
    """
    Player spotlight: highest scorers first. Players with neither points
    nor minutes are skipped.
    """
    def _pts(line: PlayerLine) -> int:
        return to_int(line.stats.get("PTS")) or 0

    played = [
        line for line in lines
        if _pts(line) > 0 or (to_int(line.stats.get("MIN")) or 0) > 0
    ]
    # sorted() is stable: ties keep roster order
    return sorted(played, key=_pts, reverse=True)[:limit]


def build_athlete_index(raw_players: Any) -> Dict[str, AthleteRef]:
    """
    athlete id -> name/headshot/team, from every block of every team.
    Summary plays reference participants by id only.
    """
    index: Dict[str, AthleteRef] = {}
    for raw in as_list(raw_players):
        team_stats = as_dict(raw)
        team_abbr = to_str(as_dict(team_stats.get("team")).get("abbreviation"))
        blocks = as_list(team_stats.get("statistics"))
        rosters = [as_list(as_dict(b).get("athletes")) for b in blocks] + [as_list(team_stats.get("athletes"))]
        for roster in rosters:
            for entry in roster:
                fields = _athlete_fields(as_dict(entry))
                athlete_id = fields.pop("athlete_id")
                if athlete_id and athlete_id not in index:
                    index[athlete_id] = AthleteRef(team_abbreviation=team_abbr, **fields)
    return index
