# courtside/services/summary.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from courtside.models.types import Game, PlayFeed
from courtside.services.boxscore import build_athlete_index
from courtside.services.games import as_dict, as_list, to_str
from courtside.services.plays import process_plays

logger = logging.getLogger("courtside.summary")


def team_index(summary: Any, game: Optional[Game] = None) -> Dict[str, str]:
    """team id -> abbreviation, from the game and the summary box score."""
    teams: Dict[str, str] = {}
    if game is not None:
        for side in (game.home, game.away):
            if side.team_id and side.abbreviation:
                teams[side.team_id] = side.abbreviation
    for raw in as_list(as_dict(as_dict(summary).get("boxscore")).get("players")):
        team = as_dict(as_dict(raw).get("team"))
        tid, abbr = to_str(team.get("id")), to_str(team.get("abbreviation"))
        if tid and abbr:
            teams.setdefault(tid, abbr)
    return teams


def summary_play_feed(summary: Any, game: Optional[Game] = None) -> PlayFeed:
    """
    Process a summary's plays, resolving participants and teams that ESPN
    only references by id against the summary's own box score.
    """
    data = as_dict(summary)
    athletes = build_athlete_index(as_dict(data.get("boxscore")).get("players"))
    return process_plays(data.get("plays"), athletes=athletes, teams=team_index(data, game))
