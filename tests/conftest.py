"""Shared raw ESPN payload fixtures."""

import pytest


def make_event(
    event_id="401585001",
    state="in",
    period=3,
    clock="4:12",
    home_score="88",
    away_score="84",
):
    return {
        "id": event_id,
        "date": "2025-01-15T00:30Z",
        "name": "New York Knicks at Boston Celtics",
        "shortName": "NYK @ BOS",
        "status": {
            "period": period,
            "displayClock": clock,
            "type": {
                "state": state,
                "shortDetail": f"{clock} - 3rd" if state == "in" else "Final",
                "description": "In Progress",
            },
        },
        "competitions": [
            {
                "venue": {"fullName": "TD Garden"},
                "broadcasts": [{"names": ["ESPN"]}, {"names": ["NBC Sports Boston", "MSG"]}],
                "odds": [{"details": "BOS -6.5"}],
                "competitors": [
                    {
                        "id": "2",
                        "homeAway": "home",
                        "score": home_score,
                        "team": {
                            "id": "2",
                            "abbreviation": "BOS",
                            "displayName": "Boston Celtics",
                            "shortDisplayName": "Celtics",
                            "logo": "https://a.espncdn.com/i/teamlogos/nba/500/bos.png",
                        },
                        "records": [{"summary": "30-10"}],
                        "linescores": [{"value": 30}, {"value": 25}, {"value": 33}],
                    },
                    {
                        "id": "18",
                        "homeAway": "away",
                        "score": away_score,
                        "team": {
                            "id": "18",
                            "abbreviation": "NYK",
                            "displayName": "New York Knicks",
                            "shortDisplayName": "Knicks",
                            "logo": "https://a.espncdn.com/i/teamlogos/nba/500/ny.png",
                        },
                        "records": [{"summary": "26-14"}],
                        "linescores": [{"value": 28}, {"value": 29}, {"value": 27}],
                    },
                ],
                "leaders": [
                    {
                        "name": "points",
                        "displayName": "Points",
                        "leaders": [
                            {
                                "displayValue": "27",
                                "athlete": {
                                    "displayName": "Jayson Tatum",
                                    "team": {"id": "2", "abbreviation": "BOS"},
                                },
                            }
                        ],
                    }
                ],
            }
        ],
    }


def make_athlete(athlete_id, name, short, stats, starter=True, dnp=False):
    return {
        "athlete": {
            "id": athlete_id,
            "displayName": name,
            "shortName": short,
            "headshot": {"href": f"https://a.espncdn.com/headshots/nba/players/full/{athlete_id}.png"},
        },
        "starter": starter,
        "didNotPlay": dnp,
        "stats": stats,
    }


BOX_NAMES = ["MIN", "FG", "3PT", "FT", "OREB", "DREB", "REB", "AST", "STL", "BLK", "TO", "PF", "+/-", "PTS"]


@pytest.fixture
def live_event():
    return make_event()


@pytest.fixture
def scheduled_event():
    return make_event(event_id="401585002", state="pre", period=0, clock="0:00", home_score="0", away_score="0")


@pytest.fixture
def bos_box():
    return {
        "team": {"id": "2", "abbreviation": "BOS", "displayName": "Boston Celtics"},
        "statistics": [
            {
                "names": BOX_NAMES,
                "athletes": [
                    make_athlete("4065648", "Jayson Tatum", "J. Tatum",
                                 ["34", "9-18", "3-7", "6-6", "1", "7", "8", "4", "1", "0", "2", "2", "+6", "27"]),
                    make_athlete("3917376", "Jaylen Brown", "J. Brown",
                                 ["31", "7-15", "2-5", "2-2", "0", "4", "4", "3", "2", "1", "3", "3", "+2", "18"]),
                    make_athlete("4397002", "Neemias Queta", "N. Queta", [], starter=False, dnp=True),
                ],
            }
        ],
    }


@pytest.fixture
def nyk_box():
    return {
        "team": {"id": "18", "abbreviation": "NYK", "displayName": "New York Knicks"},
        "statistics": [
            {
                "names": BOX_NAMES,
                "athletes": [
                    make_athlete("3934672", "Jalen Brunson", "J. Brunson",
                                 ["36", "11-22", "3-8", "5-5", "0", "3", "3", "7", "1", "0", "2", "1", "-4", "30"]),
                ],
            }
        ],
    }


@pytest.fixture
def raw_plays():
    return [
        {
            "id": "1",
            "text": "Jump ball: Mitchell Robinson vs. Kristaps Porzingis",
            "scoringPlay": False,
            "awayScore": 0,
            "homeScore": 0,
            "period": {"number": 1},
            "clock": {"displayValue": "12:00"},
        },
        {
            "id": "2",
            "text": "Jalen Brunson makes 2-foot driving layup",
            "scoringPlay": True,
            "scoreValue": 2,
            "awayScore": 2,
            "homeScore": 0,
            "period": {"number": 1},
            "clock": {"displayValue": "11:41"},
            "team": {"id": "18"},
            "participants": [{"athlete": {"id": "3934672"}}],
        },
        {
            "id": "3",
            "text": "Jayson Tatum defensive rebound",
            "scoringPlay": False,
            "period": {"number": 1},
            "clock": {"displayValue": "11:20"},
            "team": {"id": "2"},
        },
        {
            "id": "4",
            "text": "Jayson Tatum makes 26-foot three point jumper",
            "scoringPlay": True,
            "scoreValue": 3,
            "awayScore": 2,
            "homeScore": 3,
            "period": {"number": 1},
            "clock": {"displayValue": "11:02"},
            "team": {"id": "2"},
            "participants": [{"athlete": {"id": "4065648"}}],
        },
        {
            "id": "5",
            "text": "Jaylen Brown makes free throw 1 of 1",
            "scoringPlay": True,
            "scoreValue": 1,
            "awayScore": 2,
            "homeScore": 4,
            "period": {"number": 5},
            "clock": {"displayValue": "4:59"},
            "team": {"id": "2"},
            "participants": [{"athlete": {"id": "3917376"}}],
        },
    ]


@pytest.fixture
def summary(raw_plays, bos_box, nyk_box):
    return {
        "header": {
            "id": "401585001",
            "competitions": [
                {
                    "date": "2025-01-15T00:30Z",
                    "status": {"type": {"state": "in", "period": 5, "displayClock": "4:59"}},
                    "competitors": [
                        {"id": "2", "homeAway": "home", "score": "4", "team": {"id": "2", "abbreviation": "BOS"}},
                        {"id": "18", "homeAway": "away", "score": "2", "team": {"id": "18", "abbreviation": "NYK"}},
                    ],
                }
            ],
        },
        "plays": raw_plays,
        "leaders": [
            {
                "team": {"id": "2", "abbreviation": "BOS"},
                "leaders": [
                    {
                        "name": "points",
                        "displayName": "Points",
                        "leaders": [
                            {"displayValue": "27 PTS", "athlete": {"displayName": "Jayson Tatum"}},
                        ],
                    }
                ],
            },
            {
                "team": {"id": "18", "abbreviation": "NYK"},
                "leaders": [
                    {
                        "name": "points",
                        "displayName": "Points",
                        "leaders": [
                            {"displayValue": "30 PTS", "athlete": {"displayName": "Jalen Brunson"}},
                        ],
                    }
                ],
            },
        ],
        "boxscore": {"players": [bos_box, nyk_box]},
    }
