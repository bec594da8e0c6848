"""Tests for the box score normalizer."""

from conftest import make_athlete
from courtside.services.boxscore import (
    STAT_CODES,
    build_athlete_index,
    normalize_box_score,
    normalize_box_scores,
    select_main_statistics,
    top_performers,
)


class TestSelectMainStatistics:

    def test_largest_block_wins(self):
        small = {"names": ["A", "B", "C", "D"]}
        large = {"names": ["MIN", "PTS", "REB", "AST", "STL", "BLK"]}
        assert select_main_statistics([small, large]) is large

    def test_falls_back_to_first(self):
        first = {"names": ["PTS"]}
        second = {"names": ["REB", "AST"]}
        assert select_main_statistics([first, second]) is first

    def test_threshold_is_exclusive(self):
        three = {"names": ["PTS", "REB", "AST"]}
        four = {"names": ["MIN", "PTS", "REB", "AST"]}
        assert select_main_statistics([three, four]) is four

    def test_nothing_to_pick(self):
        assert select_main_statistics([]) == {}
        assert select_main_statistics(None) == {}


class TestNormalizeBoxScore:

    def test_projects_recognized_columns(self, bos_box):
        lines = normalize_box_score(bos_box)

        tatum = lines[0]
        assert tatum.short_name == "J. Tatum"
        assert tatum.display_name == "Jayson Tatum"
        assert tatum.team_abbreviation == "BOS"
        assert tatum.is_starter is True
        assert tatum.stats == {
            "MIN": "34", "PTS": "27", "REB": "8", "AST": "4",
            "STL": "1", "BLK": "0", "TO": "2", "FG": "9-18",
        }

    def test_dnp_excluded(self, bos_box):
        lines = normalize_box_score(bos_box)
        assert [line.short_name for line in lines] == ["J. Tatum", "J. Brown"]
        assert not any(line.did_not_play for line in lines)

    def test_absent_columns_are_omitted(self):
        """Codes missing from `names` never show up, not even as blanks."""
        raw = {
            "team": {"abbreviation": "DUKE"},
            "statistics": [
                {
                    "names": ["MIN", "PTS", "REB", "AST", "PF"],
                    "athletes": [make_athlete("1", "Cooper Flagg", "C. Flagg", ["30", "22", "9", "4", "2"])],
                }
            ],
        }
        line = normalize_box_score(raw)[0]
        assert set(line.stats) == {"MIN", "PTS", "REB", "AST"}

    def test_column_fidelity(self, bos_box, nyk_box):
        for box in (bos_box, nyk_box):
            names = set(box["statistics"][0]["names"])
            for line in normalize_box_score(box):
                assert set(line.stats) <= names
                assert set(line.stats) <= set(STAT_CODES)

    def test_short_stats_row(self):
        raw = {
            "statistics": [
                {
                    "names": ["MIN", "FG", "REB", "AST", "PTS"],
                    "athletes": [make_athlete("1", "A Player", "A. Player", ["12", "1-3"])],
                }
            ]
        }
        assert normalize_box_score(raw)[0].stats == {"MIN": "12", "FG": "1-3"}

    def test_team_level_athletes_fallback(self):
        raw = {
            "team": {"abbreviation": "UNC"},
            "statistics": [{"names": ["MIN", "PTS", "REB", "AST"]}],
            "athletes": [make_athlete("9", "RJ Davis", "R. Davis", ["35", "21", "4", "5"], starter=False)],
        }
        lines = normalize_box_score(raw)
        assert len(lines) == 1
        assert lines[0].stats["PTS"] == "21"
        assert lines[0].is_starter is False

    def test_main_block_chosen_over_first(self):
        raw = {
            "statistics": [
                {"names": ["PTS"], "athletes": [make_athlete("1", "Wrong", "W.", ["1"])]},
                {
                    "names": ["MIN", "PTS", "REB", "AST", "STL"],
                    "athletes": [make_athlete("2", "Right", "R.", ["20", "10", "3", "2", "1"])],
                },
            ]
        }
        assert [line.short_name for line in normalize_box_score(raw)] == ["R."]

    def test_uninterpretable_block(self):
        assert normalize_box_score({}) == []
        assert normalize_box_score({"statistics": "nope"}) == []
        assert normalize_box_score(None) == []


class TestTeamsAndSpotlight:

    def test_normalize_box_scores(self, bos_box, nyk_box):
        teams = normalize_box_scores([bos_box, nyk_box])
        assert [t.team_abbreviation for t in teams] == ["BOS", "NYK"]
        assert teams[1].team_name == "New York Knicks"
        assert len(teams[0].players) == 2

    def test_top_performers(self, bos_box, nyk_box):
        lines = normalize_box_score(bos_box) + normalize_box_score(nyk_box)
        ranked = top_performers(lines, limit=2)
        assert [line.short_name for line in ranked] == ["J. Brunson", "J. Tatum"]

    def test_top_performers_skips_idle(self):
        raw = {
            "statistics": [
                {
                    "names": ["MIN", "PTS", "REB", "AST"],
                    "athletes": [
                        make_athlete("1", "Bench Guy", "B. Guy", ["0", "0", "0", "0"]),
                        make_athlete("2", "Defender", "D. Fender", ["12", "0", "3", "1"]),
                    ],
                }
            ]
        }
        assert [line.short_name for line in top_performers(normalize_box_score(raw))] == ["D. Fender"]

    def test_athlete_index(self, bos_box, nyk_box):
        index = build_athlete_index([bos_box, nyk_box])
        assert index["3934672"].display_name == "Jalen Brunson"
        assert index["3934672"].team_abbreviation == "NYK"
        assert index["4397002"].short_name == "N. Queta"
        assert index["4065648"].headshot_url.endswith("4065648.png")
