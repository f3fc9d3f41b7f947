import argparse
import json
import sqlite3

import pytest

from analysis.analyze_elo_one_match_at_a_time import OneMatchAtATime
from analysis.analyze_elo_rating_periods import RatingPeriods
from analysis.util import (
    EloAnalytics,
    InMemoryStorage,
    MatchData,
    MatchDataError,
    TallyMatchAnalytics,
    cli,
    config,
    positive_float,
    rating_band,
)
from eloratings.interfaces import MatchRecord
from eloratings.math.elo import EloConfig, EloRating, Outcome

DAY = 24 * 60 * 60
HEADER = "match_id,player_one,player_two,result,date\n"


def write_csv(tmp_path, body, header=HEADER):
    path = tmp_path / "matches.csv"
    path.write_text(header + body)
    return str(path)


def test_match_data(tmp_path):
    fname = write_csv(
        tmp_path,
        "1,1,2,win,2023-01-03\n"
        "2,2,3,loss,2023-01-01\n"
        "3,3,1,draw,2023-01-02\n"
        "4,1,3,0.5,2023-01-02\n",
    )
    matches = list(MatchData(fname, quiet=True))

    assert [m.match_id for m in matches] == [2, 3, 4, 1]
    assert matches[0].winner_id == 3
    assert matches[1].winner_id is None
    assert matches[1].outcome is Outcome.DRAW
    assert matches[3].outcome is Outcome.WIN
    assert matches[0].ended < matches[1].ended < matches[3].ended


def test_match_data_limit(tmp_path):
    fname = write_csv(tmp_path, "1,1,2,win,2023-01-01\n2,1,2,win,2023-01-02\n3,1,2,win,2023-01-03\n")
    assert [m.match_id for m in MatchData(fname, limit=2, quiet=True)] == [1, 2]


def test_match_data_bad_result(tmp_path):
    fname = write_csv(tmp_path, "1,1,2,win,2023-01-01\n2,1,2,forfeit,2023-01-02\n")
    with pytest.raises(MatchDataError, match=":3:"):
        MatchData(fname, quiet=True).load()


def test_match_data_bad_date(tmp_path):
    fname = write_csv(tmp_path, "1,1,2,win,not a date\n")
    with pytest.raises(MatchDataError):
        MatchData(fname, quiet=True).load()


def test_match_data_self_play(tmp_path):
    fname = write_csv(tmp_path, "1,4,4,win,2023-01-01\n")
    with pytest.raises(MatchDataError, match="themself"):
        MatchData(fname, quiet=True).load()


def test_match_data_missing_column(tmp_path):
    fname = write_csv(tmp_path, "1,1,2,win\n", header="match_id,player_one,player_two,result\n")
    with pytest.raises(MatchDataError, match="date"):
        MatchData(fname, quiet=True).load()


def test_match_data_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        MatchData(str(tmp_path / "nope.csv"), quiet=True).load()


def test_example_data():
    matches = MatchData(quiet=True).load()
    assert len(matches) == 24


def test_storage():
    storage = InMemoryStorage(EloRating)
    assert storage.get(1).rating == 1000.0
    assert storage.get_set_count(1) == 0

    storage.set(1, EloRating(1016))
    storage.set(1, EloRating(1030))
    assert storage.get(1).rating == 1030
    assert storage.get_set_count(1) == 2

    storage.clear_set_count(1)
    assert storage.get_set_count(1) == 0
    assert set(storage.all_players()) == {1}


def test_storage_history():
    storage = InMemoryStorage()
    storage.add_rating_history(1, 10, EloRating(1010))
    storage.add_rating_history(1, 20, EloRating(1020))
    storage.add_match_history(1, 10, "a")
    storage.add_match_history(1, 20, "b")
    storage.add_match_history(1, 30, "c")

    assert storage.get_first_rating_older_than(1, 20).rating == 1010
    assert storage.get_first_rating_older_than(1, 10).rating == 1000.0
    assert storage.get_first_timestamp_older_than(1, 25) == 20
    assert storage.get_first_timestamp_older_than(1, 5) is None
    assert storage.get_matches_newer_or_equal_to(1, 20) == ["b", "c"]
    assert storage.get_matches_newer_or_equal_to(1, 31) == []
    assert [t for t, _ in storage.get_rating_history(1)] == [10, 20]


def test_storage_save_rating_history(tmp_path):
    storage = InMemoryStorage()
    storage.add_rating_history(1, 10, EloRating(1016))
    storage.add_rating_history(2, 10, EloRating(984))
    db = str(tmp_path / "history.db")

    storage.save_rating_history("test", db)
    storage.save_rating_history("test", None)

    connection = sqlite3.connect(db)
    rows = connection.execute("SELECT category, player_id, rating FROM rating_history ORDER BY player_id").fetchall()
    connection.close()
    assert rows == [("test", 1, 1016.0), ("test", 2, 984.0)]


def test_one_match_at_a_time():
    storage = InMemoryStorage()
    engine = OneMatchAtATime(storage, EloConfig())

    analytics = engine.process_match(MatchRecord(1, 1, 2, 1, 100))
    assert not analytics.skipped
    assert analytics.expected_win_rate == 0.5
    assert analytics.player_one_rating == 1000.0
    assert round(analytics.player_one_updated_rating) == 1016
    assert analytics.player_one_matches_played == 0

    assert round(storage.get(1).rating) == 1016
    assert round(storage.get(2).rating) == 984

    analytics = engine.process_match(MatchRecord(2, 2, 1, None, 200))
    assert analytics.player_one_rating == pytest.approx(984.0)
    assert analytics.player_two_matches_played == 1
    assert storage.get(1).rating + storage.get(2).rating == pytest.approx(2000.0)


def test_rating_periods_match_elo_rating_period():
    storage = InMemoryStorage()
    engine = RatingPeriods(storage, EloConfig(), 7 * DAY)

    # three wins for player 1 inside the first week, against fresh opponents
    engine.process_match(MatchRecord(1, 1, 2, 1, 1 * DAY))
    engine.process_match(MatchRecord(2, 1, 3, 1, 2 * DAY))
    analytics = engine.process_match(MatchRecord(3, 4, 1, 1, 3 * DAY))

    assert round(storage.get(1).rating) == 1046
    assert analytics.player_two_rating == 1000.0
    assert analytics.expected_win_rate == 0.5
    assert round(storage.get(4).rating) == 984


def test_rating_periods_new_window_uses_previous_result():
    storage = InMemoryStorage()
    engine = RatingPeriods(storage, EloConfig(), 7 * DAY)

    engine.process_match(MatchRecord(1, 1, 2, 1, 1 * DAY))
    analytics = engine.process_match(MatchRecord(2, 1, 2, 2, 8 * DAY))

    assert analytics.player_one_rating == pytest.approx(1016.0)
    assert analytics.player_two_rating == pytest.approx(984.0)
    assert storage.get(1).rating == pytest.approx(1016.0 - 32 * analytics.expected_win_rate)


def rated(expected, winner, one_played=10, two_played=10, rating=1000.0):
    return EloAnalytics(
        skipped=False,
        match=MatchRecord(1, 1, 2, winner, 0),
        expected_win_rate=expected,
        player_one_rating=rating,
        player_two_rating=1000.0,
        player_one_matches_played=one_played,
        player_two_matches_played=two_played,
    )


def test_tally():
    tally = TallyMatchAnalytics(InMemoryStorage(), provisional=5)
    tally.add_elo_analytics(rated(0.75, 1))
    tally.add_elo_analytics(rated(0.75, 2))
    tally.add_elo_analytics(rated(0.5, None, rating=1450.0))
    tally.add_elo_analytics(rated(0.9, 1, one_played=1))
    tally.add_elo_analytics(EloAnalytics(skipped=True, match=MatchRecord(9, 1, 2, 1, 0)))

    assert tally.matches_ignored == 1
    summary = tally.get_summary("run")
    assert summary["name"] == "run"

    everything = summary["bands"]["all"]
    assert everything["count"] == 3
    assert everything["player_one_score"] == pytest.approx(0.5)
    assert everything["predicted_score"] == pytest.approx(2.0 / 3)
    assert everything["prediction_accuracy"] == pytest.approx(1.5 / 3)

    assert list(summary["bands"]) == ["all", "1000+200", "1400+200"]
    assert summary["bands"]["1400+200"]["count"] == 1


def test_tally_print(capsys):
    storage = InMemoryStorage()
    storage.set(1, EloRating(1016))
    tally = TallyMatchAnalytics(storage, provisional=0)
    tally.add_elo_analytics(rated(0.5, 1))
    tally.print("printed")

    out = capsys.readouterr().out
    assert "printed" in out
    assert "Mean rating: 1016.00" in out
    assert "1000+200" in out


def test_tally_results_file(tmp_path):
    fname = str(tmp_path / "results.json")
    tally = TallyMatchAnalytics(InMemoryStorage(), provisional=0)
    tally.add_elo_analytics(rated(0.5, 1))

    tally.update_results_file(fname, "first")
    tally.update_results_file(fname, "second")

    with open(fname) as f:
        data = json.load(f)
    assert set(data) == {"first", "second"}
    assert data["first"]["bands"]["all"]["count"] == 1


def test_tally_extreme_prediction():
    tally = TallyMatchAnalytics(InMemoryStorage(), provisional=0)
    tally.add_elo_analytics(rated(0.0, 1))
    assert tally.get_summary()["bands"]["all"]["prediction_cost"] > 20


def test_rating_band():
    assert rating_band(1000.0) == "1000+200"
    assert rating_band(1199.9) == "1000+200"
    assert rating_band(-10.0) == "-200+200"
    assert rating_band(float("nan")) == "N/A"


def test_positive_float():
    assert positive_float("16") == 16.0
    with pytest.raises(argparse.ArgumentTypeError):
        positive_float("0")
    with pytest.raises(argparse.ArgumentTypeError):
        positive_float("-3")
    with pytest.raises(argparse.ArgumentTypeError):
        positive_float("abc")


def test_config():
    config(cli.parse_args(["-k", "24", "--games", "3", "-q"]), "test-run")
    assert config.name == "test-run"
    assert config.elo.k == 24.0
    assert config.args.num_games == 3
    assert config.args.quiet
    assert config.args.provisional == 5


def test_config_rejects_bad_k():
    with pytest.raises(SystemExit):
        cli.parse_args(["-k", "0"])


def test_parse_result():
    from analysis.util.MatchData import parse_result

    assert parse_result(" WIN ") is Outcome.WIN
    assert parse_result("0") is Outcome.LOSS
    assert parse_result("0.5") is Outcome.DRAW
    with pytest.raises(MatchDataError):
        parse_result("forfeit")
