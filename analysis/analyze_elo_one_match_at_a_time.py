#!/usr/bin/env -S PYTHONDONTWRITEBYTECODE=1 PYTHONPATH=..:. python3

from analysis.util import (
    EloAnalytics,
    InMemoryStorage,
    MatchData,
    TallyMatchAnalytics,
    cli,
    config,
)
from eloratings.interfaces import MatchRecord, RatingSystem
from eloratings.math.elo import EloConfig, EloRating, elo, expected_score


class OneMatchAtATime(RatingSystem):
    _storage: InMemoryStorage
    _config: EloConfig

    def __init__(self, storage: InMemoryStorage, elo_config: EloConfig) -> None:
        self._storage = storage
        self._config = elo_config

    def process_match(self, match: MatchRecord) -> EloAnalytics:
        one = self._storage.get(match.player_one_id)
        two = self._storage.get(match.player_two_id)
        one_played = self._storage.get_set_count(match.player_one_id)
        two_played = self._storage.get_set_count(match.player_two_id)

        updated_one, updated_two = elo(one, two, match.outcome, self._config)

        self._storage.set(match.player_one_id, updated_one)
        self._storage.set(match.player_two_id, updated_two)
        self._storage.add_rating_history(match.player_one_id, match.ended, updated_one)
        self._storage.add_rating_history(match.player_two_id, match.ended, updated_two)

        return EloAnalytics(
            skipped=False,
            match=match,
            expected_win_rate=expected_score(one, two)[0],
            player_one_rating=one.rating,
            player_two_rating=two.rating,
            player_one_updated_rating=updated_one.rating,
            player_two_updated_rating=updated_two.rating,
            player_one_matches_played=one_played,
            player_two_matches_played=two_played,
        )


# Run
if __name__ == "__main__":
    config(cli.parse_args(), "elo-one-match-at-a-time")
    match_data = MatchData(config.args.matches, limit=config.args.num_games, quiet=config.args.quiet)
    storage = InMemoryStorage(EloRating)
    engine = OneMatchAtATime(storage, config.elo)
    tally = TallyMatchAnalytics(storage, provisional=config.args.provisional)

    for match in match_data:
        analytics = engine.process_match(match)
        tally.add_elo_analytics(analytics)

    tally.print(config.name)
    if config.args.results_file:
        tally.update_results_file(config.args.results_file, config.name)
    storage.save_rating_history(config.name, config.args.rating_history_db)
