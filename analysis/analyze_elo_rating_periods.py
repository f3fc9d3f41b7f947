#!/usr/bin/env -S PYTHONDONTWRITEBYTECODE=1 PYTHONPATH=..:. python3

import logging

from analysis.util import (
    EloAnalytics,
    InMemoryStorage,
    MatchData,
    TallyMatchAnalytics,
    cli,
    config,
    defaults,
    positive_float,
)
from eloratings.interfaces import MatchRecord, RatingSystem
from eloratings.math.elo import EloConfig, EloRating, elo_rating_period, expected_score

logger = logging.getLogger(__name__)

cli.add_argument(
    "--period-days", dest="period_days", type=positive_float, default=defaults["period_days"],
    help="width of a rating period in days",
)


class RatingPeriods(RatingSystem):
    """
    Rates players in fixed width windows. Within a window every match is
    rated against the rating the opponent had when the window opened, and
    a player's rating is rebuilt from their own opening rating each time
    one of their matches arrives, so the stored rating is always the
    rating period result for the matches seen so far.
    """
    _storage: InMemoryStorage
    _config: EloConfig
    window_width: int

    def __init__(self, storage: InMemoryStorage, elo_config: EloConfig, window_width: int) -> None:
        self._storage = storage
        self._config = elo_config
        self.window_width = window_width

    def process_match(self, match: MatchRecord) -> EloAnalytics:
        window = (int(match.ended) // self.window_width) * self.window_width

        ## read base ratings (last rating before the current rating period)
        one_base = self._storage.get_first_rating_older_than(match.player_one_id, window)
        two_base = self._storage.get_first_rating_older_than(match.player_two_id, window)
        one_played = self._storage.get_set_count(match.player_one_id)
        two_played = self._storage.get_set_count(match.player_two_id)

        self._storage.add_match_history(match.player_one_id, match.ended, (match, two_base))
        self._storage.add_match_history(match.player_two_id, match.ended, (match, one_base))

        updated_one = self._rate_window(match.player_one_id, one_base, window)
        updated_two = self._rate_window(match.player_two_id, two_base, window)

        self._storage.set(match.player_one_id, updated_one)
        self._storage.set(match.player_two_id, updated_two)
        self._storage.add_rating_history(match.player_one_id, match.ended, updated_one)
        self._storage.add_rating_history(match.player_two_id, match.ended, updated_two)

        return EloAnalytics(
            skipped=False,
            match=match,
            expected_win_rate=expected_score(one_base, two_base)[0],
            player_one_rating=one_base.rating,
            player_two_rating=two_base.rating,
            player_one_updated_rating=updated_one.rating,
            player_two_updated_rating=updated_two.rating,
            player_one_matches_played=one_played,
            player_two_matches_played=two_played,
        )

    def _rate_window(self, player_id: int, base: EloRating, window: int) -> EloRating:
        results = [
            (opponent, past_match.outcome_for(player_id))
            for past_match, opponent in self._storage.get_matches_newer_or_equal_to(player_id, window)
        ]
        logger.debug("Player %d: %d match(es) in window %d", player_id, len(results), window)
        return elo_rating_period(base, results, self._config)


# Run
if __name__ == "__main__":
    args = cli.parse_args()
    config(args, "elo-%g-day-rating-periods" % args.period_days)
    match_data = MatchData(config.args.matches, limit=config.args.num_games, quiet=config.args.quiet)
    storage = InMemoryStorage(EloRating)
    engine = RatingPeriods(storage, config.elo, int(config.args.period_days * 24 * 60 * 60))
    tally = TallyMatchAnalytics(storage, provisional=config.args.provisional)

    for match in match_data:
        analytics = engine.process_match(match)
        tally.add_elo_analytics(analytics)

    tally.print(config.name)
    if config.args.results_file:
        tally.update_results_file(config.args.results_file, config.name)
    storage.save_rating_history(config.name, config.args.rating_history_db)
