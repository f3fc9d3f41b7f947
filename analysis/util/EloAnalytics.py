from eloratings.interfaces import MatchAnalytics, MatchRecord

__all__ = ["EloAnalytics"]


class EloAnalytics(MatchAnalytics):
    expected_win_rate: float  # expected score of player one
    player_one_rating: float
    player_two_rating: float
    player_one_updated_rating: float
    player_two_updated_rating: float
    player_one_matches_played: int
    player_two_matches_played: int

    def __init__(
        self,
        skipped: bool,
        match: MatchRecord,
        expected_win_rate: float = 0,
        player_one_rating: float = 0,
        player_two_rating: float = 0,
        player_one_updated_rating: float = 0,
        player_two_updated_rating: float = 0,
        player_one_matches_played: int = 0,
        player_two_matches_played: int = 0,
    ) -> None:
        super().__init__(skipped, match)
        self.expected_win_rate = expected_win_rate
        self.player_one_rating = player_one_rating
        self.player_two_rating = player_two_rating
        self.player_one_updated_rating = player_one_updated_rating
        self.player_two_updated_rating = player_two_updated_rating
        self.player_one_matches_played = player_one_matches_played
        self.player_two_matches_played = player_two_matches_played

    def __str__(self) -> str:
        return "%.1f vs %.1f  Expected score: %.2f" % (
            self.player_one_rating,
            self.player_two_rating,
            self.expected_win_rate,
        )
