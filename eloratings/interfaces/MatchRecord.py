from typing import Optional

from eloratings.math.elo import Outcome

__all__ = ["MatchRecord"]


class MatchRecord:
    match_id: int
    player_one_id: int
    player_two_id: int
    winner_id: Optional[int]  # None for a draw
    ended: int  # timestamp, seconds since epoch

    def __init__(
        self,
        match_id: int,
        player_one_id: int,
        player_two_id: int,
        winner_id: Optional[int],
        ended: int,
    ):
        self.match_id = match_id
        self.player_one_id = player_one_id
        self.player_two_id = player_two_id
        self.winner_id = winner_id
        self.ended = ended

    def __str__(self) -> str:
        return "%d\t%d %d vs. %d" % (
            self.ended,
            self.match_id,
            self.player_one_id,
            self.player_two_id,
        )

    @property
    def outcome(self) -> Outcome:
        if self.winner_id is None:
            return Outcome.DRAW
        if self.winner_id == self.player_one_id:
            return Outcome.WIN
        return Outcome.LOSS

    def outcome_for(self, player_id: int) -> Outcome:
        if player_id == self.player_one_id:
            return self.outcome
        if player_id == self.player_two_id:
            return self.outcome.inverse()
        raise ValueError("Player %d did not play in match %d" % (player_id, self.match_id))

