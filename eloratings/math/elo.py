from enum import Enum
from typing import Optional, Sequence, Tuple

__all__ = [
    "Elo",
    "EloConfig",
    "EloRating",
    "Outcome",
    "elo",
    "elo_rating_period",
    "expected_score",
]


DEFAULT_RATING: float = 1000.0
DEFAULT_K: float = 32.0
ELO_SCALE: float = 400.0


class Outcome(Enum):
    """Result of a match, from the point of view of player one."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"

    def to_chess_points(self) -> float:
        if self is Outcome.WIN:
            return 1.0
        if self is Outcome.LOSS:
            return 0.0
        return 0.5

    def inverse(self) -> "Outcome":
        if self is Outcome.WIN:
            return Outcome.LOSS
        if self is Outcome.LOSS:
            return Outcome.WIN
        return Outcome.DRAW


class EloRating:
    rating: float

    def __init__(self, rating: float = DEFAULT_RATING) -> None:
        self.rating = rating

    def copy(self) -> "EloRating":
        return EloRating(self.rating)

    def __float__(self) -> float:
        return self.rating

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EloRating):
            return NotImplemented
        return self.rating == other.rating

    def __hash__(self) -> int:
        return hash(self.rating)

    def __repr__(self) -> str:
        return "EloRating(%r)" % self.rating

    def __str__(self) -> str:
        return "%6.2f" % self.rating


class EloConfig:
    k: float

    def __init__(self, k: float = DEFAULT_K) -> None:
        self.k = k

    @classmethod
    def default(cls) -> "EloConfig":
        return cls()

    def __repr__(self) -> str:
        return "EloConfig(k=%r)" % self.k


def _expected(rating: float, opponent: float) -> float:
    try:
        return 1 / (1 + 10 ** ((opponent - rating) / ELO_SCALE))
    except OverflowError:
        # 10 ** x past the float range; IEEE arithmetic would give 1 / inf.
        return 0.0


def expected_score(player_one: EloRating, player_two: EloRating) -> Tuple[float, float]:
    """
    Returns the expected score of each player, i.e. the probability of
    player one and player two winning the match. The two values sum to 1.
    """
    return (
        _expected(player_one.rating, player_two.rating),
        _expected(player_two.rating, player_one.rating),
    )


def elo(
    player_one: EloRating, player_two: EloRating, outcome: Outcome, config: EloConfig
) -> Tuple[EloRating, EloRating]:
    """
    Rates a single match. `outcome` is seen from player one, so
    Outcome.WIN means player one won and Outcome.LOSS means player two won.
    """
    one_expected, two_expected = expected_score(player_one, player_two)
    o = outcome.to_chess_points()

    return (
        EloRating(player_one.rating + config.k * (o - one_expected)),
        EloRating(player_two.rating + config.k * ((1.0 - o) - two_expected)),
    )


def elo_rating_period(
    player: EloRating, results: Sequence[Tuple[EloRating, Outcome]], config: EloConfig
) -> EloRating:
    """
    Applies a batch of results to one player. Matches are rated in the
    order given against each opponent's rating as passed in; the opponents'
    own updates are discarded.
    """
    for opponent, outcome in results:
        player, _ = elo(player, opponent, outcome, config)
    return player.copy()


class Elo:
    config: EloConfig

    def __init__(self, config: Optional[EloConfig] = None) -> None:
        self.config = config if config is not None else EloConfig()

    def rate(
        self, player_one: EloRating, player_two: EloRating, outcome: Outcome
    ) -> Tuple[EloRating, EloRating]:
        return elo(player_one, player_two, outcome, self.config)

    def rate_period(
        self, player: EloRating, results: Sequence[Tuple[EloRating, Outcome]]
    ) -> EloRating:
        return elo_rating_period(player, results, self.config)

    def expected_score(self, player_one: EloRating, player_two: EloRating) -> Tuple[float, float]:
        return expected_score(player_one, player_two)
