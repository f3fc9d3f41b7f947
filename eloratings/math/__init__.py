from .elo import Elo, EloConfig, EloRating, Outcome, elo, elo_rating_period, expected_score

__all__ = [
    "Elo",
    "EloConfig",
    "EloRating",
    "Outcome",
    "elo",
    "elo_rating_period",
    "expected_score",
]
