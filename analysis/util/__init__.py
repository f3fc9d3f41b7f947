from .CLI import cli, defaults, positive_float
from .Config import config
from .EloAnalytics import EloAnalytics
from .InMemoryStorage import InMemoryStorage
from .MatchData import MatchData, MatchDataError
from .TallyMatchAnalytics import TallyMatchAnalytics, rating_band

__all__ = [
    "cli",
    "config",
    "defaults",
    "positive_float",
    "EloAnalytics",
    "InMemoryStorage",
    "MatchData",
    "MatchDataError",
    "TallyMatchAnalytics",
    "rating_band",
]
