from .MatchAnalytics import MatchAnalytics
from .MatchRecord import MatchRecord
from .RatingSystem import RatingSystem
from .Storage import Storage

__all__ = [
    "MatchAnalytics",
    "MatchRecord",
    "RatingSystem",
    "Storage",
]
