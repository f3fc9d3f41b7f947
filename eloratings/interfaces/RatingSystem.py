import abc

from .MatchAnalytics import MatchAnalytics
from .MatchRecord import MatchRecord

__all__ = ["RatingSystem"]


class RatingSystem(abc.ABC):
    @abc.abstractmethod
    def process_match(self, match: MatchRecord) -> MatchAnalytics:
        raise NotImplementedError
