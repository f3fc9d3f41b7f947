from .MatchRecord import MatchRecord

__all__ = ["MatchAnalytics"]


class MatchAnalytics:
    '''
    Base class for whatever a rating system wants to report about a match
    it processed, so the replay tooling can tally prediction quality.
    '''
    skipped: bool
    match: MatchRecord

    def __init__(
        self,
        skipped: bool,
        match: MatchRecord,
    ) -> None:
        self.skipped = skipped
        self.match = match
