import abc
from typing import Dict

from eloratings.math.elo import EloRating

__all__ = ["Storage"]


class Storage(abc.ABC):
    @abc.abstractmethod
    def get(self, player_id: int) -> EloRating:
        raise NotImplementedError

    @abc.abstractmethod
    def set(self, player_id: int, entry: EloRating) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def get_set_count(self, player_id: int) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def clear_set_count(self, player_id: int) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def all_players(self) -> Dict[int, EloRating]:
        raise NotImplementedError
