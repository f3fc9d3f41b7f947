import json
import logging
import math
import os
import sys
from collections import defaultdict
from statistics import mean
from typing import Any, DefaultDict, Dict, List, Optional, Union

from filelock import FileLock

from .CLI import cli
from .EloAnalytics import EloAnalytics
from .InMemoryStorage import InMemoryStorage

__all__ = ["TallyMatchAnalytics", "rating_band"]


logger = logging.getLogger(__name__)

cli.add_argument(
    "--provisional", dest="provisional", type=int, default=5,
    help="Matches a player must have played before their matches are tallied",
)
cli.add_argument(
    "--results-file", dest="results_file", type=str,
    help="JSON file to merge the run summary into (not saved by default)",
)

ALL: str = "all"
BAND_WIDTH: int = 200
PROBABILITY_FLOOR: float = 1e-12

# Result storage is indexed by the rating band of player one, or `ALL`
ResultStorageType = DefaultDict[str, Union[int, float]]


def rating_band(rating: float) -> str:
    if math.isnan(rating) or math.isinf(rating):
        return "N/A"
    low = int(rating // BAND_WIDTH) * BAND_WIDTH
    return "%d+%d" % (low, BAND_WIDTH)


class TallyMatchAnalytics:
    matches_ignored: int
    player_one_score: ResultStorageType
    predictions: ResultStorageType
    predicted_outcome: ResultStorageType
    prediction_cost: ResultStorageType
    count: ResultStorageType
    storage: InMemoryStorage
    provisional: int
    prefix: str

    def __init__(self, storage: InMemoryStorage, provisional: int = 5, prefix: str = '') -> None:
        self.prefix = prefix
        self.provisional = provisional
        self.matches_ignored = 0
        self.storage = storage
        self.player_one_score = defaultdict(lambda: 0.0)
        self.predictions = defaultdict(lambda: 0.0)
        self.predicted_outcome = defaultdict(lambda: 0.0)
        self.prediction_cost = defaultdict(lambda: 0.0)
        self.count = defaultdict(lambda: 0)

    def add_elo_analytics(self, result: EloAnalytics) -> None:
        if result.skipped:
            return

        if (
            result.player_one_matches_played < self.provisional
            or result.player_two_matches_played < self.provisional
        ):
            self.matches_ignored += 1
            return

        score = result.match.outcome.to_chess_points()
        expected = result.expected_win_rate
        p = min(1 - PROBABILITY_FLOOR, max(PROBABILITY_FLOOR, expected))

        for band in [ALL, rating_band(result.player_one_rating)]:
            self.player_one_score[band] += score
            self.predictions[band] += expected
            if expected == 0.5 or score == 0.5:
                self.predicted_outcome[band] += 0.5
            elif (expected > 0.5) == (score == 1.0):
                self.predicted_outcome[band] += 1
            self.prediction_cost[band] += -(score * math.log(p) + (1 - score) * math.log(1 - p))
            self.count[band] += 1

    def bands(self) -> List[str]:
        return sorted(
            (b for b in self.count if b != ALL),
            key=lambda b: float(b.split("+")[0]) if b != "N/A" else math.inf,
        )

    def get_summary(self, name: Optional[str] = None) -> Dict[str, Any]:
        obj: Dict[str, Any] = {
            "name": self.prefix + (name or "elo"),
            "matches_ignored": self.matches_ignored,
            "players": len(self.storage.all_players()),
            "bands": {},
        }
        if self.storage.all_players():
            obj["mean_rating"] = mean(r.rating for r in self.storage.all_players().values())

        for band in [ALL] + self.bands():
            ct = self.count[band]
            if not ct:
                continue
            obj["bands"][band] = {
                "count": ct,
                "player_one_score": self.player_one_score[band] / ct,
                "predicted_score": self.predictions[band] / ct,
                "prediction_accuracy": self.predicted_outcome[band] / ct,
                "prediction_cost": self.prediction_cost[band] / ct,
            }
        return obj

    def print(self, name: Optional[str] = None) -> None:
        summary = self.get_summary(name)
        out = sys.stdout

        out.write("\n%s\n" % summary["name"])
        out.write("%d players, %d matches ignored (provisional)\n" % (summary["players"], summary["matches_ignored"]))
        if "mean_rating" in summary:
            out.write("Mean rating: %.2f\n" % summary["mean_rating"])

        out.write("\n%-12s %8s %10s %10s %10s %10s\n" % ("band", "count", "p1 score", "predicted", "accuracy", "cost"))
        for band, row in summary["bands"].items():
            out.write(
                "%-12s %8d %10.3f %10.3f %10.3f %10.3f\n"
                % (
                    band,
                    row["count"],
                    row["player_one_score"],
                    row["predicted_score"],
                    row["prediction_accuracy"],
                    row["prediction_cost"],
                )
            )

    def update_results_file(self, fname: str, name: Optional[str] = None) -> Dict[str, Any]:
        data: Any = {}
        obj = self.get_summary(name)

        with FileLock(fname + ".lock"):
            if os.path.exists(fname):
                with open(fname, "r") as f:
                    data = json.load(f)

            data[obj["name"]] = obj

            with open(fname, "w") as f:
                json.dump(data, f, indent=2)

        logger.info("Saved %s results to %s", obj["name"], fname)
        return obj
