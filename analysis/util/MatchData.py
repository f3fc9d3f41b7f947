import csv
import logging
import os
import sys
from time import time
from typing import Dict, Iterator, List, Optional

from dateutil import parser

from eloratings.interfaces import MatchRecord
from eloratings.math.elo import Outcome

from .CLI import cli, defaults

__all__ = ["MatchData", "MatchDataError", "parse_result"]


logger = logging.getLogger(__name__)

cli.add_argument(
    "--matches", dest="matches", type=str, default=defaults["matches"],
    help="CSV file of match results to replay",
)

cli.add_argument(
    "--games", dest="num_games", type=int, default=0, help="Number of matches to process, 0 for all",
)

COLUMNS = ("match_id", "player_one", "player_two", "result", "date")

# result column, from player one's point of view
RESULTS: Dict[str, Outcome] = {
    "win": Outcome.WIN,
    "1": Outcome.WIN,
    "loss": Outcome.LOSS,
    "0": Outcome.LOSS,
    "draw": Outcome.DRAW,
    "0.5": Outcome.DRAW,
}


class MatchDataError(ValueError):
    pass


def parse_result(token: str) -> Outcome:
    try:
        return RESULTS[token.strip().lower()]
    except KeyError:
        raise MatchDataError("Unknown result %r" % token)


class MatchData:
    filename: str
    limit: int
    quiet: bool

    def __init__(self, filename: Optional[str] = None, limit: int = 0, quiet: bool = False) -> None:
        if filename is None:
            filename = defaults["matches"]
        if not os.path.exists(filename) and os.path.exists("../" + filename):
            filename = "../" + filename

        self.filename = filename
        self.limit = limit
        self.quiet = quiet

    def load(self) -> List[MatchRecord]:
        records: List[MatchRecord] = []

        with open(self.filename, newline="") as f:
            reader = csv.DictReader(f)
            missing = [c for c in COLUMNS if c not in (reader.fieldnames or [])]
            if missing:
                raise MatchDataError("%s: missing column(s) %s" % (self.filename, ", ".join(missing)))

            for row in reader:
                try:
                    records.append(self._parse_row(row))
                except (TypeError, ValueError, OverflowError) as e:
                    raise MatchDataError("%s:%d: %s" % (self.filename, reader.line_num, e)) from e

        # sorted() is stable, so matches sharing a timestamp keep file order
        records = sorted(records, key=lambda r: r.ended)
        if self.limit:
            records = records[: self.limit]

        logger.debug("Loaded %d matches from %s", len(records), self.filename)
        return records

    def _parse_row(self, row: Dict[str, str]) -> MatchRecord:
        player_one = int(row["player_one"])
        player_two = int(row["player_two"])
        if player_one == player_two:
            raise MatchDataError("player %d cannot play themself" % player_one)

        result = parse_result(row["result"])
        if result is Outcome.WIN:
            winner: Optional[int] = player_one
        elif result is Outcome.LOSS:
            winner = player_two
        else:
            winner = None

        try:
            ended = int(parser.parse(row["date"]).timestamp())
        except parser.ParserError as e:
            raise MatchDataError("bad date %r" % row["date"]) from e

        return MatchRecord(
            match_id=int(row["match_id"]),
            player_one_id=player_one,
            player_two_id=player_two,
            winner_id=winner,
            ended=ended,
        )

    def __iter__(self) -> Iterator[MatchRecord]:
        records = self.load()
        num_records = len(records)
        t = 0.0
        started = time()

        for ct, record in enumerate(records, 1):
            if not self.quiet and time() - t > 0.05:
                t = time()
                records_per_second = ct / max(time() - started, 1e-9)
                seconds_left = (num_records - ct) / records_per_second
                sys.stdout.write(
                    f"\r{ct:12n} / {num_records:12n} matches processed. "
                    + f"{seconds_left:6.1f}s remaining"
                )
                sys.stdout.flush()
            yield record

        if not self.quiet:
            sys.stdout.write("\n")
