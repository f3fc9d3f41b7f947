import argparse
import logging
import sys

from eloratings.math.elo import EloConfig

from .CLI import cli, positive_float

__all__ = ["config"]


logger = logging.getLogger(__name__)


class Config:
    args: argparse.Namespace
    name: str
    elo: EloConfig

    def __init__(self) -> None:
        self.elo = EloConfig()

    def __call__(self, args: argparse.Namespace, name: str) -> None:
        self.args = args
        self.name = name
        configure_logging(args)
        configure_elo(self, args)
        logger.debug("Configured %s with %r", name, self.elo)


elo_config = cli.add_argument_group("elo configuration")
elo_config.add_argument(
    "-k", "--k-factor", dest="k", type=positive_float, default=32.0,
    help="maximum number of rating points exchanged in one match",
)


def configure_logging(args: argparse.Namespace) -> None:
    logging.basicConfig(
        stream=sys.stdout,
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
    )


def configure_elo(config: Config, args: argparse.Namespace) -> None:
    config.elo = EloConfig(k=args.k)


config = Config()
