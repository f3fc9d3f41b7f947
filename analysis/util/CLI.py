import argparse

__all__ = ["cli", "defaults", "positive_float"]

cli = argparse.ArgumentParser(
    description="Elo ratings analysis test code",
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)

defaults = {
    'matches': 'data/example-matches.csv',
    'period_days': 7.0,
}


def positive_float(value: str) -> float:
    try:
        ret = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("%r is not a number" % value)
    if not ret > 0:
        raise argparse.ArgumentTypeError("%r must be greater than zero" % value)
    return ret


cli.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Log debug output")
cli.add_argument("-q", "--quiet", dest="quiet", action="store_true", help="Don't print progress")
