"""
photog: build a photography website from a directory of pictures.

Usage:
    photog SOURCE [DESTINATION]

DESTINATION can be left out if the photog.ini in SOURCE sets it.
"""

import argparse
import logging
import sys

from .errors import PhotogError
from .loader import create_album
from .log import LogConfig, setup_logging
from .options import BuildOptions
from .website import generate


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="photog",
        description="Build a photography website from a directory of pictures.",
    )
    parser.add_argument("source", help="directory with pictures and photog.ini files")
    parser.add_argument("destination", nargs="?", help="website directory")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-v", "--verbose", action="store_true", help="also report what is up to date")
    group.add_argument("-q", "--quiet", action="store_true", help="only report errors")
    parser.add_argument("-k", "--keep-going", action="store_true",
                        help="carry on when an image command fails")
    parser.add_argument("--no-prune", dest="prune", action="store_false",
                        help="report destination files without a source instead of deleting them")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(logging.INFO)
    log = LogConfig(verbose=args.verbose, silent=args.quiet)
    options = BuildOptions(log=log, keep_going=args.keep_going, prune=args.prune)

    try:
        website = create_album(args.source, destination=args.destination, log=log)
        generate(website, options)
    except PhotogError as e:
        log.error("%s", e)
        return 1

    if options.failures:
        log.error("%d image command(s) failed", len(options.failures))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
