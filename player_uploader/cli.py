# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Run one upload of a scraped players.json into MySQL.
#
# USAGE:
# ------
#   python -m player_uploader.cli
#   python -m player_uploader.cli --input data/players.json --sample-size 200
#   player-uploader --season 2025-26 --log-level DEBUG
#
#   Flags override the values loaded from the environment / .env.
#
# EXIT CODES:
# -----------
#   0 → run completed (individual record failures are only logged)
#   1 → fatal: unreadable / malformed input, or MySQL unreachable
#
# ==============================================

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

import pymysql

from player_uploader.config import get_config
from player_uploader.log_config import VALID_LEVELS, setup_logging
from player_uploader.uploader import PlayerDataError, upload_players

logger = logging.getLogger("player_uploader.cli")


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="player-uploader",
        description="Upload scraped player records into MySQL, adding missing columns first.",
    )
    parser.add_argument("--input", dest="input_path", help="Path to the players JSON array")
    parser.add_argument("--sample-size", type=_non_negative_int, help="Records examined for schema discovery")
    parser.add_argument("--season", help="Season written to player_statistics")
    parser.add_argument("--log-level", choices=VALID_LEVELS, help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()

    upload = config.upload
    if args.input_path:
        upload = replace(upload, input_path=args.input_path)
    if args.sample_size is not None:
        upload = replace(upload, sample_size=args.sample_size)
    if args.season:
        upload = replace(upload, season=args.season)
    config = replace(config, upload=upload, log_level=args.log_level or config.log_level)

    setup_logging(config.log_level)

    try:
        upload_players(config)
    except PlayerDataError as e:
        logger.error("✗ Error reading player data: %s", e)
        return 1
    except pymysql.MySQLError as e:
        logger.error("✗ Error uploading to database: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
