"""Entry point for leaderboard reports"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from aoc_timeline.config import Settings, settings
from aoc_timeline.report import LeaderboardReport
from aoc_timeline.services.adventofcode import AuthError, FetchError

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='aoc_timeline',
        description='Chronological report of private leaderboard star completions'
    )
    parser.add_argument('-a', '--all', action='store_true',
                        help='Show every completion instead of only today\'s')
    parser.add_argument('-f', '--flush-cache', action='store_true',
                        help='Ignore cached snapshots and fetch fresh data')
    parser.add_argument('leaderboards', nargs='*', type=int,
                        help='Leaderboard ids, defaults to the LEADERBOARDS setting')
    return parser.parse_args(argv)


def run(argv: Optional[List[str]] = None, config: Optional[Settings] = None,
        report: Optional[LeaderboardReport] = None) -> int:
    """Report every requested leaderboard, returning the process exit code"""
    args = parse_args(argv)
    config = config or settings

    # Log config (excluding sensitive data)
    safe_config = config.model_dump(exclude={'AOC_SESSION'})
    logger.debug("Using configuration:")
    logger.debug(json.dumps(safe_config, indent=2))

    report = report or LeaderboardReport(config)
    failed = []

    for leaderboard_id in args.leaderboards or config.LEADERBOARDS:
        try:
            report.run(leaderboard_id, show_all=args.all, force_refresh=args.flush_cache)
        except AuthError as e:
            logger.error(f"Fetch failed, cookie probably outdated: {e}")
            logger.error("Set a new cookie with 'python scripts/store_session.py --session <COOKIE>'")
            failed.append(leaderboard_id)
        except FetchError as e:
            logger.error(f"Fetch of leaderboard {leaderboard_id} failed: {e}")
            failed.append(leaderboard_id)

    if failed:
        logger.error(f"Reports failed for leaderboards: {', '.join(map(str, failed))}")
        return 1
    return 0


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL, format='%(message)s')
    sys.exit(run())


if __name__ == "__main__":
    main()
