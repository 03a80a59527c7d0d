"""Leaderboard report generation"""
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional, TextIO

from aoc_timeline.config import Settings
from aoc_timeline.render import render
from aoc_timeline.scoring import score_timeline
from aoc_timeline.services.adventofcode import AdventOfCodeAPI
from aoc_timeline.services.cache import CacheStore, SnapshotCache
from aoc_timeline.services.secrets import resolve_session_token
from aoc_timeline.timeline import reconstruct

logger = logging.getLogger(__name__)


class LeaderboardReport:
    """Runs cache lookup, timeline reconstruction, scoring and rendering"""

    def __init__(self, settings: Settings, cache: Optional[SnapshotCache] = None,
                 out: Optional[TextIO] = None):
        """Initialize report generator, wiring the default cache and fetcher from settings"""
        self.settings = settings
        self.out = out
        if cache is None:
            fetcher = AdventOfCodeAPI(
                base_url=settings.BASE_URL,
                timeout=settings.REQUEST_TIMEOUT,
                token_provider=lambda: resolve_session_token(settings)
            )
            cache = SnapshotCache(
                CacheStore(settings.CACHE_FILE),
                fetcher,
                settings.YEAR,
                ttl=timedelta(minutes=settings.CACHE_TTL_MINUTES)
            )
        self.cache = cache

    def run(self, leaderboard_id: int, show_all: bool = False,
            force_refresh: bool = False) -> Dict[str, int]:
        """
        Print the report for one leaderboard and return the member totals.

        Raises:
            FetchError: If the snapshot had to be fetched and the fetch failed
        """
        snapshot = self.cache.get(leaderboard_id, force_refresh)
        tz = self.settings.tzinfo

        events = reconstruct(snapshot.members, snapshot.event_year, tz, self.settings.UNLOCK_HOUR)
        scored, totals = score_timeline(events, len(snapshot.members))
        logger.debug(f"Leaderboard {leaderboard_id}: {len(scored)} events, {len(totals)} scoring members")

        render(scored, totals, filter_today=not show_all,
               today=datetime.now(tz).date(), out=self.out)
        return totals
