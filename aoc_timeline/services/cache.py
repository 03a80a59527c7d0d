"""Local snapshot cache with per-leaderboard freshness"""
import json
import logging
import os
import tempfile
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Protocol

from pydantic import BaseModel, ValidationError, field_validator

from aoc_timeline.models.leaderboard import Snapshot

logger = logging.getLogger(__name__)


class CacheCorrupt(Exception):
    """Cache file exists but cannot be parsed"""
    pass


class Fetcher(Protocol):
    def fetch(self, leaderboard_id: int, year: int) -> Snapshot: ...


class CacheEntry(BaseModel):
    """Latest snapshot of one leaderboard and when it was retrieved"""
    fetched_at: datetime
    snapshot: Snapshot

    @field_validator('fetched_at')
    @classmethod
    def assume_local_time(cls, value: datetime) -> datetime:
        """Entries written without an offset are read as local time"""
        if value.tzinfo is None:
            return value.astimezone()
        return value


def local_now() -> datetime:
    return datetime.now().astimezone()


class CacheStore:
    """
    Single JSON file mapping leaderboard id to its CacheEntry.

    load() and save() always work on the whole mapping so entries for other
    leaderboards survive a refresh of one of them.
    """

    def __init__(self, path: str):
        self.path = path

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def load(self) -> Dict[int, CacheEntry]:
        """
        Read every cached entry.

        Raises:
            CacheCorrupt: If the file is not valid JSON or an entry does not validate
        """
        if not self.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                raise CacheCorrupt(f"Cache file {self.path} is not a mapping")
            return {
                int(leaderboard_id): CacheEntry.model_validate(entry)
                for leaderboard_id, entry in raw.items()
            }
        except (OSError, ValueError, ValidationError) as e:
            raise CacheCorrupt(f"Cannot parse cache file {self.path}: {e}") from e

    def save(self, entries: Dict[int, CacheEntry]) -> None:
        """
        Replace the cache file with the given entries.

        The mapping is written to a temporary file beside the cache and moved
        into place, so a failed write leaves the previous file intact.

        Raises:
            OSError: If the file cannot be written
        """
        data = {
            str(leaderboard_id): {
                'fetched_at': entry.fetched_at.isoformat(),
                'snapshot': entry.snapshot.to_wire()
            }
            for leaderboard_id, entry in entries.items()
        }
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, temp_path = tempfile.mkstemp(prefix='.aoc-', suffix='.tmp', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f)
            os.replace(temp_path, self.path)
        except Exception:
            os.unlink(temp_path)
            raise


class SnapshotCache:
    """Returns fresh snapshots from the store, fetching on miss or expiry"""

    def __init__(self, store: CacheStore, fetcher: Fetcher, year: int,
                 ttl: timedelta = timedelta(minutes=15),
                 clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.fetcher = fetcher
        self.year = year
        self.ttl = ttl
        self.clock = clock or local_now

    def _load_entries(self) -> Dict[int, CacheEntry]:
        """All stored entries, empty when the file is unreadable"""
        try:
            return self.store.load()
        except CacheCorrupt as e:
            logger.warning(f"Ignoring corrupt cache: {e}")
            return {}

    def is_fresh(self, entry: CacheEntry, now: datetime) -> bool:
        """Whether the entry is still inside the freshness window"""
        return now < entry.fetched_at + self.ttl

    def get(self, leaderboard_id: int, force_refresh: bool = False) -> Snapshot:
        """
        Snapshot for a leaderboard, from cache while it is fresh.

        Raises:
            FetchError: If a fetch is needed and fails
        """
        entries = self._load_entries()
        now = self.clock()

        if not force_refresh:
            entry = entries.get(leaderboard_id)
            if entry is not None and self.is_fresh(entry, now):
                logger.info(f"Using cached leaderboard {leaderboard_id}")
                return entry.snapshot

        logger.info(f"Fetching data for leaderboard {leaderboard_id}")
        snapshot = self.fetcher.fetch(leaderboard_id, self.year)

        entries[leaderboard_id] = CacheEntry(fetched_at=now, snapshot=snapshot)
        try:
            self.store.save(entries)
        except OSError as e:
            logger.warning(f"Could not write cache for leaderboard {leaderboard_id}: {e}")
        return snapshot
