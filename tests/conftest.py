from datetime import datetime, timedelta, timezone

import pytest

from aoc_timeline.models.leaderboard import Snapshot

YEAR = 2025
TZ = timezone(timedelta(hours=1))


def unlock_ts(day: int) -> int:
    return int(datetime(YEAR, 12, day, 6, tzinfo=TZ).timestamp())


def member_payload(member_id, name, solves):
    """Wire payload for a member; solves maps (day, star) to seconds after unlock"""
    days = {}
    for (day, star), offset in solves.items():
        days.setdefault(str(day), {})[str(star)] = {
            'get_star_ts': unlock_ts(day) + offset,
            'star_index': 0
        }
    return {
        'id': member_id,
        'name': name,
        'stars': len(solves),
        'local_score': 0,
        'last_star_ts': 0,
        'completion_day_level': days
    }


def snapshot_payload(members):
    return {
        'event': str(YEAR),
        'owner_id': 1,
        'members': {str(m['id']): m for m in members}
    }


@pytest.fixture
def tz():
    return TZ


@pytest.fixture
def scenario_snapshot():
    """A solves 1-1 at +10m and 1-2 at +25m, B solves 1-1 at +5m"""
    return Snapshot.model_validate(snapshot_payload([
        member_payload(1, 'A', {(1, 1): 600, (1, 2): 1500}),
        member_payload(2, 'B', {(1, 1): 300}),
    ]))


class FakeFetcher:
    def __init__(self, snapshot=None, error=None):
        self.snapshot = snapshot
        self.error = error
        self.calls = []

    def fetch(self, leaderboard_id, year):
        self.calls.append((leaderboard_id, year))
        if self.error:
            raise self.error
        return self.snapshot


@pytest.fixture
def fake_fetcher(scenario_snapshot):
    return FakeFetcher(scenario_snapshot)
