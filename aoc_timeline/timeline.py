"""Reconstruction of the chronological star completion timeline"""
import logging
from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Union

from aoc_timeline.models.leaderboard import Member
from aoc_timeline.models.timeline import CompletionEvent, StarKey

logger = logging.getLogger(__name__)

FIRST_DAY = 1
LAST_DAY = 25
STARS = (1, 2)


class MissingUnlockInstant(ValueError):
    """Day number outside the competition calendar"""
    pass


def unlock_instant(year: int, day: int, tz: Optional[tzinfo] = None, hour: int = 6) -> datetime:
    """
    Instant the puzzle for `day` became available.

    Puzzles unlock at `hour` local time on December `day`. With no tz the
    system local zone is used.
    """
    if not FIRST_DAY <= day <= LAST_DAY:
        raise MissingUnlockInstant(f"Day {day} is outside {FIRST_DAY}-{LAST_DAY}")

    naive = datetime(year, 12, day, hour, 0, 0)
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def solve_instant(timestamp: int, tz: Optional[tzinfo] = None) -> datetime:
    """Aware datetime for an epoch seconds solve time"""
    if tz is None:
        return datetime.fromtimestamp(timestamp).astimezone()
    return datetime.fromtimestamp(timestamp, tz)


def member_events(member: Member, year: int, tz: Optional[tzinfo] = None,
                  hour: int = 6) -> List[CompletionEvent]:
    """Events for one member, day by day, measuring star 2 from star 1"""
    label = member.display.label
    events = []

    for day in sorted(member.completions):
        stars = member.completions[day]
        try:
            start = unlock_instant(year, day, tz, hour)
        except MissingUnlockInstant as e:
            logger.warning(f"Skipping day {day} for {label}: {e}")
            continue

        for star in STARS:
            completion = stars.get(star)
            if completion is None:
                continue
            solved_at = solve_instant(completion.solved_at, tz)
            events.append(CompletionEvent(
                timestamp=solved_at,
                elapsed=solved_at - start,
                member_label=label,
                star_key=StarKey(day, star)
            ))
            # Star 2 unlocks once star 1 is solved
            start = solved_at

    return events


def reconstruct(members: Union[Dict[str, Member], Iterable[Member]], year: int,
                tz: Optional[tzinfo] = None, hour: int = 6) -> List[CompletionEvent]:
    """
    Merge every member's completions into one timeline ordered by solve time.

    Ties keep the input order of members, then day and star order. Members
    with no completions contribute nothing.
    """
    if isinstance(members, dict):
        members = members.values()

    timeline = []
    for member in members:
        timeline.extend(member_events(member, year, tz, hour))

    timeline.sort(key=lambda event: event.timestamp)
    return timeline
