"""Console rendering of a scored timeline"""
import sys
from datetime import date
from typing import Dict, Iterable, Optional, TextIO

from aoc_timeline.duration import format_duration
from aoc_timeline.models.timeline import ScoredEvent
from aoc_timeline.scoring import rank_totals

SEPARATOR = '#' * 70
NAME_WIDTH = 25


def format_event(scored: ScoredEvent) -> str:
    """One report line: time, member, star, points and time taken"""
    event = scored.event
    return (
        f"  {event.timestamp.strftime('%H:%M:%S')} {event.member_label:{NAME_WIDTH}}\t"
        f"{event.star_key.label} [{scored.score}] ({format_duration(event.elapsed)})"
    )


def render(events: Iterable[ScoredEvent], totals: Dict[str, int], filter_today: bool,
           today: Optional[date] = None, out: Optional[TextIO] = None) -> None:
    """
    Print the timeline grouped by day, followed by the leaderboard.

    With filter_today only events solved on `today` are listed. Totals always
    cover the whole timeline.
    """
    today = today or date.today()
    out = out or sys.stdout
    print(f"\n{SEPARATOR}", file=out)

    heading = None
    for scored in events:
        timestamp = scored.event.timestamp
        if filter_today and timestamp.date() != today:
            continue
        event_day = f"{timestamp:%B} {timestamp.day:2}"
        if event_day != heading:
            print(f"\n{event_day}", file=out)
            heading = event_day
        print(format_event(scored), file=out)

    print("\nLeaderboard:", file=out)
    for label, total in rank_totals(totals):
        print(f"  {label:{NAME_WIDTH}} {total}", file=out)
