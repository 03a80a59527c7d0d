import io
from datetime import date, datetime, timedelta

from aoc_timeline.models.timeline import CompletionEvent, ScoredEvent, StarKey
from aoc_timeline.render import SEPARATOR, format_event, render
from aoc_timeline.scoring import score_timeline
from aoc_timeline.timeline import reconstruct

from conftest import YEAR


def scored_event(tz, day, hour, label, score):
    timestamp = datetime(YEAR, 12, day, hour, 7, 3, tzinfo=tz)
    return ScoredEvent(
        event=CompletionEvent(
            timestamp=timestamp,
            elapsed=timedelta(minutes=65, seconds=3),
            member_label=label,
            star_key=StarKey(day, 1)
        ),
        score=score
    )


def test_format_event(tz):
    line = format_event(scored_event(tz, 1, 7, 'Alice', 4))

    assert line == "  07:07:03 " + "Alice".ljust(25) + "\t01-1 [4] (1:05:03)"


def test_render_groups_by_day_and_ranks(scenario_snapshot, tz):
    events = reconstruct(scenario_snapshot.members, YEAR, tz)
    scored, totals = score_timeline(events, len(scenario_snapshot.members))
    out = io.StringIO()

    render(scored, totals, filter_today=False, out=out)

    lines = out.getvalue().splitlines()
    assert lines[1] == SEPARATOR
    assert lines[3] == "December  1"
    assert "B" in lines[4] and "[2] (05:00)" in lines[4]
    assert "[1] (10:00)" in lines[5]
    assert "01-2 [2] (15:00)" in lines[6]
    assert lines[-3] == "Leaderboard:"
    assert lines[-2] == "  " + "A".ljust(25) + " 3"
    assert lines[-1] == "  " + "B".ljust(25) + " 2"


def test_render_today_only_filters_events_not_totals(tz):
    events = [scored_event(tz, 1, 7, 'Old', 2), scored_event(tz, 2, 7, 'New', 2)]
    out = io.StringIO()

    render(events, {'Old': 2, 'New': 2}, filter_today=True, today=date(YEAR, 12, 2), out=out)

    text = out.getvalue()
    assert "December  2" in text
    assert "December  1" not in text
    assert "  " + "Old".ljust(25) + " 2" in text


def test_day_heading_pads_single_digit_days(tz):
    events = [scored_event(tz, 3, 7, 'A', 1), scored_event(tz, 14, 7, 'A', 1)]
    out = io.StringIO()

    render(events, {'A': 2}, filter_today=False, out=out)

    lines = out.getvalue().splitlines()
    assert "December  3" in lines
    assert "December 14" in lines
