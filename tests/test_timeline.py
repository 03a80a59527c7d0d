from datetime import datetime, timedelta

import pytest

from aoc_timeline.models.leaderboard import Member, Snapshot
from aoc_timeline.models.timeline import StarKey
from aoc_timeline.timeline import MissingUnlockInstant, reconstruct, unlock_instant

from conftest import YEAR, member_payload, snapshot_payload


def test_unlock_instant_is_six_local(tz):
    assert unlock_instant(YEAR, 3, tz) == datetime(YEAR, 12, 3, 6, tzinfo=tz)


def test_unlock_instant_custom_hour(tz):
    assert unlock_instant(YEAR, 3, tz, hour=0).hour == 0


@pytest.mark.parametrize("day", [0, 26, -1])
def test_unlock_instant_rejects_days_outside_calendar(tz, day):
    with pytest.raises(MissingUnlockInstant):
        unlock_instant(YEAR, day, tz)


def test_scenario_order_and_elapsed(scenario_snapshot, tz):
    events = reconstruct(scenario_snapshot.members, scenario_snapshot.event_year, tz)

    assert [(e.member_label, e.star_key) for e in events] == [
        ('B', StarKey(1, 1)),
        ('A', StarKey(1, 1)),
        ('A', StarKey(1, 2)),
    ]
    assert [e.elapsed for e in events] == [
        timedelta(minutes=5),
        timedelta(minutes=10),
        timedelta(minutes=15),
    ]


def test_star_two_without_star_one_measures_from_unlock(tz):
    member = Member.model_validate(member_payload(7, 'C', {(2, 2): 3600}))
    events = reconstruct([member], YEAR, tz)

    assert len(events) == 1
    assert events[0].star_key == StarKey(2, 2)
    assert events[0].elapsed == timedelta(hours=1)


def test_anonymous_member_label(tz):
    member = Member.model_validate(member_payload(42, None, {(1, 1): 10}))
    events = reconstruct([member], YEAR, tz)

    assert events[0].member_label == 'Anonymous#42'


def test_member_without_completions_contributes_nothing(tz):
    member = Member.model_validate(member_payload(3, 'Idle', {}))
    assert reconstruct([member], YEAR, tz) == []


def test_invalid_day_is_skipped(tz, caplog):
    payload = member_payload(5, 'D', {(1, 1): 60})
    payload['completion_day_level']['30'] = {'1': {'get_star_ts': 0}}
    member = Member.model_validate(payload)

    events = reconstruct([member], YEAR, tz)

    assert [e.star_key for e in events] == [StarKey(1, 1)]
    assert "Skipping day 30" in caplog.text


def test_timeline_is_globally_ordered_and_non_negative(tz):
    snapshot = Snapshot.model_validate(snapshot_payload([
        member_payload(1, 'A', {(3, 1): 100, (3, 2): 200, (1, 1): 5000, (2, 1): 50}),
        member_payload(2, 'B', {(1, 1): 10, (1, 2): 20000, (2, 1): 40, (2, 2): 90}),
        member_payload(3, 'C', {(3, 1): 90000}),
    ]))
    events = reconstruct(snapshot.members, snapshot.event_year, tz)

    timestamps = [e.timestamp for e in events]
    assert timestamps == sorted(timestamps)
    assert all(e.elapsed >= timedelta(0) for e in events)
    assert len(events) == 9


def test_days_are_processed_in_numeric_order(tz):
    member = Member.model_validate(member_payload(1, 'A', {(10, 1): 5, (9, 1): 5, (2, 1): 5}))
    events = reconstruct([member], YEAR, tz)

    assert [e.star_key.day for e in events] == [2, 9, 10]


def test_reconstruction_is_repeatable(scenario_snapshot, tz):
    first = reconstruct(scenario_snapshot.members, YEAR, tz)
    second = reconstruct(scenario_snapshot.members, YEAR, tz)
    assert first == second
