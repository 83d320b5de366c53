"""Tests for the timeline materializer: dense, gap-filled day calendars."""
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

from upfor.models.availability import AvailabilityDay
from upfor.services.timeline import DayEntry, day_bucket_utc, fill_window, materialize

START = datetime(2026, 3, 1, tzinfo=timezone.utc)


def _row(user_id, day_offset, is_up=True, up_text=None):
    return SimpleNamespace(
        user_id=user_id,
        date=START.date() + timedelta(days=day_offset),
        is_up=is_up,
        up_text=up_text,
    )


class TestDayBucket:

    def test_truncates_to_utc_midnight(self):
        moment = datetime(2026, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert day_bucket_utc(moment) == datetime(2026, 3, 2, tzinfo=timezone.utc)

    def test_naive_is_treated_as_utc(self):
        assert day_bucket_utc(datetime(2026, 3, 1, 8, 15)) == START


class TestFillWindow:

    def test_user_without_rows_gets_all_false_days(self):
        result = fill_window([], ["u1"], START, 28)
        days = result["u1"]
        assert len(days) == 28
        assert all(d == DayEntry(date=d.date, is_up=False, up_text=None) for d in days)

    def test_days_are_strictly_ascending_without_gaps(self):
        days = fill_window([_row("u1", 5)], ["u1"], START, 28)["u1"]
        for offset, entry in enumerate(days):
            assert entry.date == START + timedelta(days=offset)

    def test_recorded_day_lands_at_its_offset(self):
        days = fill_window([_row("u1", 3, up_text="sauna")], ["u1"], START, 28)["u1"]
        assert days[3].is_up is True
        assert days[3].up_text == "sauna"
        assert sum(1 for d in days if d.is_up) == 1

    def test_rows_outside_window_are_ignored(self):
        rows = [_row("u1", -1), _row("u1", 28), _row("u1", 40)]
        days = fill_window(rows, ["u1"], START, 28)["u1"]
        assert not any(d.is_up for d in days)

    def test_not_up_row_drops_text(self):
        days = fill_window([_row("u1", 2, is_up=False, up_text="stale")], ["u1"], START, 28)["u1"]
        assert days[2].is_up is False
        assert days[2].up_text is None

    def test_rows_for_unrequested_users_are_ignored(self):
        result = fill_window([_row("stranger", 1)], ["u1"], START, 28)
        assert list(result) == ["u1"]

    def test_multiple_users_are_grouped(self):
        rows = [_row("u1", 0, up_text="run"), _row("u2", 27, up_text="film")]
        result = fill_window(rows, ["u1", "u2"], START, 28)
        assert result["u1"][0].up_text == "run"
        assert result["u2"][27].up_text == "film"
        assert not result["u1"][27].is_up
        assert not result["u2"][0].is_up

    def test_configurable_length(self):
        assert len(fill_window([], ["u1"], START, 7)["u1"]) == 7

    def test_start_is_bucketed(self):
        days = fill_window([], ["u1"], START + timedelta(hours=13), 3)["u1"]
        assert days[0].date == START


class TestMaterialize:

    def _seed(self, db):
        db.add_all([
            AvailabilityDay(user_id="u1", date=date(2026, 3, 4), is_up=True, up_text="sauna"),
            AvailabilityDay(user_id="u1", date=date(2026, 2, 28), is_up=True, up_text="too early"),
            AvailabilityDay(user_id="u1", date=date(2026, 3, 29), is_up=True, up_text="too late"),
            AvailabilityDay(user_id="u2", date=date(2026, 3, 1), is_up=True, up_text=None),
        ])
        db.commit()

    def test_reads_only_window_rows(self, db):
        self._seed(db)
        result = materialize(db, ["u1", "u2"], START, 28)
        assert len(result["u1"]) == 28
        assert result["u1"][3].up_text == "sauna"
        assert [d.up_text for d in result["u1"] if d.is_up] == ["sauna"]
        assert result["u2"][0].is_up is True

    def test_repeated_reads_are_identical(self, db):
        self._seed(db)
        first = materialize(db, ["u1", "u2"], START, 28)
        second = materialize(db, ["u1", "u2"], START, 28)
        assert first == second

    def test_no_users_returns_empty(self, db):
        assert materialize(db, [], START, 28) == {}

    def test_duplicate_ids_collapse(self, db):
        result = materialize(db, ["u1", "u1"], START, 28)
        assert list(result) == ["u1"]
