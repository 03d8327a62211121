"""Tests for event timestamp freshness checks."""

from datetime import datetime, timedelta, timezone

from codegen_webhooks.webhooks.timestamps import is_fresh


NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestIsFresh:
    def test_current_timestamp(self):
        assert is_fresh(NOW, now=NOW, max_age_seconds=300) is True

    def test_within_window(self):
        assert is_fresh(NOW - timedelta(seconds=120), now=NOW, max_age_seconds=300) is True

    def test_exactly_max_age(self):
        assert is_fresh(NOW - timedelta(seconds=300), now=NOW, max_age_seconds=300) is True

    def test_one_second_past_max_age(self):
        assert is_fresh(NOW - timedelta(seconds=301), now=NOW, max_age_seconds=300) is False

    def test_ten_minutes_old(self):
        assert is_fresh(NOW - timedelta(minutes=10), now=NOW, max_age_seconds=300) is False

    def test_future_timestamp(self):
        assert is_fresh(NOW + timedelta(seconds=1), now=NOW, max_age_seconds=300) is False

    def test_disabled_accepts_anything(self):
        assert is_fresh(NOW - timedelta(days=30), now=NOW, max_age_seconds=300, enabled=False) is True
        assert is_fresh(NOW + timedelta(days=30), now=NOW, max_age_seconds=300, enabled=False) is True

    def test_zero_max_age(self):
        assert is_fresh(NOW, now=NOW, max_age_seconds=0) is True
        assert is_fresh(NOW - timedelta(seconds=1), now=NOW, max_age_seconds=0) is False

    def test_naive_timestamp_read_as_utc(self):
        naive = (NOW - timedelta(seconds=60)).replace(tzinfo=None)
        assert is_fresh(naive, now=NOW, max_age_seconds=300) is True

    def test_other_offset_compared_in_utc(self):
        plus_two = timezone(timedelta(hours=2))
        ts = (NOW - timedelta(seconds=30)).astimezone(plus_two)
        assert is_fresh(ts, now=NOW, max_age_seconds=300) is True

    def test_defaults_to_current_time(self):
        assert is_fresh(datetime.now(timezone.utc)) is True
        assert is_fresh(datetime.now(timezone.utc) - timedelta(hours=1)) is False
