"""
Tests for twoam/services/mute.py - mute window checks and construction.
"""

from datetime import datetime

import pytest

from twoam.errors import InvalidMuteSpecError
from twoam.models.tenant import TenantRecord
from twoam.services.mute import format_mute_until, is_muted, parse_mute_until, resolve_mute_until


def _record(mute_until):
    return TenantRecord(tenant_id="1", destination_id="ch1", mute_until=mute_until)


class TestIsMuted:
    """Tests for the lazy-expiry mute check."""

    @pytest.mark.parametrize(
        "mute_until, expected",
        [
            (None, False),
            ("", False),
            ("2030-01-01T10:00:01", True),
            ("2030-01-01T10:00:00", False),
            ("2030-01-01T09:59:59", False),
            ("2030-01-01 23:59:59", True),
            ("2099-01-01", True),
        ],
    )
    def test_muted_iff_now_before_mute_until(self, now, mute_until, expected):
        assert is_muted(_record(mute_until), now) is expected

    @pytest.mark.parametrize("garbage", ["not a date", "2030-13-45T00:00:00", "Tuesday"])
    def test_unparseable_value_is_not_muted(self, now, garbage):
        assert is_muted(_record(garbage), now) is False

    def test_accepts_datetime_value(self, now):
        assert is_muted(_record(datetime(2030, 1, 2)), now) is True

    def test_parse_strips_timezone(self):
        assert parse_mute_until("2030-01-01T10:00:00+02:00") == datetime(2030, 1, 1, 10, 0, 0)


class TestResolveMuteUntil:
    """Tests for turning mute arguments into timestamps."""

    def test_default_mutes_until_end_of_today(self, now):
        assert format_mute_until(resolve_mute_until("", now)) == "2030-01-01T23:59:59"

    def test_none_is_default(self, now):
        assert resolve_mute_until(None, now) == datetime(2030, 1, 1, 23, 59, 59)

    def test_tomorrow_is_alias_for_end_of_today(self, now):
        assert resolve_mute_until("tomorrow", now) == resolve_mute_until("", now)

    def test_week_mutes_until_end_of_day_seven_days_out(self, now):
        assert format_mute_until(resolve_mute_until("week", now)) == "2030-01-08T23:59:59"

    def test_keywords_are_case_insensitive(self, now):
        assert resolve_mute_until("  WEEK ", now) == datetime(2030, 1, 8, 23, 59, 59)

    def test_explicit_date_mutes_until_start_of_that_day(self, now):
        assert resolve_mute_until("2030-02-14", now) == datetime(2030, 2, 14, 0, 0, 0)

    def test_explicit_date_today_is_rejected(self, now):
        with pytest.raises(InvalidMuteSpecError):
            resolve_mute_until("2030-01-01", now)

    def test_past_date_is_rejected(self, now):
        with pytest.raises(InvalidMuteSpecError):
            resolve_mute_until("2029-12-31", now)

    def test_garbage_is_rejected(self, now):
        with pytest.raises(InvalidMuteSpecError, match="Could not understand"):
            resolve_mute_until("next tuesday", now)

    def test_one_second_before_midnight_still_mutes(self):
        late = datetime(2030, 1, 1, 23, 59, 58)
        assert resolve_mute_until("", late) == datetime(2030, 1, 1, 23, 59, 59)
