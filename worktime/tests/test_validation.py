"""
Tests for the candidate shift validator
"""

import itertools
from datetime import date, datetime
from decimal import Decimal

import pytest

from worktime.enums import RejectionType
from worktime.types import ShiftData
from worktime.validation import intervals_overlap, validate_shift

DAY = date(2024, 3, 4)


def shift(pk, start, end, day=DAY, end_date=None, description=""):
    return ShiftData(
        id=pk,
        employee_id=1,
        date=day,
        start_time=start,
        end_time=end,
        end_date=end_date,
        overnight=end_date is not None,
        description=description,
    )


class TestScenarios:
    def test_day_shift_without_neighbours_is_valid(self):
        result = validate_shift("09:00", "17:00", "2024-03-04", [], max_hours=16)

        assert result.is_valid
        assert result.total_daily_hours == Decimal("8.00")
        assert result.overnight is False
        assert result.message == "Valid shift"

    def test_overnight_shift_allowed_when_flagged(self):
        result = validate_shift("22:00", "06:00", DAY, [], allow_overnight=True)

        assert result.is_valid
        assert result.total_daily_hours == Decimal("8.00")
        assert result.overnight is True
        assert result.message == "Valid shift (crosses midnight)"

    def test_overlapping_shift_is_rejected(self):
        existing = [shift(7, "09:00", "13:00", description="Morning")]

        result = validate_shift("12:00", "16:00", DAY, existing)

        assert not result.is_valid
        assert result.type is RejectionType.OVERLAP_CONFLICT
        assert result.conflicting_shift_id == 7
        assert "09:00 - 13:00: Morning" in result.message
        assert result.as_dict()["type"] == "overlap_conflict"


class TestRejections:
    def test_end_before_start_without_overnight(self):
        result = validate_shift("22:00", "06:00", DAY, [])
        assert result.type is RejectionType.TIME_INVALID
        assert result.message == "End time must be after start time"

    def test_equal_times_without_overnight(self):
        result = validate_shift("09:00", "09:00", DAY, [])
        assert result.type is RejectionType.TIME_INVALID

    def test_duration_over_max(self):
        result = validate_shift("06:00", "23:00", DAY, [], max_hours=16)
        assert result.type is RejectionType.DURATION_EXCEEDED
        assert result.message == "A shift cannot last more than 16 hours"

    def test_duration_exactly_at_max_is_valid(self):
        result = validate_shift("06:00", "22:00", DAY, [], max_hours=16)
        assert result.is_valid
        assert result.total_daily_hours == Decimal("16.00")

    def test_duration_uses_full_overnight_length(self):
        result = validate_shift("20:00", "13:00", DAY, [], allow_overnight=True, max_hours=16)
        assert result.type is RejectionType.DURATION_EXCEEDED

    def test_unparsable_time_is_typed_not_raised(self):
        result = validate_shift("nine", "17:00", DAY, [])
        assert not result.is_valid
        assert result.type is RejectionType.VALIDATION_ERROR

    def test_unparsable_day(self):
        result = validate_shift("09:00", "17:00", "not-a-date", [])
        assert result.type is RejectionType.VALIDATION_ERROR

    def test_daily_ceiling(self):
        existing = [shift(1, "00:00", "08:00"), shift(2, "08:00", "16:00")]

        result = validate_shift("16:00", "18:00", DAY, existing)

        assert result.type is RejectionType.DAILY_LIMIT_EXCEEDED
        assert result.total_daily_hours == Decimal("18.00")
        assert "exceed the allowed 16 hours" in result.message
        assert "(current: 18.00h)" in result.message

    def test_daily_ceiling_reached_exactly_is_valid(self):
        existing = [shift(1, "00:00", "08:00")]

        result = validate_shift("08:00", "16:00", DAY, existing)

        assert result.is_valid
        assert result.total_daily_hours == Decimal("16.00")

    def test_daily_ceiling_one_minute_over(self):
        existing = [shift(1, "00:00", "08:00")]

        result = validate_shift("08:00", "16:01", DAY, existing)

        assert result.type is RejectionType.DAILY_LIMIT_EXCEEDED

    def test_daily_ceiling_clamps_overnight_at_midnight(self):
        # 8h day shift plus 22:00-06:00: only 2h count towards the day
        existing = [shift(1, "08:00", "16:00")]

        result = validate_shift("22:00", "06:00", DAY, existing, allow_overnight=True)

        assert result.is_valid
        assert result.total_daily_hours == Decimal("16.00")

    def test_reported_total_can_exceed_ceiling_when_valid(self):
        # 8h + 6h before midnight is within the ceiling; the full 12h is reported
        existing = [shift(1, "08:00", "16:00")]

        result = validate_shift("18:00", "06:00", DAY, existing, allow_overnight=True)

        assert result.is_valid
        assert result.total_daily_hours == Decimal("20.00")

    def test_daily_limit_override(self):
        existing = [shift(1, "08:00", "12:00")]
        result = validate_shift("13:00", "17:00", DAY, existing, daily_limit_minutes=420)
        assert result.type is RejectionType.DAILY_LIMIT_EXCEEDED


class TestNeighbours:
    def test_previous_day_overnight_conflicts(self):
        previous = shift(3, "22:00", "06:00", day=date(2024, 3, 3), end_date=DAY)

        result = validate_shift("05:00", "09:00", DAY, [previous])

        assert result.type is RejectionType.OVERLAP_CONFLICT
        assert result.conflicting_shift_id == 3

    def test_previous_day_shift_not_in_daily_total(self):
        previous = shift(3, "22:00", "06:00", day=date(2024, 3, 3), end_date=DAY)

        result = validate_shift("07:00", "15:00", DAY, [previous])

        assert result.is_valid
        assert result.total_daily_hours == Decimal("8.00")

    def test_candidate_overnight_hits_next_day_shift(self):
        following = shift(4, "05:00", "09:00", day=date(2024, 3, 5))

        result = validate_shift("22:00", "06:00", DAY, [following], allow_overnight=True)

        assert result.type is RejectionType.OVERLAP_CONFLICT

    def test_touching_shifts_do_not_overlap(self):
        existing = [shift(1, "09:00", "13:00")]
        assert validate_shift("13:00", "17:00", DAY, existing).is_valid

    def test_exclude_id_skips_self(self):
        existing = [shift(9, "09:00", "17:00")]
        result = validate_shift("10:00", "18:00", DAY, existing, exclude_id="9")
        assert result.is_valid

    def test_unparsable_existing_shift_is_skipped(self):
        existing = [shift(1, "??", "13:00")]
        assert validate_shift("09:00", "17:00", DAY, existing).is_valid


def _interval(start_hour, end_hour):
    return (
        datetime(2024, 3, 4, start_hour, 0),
        datetime(2024, 3, 4, end_hour, 0),
    )


class TestOverlapSymmetry:
    def test_overlaps_is_symmetric(self):
        intervals = [
            _interval(start, end)
            for start, end in itertools.combinations(range(0, 24, 3), 2)
        ]
        for a, b in itertools.product(intervals, repeat=2):
            assert intervals_overlap(a, b) == intervals_overlap(b, a)

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ((9, 13), (12, 16), True),
            ((9, 13), (13, 16), False),
            ((9, 17), (10, 11), True),
            ((9, 10), (11, 12), False),
        ],
    )
    def test_known_pairs(self, a, b, expected):
        assert intervals_overlap(_interval(*a), _interval(*b)) is expected
