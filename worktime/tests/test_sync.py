"""
Tests for derived worked hours / status reconciliation
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytz

from worktime.check_events import ABSENT, PreciseCheck, WallClockCheck, check_event
from worktime.enums import ShiftStatus
from worktime.sync import apply_patch, compute_worked_hours, derive_status, sync_derived_fields
from worktime.types import ShiftData

UTC = pytz.utc


def make_shift(**kwargs):
    defaults = {
        "id": 1,
        "employee_id": 1,
        "date": date(2024, 3, 4),
        "start_time": "09:00",
        "end_time": "17:00",
    }
    defaults.update(kwargs)
    return ShiftData(**defaults)


class TestCheckEvents:
    def test_instant_wins_over_clock(self):
        instant = UTC.localize(datetime(2024, 3, 4, 9, 0))
        assert check_event(instant, "08:00") == PreciseCheck(instant)

    def test_clock_is_normalized(self):
        assert check_event(None, "9:15") == WallClockCheck("09:15")

    def test_blank_is_absent(self):
        assert check_event(None, "  ") is ABSENT
        assert check_event(None, None) is ABSENT

    def test_unparsable_clock_kept_as_wall_clock(self):
        event = check_event(None, "late")
        assert isinstance(event, WallClockCheck)
        assert event.clock == "late"


class TestComputeWorkedHours:
    def test_precise_instants(self):
        start = UTC.localize(datetime(2024, 3, 4, 9, 0))
        shift = make_shift(
            check_in_timestamp=start,
            check_out_timestamp=start + timedelta(hours=7, minutes=45),
        )
        assert compute_worked_hours(shift) == Decimal("7.75")

    def test_negative_instants_fall_through_to_none(self):
        start = UTC.localize(datetime(2024, 3, 4, 9, 0))
        shift = make_shift(
            check_in_timestamp=start, check_out_timestamp=start - timedelta(hours=1)
        )
        assert compute_worked_hours(shift) is None

    def test_wall_clock_strings(self):
        shift = make_shift(checked_in_time="09:00", checked_out_time="17:30")
        assert compute_worked_hours(shift) == Decimal("8.50")

    def test_wall_clock_overnight_adds_a_day(self):
        shift = make_shift(
            start_time="22:00", end_time="06:00", overnight=True,
            checked_in_time="22:00", checked_out_time="06:00",
        )
        assert compute_worked_hours(shift) == Decimal("8.00")

    def test_wall_clock_inverted_without_overnight_is_none(self):
        shift = make_shift(checked_in_time="17:00", checked_out_time="09:00")
        assert compute_worked_hours(shift) is None

    def test_mixed_precise_and_wall_clock_is_none(self):
        shift = make_shift(
            check_in_timestamp=UTC.localize(datetime(2024, 3, 4, 9, 0)),
            checked_out_time="17:00",
        )
        assert compute_worked_hours(shift) is None

    def test_missing_check_out_is_none(self):
        assert compute_worked_hours(make_shift(checked_in_time="09:00")) is None

    def test_unparsable_clock_is_none(self):
        shift = make_shift(checked_in_time="nine", checked_out_time="17:00")
        assert compute_worked_hours(shift) is None


class TestDeriveStatus:
    def test_status_follows_presence(self):
        assert derive_status(make_shift()) == ShiftStatus.SCHEDULED
        assert derive_status(make_shift(checked_in_time="09:00")) == ShiftStatus.IN_PROGRESS
        assert (
            derive_status(make_shift(checked_in_time="09:00", checked_out_time="17:00"))
            == ShiftStatus.COMPLETED
        )

    def test_check_out_alone_is_scheduled(self):
        assert derive_status(make_shift(checked_out_time="17:00")) == ShiftStatus.SCHEDULED


class TestSyncDerivedFields:
    def test_fresh_shift_needs_no_patch(self):
        assert sync_derived_fields(make_shift()) is None

    def test_completed_shift_patch(self):
        shift = make_shift(checked_in_time="09:00", checked_out_time="17:00")

        patch = sync_derived_fields(shift)

        assert patch == {
            "derived_worked_hours": Decimal("8.00"),
            "derived_status": ShiftStatus.COMPLETED,
        }

    def test_second_sync_returns_none(self):
        shift = make_shift(checked_in_time="09:00", checked_out_time="17:15")

        apply_patch(shift, sync_derived_fields(shift))

        assert sync_derived_fields(shift) is None

    def test_in_progress_only_patches_status(self):
        shift = make_shift(checked_in_time="09:00")
        assert sync_derived_fields(shift) == {"derived_status": ShiftStatus.IN_PROGRESS}

    def test_stored_hours_compared_after_rounding(self):
        shift = make_shift(
            checked_in_time="09:00",
            checked_out_time="17:00",
            derived_worked_hours=Decimal("8.0"),
            derived_status=ShiftStatus.COMPLETED,
        )
        assert sync_derived_fields(shift) is None

    def test_gap_keeps_stored_hours(self):
        shift = make_shift(
            checked_in_time="09:00",
            checked_out_time="nine",
            derived_worked_hours=Decimal("3.00"),
            derived_status=ShiftStatus.COMPLETED,
        )
        assert sync_derived_fields(shift) is None

    def test_apply_patch_none_is_noop(self):
        shift = make_shift()
        assert apply_patch(shift, None) is shift
