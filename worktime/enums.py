"""
Enumerations shared by the worktime models and algorithms.
"""

from enum import Enum

from django.db import models


class ShiftStatus(models.TextChoices):
    """Lifecycle status derived from check-in/check-out presence"""

    SCHEDULED = "scheduled", "Scheduled"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETED = "completed", "Completed"


class ShiftType(models.TextChoices):
    REGULAR = "regular", "Regular"
    OVERTIME = "overtime", "Overtime"
    BREAK = "break", "Break"
    MEETING = "meeting", "Meeting"


class RejectionType(Enum):
    """Machine-checkable reason a candidate shift was refused"""

    TIME_INVALID = "time_invalid"
    """End is not after start and overnight shifts are not allowed"""

    DURATION_EXCEEDED = "duration_exceeded"
    """Single shift longer than the per-shift maximum"""

    OVERLAP_CONFLICT = "overlap_conflict"
    """Candidate intersects another shift of the same employee"""

    DAILY_LIMIT_EXCEEDED = "daily_limit_exceeded"
    """Committed minutes on the nominal day would pass the daily ceiling"""

    VALIDATION_ERROR = "validation_error"
    """Candidate could not be interpreted (unparsable times)"""

    def __str__(self):
        return self.value
