"""
Enumerations for the payroll recalculation flow.
"""

from enum import Enum


class RecalculationTrigger(Enum):
    """What caused a week of earnings to be rebuilt"""

    SHIFT_CHANGED = "shift_changed"
    """A shift was created, edited or deleted"""

    WAGE_CHANGE = "wage_change"
    """A new wage history entry was recorded"""

    SETTINGS_CHANGE = "settings_change"
    """Overtime settings changed and a recompute was requested"""

    MANUAL = "manual"
    """Management command or API request"""

    def __str__(self):
        return self.value
