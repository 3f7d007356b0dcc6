from __future__ import annotations

from enum import Enum


class Dimension(str, Enum):
    """Attendance dimensions stored per class per day."""

    REGISTERED = "registered"
    PRESENT = "present"
    MEAL_TAKEN = "mealTaken"
    ALT_MEAL_TAKEN = "altMealTaken"


ALL_DIMENSIONS = (
    Dimension.REGISTERED,
    Dimension.PRESENT,
    Dimension.MEAL_TAKEN,
    Dimension.ALT_MEAL_TAKEN,
)


class Band(str, Enum):
    """Standard bands used for subtotal rows."""

    PRE_PRIMARY = "pre-primary"
    LOWER = "lower"
    UPPER = "upper"


class RowKind(str, Enum):
    CLASS = "class"
    SUBTOTAL = "subtotal"
    GRAND_TOTAL = "grand_total"
    DATE = "date"
    TOTAL = "total"


class Half(int, Enum):
    """Semi-monthly period: 1st-15th or 16th-end of month."""

    FIRST = 1
    SECOND = 2
