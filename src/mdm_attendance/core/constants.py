"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Column order used by every sheet layout.
CATEGORY_CODES = ("sc", "st", "obc", "general")
GENDERS = ("male", "female")

PRE_PRIMARY_STANDARD = 0
MAX_STANDARD = 8
DIVISIONS = ("A", "B", "C", "D")

DEFAULT_BREAK_AT = 5
DEFAULT_SEMI_MONTHLY_BREAK_AT = 6
MIN_BREAK_AT = 1
MAX_BREAK_AT = 8

FIRST_HALF_END_DAY = 15
ACADEMIC_YEAR_START_MONTH = 6
