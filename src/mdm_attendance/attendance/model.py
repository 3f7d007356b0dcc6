from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional

# {category: {"male": int, "female": int}}
CategoryBlock = Mapping[str, Mapping[str, int]]


@dataclass(frozen=True)
class AttendanceRecord:
    """One class/division on one day. Read-only for report computation."""

    school_id: str
    standard: int
    division: str
    date: date
    academic_year: Optional[str] = None
    registered: CategoryBlock = field(default_factory=dict)
    present: CategoryBlock = field(default_factory=dict)
    meal_taken: CategoryBlock = field(default_factory=dict)
    # Legacy rows were stored before the alt-meal column existed.
    alt_meal_taken: Optional[CategoryBlock] = None

    @property
    def class_key(self) -> tuple[int, str]:
        return (self.standard, self.division)


@dataclass(frozen=True)
class RegisteredClass:
    """Class roster entry for an academic year."""

    school_id: str
    academic_year: str
    standard: int
    division: str
    counts: CategoryBlock = field(default_factory=dict)
