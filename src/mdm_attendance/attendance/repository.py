from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, RegisteredClass


class AttendanceRepository(Protocol):
    def find_attendance(
        self,
        school_id: str,
        start: date,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records for one school on ``start`` (or ``start..end`` inclusive).

        Results are sorted by (standard ASC, division ASC, date ASC); the band
        partitioner relies on that order.
        """

        raise NotImplementedError


class RegisteredClassRepository(Protocol):
    def list_for_academic_year(self, school_id: str, academic_year: str) -> Sequence[RegisteredClass]:
        """Registered classes sorted by (standard, division)."""

        raise NotImplementedError
