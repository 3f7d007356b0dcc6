from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

from ..attendance.repository import AttendanceRepository, RegisteredClassRepository
from ..common.datetime_utils import academic_year_label, iter_days, semi_month_bounds
from ..common.validators import DateLike, require_date, require_half, require_month, require_school_id, require_year
from ..core.enums import Dimension
from .aggregator import by_class, by_date
from .normalizer import normalize_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassStatus:
    standard: int
    division: str
    attendance_taken: bool
    mdm_taken: bool
    alt_meal_taken: bool

    def to_dict(self) -> dict:
        return {
            "standard": self.standard,
            "division": self.division,
            "attendanceTaken": self.attendance_taken,
            "mdmTaken": self.mdm_taken,
            "altMealTaken": self.alt_meal_taken,
        }


@dataclass(frozen=True)
class DayStatus:
    day: date
    classes: list[ClassStatus]

    def to_dict(self) -> dict:
        return {"date": self.day.isoformat(), "attendance": [c.to_dict() for c in self.classes]}


@dataclass(frozen=True)
class SubmissionStatus:
    academic_year: str
    registered_classes: list[tuple[int, str]]
    days: list[DayStatus]

    def to_dict(self) -> dict:
        return {
            "academicYear": self.academic_year,
            "registeredClasses": [{"standard": s, "division": d} for s, d in self.registered_classes],
            "status": [d.to_dict() for d in self.days],
        }


@dataclass(frozen=True)
class _Flags:
    mdm: bool
    alt_meal: bool


def _flags(record: Any) -> _Flags:
    snapshot = normalize_record(record, (Dimension.MEAL_TAKEN, Dimension.ALT_MEAL_TAKEN))
    return _Flags(mdm=not snapshot.meal_taken.is_zero(), alt_meal=not snapshot.alt_meal_taken.is_zero())


class SubmissionStatusService:
    """Which registered classes have submitted attendance, MDM and alt-meal counts."""

    def __init__(self, attendance: AttendanceRepository, registered: RegisteredClassRepository):
        self._attendance = attendance
        self._registered = registered

    def _build(self, school_id: str, start: date, end: date) -> SubmissionStatus:
        academic_year = academic_year_label(start)
        classes = [(int(c.standard), str(c.division)) for c in self._registered.list_for_academic_year(school_id, academic_year)]
        records: Iterable[Any] = self._attendance.find_attendance(school_id, start, end)

        submitted: dict[tuple[date, int, str], _Flags] = {}
        for record in records:
            submitted[(by_date(record), *by_class(record))] = _flags(record)

        days = []
        for day in iter_days(start, end):
            statuses = []
            for standard, division in classes:
                flags = submitted.get((day, standard, division))
                statuses.append(
                    ClassStatus(
                        standard=standard,
                        division=division,
                        attendance_taken=flags is not None,
                        mdm_taken=bool(flags and flags.mdm),
                        alt_meal_taken=bool(flags and flags.alt_meal),
                    )
                )
            days.append(DayStatus(day=day, classes=statuses))

        logger.debug("Submission status school=%s %s..%s classes=%d", school_id, start, end, len(classes))
        return SubmissionStatus(academic_year=academic_year, registered_classes=classes, days=days)

    def daily_status(self, school_id: str, day: DateLike) -> SubmissionStatus:
        school_id = require_school_id(school_id)
        day = require_date(day)
        return self._build(school_id, day, day)

    def semi_monthly_status(self, school_id: str, year: int, month: int, half: int) -> SubmissionStatus:
        school_id = require_school_id(school_id)
        start, end = semi_month_bounds(require_year(year), require_month(month), int(require_half(half)))
        return self._build(school_id, start, end)
