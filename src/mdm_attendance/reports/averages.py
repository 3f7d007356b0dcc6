from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..common.validators import require_month, require_school_id, require_year
from ..core.enums import Dimension
from .aggregator import carried_registered
from .normalizer import normalize_record, record_field

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


def _ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    return numerator / denominator if denominator else Decimal(0)


def _round2(value: Decimal) -> float:
    return float(value.quantize(_CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class AverageRow:
    average_male: float
    average_female: float
    average_total: float
    registered_male: int
    registered_female: int
    registered_total: int
    percent_male: float
    percent_female: float
    percent_total: float
    working_days: int

    def to_dict(self) -> dict:
        return {
            "averageMale": self.average_male,
            "averageFemale": self.average_female,
            "averageTotal": self.average_total,
            "registeredMale": self.registered_male,
            "registeredFemale": self.registered_female,
            "registeredTotal": self.registered_total,
            "percentMale": self.percent_male,
            "percentFemale": self.percent_female,
            "percentTotal": self.percent_total,
            "workingDays": self.working_days,
        }


@dataclass(frozen=True)
class MonthlyAverages:
    year: int
    month: int
    standards: dict[int, AverageRow]
    school: AverageRow

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "standards": {str(k): v.to_dict() for k, v in self.standards.items()},
            "schoolAverage": self.school.to_dict(),
        }


def _average_row(records: list[Any]) -> AverageRow:
    """Present averages per class-day, against registered carried from each class's latest record."""
    present_male = present_female = 0
    for record in records:
        present = normalize_record(record, (Dimension.PRESENT,)).present
        present_male += present.total_male
        present_female += present.total_female

    days = Decimal(len(records))
    registered = carried_registered(records).registered
    avg_male = _ratio(Decimal(present_male), days)
    avg_female = _ratio(Decimal(present_female), days)
    avg_total = _ratio(Decimal(present_male + present_female), days)

    return AverageRow(
        average_male=_round2(avg_male),
        average_female=_round2(avg_female),
        average_total=_round2(avg_total),
        registered_male=registered.total_male,
        registered_female=registered.total_female,
        registered_total=registered.grand_total,
        percent_male=_round2(_ratio(avg_male, Decimal(registered.total_male)) * 100),
        percent_female=_round2(_ratio(avg_female, Decimal(registered.total_female)) * 100),
        percent_total=_round2(_ratio(avg_total, Decimal(registered.grand_total)) * 100),
        working_days=len(records),
    )


class MonthlyAveragesService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def monthly_averages(self, school_id: str, year: int, month: int) -> MonthlyAverages:
        school_id = require_school_id(school_id)
        year = require_year(year)
        month = require_month(month)

        start, end = month_bounds(year, month)
        records = list(self._attendance.find_attendance(school_id, start, end))

        by_standard: dict[int, list[Any]] = {}
        for record in records:
            by_standard.setdefault(int(record_field(record, "standard")), []).append(record)

        standards = {std: _average_row(by_standard[std]) for std in sorted(by_standard)}
        logger.debug("Monthly averages school=%s %04d-%02d standards=%d", school_id, year, month, len(standards))
        return MonthlyAverages(year=year, month=month, standards=standards, school=_average_row(records))
