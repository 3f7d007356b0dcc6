from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..core.enums import Band, RowKind
from .accumulator import CategoryAccumulator
from .normalizer import DimensionTotals
from .percentages import PercentageBlock


@dataclass
class ReportRow:
    """One emitted line of a report (class, subtotal, date or total)."""

    kind: RowKind
    label: str
    totals: DimensionTotals
    key: Any = None
    band: Optional[Band] = None
    percentages: Optional[PercentageBlock] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {
            "kind": self.kind.value,
            "label": self.label,
            "key": self.key.isoformat() if isinstance(self.key, date) else self.key,
            "band": self.band.value if self.band else None,
        }
        out.update(self.totals.to_dict())
        if self.percentages is not None:
            out["percentages"] = self.percentages.to_dict()
        return out


@dataclass
class DailyReport:
    day: date
    date_label: str
    break_at: int
    rows: list[ReportRow]
    record_count: int
    generated_at: str
    academic_year: str

    @property
    def has_data(self) -> bool:
        return self.record_count > 0

    @property
    def date_iso(self) -> str:
        return self.day.isoformat()

    @property
    def grand_total(self) -> ReportRow:
        return self.rows[-1]

    def to_dict(self, sheet: Optional[list[list]] = None) -> dict:
        out = {
            "date": self.date_label,
            "dateISO": self.date_iso,
            "academicYear": self.academic_year,
            "groupBreakAt": self.break_at,
            "hasData": self.has_data,
            "recordCount": self.record_count,
            "rows": [r.to_dict() for r in self.rows],
            "timestamp": self.generated_at,
        }
        if sheet is not None:
            out["sheet"] = sheet
        return out


@dataclass
class RangeReport:
    start: date
    end: date
    break_at: int
    daily_reports: list[DailyReport]
    generated_at: str

    @property
    def date_list(self) -> list[str]:
        return [r.date_iso for r in self.daily_reports]

    @property
    def total_days(self) -> int:
        return len(self.daily_reports)

    @property
    def days_with_data(self) -> int:
        return sum(1 for r in self.daily_reports if r.has_data)

    def to_dict(self, sheets: Optional[list[list[list]]] = None) -> dict:
        reports = [
            r.to_dict(sheet=sheets[i] if sheets is not None else None) for i, r in enumerate(self.daily_reports)
        ]
        return {
            "dailyReports": reports,
            "metadata": {
                "startDate": self.daily_reports[0].date_label if self.daily_reports else None,
                "endDate": self.daily_reports[-1].date_label if self.daily_reports else None,
                "dateList": self.date_list,
                "totalDays": self.total_days,
                "breakAt": self.break_at,
                "daysWithData": self.days_with_data,
                "timestamp": self.generated_at,
            },
        }


@dataclass
class SemiMonthlySection:
    """Per-date grid for one band (or the whole school when ``band`` is None)."""

    label: str
    band: Optional[Band]
    per_date: list[ReportRow]
    totals: ReportRow
    registered: CategoryAccumulator

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "band": self.band.value if self.band else None,
            "registeredTotals": self.registered.to_dict(),
            "perDate": [r.to_dict() for r in self.per_date],
            "totals": self.totals.to_dict(),
        }


@dataclass
class SemiMonthlyReport:
    year: int
    month: int
    half: int
    start: date
    end: date
    month_label: str
    academic_year: str
    break_at: int
    overall: SemiMonthlySection
    sections: list[SemiMonthlySection] = field(default_factory=list)
    generated_at: str = ""

    @property
    def per_date(self) -> list[ReportRow]:
        return self.overall.per_date

    @property
    def totals(self) -> ReportRow:
        return self.overall.totals

    @property
    def registered(self) -> CategoryAccumulator:
        return self.overall.registered

    @property
    def date_list(self) -> list[str]:
        return [r.key.isoformat() for r in self.overall.per_date]

    def to_dict(self) -> dict:
        return {
            "perDate": [r.to_dict() for r in self.per_date],
            "totals": self.totals.to_dict(),
            "overall": self.overall.to_dict(),
            "reportData": [s.to_dict() for s in self.sections],
            "metadata": {
                "month": self.month,
                "year": self.year,
                "half": self.half,
                "monthName": self.month_label,
                "academicYear": self.academic_year,
                "breakAt": self.break_at,
                "dateList": self.date_list,
                "timestamp": self.generated_at,
            },
        }
