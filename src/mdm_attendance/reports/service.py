from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import (
    academic_year_label,
    format_day,
    format_timestamp,
    iter_days,
    now_local,
    semi_month_bounds,
)
from ..common.validators import (
    DateLike,
    require_break_at,
    require_date,
    require_date_range,
    require_half,
    require_month,
    require_school_id,
    require_year,
)
from ..core.constants import DEFAULT_BREAK_AT, DEFAULT_SEMI_MONTHLY_BREAK_AT
from ..core.enums import Band, RowKind
from .aggregator import aggregate, by_date, carried_registered, sum_totals
from .bands import bands_for, classify_standard, partition
from .labels import ENGLISH, ReportLabels
from .layout import SEMI_MONTHLY
from .normalizer import record_field
from .model import DailyReport, RangeReport, ReportRow, SemiMonthlyReport, SemiMonthlySection

logger = logging.getLogger(__name__)


class ReportService:
    """Builds daily, ranged and semi-monthly MDM reports for one school.

    Input is validated before the repository is touched; repository errors
    propagate to the caller unchanged.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        labels: Optional[ReportLabels] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._attendance = attendance
        self._labels = labels or ENGLISH
        self._clock = clock or now_local

    @property
    def labels(self) -> ReportLabels:
        return self._labels

    def _timestamp(self) -> str:
        return format_timestamp(self._clock())

    def _daily_from_records(self, day: date, records: Sequence[Any], break_at: int, generated_at: str) -> DailyReport:
        rows = partition(records, break_at, labels=self._labels)
        return DailyReport(
            day=day,
            date_label=format_day(day),
            break_at=break_at,
            rows=rows,
            record_count=len(records),
            generated_at=generated_at,
            academic_year=academic_year_label(day),
        )

    def build_daily_report(self, school_id: str, day: DateLike, break_at: int = DEFAULT_BREAK_AT) -> DailyReport:
        school_id = require_school_id(school_id)
        day = require_date(day)
        break_at = require_break_at(break_at)

        records = list(self._attendance.find_attendance(school_id, day))
        report = self._daily_from_records(day, records, break_at, self._timestamp())
        logger.debug("Daily report school=%s day=%s records=%d", school_id, day, report.record_count)
        return report

    def build_range_report(
        self,
        school_id: str,
        start: DateLike,
        end: DateLike,
        break_at: int = DEFAULT_BREAK_AT,
    ) -> RangeReport:
        school_id = require_school_id(school_id)
        start, end = require_date_range(start, end)
        break_at = require_break_at(break_at)

        # One fetch for the whole range; repository order (standard, division)
        # is kept inside each day's bucket.
        records = list(self._attendance.find_attendance(school_id, start, end))
        by_day: dict[date, list] = {d: [] for d in iter_days(start, end)}
        for record in records:
            bucket = by_day.get(by_date(record))
            if bucket is not None:
                bucket.append(record)

        generated_at = self._timestamp()
        daily = [self._daily_from_records(d, by_day[d], break_at, generated_at) for d in sorted(by_day)]
        report = RangeReport(start=start, end=end, break_at=break_at, daily_reports=daily, generated_at=generated_at)
        logger.debug(
            "Range report school=%s %s..%s days=%d with_data=%d",
            school_id,
            start,
            end,
            len(daily),
            report.days_with_data,
        )
        return report

    def _semi_section(
        self,
        records: Sequence[Any],
        days: list[date],
        *,
        label: str,
        band: Optional[Band],
    ) -> SemiMonthlySection:
        dims = SEMI_MONTHLY.dimensions
        grouped = aggregate(records, by_date, keys=days, dimensions=dims)
        per_date = [
            ReportRow(kind=RowKind.DATE, label=f"{d.day:02d}", totals=grouped[d], key=d, band=band) for d in days
        ]
        totals = ReportRow(
            kind=RowKind.TOTAL,
            label=self._labels.total,
            totals=sum_totals((grouped[d] for d in days), dims),
            key="total",
            band=band,
        )
        return SemiMonthlySection(
            label=label,
            band=band,
            per_date=per_date,
            totals=totals,
            registered=carried_registered(records).registered,
        )

    def build_semi_monthly_report(
        self,
        school_id: str,
        year: int,
        month: int,
        half: int,
        break_at: int = DEFAULT_SEMI_MONTHLY_BREAK_AT,
    ) -> SemiMonthlyReport:
        school_id = require_school_id(school_id)
        year = require_year(year)
        month = require_month(month)
        half = require_half(half)
        break_at = require_break_at(break_at)

        start, end = semi_month_bounds(year, month, int(half))
        days = list(iter_days(start, end))
        records = list(self._attendance.find_attendance(school_id, start, end))

        overall = self._semi_section(records, days, label=self._labels.total, band=None)
        sections = []
        for band in bands_for(break_at):
            members = [r for r in records if classify_standard(int(record_field(r, "standard")), break_at) == band]
            sections.append(
                self._semi_section(members, days, label=self._labels.section_label(band, break_at), band=band)
            )

        logger.debug("Semi-monthly report school=%s %04d-%02d half=%d records=%d", school_id, year, month, half, len(records))
        return SemiMonthlyReport(
            year=year,
            month=month,
            half=int(half),
            start=start,
            end=end,
            month_label=self._labels.month_name(month),
            academic_year=academic_year_label(start),
            break_at=break_at,
            overall=overall,
            sections=sections,
            generated_at=self._timestamp(),
        )
