from __future__ import annotations

from datetime import date, datetime

import pytest

from mdm_attendance.attendance.model import AttendanceRecord
from mdm_attendance.core.enums import Band, RowKind
from mdm_attendance.core.exceptions import DataIntegrityError, ValidationError
from mdm_attendance.reports.labels import GUJARATI
from mdm_attendance.reports.service import ReportService

SCHOOL = "24010101001"


class FakeAttendanceRepo:
    def __init__(self, records):
        self._records = records
        self.calls = []

    def find_attendance(self, school_id, start, end=None):
        end = end or start
        self.calls.append((school_id, start, end))
        rows = [r for r in self._records if r.school_id == school_id and start <= r.date <= end]
        return sorted(rows, key=lambda r: (r.standard, r.division, r.date))


class FailingRepo:
    def find_attendance(self, school_id, start, end=None):
        raise RuntimeError("database unavailable")


def _rec(standard, division, day, *, registered=None, present=None, meal=None, school_id=SCHOOL):
    return AttendanceRecord(
        school_id=school_id,
        standard=standard,
        division=division,
        date=day,
        registered=registered or {},
        present=present or {},
        meal_taken=meal or {},
    )


def _male(n):
    return {"general": {"male": n}}


def _fixed_clock():
    return datetime(2026, 1, 15, 14, 5)


def test_daily_report_bands_and_grand_total():
    day = date(2026, 1, 15)
    records = [_rec(s, "A", day, registered=_male(s * 2), present=_male(s)) for s in range(8, 0, -1)]
    records.append(_rec(1, "A", day, present=_male(99), school_id="other-school"))
    repo = FakeAttendanceRepo(records)

    report = ReportService(repo, clock=_fixed_clock).build_daily_report(SCHOOL, "2026-01-15")

    assert repo.calls == [(SCHOOL, day, day)]
    assert report.has_data
    assert report.record_count == 8
    assert report.date_label == "15/01/2026"
    assert report.academic_year == "2025-2026"
    assert report.generated_at == "15/01/2026, 02:05 pm"
    assert len(report.rows) == 11

    subtotals = [r for r in report.rows if r.kind == RowKind.SUBTOTAL]
    assert [r.label for r in subtotals] == ["1-4 Total", "5-8 Total"]
    assert [r.totals.present.grand_total for r in subtotals] == [10, 26]
    assert report.grand_total.totals.present.grand_total == 36
    assert report.grand_total.percentages.present_rate.total == 50


def test_daily_report_without_records_has_only_zero_total():
    report = ReportService(FakeAttendanceRepo([])).build_daily_report(SCHOOL, date(2026, 1, 15))

    assert not report.has_data
    assert len(report.rows) == 1
    assert report.rows[0].kind == RowKind.GRAND_TOTAL
    assert report.rows[0].totals.is_zero()
    assert report.to_dict()["hasData"] is False


def test_break_point_moves_subtotals():
    day = date(2026, 1, 15)
    records = [_rec(s, "A", day, present=_male(1)) for s in (2, 3, 6)]

    report = ReportService(FakeAttendanceRepo(records)).build_daily_report(SCHOOL, day, break_at=3)

    assert [r.label for r in report.rows] == ["2 - A", "1-2 Total", "3 - A", "6 - A", "3-8 Total", "Total"]


def test_gujarati_labels():
    day = date(2026, 1, 15)
    records = [_rec(0, "A", day, present=_male(1))]

    report = ReportService(FakeAttendanceRepo(records), labels=GUJARATI).build_daily_report(SCHOOL, day)

    assert [r.label for r in report.rows] == ["બાલવાટિકા - A", "બાલવાટિકા કુલ", "કુલ"]


def test_range_report_fetches_once_and_emits_every_day():
    records = [_rec(1, "A", date(2026, 1, 15), present=_male(4)), _rec(2, "B", date(2026, 1, 15), present=_male(3))]
    repo = FakeAttendanceRepo(records)

    report = ReportService(repo).build_range_report(SCHOOL, "2026-01-14", "2026-01-16")

    assert len(repo.calls) == 1
    assert report.date_list == ["2026-01-14", "2026-01-15", "2026-01-16"]
    assert report.days_with_data == 1
    assert report.total_days == 3
    assert [d.has_data for d in report.daily_reports] == [False, True, False]
    assert report.daily_reports[1].grand_total.totals.present.grand_total == 7
    assert report.daily_reports[0].rows[0].kind == RowKind.GRAND_TOTAL

    meta = report.to_dict()["metadata"]
    assert meta["startDate"] == "14/01/2026"
    assert meta["endDate"] == "16/01/2026"
    assert meta["totalDays"] == 3


def test_semi_monthly_second_half_of_february():
    records = [
        _rec(0, "A", date(2026, 2, 16), registered=_male(5), present=_male(4), meal=_male(4)),
        _rec(
            1,
            "A",
            date(2026, 2, 16),
            registered={"general": {"male": 20}, "sc": {"female": 10}},
            present={"general": {"male": 18}, "sc": {"female": 9}},
            meal=_male(18),
        ),
        _rec(
            1,
            "A",
            date(2026, 2, 20),
            registered={"general": {"male": 22}, "sc": {"female": 10}},
            present=_male(15),
        ),
        _rec(7, "A", date(2026, 2, 17), registered=_male(8), present=_male(6)),
    ]

    report = ReportService(FakeAttendanceRepo(records)).build_semi_monthly_report(SCHOOL, 2026, 2, 2)

    assert report.start == date(2026, 2, 16)
    assert report.end == date(2026, 2, 28)
    assert len(report.per_date) == 13
    assert report.per_date[0].label == "16"
    assert [r.totals.present.grand_total for r in report.per_date[:5]] == [31, 6, 0, 0, 15]
    assert report.totals.kind == RowKind.TOTAL
    assert report.totals.totals.present.grand_total == 52
    assert report.totals.totals.meal_taken.grand_total == 22

    # registered is carried from each class's latest entry, not summed over days
    assert report.registered.get("general", "male") == 5 + 22 + 8
    assert report.registered.get("sc", "female") == 10

    assert report.month_label == "February"
    assert report.academic_year == "2025-2026"
    assert report.break_at == 6
    assert [s.label for s in report.sections] == ["Balvatika", "Std 1-5", "Std 6-8"]
    assert [s.band for s in report.sections] == [Band.PRE_PRIMARY, Band.LOWER, Band.UPPER]
    assert report.sections[1].registered.grand_total == 32
    assert report.sections[1].totals.totals.present.grand_total == 42
    assert report.sections[2].totals.totals.present.grand_total == 6

    out = report.to_dict()
    assert len(out["perDate"]) == 13
    assert out["totals"]["present"]["grandTotal"] == 52
    assert out["totals"] == out["overall"]["totals"]


def test_semi_monthly_first_half_has_fifteen_days():
    report = ReportService(FakeAttendanceRepo([])).build_semi_monthly_report(SCHOOL, 2026, 2, 1)

    assert len(report.per_date) == 15
    assert report.date_list[-1] == "2026-02-15"
    assert report.totals.totals.is_zero()


@pytest.mark.parametrize(
    "call",
    [
        lambda svc: svc.build_daily_report(SCHOOL, "15-01-2026"),
        lambda svc: svc.build_daily_report(SCHOOL, "2026-02-30"),
        lambda svc: svc.build_daily_report("", "2026-01-15"),
        lambda svc: svc.build_daily_report(SCHOOL, "2026-01-15", break_at=0),
        lambda svc: svc.build_daily_report(SCHOOL, "2026-01-15", break_at=9),
        lambda svc: svc.build_range_report(SCHOOL, "2026-01-16", "2026-01-15"),
        lambda svc: svc.build_semi_monthly_report(SCHOOL, 2026, 13, 1),
        lambda svc: svc.build_semi_monthly_report(SCHOOL, 2026, 2, 3),
    ],
)
def test_invalid_input_is_rejected_before_fetching(call):
    repo = FakeAttendanceRepo([])

    with pytest.raises(ValidationError):
        call(ReportService(repo))

    assert repo.calls == []


def test_range_message_names_order():
    with pytest.raises(ValidationError, match="Start date must be before or equal to end date"):
        ReportService(FakeAttendanceRepo([])).build_range_report(SCHOOL, "2026-01-16", "2026-01-15")


def test_repository_errors_propagate():
    with pytest.raises(RuntimeError):
        ReportService(FailingRepo()).build_daily_report(SCHOOL, "2026-01-15")


def test_out_of_range_standard_is_a_data_error():
    records = [_rec(9, "A", date(2026, 1, 15), present=_male(1))]

    with pytest.raises(DataIntegrityError):
        ReportService(FakeAttendanceRepo(records)).build_daily_report(SCHOOL, "2026-01-15")
