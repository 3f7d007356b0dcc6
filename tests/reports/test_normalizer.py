from __future__ import annotations

from datetime import date

from mdm_attendance.attendance.model import AttendanceRecord
from mdm_attendance.core.enums import Dimension
from mdm_attendance.reports.normalizer import normalize_record


def test_record_without_alt_meal_block_normalizes_to_zero():
    record = AttendanceRecord(
        school_id="24010101001",
        standard=3,
        division="A",
        date=date(2026, 1, 15),
        registered={"sc": {"male": 10, "female": 5}},
        present={"sc": {"male": 8, "female": 5}},
        meal_taken={"sc": {"male": 8, "female": 4}},
        alt_meal_taken=None,
    )

    snap = normalize_record(record)

    assert snap.registered.grand_total == 15
    assert snap.present.grand_total == 13
    assert snap.meal_taken.grand_total == 12
    assert snap.alt_meal_taken.is_zero()
    assert snap.dimensions == (
        Dimension.REGISTERED,
        Dimension.PRESENT,
        Dimension.MEAL_TAKEN,
        Dimension.ALT_MEAL_TAKEN,
    )


def test_stored_document_keys_are_understood():
    doc = {
        "standard": 1,
        "division": "B",
        "registeredStudents": {"general": {"male": 4, "female": 4}},
        "presentStudents": {"general": {"male": 3}},
        "mealTakenStudents": {"general": {"female": 2}},
        "alpaharTakenStudents": {"obc": {"male": 1, "female": 1}},
    }

    snap = normalize_record(doc)

    assert snap.registered.grand_total == 8
    assert snap.present.total_male == 3
    assert snap.meal_taken.total_female == 2
    assert snap.alt_meal_taken.grand_total == 2


def test_api_style_keys_are_understood():
    doc = {"present": {"st": {"male": 2, "female": 3}}, "altMealTaken": {"st": {"male": 1}}}

    snap = normalize_record(doc)

    assert snap.present.grand_total == 5
    assert snap.alt_meal_taken.grand_total == 1
    assert snap.registered.is_zero()


def test_dimensions_subset_only_carries_requested_dimensions():
    doc = {"registered": {"sc": {"male": 9}}, "present": {"sc": {"male": 4}}}

    snap = normalize_record(doc, (Dimension.PRESENT,))

    assert snap.dimensions == (Dimension.PRESENT,)
    assert snap.present.grand_total == 4
    assert snap.registered.is_zero()
    assert list(snap.to_dict()) == ["present"]
