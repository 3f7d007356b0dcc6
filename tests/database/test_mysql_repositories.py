from __future__ import annotations

from datetime import date

import pytest

from mdm_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from mdm_attendance.attendance.mysql_registered_class_repository import MySQLRegisteredClassRepository


class FakeCursor:
    def __init__(self, rows, error=None):
        self._rows = rows
        self._error = error
        self.executed = []
        self.closed = False

    def execute(self, sql, params=None):
        if self._error is not None:
            raise self._error
        self.executed.append((sql, params))

    def fetchall(self):
        return self._rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, rows, error=None):
        self.cursor = FakeCursor(rows, error)
        self.conn = FakeConnection(self.cursor)

    def connect(self):
        return self.conn


def test_attendance_rows_map_to_records():
    factory = FakeConnFactory(
        [
            {
                "school_id": "24010101001",
                "standard": 3,
                "division": "B",
                "attendance_date": date(2026, 1, 15),
                "academic_year": "2025-2026",
                "registered_students": '{"sc": {"male": 4, "female": 5}}',
                "present_students": b'{"sc": {"male": 4, "female": 4}}',
                "meal_taken_students": {"sc": {"male": 4, "female": 3}},
                "alt_meal_taken_students": None,
            }
        ]
    )

    records = MySQLAttendanceRepository(factory).find_attendance("24010101001", date(2026, 1, 15))

    _, params = factory.cursor.executed[0]
    assert params == ("24010101001", date(2026, 1, 15), date(2026, 1, 15))
    assert len(records) == 1
    record = records[0]
    assert record.class_key == (3, "B")
    assert record.registered == {"sc": {"male": 4, "female": 5}}
    assert record.present["sc"]["female"] == 4
    assert record.alt_meal_taken is None
    assert factory.conn.committed and factory.conn.closed and factory.cursor.closed


def test_registered_classes_for_academic_year():
    factory = FakeConnFactory(
        [{"school_id": "24010101001", "academic_year": "2025-2026", "standard": 0, "division": "A", "counts": None}]
    )

    classes = MySQLRegisteredClassRepository(factory).list_for_academic_year("24010101001", "2025-2026")

    assert [(c.standard, c.division) for c in classes] == [(0, "A")]
    assert classes[0].counts == {}


def test_query_errors_roll_back_and_propagate():
    factory = FakeConnFactory([], error=RuntimeError("lost connection"))

    with pytest.raises(RuntimeError):
        MySQLAttendanceRepository(factory).find_attendance("24010101001", date(2026, 1, 15))

    assert factory.conn.rolled_back
    assert factory.conn.closed
