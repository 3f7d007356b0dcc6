from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, load_json_block
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_attendance(
        self,
        school_id: str,
        start: date,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        end = end or start
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT school_id, standard, division, attendance_date, academic_year,
                       registered_students, present_students, meal_taken_students, alt_meal_taken_students
                FROM attendance_records
                WHERE school_id=%s AND attendance_date BETWEEN %s AND %s
                ORDER BY standard ASC, division ASC, attendance_date ASC
                """,
                (school_id, start, end),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    school_id=r["school_id"],
                    standard=int(r["standard"]),
                    division=r["division"],
                    date=r["attendance_date"],
                    academic_year=r.get("academic_year"),
                    registered=load_json_block(r.get("registered_students")) or {},
                    present=load_json_block(r.get("present_students")) or {},
                    meal_taken=load_json_block(r.get("meal_taken_students")) or {},
                    alt_meal_taken=load_json_block(r.get("alt_meal_taken_students")),
                )
                for r in rows
            ]
