from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, load_json_block
from .model import RegisteredClass
from .repository import RegisteredClassRepository


class MySQLRegisteredClassRepository(RegisteredClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_academic_year(self, school_id: str, academic_year: str) -> Sequence[RegisteredClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT school_id, academic_year, standard, division, counts
                FROM registered_students
                WHERE school_id=%s AND academic_year=%s
                ORDER BY standard ASC, division ASC
                """,
                (school_id, academic_year),
            )
            return [
                RegisteredClass(
                    school_id=r["school_id"],
                    academic_year=r["academic_year"],
                    standard=int(r["standard"]),
                    division=r["division"],
                    counts=load_json_block(r.get("counts")) or {},
                )
                for r in fetchall(cur)
            ]
