from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.mysql_registered_class_repository import MySQLRegisteredClassRepository
from .database.connection import DBConfig, DatabaseConnection
from .reports.averages import MonthlyAveragesService
from .reports.labels import labels_for
from .reports.service import ReportService
from .reports.status_service import SubmissionStatusService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    registered_repo: MySQLRegisteredClassRepository

    report_service: ReportService
    status_service: SubmissionStatusService
    averages_service: MonthlyAveragesService

    def close(self) -> None:
        self.conn.close()


def build_container(*, db_config: dict, locale: str = "en", pool_size: int = 0) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(pool_size),
    )
    conn = DatabaseConnection(config)

    attendance_repo = MySQLAttendanceRepository(conn)
    registered_repo = MySQLRegisteredClassRepository(conn)

    report_service = ReportService(attendance_repo, labels=labels_for(locale))
    status_service = SubmissionStatusService(attendance_repo, registered_repo)
    averages_service = MonthlyAveragesService(attendance_repo)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        registered_repo=registered_repo,
        report_service=report_service,
        status_service=status_service,
        averages_service=averages_service,
    )
