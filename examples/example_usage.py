"""Example: build a daily MDM report through the service layer (no Flask)."""

import importlib
import sys

from dotenv import load_dotenv

from config import get_settings_module
from mdm_attendance.container import build_container
from mdm_attendance.reports.layout import DAILY_COMBINED


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, locale=getattr(settings, "REPORT_LOCALE", "en"))
    school_id, day = sys.argv[1], sys.argv[2]
    try:
        report = container.report_service.build_daily_report(school_id, day)
        for row in DAILY_COMBINED.sheet(report.rows):
            print(row)
    finally:
        container.close()


if __name__ == "__main__":
    main()
