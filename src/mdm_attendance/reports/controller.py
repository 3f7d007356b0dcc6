from __future__ import annotations

import csv
import io
import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.exceptions import ValidationError
from .layout import DAILY_COMBINED, SEMI_MONTHLY

logger = logging.getLogger(__name__)


def register(app: Flask, container) -> None:
    def school_required(view):
        """Tenant scope comes from the session set by the auth layer."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            school_id = session.get("school_id")
            if not school_id:
                return jsonify({"message": "School authentication required"}), 401
            return view(str(school_id), *args, **kwargs)

        return wrapper

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                logger.info("Rejected %s: %s", request.path, e)
                return jsonify({"message": str(e)}), 400
            except Exception:
                logger.exception("Error in %s", request.path)
                return jsonify({"message": "Server error"}), 500

        return wrapper

    def _break_at(config_key: str):
        return request.args.get("breakAt", app.config.get(config_key))

    @app.route("/api/reports/daily/<day>", methods=["GET"], endpoint="daily_report")
    @school_required
    @json_errors
    def daily_report(school_id: str, day: str):
        report = container.report_service.build_daily_report(school_id, day, _break_at("DEFAULT_BREAK_AT"))
        return jsonify(report.to_dict(sheet=DAILY_COMBINED.sheet(report.rows))), 200

    @app.route("/api/reports/daily/<day>/sheet.csv", methods=["GET"], endpoint="daily_report_csv")
    @school_required
    @json_errors
    def daily_report_csv(school_id: str, day: str):
        report = container.report_service.build_daily_report(school_id, day, _break_at("DEFAULT_BREAK_AT"))

        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow(DAILY_COMBINED.header())
        writer.writerows(DAILY_COMBINED.sheet(report.rows))

        filename = f"mdm_daily_{report.day.strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/range/<start>/<end>", methods=["GET"], endpoint="range_report")
    @school_required
    @json_errors
    def range_report(school_id: str, start: str, end: str):
        report = container.report_service.build_range_report(school_id, start, end, _break_at("DEFAULT_BREAK_AT"))
        sheets = [DAILY_COMBINED.sheet(d.rows) for d in report.daily_reports]
        return jsonify(report.to_dict(sheets=sheets)), 200

    @app.route("/api/reports/semi-monthly/<year>/<month>/<half>", methods=["GET"], endpoint="semi_monthly_report")
    @school_required
    @json_errors
    def semi_monthly_report(school_id: str, year: str, month: str, half: str):
        report = container.report_service.build_semi_monthly_report(
            school_id, year, month, half, _break_at("SEMI_MONTHLY_BREAK_AT")
        )
        data = report.to_dict()
        for section, out in zip(report.sections, data["reportData"]):
            out["grid"] = SEMI_MONTHLY.sheet(section.per_date + [section.totals])
        return jsonify(data), 200

    @app.route("/api/reports/status/daily/<day>", methods=["GET"], endpoint="daily_status")
    @school_required
    @json_errors
    def daily_status(school_id: str, day: str):
        return jsonify(container.status_service.daily_status(school_id, day).to_dict()), 200

    @app.route("/api/reports/status/semi-monthly/<year>/<month>/<half>", methods=["GET"], endpoint="semi_monthly_status")
    @school_required
    @json_errors
    def semi_monthly_status(school_id: str, year: str, month: str, half: str):
        return jsonify(container.status_service.semi_monthly_status(school_id, year, month, half).to_dict()), 200

    @app.route("/api/averages/<year>/<month>", methods=["GET"], endpoint="monthly_averages")
    @school_required
    @json_errors
    def monthly_averages(school_id: str, year: str, month: str):
        return jsonify(container.averages_service.monthly_averages(school_id, year, month).to_dict()), 200
