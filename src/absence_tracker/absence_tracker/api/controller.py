from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Blueprint, Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..common.datetime_utils import now_local
from ..common.validators import require_absence_type
from ..core.constants import DEFAULT_API_PREFIX
from ..core.exceptions import AggregationDataError, DomainError, InvalidReference, NotFound, ValidationError
from ..container import Container
from ..stats.export import export_csv, export_filename
from ..stats.model import AbsenceFilter, DateRange
from ..stats.service import duration_stats, filter_absences, grouped_counts, monthly_metrics

logger = logging.getLogger(__name__)


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _date_range_from_args() -> DateRange:
    return DateRange(start=request.args.get("start") or None, end=request.args.get("end") or None)


def register(app: Flask, container: Container, *, url_prefix: str = DEFAULT_API_PREFIX) -> None:
    """JSON CRUD surface over the container's tracker service."""

    bp = Blueprint("api", __name__, url_prefix=url_prefix or None)
    tracker = container.tracker

    @bp.errorhandler(ValidationError)
    @bp.errorhandler(InvalidReference)
    def _bad_request(exc: DomainError):
        return _error(str(exc), 400)

    @bp.errorhandler(NotFound)
    def _not_found(exc: NotFound):
        return _error(str(exc), 404)

    @bp.errorhandler(AggregationDataError)
    def _bad_stored_data(exc: AggregationDataError):
        logger.error("stored absence %s cannot be aggregated: %s", exc.absence_id, exc)
        return _error(str(exc), 500)

    @bp.errorhandler(Exception)
    def _unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return _error(exc.description or exc.name, exc.code or 500)
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return _error(str(exc), 500)

    @bp.route("/health", methods=["GET"])
    def health():
        tracker.health()
        return jsonify({"ok": True})

    # -------------------- Employees --------------------

    @bp.route("/employees", methods=["GET"])
    def list_employees():
        return jsonify([e.to_dict() for e in tracker.list_employees()])

    @bp.route("/employees", methods=["POST"])
    def create_employee():
        data = _body()
        if not data.get("name") or not data.get("role"):
            return _error("name and role are required", 400)
        employee = tracker.create_employee(data.get("name"), data.get("role"))
        return jsonify(employee.to_dict()), 201

    @bp.route("/employees/<employee_id>", methods=["PUT"])
    def update_employee(employee_id: str):
        data = _body()
        if not data.get("name") or not data.get("role"):
            return _error("name and role are required", 400)
        employee = tracker.update_employee(employee_id, data.get("name"), data.get("role"))
        return jsonify(employee.to_dict())

    @bp.route("/employees/<employee_id>", methods=["DELETE"])
    def delete_employee(employee_id: str):
        tracker.delete_employee(employee_id)
        return "", 204

    # -------------------- Absences --------------------

    @bp.route("/absences", methods=["GET"])
    def list_absences():
        employee_id = request.args.get("employeeId") or None
        return jsonify([a.to_dict() for a in tracker.list_absences(employee_id)])

    @bp.route("/absences", methods=["POST"])
    def create_absence():
        data = _body()
        required = ("employeeId", "date", "type", "startTime", "endTime")
        missing = [k for k in required if not data.get(k)]
        if missing:
            return _error(f"Missing required fields: {', '.join(missing)}", 400)
        record = tracker.create_absence(
            data["employeeId"],
            data["date"],
            data["type"],
            data["startTime"],
            data["endTime"],
            data.get("notes"),
        )
        return jsonify(record.to_dict()), 201

    @bp.route("/absences/<absence_id>", methods=["DELETE"])
    def delete_absence(absence_id: str):
        tracker.delete_absence(absence_id)
        return "", 204

    # -------------------- Read-only dashboard helpers --------------------

    @bp.route("/stats", methods=["GET"])
    def stats():
        date_range = _date_range_from_args()
        employees = list(tracker.list_employees())
        absences = list(tracker.list_absences())
        metrics = monthly_metrics(employees, absences, now=now_local())
        counts = grouped_counts(employees, absences, date_range)
        durations = duration_stats(employees, absences, date_range)
        return jsonify(
            {
                "metrics": {
                    "totalEmployees": metrics.total_employees,
                    "absencesThisMonth": metrics.absences_this_month,
                    "mostCommonAbsenceType": metrics.most_common_type.value if metrics.most_common_type else None,
                },
                "byType": {t.value: n for t, n in counts.by_type.items()},
                "byEmployee": [[name, n] for name, n in counts.by_employee],
                "durations": {
                    **asdict(durations),
                    "top_types": [[t.value, n] for t, n in durations.top_types],
                },
            }
        )

    @bp.route("/absences/export.csv", methods=["GET"])
    def export_absences_csv():
        absence_type = request.args.get("type") or None
        criteria = AbsenceFilter(
            date_range=_date_range_from_args(),
            employee_id=request.args.get("employeeId") or None,
            absence_type=require_absence_type(absence_type) if absence_type else None,
        )
        employees = list(tracker.list_employees())
        rows = filter_absences(tracker.list_absences(), criteria)
        filename = export_filename(now_local().date())
        return app.response_class(
            export_csv(employees, rows).encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    app.register_blueprint(bp)
