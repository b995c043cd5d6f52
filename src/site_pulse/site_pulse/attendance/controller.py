from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.validators import optional_iso_date, positive_int, require_iso_date
from ..container import Container
from ..core.constants import DEFAULT_ACTIVITY_PAGE_SIZE
from ..core.exceptions import (
    AuthorizationError,
    DataSourceUnavailableError,
    NotFoundError,
    ValidationError,
)
from ..identity.access import access_level
from ..identity.model import CallerContext, EmployeeIdentity, EmployeeRef
from . import presenter
from .service import ActivityQuery

logger = logging.getLogger(__name__)

API_PREFIX = "/api/activity"


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Missing or invalid session"}), 401
            return view(*args, **kwargs)

        return wrapper

    def json_errors(view):
        """Map domain errors to HTTP responses."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except AuthorizationError as e:
                return jsonify({"success": False, "message": str(e)}), 403
            except NotFoundError as e:
                return jsonify({"success": False, "message": str(e)}), 404
            except DataSourceUnavailableError as e:
                return jsonify({"success": False, "message": str(e)}), 503
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return jsonify({"success": False, "message": "Internal server error"}), 500

        return wrapper

    def _caller() -> CallerContext:
        ref = EmployeeRef.of(
            employee_code=session.get("employee_id"),
            username=session.get("username"),
            user_id=session.get("user_id"),
        )
        identity = EmployeeIdentity(internal_id=ref.user_id, employee_code=ref.employee_code, username=ref.username)
        return CallerContext(identity=identity, role=session.get("role") or "")

    def _ok(caller: CallerContext, payload: dict):
        return jsonify(
            {
                "success": True,
                **payload,
                "userRole": caller.role,
                "accessLevel": access_level(caller.role).value,
            }
        )

    @app.route(f"{API_PREFIX}/date-summary", methods=["GET"], endpoint="date_summary")
    @login_required
    @json_errors
    def date_summary():
        work_date = require_iso_date(request.args.get("date"), "date")
        caller = _caller()
        view = container.attendance_service.date_summary(work_date=work_date, caller=caller)
        return _ok(caller, presenter.date_summary_to_dict(view))

    @app.route(f"{API_PREFIX}/available-dates", methods=["GET"], endpoint="available_dates")
    @login_required
    @json_errors
    def available_dates():
        caller = _caller()
        dates = container.attendance_service.available_dates(caller=caller)
        return _ok(caller, {"dates": presenter.dates_to_list(dates)})

    @app.route(f"{API_PREFIX}/attendance", methods=["GET"], endpoint="attendance")
    @login_required
    @json_errors
    def attendance():
        work_date = require_iso_date(request.args.get("date"), "date")
        caller = _caller()
        result = container.attendance_service.attendance_for_date(work_date=work_date, caller=caller)
        return _ok(caller, presenter.date_attendance_to_dict(result))

    @app.route(f"{API_PREFIX}/attendance/range", methods=["GET"], endpoint="attendance_range")
    @login_required
    @json_errors
    def attendance_range():
        start_date = require_iso_date(request.args.get("startDate"), "startDate")
        end_date = require_iso_date(request.args.get("endDate"), "endDate")
        caller = _caller()
        result = container.attendance_service.attendance_for_range(
            start_date=start_date, end_date=end_date, caller=caller
        )
        return _ok(caller, presenter.range_attendance_to_dict(result))

    @app.route(f"{API_PREFIX}/engineer/<identifier>", methods=["GET"], endpoint="engineer_profile")
    @login_required
    @json_errors
    def engineer_profile(identifier: str):
        caller = _caller()
        profile = container.attendance_service.engineer_profile(identifier=identifier, caller=caller)
        return _ok(caller, presenter.engineer_profile_to_dict(profile))

    @app.route(f"{API_PREFIX}/activities", methods=["GET"], endpoint="activities")
    @login_required
    @json_errors
    def activities():
        args = request.args
        query = ActivityQuery(
            work_date=optional_iso_date(args.get("date"), "date"),
            start_date=optional_iso_date(args.get("startDate"), "startDate"),
            end_date=optional_iso_date(args.get("endDate"), "endDate"),
            engineer_id=(args.get("engineerId") or "").strip() or None,
            status=(args.get("status") or "").strip() or None,
            page=positive_int(args.get("page"), "page", default=1),
            limit=positive_int(args.get("limit"), "limit", default=DEFAULT_ACTIVITY_PAGE_SIZE),
        )
        caller = _caller()
        page = container.attendance_service.list_activities(query=query, caller=caller)
        return _ok(caller, presenter.activity_page_to_dict(page))

    @app.route(f"{API_PREFIX}/stats", methods=["GET"], endpoint="stats")
    @login_required
    @json_errors
    def stats():
        caller = _caller()
        result = container.attendance_service.activity_stats(caller=caller)
        return _ok(caller, presenter.activity_stats_to_dict(result))
