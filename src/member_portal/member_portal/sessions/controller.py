from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.exceptions import DomainError
from ..container import Container
from ..members.guards import current_member_id, current_role, login_required
from .service import format_session_time

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    app.jinja_env.filters["session_time"] = format_session_time

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        member_id = current_member_id()
        try:
            board = container.session_service.today_and_upcoming()
            feedback_state = container.feedback_service.form_state(member_id=member_id)
            attendance = container.attendance_service.month(member_id=member_id)
            my_requests = container.interest_service.list_for_member(member_id=member_id)
        except DomainError as e:
            flash(str(e), "danger")
            return render_template("dashboard.html", board=None, active_page="dashboard")
        except Exception:
            logger.exception("Dashboard failed for member %s", member_id)
            flash("Failed to fetch sessions", "danger")
            return render_template("dashboard.html", board=None, active_page="dashboard")

        return render_template(
            "dashboard.html",
            board=board,
            feedback_state=feedback_state,
            attendance=attendance,
            my_requests=my_requests,
            is_admin=current_role().is_admin,
            active_page="dashboard",
        )

    @app.route("/dashboard/history", methods=["GET"], endpoint="session_history")
    @login_required
    def session_history():
        try:
            history = container.session_service.history(member_id=current_member_id())
        except Exception:
            logger.exception("Session history failed")
            flash("Failed to fetch session history", "danger")
            return redirect(url_for("dashboard"))

        return render_template("session_history.html", history=history, active_page="session_history")

    @app.route("/dashboard/calendar", methods=["GET"], endpoint="booking_calendar")
    @login_required
    def booking_calendar():
        year = request.args.get("year", type=int)
        month = request.args.get("month", type=int)
        offset = request.args.get("offset", default=0, type=int)
        try:
            view = container.calendar_service.month_view(year=year, month=month, offset=offset)
        except Exception:
            logger.exception("Calendar failed for %s-%s", year, month)
            flash("Failed to load the calendar", "danger")
            return redirect(url_for("dashboard"))

        return render_template(
            "calendar.html",
            view=view,
            member_name=session.get("name"),
            active_page="booking_calendar",
        )
