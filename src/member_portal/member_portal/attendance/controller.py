from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..members.guards import current_member_id, login_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard/attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        member_id = current_member_id()
        try:
            months = container.attendance_service.monthly_summary(member_id=member_id)
            selected = container.attendance_service.month(
                member_id=member_id,
                month_key=request.args.get("month") or None,
            )
        except Exception:
            logger.exception("Attendance failed for member %s", member_id)
            flash("Failed to fetch attendance data", "danger")
            return redirect(url_for("dashboard"))

        return render_template(
            "attendance.html",
            months=months,
            selected=selected,
            active_page="my_attendance",
        )
