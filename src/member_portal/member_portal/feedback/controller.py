from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import now_utc, to_org_time
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from ..members.guards import admin_required, current_member_id, login_required
from ..timewindow.evaluator import classify, same_day_cutoff_passed, window_message

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/feedback", methods=["POST"], endpoint="submit_feedback")
    @login_required
    def submit_feedback():
        try:
            container.feedback_service.submit(
                member_id=current_member_id(),
                session_id=request.form.get("session_id", type=int),
                rating=request.form.get("rating"),
                comments=request.form.get("comments", ""),
            )
            flash("Thank you for your feedback!", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Feedback submission failed")
            flash("Failed to submit feedback", "danger")
        return redirect(url_for("dashboard"))

    @app.route("/api/feedback-window", methods=["GET"], endpoint="feedback_window")
    @login_required
    def feedback_window():
        now = now_utc()
        window = classify(now)
        return jsonify(
            {
                "window": window.value,
                "message": window_message(window),
                "same_day_cutoff_passed": same_day_cutoff_passed(now),
                "org_time": to_org_time(now).strftime("%Y-%m-%d %H:%M"),
            }
        )

    @app.route("/admin/interests/<int:interest_id>/feedback", methods=["GET"], endpoint="interest_feedback")
    @admin_required
    def interest_feedback(interest_id: int):
        try:
            report = container.feedback_service.interest_feedback(interest_id=int(interest_id))
        except NotFoundError as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_interests"))
        except Exception:
            logger.exception("Feedback report failed for request %s", interest_id)
            flash("Failed to fetch feedback", "danger")
            return redirect(url_for("admin_interests"))

        return render_template("admin/feedback.html", report=report, active_page="admin_interests")
