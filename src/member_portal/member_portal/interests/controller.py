from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import parse_iso_date
from ..core.enums import Capability
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..container import Container
from ..members.guards import admin_required, capability_required, current_member_id, current_role, login_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _optional_date(field: str):
        raw = (request.form.get(field) or "").strip()
        return parse_iso_date(raw) if raw else None

    @app.route("/interests/new", methods=["GET", "POST"], endpoint="new_interest")
    @login_required
    def new_interest():
        if request.method == "POST":
            try:
                container.interest_service.submit(
                    member_id=current_member_id(),
                    topic=request.form.get("topic", ""),
                    session_type=request.form.get("session_type", ""),
                    preferred_date=_optional_date("preferred_date"),
                    description=request.form.get("description", ""),
                )
                flash("Session request submitted successfully", "success")
                return redirect(url_for("dashboard"))
            except ConflictError as e:
                flash(str(e), "warning")
            except (ValidationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Session request failed")
                flash("Failed to submit session request", "danger")

        return redirect(url_for("booking_calendar"))

    @app.route("/admin", methods=["GET"], endpoint="admin_interests")
    @admin_required
    def admin_interests():
        try:
            data = container.interest_service.list_for_admin()
            ratings = {
                row["interest"].interest_id: row["summary"]
                for row in container.feedback_service.admin_overview()
            }
        except Exception:
            logger.exception("Admin overview failed")
            flash("Failed to fetch session requests", "danger")
            data, ratings = {"pending": [], "approved": []}, {}

        return render_template(
            "admin/interests.html",
            pending=data["pending"],
            approved=data["approved"],
            ratings=ratings,
            active_page="admin_interests",
        )

    @app.route("/admin/interests/<int:interest_id>/approve", methods=["POST"], endpoint="approve_interest")
    @capability_required(Capability.APPROVE)
    def approve_interest(interest_id: int):
        try:
            container.interest_service.approve(
                current_role=current_role(),
                interest_id=int(interest_id),
                session_time=request.form.get("session_time") or None,
            )
            flash("Session approved", "success")
        except ConflictError as e:
            flash(str(e), "warning")
        except (ValidationError, NotFoundError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Approve failed for request %s", interest_id)
            flash("Failed to approve session", "danger")
        return redirect(url_for("admin_interests"))

    @app.route("/admin/interests/<int:interest_id>/reject", methods=["POST"], endpoint="reject_interest")
    @capability_required(Capability.REJECT)
    def reject_interest(interest_id: int):
        try:
            container.interest_service.reject(current_role=current_role(), interest_id=int(interest_id))
            flash("Session request rejected", "info")
        except (ValidationError, NotFoundError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Reject failed for request %s", interest_id)
            flash("Failed to reject session", "danger")
        return redirect(url_for("admin_interests"))

    @app.route("/admin/interests/<int:interest_id>/reschedule", methods=["POST"], endpoint="reschedule_interest")
    @capability_required(Capability.RESCHEDULE)
    def reschedule_interest(interest_id: int):
        try:
            new_date = _optional_date("new_date")
            if new_date is None:
                raise ValidationError("New date is required")
            container.interest_service.reschedule(
                current_role=current_role(),
                interest_id=int(interest_id),
                new_date=new_date,
                session_time=request.form.get("session_time") or None,
            )
            flash("Session rescheduled", "success")
        except ConflictError as e:
            flash(str(e), "warning")
        except (ValidationError, NotFoundError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Reschedule failed for request %s", interest_id)
            flash("Failed to reschedule session", "danger")
        return redirect(url_for("admin_interests"))

    @app.route("/admin/interests/<int:interest_id>/delete", methods=["POST"], endpoint="delete_interest")
    @capability_required(Capability.DELETE)
    def delete_interest(interest_id: int):
        try:
            container.interest_service.delete(current_role=current_role(), interest_id=int(interest_id))
            flash("Session deleted", "info")
        except (ValidationError, NotFoundError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Delete failed for request %s", interest_id)
            flash("Failed to delete session", "danger")
        return redirect(url_for("admin_interests"))

    @app.route("/admin/sessions/new", methods=["GET", "POST"], endpoint="new_session")
    @capability_required(Capability.CREATE)
    def new_session():
        if request.method == "POST":
            try:
                handler = container.member_service.get_by_email(request.form.get("handler_email", ""))
                if not handler:
                    raise NotFoundError("Handler is not on the members list")
                container.interest_service.create_manual(
                    current_role=current_role(),
                    member_id=handler.member_id,
                    topic=request.form.get("topic", ""),
                    session_type=request.form.get("session_type", ""),
                    session_date=_optional_date("session_date"),
                    description=request.form.get("description", ""),
                    session_time=request.form.get("session_time") or None,
                )
                flash("Session created", "success")
                return redirect(url_for("admin_interests"))
            except ConflictError as e:
                flash(str(e), "warning")
            except (ValidationError, NotFoundError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Manual session creation failed")
                flash("Failed to create session", "danger")

        return render_template("admin/new_session.html", active_page="new_session")
