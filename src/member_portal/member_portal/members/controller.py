from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..container import Container
from .guards import current_member_id, login_required
from .service import SessionMember

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _start_session(member: SessionMember, *, remember: bool = False) -> None:
        session.clear()
        session.permanent = bool(remember)
        app.permanent_session_lifetime = timedelta(days=7)

        session["member_id"] = member.member_id
        session["name"] = member.name
        session["email"] = member.email
        session["role"] = member.role.value

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        if "member_id" in session:
            return redirect(url_for("dashboard"))
        return redirect(url_for("login"))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if "member_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            try:
                member = container.auth_service.authenticate(
                    request.form.get("email", ""),
                    request.form.get("password", ""),
                )
                _start_session(member, remember=bool(request.form.get("remember_me")))
                flash("Login successful!", "success")
                return redirect(url_for("dashboard"))
            except (AuthenticationError, AuthorizationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("Login failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"An error occurred during login: {e}", "danger")
                else:
                    flash("An error occurred. Please try again later.", "danger")

        return render_template("login.html", mode="login")

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if "member_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            try:
                member = container.auth_service.register(
                    request.form.get("email", ""),
                    request.form.get("password", ""),
                    request.form.get("confirm_password", ""),
                )
                _start_session(member)
                flash("Signup successful!", "success")
                return redirect(url_for("dashboard"))
            except (AuthorizationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Signup failed")
                flash("An error occurred. Please try again later.", "danger")

        return render_template("login.html", mode="signup")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))

    @app.route("/change-password", methods=["GET", "POST"], endpoint="change_password")
    @login_required
    def change_password():
        if request.method == "POST":
            try:
                container.auth_service.change_password(
                    current_member_id(),
                    current_password=request.form.get("current_password", ""),
                    new_password=request.form.get("new_password", ""),
                    confirm_password=request.form.get("confirm_password", ""),
                )
                flash("Your password has been changed successfully", "success")
                return redirect(url_for("dashboard"))
            except (AuthenticationError, NotFoundError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Password change failed")
                flash("An error occurred. Please try again later.", "danger")

        return render_template("change_password.html")
