from __future__ import annotations

from functools import wraps

from flask import flash, redirect, render_template, session, url_for

from ..core.enums import Capability, Role


def current_role() -> Role:
    return Role(session.get("role"))


def current_member_id() -> int:
    return int(session["member_id"])


def _forbidden():
    current_user = {"name": session.get("name"), "role": session.get("role")}
    return render_template("403.html", current_user=current_user), 403


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "member_id" not in session:
            flash("Please log in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "member_id" not in session:
            return redirect(url_for("login"))
        try:
            role = current_role()
        except ValueError:
            return _forbidden()
        if not role.is_admin:
            return _forbidden()
        return view(*args, **kwargs)

    return wrapper


def capability_required(capability: Capability):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "member_id" not in session:
                return redirect(url_for("login"))
            try:
                role = current_role()
            except ValueError:
                return _forbidden()
            if not role.can(capability):
                return _forbidden()
            return view(*args, **kwargs)

        return wrapper

    return decorator
