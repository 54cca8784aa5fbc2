from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.web import (
    current_principal,
    current_role,
    employee_required,
    login_required,
    ok,
    payload,
)
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = payload()
        try:
            role = Role(str(data.get("role") or Role.EMPLOYEE.value).lower())
        except ValueError:
            raise ValidationError("Role must be admin or employee")

        s_user = container.auth_service.login(data.get("email", ""), data.get("password", ""), role)

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)
        session["uid"] = s_user.uid
        session["email"] = s_user.email
        session["role"] = s_user.role.value
        session["name"] = s_user.display_name

        return ok({"user": {"email": s_user.email, "role": s_user.role.value, "name": s_user.display_name}},
                  message="Signing In")

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/password/reset", methods=["POST"], endpoint="password_reset")
    def password_reset():
        container.auth_service.send_password_reset(payload().get("email", ""))
        return ok(message="Password reset link sent! Check your email.")

    @app.route("/password/reset/<token>", methods=["POST"], endpoint="password_reset_confirm")
    def password_reset_confirm(token: str):
        container.auth_service.reset_password(token, payload().get("new_password", ""))
        return ok(message="Password has been reset")

    @app.route("/password/change", methods=["POST"], endpoint="password_change")
    @login_required
    def password_change():
        data = payload()
        container.auth_service.change_password(
            current_principal(),
            data.get("current_password", ""),
            data.get("new_password", ""),
        )
        return ok(message="Password changed successfully")

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        if current_role() == Role.ADMIN:
            return ok({"role": Role.ADMIN.value, "name": session.get("name"), "employee": None})

        identity = container.resolver.resolve(session["email"])
        return ok(
            {
                "role": Role.EMPLOYEE.value,
                "name": identity.display_name,
                "employee": identity.employee.to_public_dict() if identity.employee else None,
            }
        )

    @app.route("/me/profile", methods=["POST"], endpoint="update_profile")
    @employee_required
    def update_profile():
        employee = container.upsert_service.update_own_profile(principal=current_principal(), candidate=payload())
        session["name"] = employee.display_name
        return ok({"employee": employee.to_public_dict()}, message="Details Updated Successfully!")
