from __future__ import annotations

from datetime import timedelta

from flask import Flask, current_app, request, session

from ..common.auth import ADMIN_ONLY, current_actor, login_required, roles_required
from ..common.http import ok
from ..core.constants import DEFAULT_SESSION_DAYS
from ..container import Container


def _json() -> dict:
    return request.get_json(silent=True) or {}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = _json()
        s_user = container.auth_service.authenticate(str(data.get("username", "")), str(data.get("password", "")))

        session.clear()
        session.permanent = True
        days = int(current_app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS))
        current_app.permanent_session_lifetime = timedelta(days=days)

        session["user_id"] = s_user.user_id
        session["username"] = s_user.username
        session["role"] = s_user.role.value

        current_app.logger.info("Login: %s (%s)", s_user.username, s_user.role.value)
        return ok({"id": s_user.user_id, "username": s_user.username, "role": s_user.role.value})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return ok(message="Sesión cerrada")

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        actor = current_actor()
        return ok({"id": actor.user_id, "username": actor.username, "role": actor.role.value})

    @app.route("/api/auth/profile", methods=["PUT"], endpoint="auth_profile")
    @login_required
    def profile():
        data = _json()
        user = container.auth_service.update_profile(
            current_actor(),
            username=str(data.get("username", "")),
            current_password=data.get("current_password") or None,
            new_password=data.get("new_password") or None,
        )
        session["username"] = user.username
        return ok(user.to_dict(), message="Perfil actualizado")

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @roles_required(*ADMIN_ONLY)
    def users_list():
        users = container.user_service.list_active(current_actor())
        return ok([u.to_dict() for u in users])

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="users_get")
    @roles_required(*ADMIN_ONLY)
    def users_get(user_id: int):
        return ok(container.user_service.get(current_actor(), user_id).to_dict())

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @roles_required(*ADMIN_ONLY)
    def users_create():
        data = _json()
        user = container.user_service.create_account(
            current_actor(),
            username=str(data.get("username", "")),
            password=str(data.get("password", "")),
            role=data.get("role"),
        )
        return ok(user.to_dict(), status=201, message="Usuario creado")

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="users_update")
    @roles_required(*ADMIN_ONLY)
    def users_update(user_id: int):
        data = _json()
        user = container.user_service.update_account(
            current_actor(),
            user_id,
            role=data.get("role") or None,
            password=data.get("password") or None,
        )
        return ok(user.to_dict(), message="Usuario actualizado")

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @roles_required(*ADMIN_ONLY)
    def users_delete(user_id: int):
        container.user_service.deactivate(current_actor(), user_id)
        return ok(message="Usuario desactivado")
