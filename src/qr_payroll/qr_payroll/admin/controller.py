from __future__ import annotations

from flask import Flask

from ..common.auth import ADMIN_ONLY, current_actor, roles_required
from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/reset", methods=["DELETE"], endpoint="admin_reset")
    @roles_required(*ADMIN_ONLY)
    def admin_reset():
        deleted = container.admin_service.reset(current_actor())
        return ok(deleted, message="Datos de asistencia y empleados eliminados")

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        now = container.clock.now()
        return ok({"status": "ok", "time": now.isoformat()})
