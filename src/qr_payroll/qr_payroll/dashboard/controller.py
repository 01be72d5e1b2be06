from __future__ import annotations

from flask import Flask

from ..common.auth import login_required
from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @login_required
    def dashboard_stats():
        return ok(container.dashboard_service.get_stats().to_dict())
