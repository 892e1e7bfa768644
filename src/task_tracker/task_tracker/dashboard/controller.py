from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import RequestGuards, current_access
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = RequestGuards(container.token_service)

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @guards.login_required
    def dashboard_stats():
        return jsonify(container.dashboard_service.stats(current_access()))
