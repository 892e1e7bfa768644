from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import RequestGuards, current_access
from ..common.datetime_utils import to_iso
from ..core.enums import Capability
from ..container import Container
from ..users.serializers import user_ref_json
from .model import TimeLogView


def timelog_json(view: TimeLogView) -> dict:
    e = view.entry
    return {
        "_id": e.entry_id,
        "user": user_ref_json(view.user),
        "loginTime": to_iso(e.login_time),
        "logoutTime": to_iso(e.logout_time),
        "date": e.log_date,
        "totalHours": e.total_hours,
        "status": e.status.value,
    }


def register(app: Flask, container: Container) -> None:
    guards = RequestGuards(container.token_service)

    @app.route("/api/timelogs", methods=["GET"], endpoint="list_timelogs")
    @guards.login_required
    def list_timelogs():
        access = current_access()
        # The ledger does not authorize; scope here.
        user_filter = None if access.can(Capability.VIEW_ALL_TIMELOGS) else access.user_id
        entries = container.time_ledger.list_entries(user_id=user_filter)
        return jsonify([timelog_json(v) for v in entries])
