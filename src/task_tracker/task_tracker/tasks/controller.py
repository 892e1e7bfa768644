from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import RequestGuards, current_access
from ..common.datetime_utils import to_iso
from ..common.http import json_body
from ..core.enums import Capability
from ..container import Container
from ..users.serializers import user_ref_json
from .model import TaskView


def task_json(view: TaskView) -> dict:
    t = view.task
    return {
        "_id": t.task_id,
        "title": t.title,
        "description": t.description,
        "assignedTo": user_ref_json(view.assignee),
        "assignedBy": user_ref_json(view.assigner),
        "dueDate": to_iso(t.due_date),
        "priority": t.priority.value,
        "status": t.status.value,
        "taskType": t.task_type,
        "createdAt": to_iso(t.created_at),
    }


def register(app: Flask, container: Container) -> None:
    guards = RequestGuards(container.token_service)

    @app.route("/api/tasks", methods=["POST"], endpoint="create_task")
    @guards.requires(Capability.MANAGE_TASKS)
    def create_task():
        view = container.task_service.create(current_access(), json_body())
        return jsonify(task_json(view)), 201

    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    @guards.login_required
    def list_tasks():
        return jsonify([task_json(v) for v in container.task_service.list(current_access())])

    @app.route("/api/tasks/<int:task_id>", methods=["PUT"], endpoint="update_task")
    @guards.login_required
    def update_task(task_id: int):
        view = container.task_service.update(current_access(), task_id, json_body())
        return jsonify(task_json(view))

    @app.route("/api/tasks/<int:task_id>", methods=["DELETE"], endpoint="delete_task")
    @guards.requires(Capability.MANAGE_TASKS)
    def delete_task(task_id: int):
        container.task_service.delete(current_access(), task_id)
        return jsonify({"message": "Task deleted successfully"})
