from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import RequestGuards, current_access
from ..common.http import json_body
from ..core.enums import Capability
from ..container import Container
from .serializers import public_user_json, session_user_json


def register(app: Flask, container: Container) -> None:
    guards = RequestGuards(container.token_service)

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        body = json_body()
        result = container.auth_service.register(
            name=body.get("name"),
            email=body.get("email"),
            password=body.get("password"),
            role=body.get("role"),
        )
        return (
            jsonify(
                {
                    "message": "User created successfully",
                    "token": result.token,
                    "user": session_user_json(result.user),
                }
            ),
            201,
        )

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        body = json_body()
        result = container.auth_service.login(email=body.get("email"), password=body.get("password"))
        return jsonify(
            {
                "message": "Login successful",
                "token": result.token,
                "user": session_user_json(result.user),
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    @guards.login_required
    def auth_logout():
        container.auth_service.logout(current_access())
        return jsonify({"message": "Logout successful"})

    @app.route("/api/users/employees", methods=["GET"], endpoint="list_employees")
    @guards.requires(Capability.VIEW_EMPLOYEES)
    def list_employees():
        employees = container.user_service.list_employees(current_access())
        return jsonify([public_user_json(u) for u in employees])
