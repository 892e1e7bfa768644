from __future__ import annotations

import atexit
import importlib
import logging
import secrets
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.http import register_cors, register_error_handlers
from .common.log_config import configure_logging
from .container import AuthConfig, Container, build_container
from .core.constants import DEFAULT_BCRYPT_ROUNDS, DEFAULT_TOKEN_TTL_HOURS, MIN_JWT_SECRET_BYTES
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .database.connection import DBConfig
from .tasks.controller import register as register_tasks
from .timelogs.controller import register as register_timelogs
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _jwt_secret(settings) -> str:
    secret = getattr(settings, "JWT_SECRET", "") or ""
    required = bool(getattr(settings, "REQUIRE_JWT_SECRET", True))
    if secret:
        if len(secret.encode("utf-8")) < MIN_JWT_SECRET_BYTES:
            if required:
                raise RuntimeError(f"JWT_SECRET must be at least {MIN_JWT_SECRET_BYTES} bytes")
            logger.warning("JWT_SECRET is shorter than %d bytes", MIN_JWT_SECRET_BYTES)
        return secret
    if required:
        raise RuntimeError("JWT_SECRET is not set; refusing to sign tokens with a default key")
    logger.warning("JWT_SECRET is not set; using an ephemeral key (tokens die with this process)")
    return secrets.token_urlsafe(32)


def auth_config_from(settings) -> AuthConfig:
    return AuthConfig(
        jwt_secret=_jwt_secret(settings),
        token_ttl_hours=int(getattr(settings, "TOKEN_TTL_HOURS", DEFAULT_TOKEN_TTL_HOURS)),
        bcrypt_rounds=int(getattr(settings, "BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)),
        allow_admin_registration=bool(getattr(settings, "ALLOW_ADMIN_REGISTRATION", False)),
        employee_status_only=bool(getattr(settings, "EMPLOYEE_STATUS_ONLY_UPDATES", False)),
    )


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    if bool(getattr(settings, "AUTO_SEED_ADMIN", False)):
        ensure_admin_user(
            db_config,
            name=getattr(settings, "ADMIN_NAME", "Administrator"),
            email=getattr(settings, "ADMIN_EMAIL"),
            password=getattr(settings, "ADMIN_PASSWORD"),
            bcrypt_rounds=int(getattr(settings, "BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)),
        )


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Without a `container` the MySQL-backed one is built from the selected
    settings module and closed at process exit.
    """
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())
        _bootstrap_database(settings, db_config)
        container = build_container(db_config=db_config, auth=auth_config_from(settings))
        atexit.register(container.close)

    register_error_handlers(app)
    register_cors(app, origins=getattr(settings, "CORS_ORIGINS", "*"))

    register_users(app, container)
    register_tasks(app, container)
    register_dashboard(app, container)
    register_timelogs(app, container)

    @app.route("/api/test", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"message": "Backend is working!"})

    return app
