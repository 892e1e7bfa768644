"""Create (or reset) the bootstrap admin account from ADMIN_* settings."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.task_tracker.task_tracker.database.bootstrap import ensure_admin_user


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    email = getattr(settings, "ADMIN_EMAIL", "")
    password = getattr(settings, "ADMIN_PASSWORD", "")
    if not email or not password:
        raise SystemExit("ADMIN_EMAIL and ADMIN_PASSWORD must be set")

    ensure_admin_user(
        db_config,
        name=getattr(settings, "ADMIN_NAME", "Administrator"),
        email=email,
        password=password,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    print(f"OK: admin {email} ready in {db_config.get('database')}")


if __name__ == "__main__":
    main()
