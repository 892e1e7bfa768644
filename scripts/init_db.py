"""Apply database/schema.sql to the configured MySQL database.

Safe to re-run: every table is created with IF NOT EXISTS.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.task_tracker.task_tracker.database.bootstrap import apply_schema, list_tables
from src.task_tracker.task_tracker.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    tables = sorted(list_tables(db_config))
    print(f"OK: schema ready on {DBConfig.from_dict(db_config).describe()} ({', '.join(tables)})")


if __name__ == "__main__":
    main()
