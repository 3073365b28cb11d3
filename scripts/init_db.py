from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.project_tracker.project_tracker.database.bootstrap import apply_schema, list_tables
from src.project_tracker.project_tracker.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(conn, schema_path=schema_path)
    tables = list_tables(conn)
    cfg = conn.config
    print(f"OK: Applied schema.sql -> {cfg.user}@{cfg.host}:{cfg.port}/{cfg.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
