from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .audit.controller import register as register_audit
from .capacity.controller import register as register_capacity
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .timesheets.controller import register as register_timesheets

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    container = build_container(settings=settings)
    db = container.conn.config
    logger.info("settings=%s db=%s@%s:%s/%s", settings_module, db.user, db.host, db.port, db.database)

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(container.conn, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

    register_audit(app, container)
    register_capacity(app, container)
    register_timesheets(app, container)

    return app
