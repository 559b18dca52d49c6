from __future__ import annotations

import importlib
import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import STORE_MYSQL, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.memory_store import InMemoryStore
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_reports

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _load_settings(overrides: Optional[dict]) -> Any:
    module = importlib.import_module(get_settings_module())
    values = {k: getattr(module, k) for k in dir(module) if k.isupper()}
    values.update(overrides or {})
    return SimpleNamespace(**values)


def create_app(settings_override: Optional[dict] = None, *, store: Optional[InMemoryStore] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_override)

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = str(getattr(settings, "STORE_BACKEND", STORE_MYSQL)).lower()
    if store is None and backend == STORE_MYSQL:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            get_settings_module(),
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

    container = build_container(settings=settings, store=store)

    if bool(getattr(settings, "AUTO_INIT_DB", False)) and container.conn is not None:
        apply_schema(container.conn, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%s)", len(list_tables(container.conn)))

    app.extensions["attendance_points"] = container

    register_attendance(app, container)
    register_leaves(app, container)
    register_reports(app, container)

    return app
