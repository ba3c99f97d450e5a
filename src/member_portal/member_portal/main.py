from __future__ import annotations

import atexit
import importlib
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_config import configure_logging
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables

from .container import build_container
from .attendance.controller import register as register_attendance
from .feedback.controller import register as register_feedback
from .interests.controller import register as register_interests
from .members.controller import register as register_members
from .monitor.clock import OrgClockMonitor
from .monitor.scheduler import init_monitor, shutdown_monitor
from .sessions.controller import register as register_sessions

logger = logging.getLogger(__name__)


def should_start_monitor(settings) -> bool:
    if not bool(getattr(settings, "ENABLE_MONITOR", False)):
        return False
    # under the debug reloader only the child process (WERKZEUG_RUN_MAIN=true) serves requests
    if bool(getattr(settings, "DEBUG", False)) and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        logger.info("Monitor not started in the reloader parent process")
        return False
    return True


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    root = Path(__file__).resolve().parents[3]
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=root / "database" / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=root / "database" / "seed.sql")
        ensure_demo_accounts(db_config)
        logger.info("Demo seed ready")

    container = build_container(db_config=db_config)

    register_members(app, container)
    register_sessions(app, container)
    register_interests(app, container)
    register_feedback(app, container)
    register_attendance(app, container)

    if should_start_monitor(settings):
        init_monitor(OrgClockMonitor())
        atexit.register(shutdown_monitor)

    return app
