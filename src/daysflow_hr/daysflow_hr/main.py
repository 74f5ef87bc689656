from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .common.logging_config import configure_logging
from .compensation.controller import register as register_compensation
from .container import Container, build_container
from .database.bootstrap import apply_schema, missing_tables
from .leave.controller import register as register_leave
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            missing = missing_tables(db_config)
            if missing:
                logger.warning("schema applied but tables are missing: %s", ", ".join(missing))
            else:
                logger.info("schema ready")

        container = build_container(
            db_config=db_config,
            reconcile_mode=getattr(settings, "LEAVE_RECONCILE_MODE", "best_effort"),
        )

    register_error_handlers(app)
    register_compensation(app, container)
    register_attendance(app, container)
    register_leave(app, container)
    register_payroll(app, container)

    return app
