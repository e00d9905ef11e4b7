from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

from .container import build_container
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .holidays.controller import register as register_holidays
from .leave_requests.controller import register as register_leave_requests
from .locations.controller import register as register_locations
from .schedules.controller import register as register_schedules
from .settings.controller import register as register_settings

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TIMEZONE"] = getattr(settings, "TIMEZONE", "Asia/Jakarta")

    app.logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        app.logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        app.logger.info("Seed data applied")

    container = build_container(
        db_config=db_config,
        tz_name=app.config["TIMEZONE"],
        cache_ttl=float(getattr(settings, "CACHE_TTL_SECONDS", 30)),
        default_gps_radius=int(getattr(settings, "DEFAULT_GPS_RADIUS", 3000)),
    )

    register_attendance(app, container)
    register_schedules(app, container)
    register_locations(app, container)
    register_settings(app, container)
    register_holidays(app, container)
    register_employees(app, container)
    register_leave_requests(app, container)

    return app
