from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, DEFAULT_WEEK_ANCHOR
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .database.connection import DBConfig

from .contracts.controller import register as register_contracts
from .crews.controller import register as register_crews
from .dashboard.controller import register as register_dashboard
from .incidents.controller import register as register_incidents
from .timesheets.controller import register as register_timesheets
from .users.controller import register as register_users
from .weekly.controller import register as register_weekly

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    A ready ``container`` skips database bootstrap; tests pass one assembled
    from in-memory repositories.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))
    app.permanent_session_lifetime = timedelta(days=app.config["SESSION_DAYS"])

    if container is None:
        if app.config["DEBUG"]:
            logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            demo_login=bool(getattr(settings, "ENABLE_DEMO_LOGIN", False)),
            demo_attendance=bool(getattr(settings, "DEMO_ATTENDANCE", False)),
            week_anchor=int(getattr(settings, "WEEK_ANCHOR_WEEKDAY", DEFAULT_WEEK_ANCHOR)),
        )

    if container.auth_service.demo_login:
        logger.warning("demo login is enabled; demo usernames accept any password")

    register_error_handlers(app)
    register_users(app, container)
    register_contracts(app, container)
    register_crews(app, container)
    register_timesheets(app, container)
    register_incidents(app, container)
    register_weekly(app, container)
    register_dashboard(app, container)

    return app
