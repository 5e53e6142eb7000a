from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.controller import register as register_api
from .common.logging_utils import configure_logging
from .container import Container, build_server_container
from .core.constants import DEFAULT_API_PREFIX
from .database.bootstrap import apply_schema, ensure_seed_employees, list_tables

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory for the CRUD HTTP surface.

    ``container`` overrides the MySQL wiring (tests pass one over a local store).
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.json.ensure_ascii = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_seed_employees(db_config)
        container = build_server_container(db_config=db_config)

    app.extensions["absence_tracker"] = container
    register_api(app, container, url_prefix=getattr(settings, "API_PREFIX", DEFAULT_API_PREFIX))
    return app
