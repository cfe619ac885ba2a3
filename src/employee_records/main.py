from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import list_tables, run_bootstrap
from .employees.api_controller import register as register_employees_api
from .employees.web_controller import register as register_employees_web

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Tests pass a ready-made container (in-memory repositories); the database
    bootstrap only runs when the app builds its own container.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)
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
            if run_bootstrap(db_config, seed=bool(getattr(settings, "AUTO_SEED_DB", False))) and app.config["DEBUG"]:
                try:
                    logger.debug("schema ready (tables=%s)", len(list_tables(db_config)))
                except Exception:
                    logger.warning("Could not list tables after bootstrap", exc_info=True)
        container = build_container(db_config=db_config)

    register_employees_api(app, container)
    register_employees_web(app, container)

    return app
