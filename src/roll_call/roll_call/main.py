from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_setup import setup_logging
from .container import build_container
from .notifications.controller import register as register_notifications
from .session.controller import register as register_session

logger = logging.getLogger(__name__)


def create_app(overrides: Optional[dict[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    overrides = overrides or {}

    def setting(name: str, default: Any = None) -> Any:
        return overrides.get(name, getattr(settings, name, default))

    app.secret_key = setting("SECRET_KEY")
    app.config["DEBUG"] = bool(setting("DEBUG", False))
    app.config["TESTING"] = bool(setting("TESTING", False))
    app.config["MAX_UPLOAD_BYTES"] = int(setting("MAX_UPLOAD_BYTES"))
    # Leave room for multipart overhead; the file itself is checked by the importer.
    app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_UPLOAD_BYTES"] + 1024 * 1024

    setup_logging(debug=app.config["DEBUG"], log_file=setting("LOG_FILE"))
    logger.info("settings=%s database=%s", settings_module, setting("DATABASE_URL"))

    container = build_container(
        db_config={
            "url": setting("DATABASE_URL"),
            "max_upload_bytes": app.config["MAX_UPLOAD_BYTES"],
            "cross_roster_dedup": bool(setting("IMPORT_CROSS_ROSTER_DEDUP", False)),
        }
    )
    app.extensions["roll_call"] = container

    register_session(app, container)
    register_notifications(app, container)

    return app
