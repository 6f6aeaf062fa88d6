from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .database.store import MemoryStore
from .events.controller import register as register_events
from .ledger.controller import register as register_ledger
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def create_app(*, store: Optional[MemoryStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Starting attendance-fines with settings=%s", settings_module)

    container = build_container(settings=settings, store=store)
    app.extensions["container"] = container

    register_events(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_ledger(app, container)

    return app
