from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .billing.controller import register as register_billing
from .container import Container, build_container
from .core.constants import DEFAULT_PUBLIC_ROUTES
from .core.logging import configure_logging, get_logger
from .database.bootstrap import apply_schema, list_tables
from .delivery_routes.controller import register as register_routes
from .employees.controller import register as register_employees
from .tenancy.gate import install_auth_gate
from .tenancy.public_routes import PublicRoutes
from .worktime.controller import register as register_worktime

log = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(
    *,
    container: Optional[Container] = None,
    public_routes: Optional[PublicRoutes] = None,
    settings_module: Optional[str] = None,
) -> Flask:
    """Application factory.

    ``public_routes`` is the allow-list handed to the auth gate; it falls back to
    the settings' ``PUBLIC_ROUTES``. Passing a ready ``container`` skips all
    database and provider wiring (used by tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_logs=bool(getattr(settings, "LOG_JSON", False)))

    if public_routes is None:
        public_routes = PublicRoutes.of(getattr(settings, "PUBLIC_ROUTES", DEFAULT_PUBLIC_ROUTES))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        log.info(
            "app_starting",
            settings=settings_module,
            db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            log.info("schema_ready", tables=len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            identity_config=getattr(settings, "CLERK_CONFIG"),
            billing_config=getattr(settings, "STRIPE_CONFIG"),
        )

    install_auth_gate(app, container.identity, public_routes)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    register_worktime(app, container)
    register_routes(app, container)
    register_employees(app, container)
    register_billing(app, container)

    return app
