import os
from flask import Flask, request
from flask_sqlalchemy import SQLAlchemy
from pathlib import Path
from datetime import datetime, timezone
from urllib.parse import unquote
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from werkzeug.middleware.proxy_fix import ProxyFix
from flask_wtf import CSRFProtect

db = SQLAlchemy()
csrf = CSRFProtect()


def create_app(run_startup_tasks: bool = True):
    app = Flask(__name__)

    @app.context_processor
    def inject_app_version():
        return {
            "app_version": os.environ.get("APP_VERSION", "dev"),
            "current_year": datetime.now(timezone.utc).year,
        }

    @app.template_filter("localtime")
    def localtime_filter(utc_dt, fmt="%Y-%m-%d %H:%M"):
        """Convert UTC datetime to user's local timezone."""
        if not utc_dt:
            return "-"

        app_timezone = app.config.get("APP_TIMEZONE", "UTC")
        client_tz_raw = request.cookies.get("client_timezone", "")
        client_tz = unquote(client_tz_raw).strip() if client_tz_raw else ""
        display_tz = client_tz or app_timezone

        try:
            tz = ZoneInfo(display_tz)
        except (ZoneInfoNotFoundError, ValueError):
            tz = timezone.utc

        if utc_dt.tzinfo is None:
            utc_dt = utc_dt.replace(tzinfo=timezone.utc)

        return utc_dt.astimezone(tz).strftime(fmt)

    # Load configuration
    from tablesort.config import Config

    app.config.from_object(Config)

    if not app.config.get("DEBUG"):
        if app.config.get("SECRET_KEY") == "dev-secret-key-change-in-production":
            raise RuntimeError("SECRET_KEY must be set in production")

    if app.config.get("TRUST_PROXY"):
        app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_for=1,
            x_proto=1,
            x_host=1,
            x_port=1,
            x_prefix=1,
        )

    # Ensure instance folder exists
    instance_path = Path(app.instance_path)
    instance_path.mkdir(exist_ok=True)

    # Initialize extensions
    db.init_app(app)
    csrf.init_app(app)

    # Register routes
    from tablesort import routes

    app.register_blueprint(routes.bp)

    if run_startup_tasks:
        with app.app_context():
            from tablesort import models  # noqa: F401

            db.create_all()
            app.logger.info("Database in use: %s", app.config.get("SQLALCHEMY_DATABASE_URI"))

    return app
