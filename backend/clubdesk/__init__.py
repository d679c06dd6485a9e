from flask import Flask
from .config import Config
from clubdesk.routes import register_routes
from clubdesk.extensions import db, limiter, migrate, cors


def _engine_options(app):
    uri = app.config["SQLALCHEMY_DATABASE_URI"]
    timeout = app.config["STORE_TIMEOUT_SECONDS"]

    if uri.startswith("sqlite"):
        # busy timeout, sqlite has no connect timeout
        return {"connect_args": {"timeout": timeout}}

    options = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_timeout": timeout,
    }
    if uri.startswith("postgresql"):
        options["connect_args"] = {"connect_timeout": timeout}
    return options


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", _engine_options(app))

    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)
    limiter.init_app(app)
    register_routes(app)

    with app.app_context():
        from clubdesk import models  # noqa: F401
        db.create_all()

    app.logger.info("clubdesk started (%s)", app.config.get("FLASK_ENV"))
    return app
