"""
API gateway: combines the auth, events and attendees blueprints.
This is the local entrypoint for development.
"""

import logging
from typing import Optional, Tuple

from flask import Flask, jsonify, Response
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from event_api.attendees_service.routes import attendees_bp
from event_api.auth_service.credentials import CredentialStore
from event_api.auth_service.routes import auth_bp
from event_api.config import Config
from event_api.context import EXTENSION_KEY, Services
from event_api.database.db_connection import Database
from event_api.database.models import new_models
from event_api.errors import ApiError
from event_api.events_service.routes import events_bp

LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(message)s"


def build_services(config: Config) -> Services:
    """
    Open the connection pool and wire the repositories and credential store.

    Raises:
        RuntimeError: If DATABASE_URL is not configured.
    """
    if not config.database_url:
        raise RuntimeError("DATABASE_URL is not set. Please set the environment variable.")

    db = Database(config.database_url, minconn=config.db_pool_min, maxconn=config.db_pool_max)
    return Services(
        models=new_models(db),
        credentials=CredentialStore(config.jwt_secret, token_ttl=config.token_ttl),
    )


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def api_error(error: ApiError) -> Tuple[Response, int]:
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException) -> Tuple[Response, int]:
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error: Exception) -> Tuple[Response, int]:
        logging.exception(f"Unhandled error: {error}")
        return jsonify({"error": "Something went wrong"}), 500


def create_app(config: Optional[Config] = None, services: Optional[Services] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        config (Config, optional): Settings. Read from the environment when
            omitted and ``services`` is not given; defaults otherwise.
        services (Services, optional): Pre-built repositories and credential
            store. Built from ``config`` when omitted.

    Returns:
        Flask: The configured Flask application.
    """
    if config is None:
        config = Config() if services is not None else Config.from_env()

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = services or build_services(config)

    if config.cors_origins:
        CORS(app, resources={
            r"/*": {
                "origins": config.cors_origins,
                "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                "allow_headers": ["Content-Type", "Authorization"],
            }
        })

    # --- REGISTER BLUEPRINTS ---
    prefix = config.api_prefix
    app.register_blueprint(auth_bp, url_prefix=f"{prefix}/auth")
    app.register_blueprint(events_bp, url_prefix=f"{prefix}/events")
    app.register_blueprint(attendees_bp, url_prefix=prefix)
    logging.info("All blueprints registered successfully.")

    register_error_handlers(app)

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping() -> Tuple[Response, int]:
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health() -> Tuple[Response, int]:
        return jsonify({"status": "ok"}), 200

    return app


def main() -> None:
    config = Config.from_env()
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
    app = create_app(config)
    app.run(host="0.0.0.0", port=config.port)


if __name__ == "__main__":
    main()
