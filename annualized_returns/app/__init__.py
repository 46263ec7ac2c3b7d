"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from annualized_returns.app.api.routes import api_bp
from annualized_returns.app.views import pages_bp
from annualized_returns.config import Settings, get_settings
from annualized_returns.logging_config import setup_logging


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()
    logger = setup_logging(settings.log_level, settings.log_format)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(pages_bp)

    logger.info("app created", extra={"extra": {"cors_origins": settings.cors_origins}})
    return app
