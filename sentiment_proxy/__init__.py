# sentiment_proxy/__init__.py
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

load_dotenv()

from .config import ProxySettings, config_by_name
from .errors import InternalError
from .services.analysis_service import AnalysisService

logging.basicConfig(level=logging.INFO)


def create_app(config_name: str = 'default', overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if overrides:
        app.config.update(overrides)

    # Korean text stays readable and the model's key order is kept
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    settings = ProxySettings.from_mapping(app.config)
    app.extensions['analysis_service'] = AnalysisService(settings)

    from .api import api_blueprint
    app.register_blueprint(api_blueprint)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return 'Method Not Allowed', 405

    @app.errorhandler(Exception)
    def unhandled_exception(e):
        if isinstance(e, HTTPException):
            return e
        app.logger.exception("Unhandled exception while serving request.")
        error = InternalError.from_exception(e)
        return jsonify(error.to_dict()), error.status

    return app
