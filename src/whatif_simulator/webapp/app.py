"""Flask application factory."""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from whatif_simulator.api import WhatIfAPI, create_default_api
from whatif_simulator.config import configure_logging
from whatif_simulator.llm import check_claude_credentials

from .config import Config
from .responses import error_response
from .services import EXTENSION_KEY

logger = logging.getLogger(__name__)


def create_app(config_class=Config, api: WhatIfAPI | None = None):
    """Create and configure the Flask application.

    Args:
        config_class: Flask configuration class
        api: WhatIfAPI to serve. If None, builds a Claude-backed one from
            the environment.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    if api is None:
        # Missing credentials degrade to fallback content, so only warn
        check_claude_credentials()
        api = create_default_api()
    app.extensions[EXTENSION_KEY] = api

    # Register blueprints
    from .routes import feedback, simulator

    app.register_blueprint(simulator.bp)
    app.register_blueprint(feedback.bp)

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = app.config["CORS_ALLOW_ORIGIN"]
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    @app.errorhandler(Exception)
    def unexpected_error(e):
        if isinstance(e, HTTPException):
            return error_response(e.description, e.code)
        logger.exception(f"Unhandled error: {e}")
        return error_response("Internal server error", 500)

    return app


def main():
    """Entry point for `whatif-simulator-web` command."""
    configure_logging()
    app = create_app()
    app.run(debug=True, host="0.0.0.0", port=5000)


if __name__ == "__main__":
    main()
