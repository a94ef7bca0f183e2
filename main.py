# FILE: ecotrack-backend/main.py

import logging
from flask import Flask, jsonify
from dotenv import load_dotenv
from pydantic import ValidationError

from logging_config import setup_logging
from dependencies import EXTENSION_KEY, REDIS_URL, build_services
from extensions import limiter

# --- SETUP & CONFIG ---
load_dotenv()


def create_app(services=None, config=None):
    """
    Builds the Flask app. `services` defaults to Firestore + Gemini collaborators
    from the environment; tests pass their own.
    """
    app = Flask(__name__)
    app.config["RATELIMIT_STORAGE_URI"] = REDIS_URL
    if config:
        app.config.update(config)

    if not app.config.get("TESTING"):
        setup_logging()

    app.extensions[EXTENSION_KEY] = services or build_services()

    # --- Initialize Extensions ---
    limiter.init_app(app)

    # --- Import and Register Blueprints ---
    from api.users import users_bp
    from api.core import core_bp
    from api.coach import coach_bp
    from api.gamification import gamification_bp
    from api.status import status_bp

    app.register_blueprint(users_bp, url_prefix='/users')
    app.register_blueprint(core_bp, url_prefix='/', strict_slashes=False)
    app.register_blueprint(coach_bp, url_prefix='/', strict_slashes=False)
    app.register_blueprint(gamification_bp, url_prefix='/', strict_slashes=False)
    app.register_blueprint(status_bp, url_prefix='/', strict_slashes=False)

    # --- Global Error Handlers ---
    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify({"error_code": "BAD_REQUEST", "details": e.errors(include_url=False, include_context=False, include_input=False)}), 400

    @app.errorhandler(404)
    def resource_not_found(e):
        """Handles 404 Not Found errors for a clean API response."""
        return jsonify(error_code="NOT_FOUND", message="The requested resource was not found."), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        """Handles unexpected 500 Internal Server Errors for a clean API response."""
        logging.critical(f"An unhandled exception occurred: {e}", exc_info=True)
        return jsonify(error_code="INTERNAL_SERVER_ERROR", message="An unexpected error occurred on the server."), 500

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=8080)
