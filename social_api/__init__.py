import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from social_api.config import Config
from social_api.db import db
from social_api.errors import ApiError
from social_api.extensions import identity
from social_api.extensions.extensions import jwt, ma


logger = logging.getLogger(__name__)


def _configure_logging(app):
    level = getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO)
    logging.basicConfig(level=level)
    logging.getLogger("social_api").setLevel(level)
    app.logger.setLevel(level)


def _register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e):
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        messages = {
            404: "Not found",
            405: "Method Not Allowed",
            413: "File too large",
        }
        return jsonify({"error": messages.get(e.code, e.name)}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500


def _register_blueprints(app):
    from social_api.routes.auth_routes import auth_bp
    from social_api.routes.comment_routes import comment_bp
    from social_api.routes.docs_routes import docs_bp
    from social_api.routes.feed_routes import feed_bp
    from social_api.routes.follow_routes import follow_bp
    from social_api.routes.media_routes import media_bp
    from social_api.routes.notification_routes import notification_bp
    from social_api.routes.post_routes import post_bp
    from social_api.routes.profile_routes import profile_bp
    from social_api.routes.reaction_routes import reaction_bp

    for blueprint in (
        auth_bp,
        post_bp,
        comment_bp,
        reaction_bp,
        follow_bp,
        feed_bp,
        notification_bp,
        media_bp,
        profile_bp,
        docs_bp,
    ):
        app.register_blueprint(blueprint)


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    _configure_logging(app)

    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    identity.init_app(app)

    _register_error_handlers(app)
    _register_blueprints(app)

    @app.after_request
    def log_request(response):
        logger.debug("%s %s -> %s", request.method, request.full_path, response.status_code)
        return response

    return app
