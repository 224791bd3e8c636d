from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix
from marshmallow import ValidationError
from flask_smorest import Api
from flask_limiter.errors import RateLimitExceeded
from pymongo.errors import PyMongoError

from .utils.extensions import limiter
from .extensions import db, cors
from .models.campaign_log import CampaignLog

from .config import load_config
from .routes import register_routes
from .utils.csv_decoder import CsvInputError
from .utils.logger import Log
from .utils.error_handlers import (
    handle_permission_error, handle_validation_error, handle_type_error,
    handle_rate_limit, handle_csv_input_error,
)


def create_app(config_name=None):
    app = Flask(__name__)

    #get actual client IP
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_for=1,      # Trust X-Forwarded-For
        x_proto=1,    # Trust X-Forwarded-Proto
        x_host=1,     # Trust X-Forwarded-Host
        x_port=1,     # Trust X-Forwarded-Port
        x_prefix=1    # Trust X-Forwarded-Prefix
    )

    # Load configuration (must not override Flask-Smorest keys)
    load_config(app, config_name)

    app.config["API_TITLE"] = "Bulk Ads Importer API"
    app.config["API_VERSION"] = "v1"
    app.config["OPENAPI_VERSION"] = "3.0.3"
    # The base prefix MUST match how it's mounted
    app.config["OPENAPI_URL_PREFIX"] = "/api"
    app.config["OPENAPI_JSON_PATH"] = "openapi.json"
    app.config["OPENAPI_SWAGGER_UI_PATH"] = "/docs"
    app.config["OPENAPI_SWAGGER_UI_URL"] = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"

    api = Api(app)

    # Initialize all extensions
    limiter.init_app(app)
    db.init_app(app)
    cors.init_app(app, origins=app.config.get("CORS_ORIGINS", "*"))

    if not app.config.get("TESTING"):
        with app.app_context():
            try:
                CampaignLog.ensure_indexes()
            except PyMongoError as e:
                Log.error(f"[create_app] Could not create campaign_logs indexes: {e}")

    # Register custom error handlers
    app.errorhandler(PermissionError)(handle_permission_error)
    app.errorhandler(ValidationError)(handle_validation_error)
    app.errorhandler(TypeError)(handle_type_error)
    app.errorhandler(CsvInputError)(handle_csv_input_error)
    app.errorhandler(RateLimitExceeded)(handle_rate_limit)

    # Register all blueprints using `api.register_blueprint(...)`
    register_routes(app, api)

    return app
