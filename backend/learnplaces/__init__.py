from flask import Flask, send_file, current_app
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .cli import register_cli
from flask_swagger_ui import get_swaggerui_blueprint
import os


def create_app(config_name: str = "development", **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # import models so the mappers and Alembic see them
    from .models import learnplace, block, ilias_link_block, user, audit_log  # noqa: F401

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_cli(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML (PUBLIC)
    # -------------------------------------------------
    @app.route("/openapi/learnplaces.yaml", methods=["GET"], endpoint="openapi_learnplaces")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "learnplaces_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("learnplaces_openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/learnplaces.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Learnplaces API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    app.logger.debug("Learnplaces app created with %s config", config_name)
    return app
