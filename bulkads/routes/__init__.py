from ..resources import (
    blp_campaign_import,
    blp_campaign_logs,
)


def register_routes(app, api):
    blueprints = [
        blp_campaign_import,
        blp_campaign_logs,
    ]

    for blueprint in blueprints:
        api.register_blueprint(blueprint, url_prefix="/api/v1")

    # Root route
    @app.route('/')
    def index():
        return {"message": f"Welcome to the {app.config.get('APP_NAME')} API"}
