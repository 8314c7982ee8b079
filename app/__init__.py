"""Flask application package."""

from __future__ import annotations

from flask import Flask
from dotenv import load_dotenv


def create_app(config_object: object | None = None) -> Flask:
    """Application factory.

    Args:
        config_object: Optional config class/object; defaults to the one
            selected by APP_ENV.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from app.config import load_settings
    from app.db import init_db
    from app.domain import parse_prize_table
    from app.error_handlers import register_error_handlers
    from app.logging_config import configure_logging
    from app.routes.bets import bets_bp
    from app.routes.health import health_bp
    from app.routes.results import results_bp
    from app.services.reconciliation_service import ReconciliationService
    from app.services.result_fetcher import build_result_fetcher
    from app.services.stats_service import StatsService

    app = Flask(__name__)
    if config_object is None:
        app.config.from_mapping(load_settings())
    else:
        app.config.from_object(config_object)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    bet_cost = str(app.config["BET_COST"])
    app.extensions["result_fetcher"] = build_result_fetcher(app.config)
    app.extensions["reconciliation_service"] = ReconciliationService(
        bet_cost=bet_cost,
        default_prizes=parse_prize_table(app.config["PRIZE_TABLE"]),
    )
    app.extensions["stats_service"] = StatsService(bet_cost=bet_cost)

    app.register_blueprint(health_bp)
    app.register_blueprint(bets_bp, url_prefix="/api")
    app.register_blueprint(results_bp, url_prefix="/api")

    return app
