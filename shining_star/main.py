from flask import Flask, render_template, request, jsonify
import logging
import sqlite3
import os
from datetime import datetime

from shining_star.exceptions import (
    InvalidSelection, ServiceUnavailable, UnknownService, UnknownPackage,
    UnknownPortfolioItem, ValidationFailed, DistanceUnavailable, PaymentError
)
from shining_star.utils.response_helpers import (
    error_response, not_found_response, service_unavailable_response,
    validation_failed_response
)

logger = logging.getLogger(__name__)


def create_app(config_name=None, overrides=None):
    logging.basicConfig(level=logging.INFO)
    app = Flask(__name__)
    logger.info("Logger initialized at INFO level")

    # Load configuration from config.py
    from config import config, check_secret_key

    # Determine config name from environment or parameter
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app.config.from_object(config.get(config_name, config['development']))
    if overrides:
        app.config.update(overrides)
    check_secret_key(app.config.get('SECRET_KEY'))

    # Data paths are relative to the working directory
    for key in ('DATABASE_PATH', 'UPLOAD_FOLDER', 'INVOICE_FOLDER'):
        app.config[key] = os.path.abspath(app.config[key])

    if config_name == 'development':
        app.config.update(
            TEMPLATES_AUTO_RELOAD=True,
        )

    # Add security headers with Flask-Talisman (production only)
    if config_name == 'production':
        from flask_talisman import Talisman
        from flask_limiter import Limiter
        from flask_limiter.util import get_remote_address

        csp = {
            'default-src': "'self'",
            'script-src': [
                "'self'",
                "'unsafe-inline'",  # Needed for the calculator inline script
                "https://cdn.jsdelivr.net"
            ],
            'style-src': [
                "'self'",
                "'unsafe-inline'"
            ],
            'img-src': [
                "'self'",
                "data:",
                "https:"
            ],
            'font-src': [
                "'self'",
                "https://fonts.gstatic.com"
            ],
            'connect-src': "'self'"
        }

        Talisman(
            app,
            force_https=True,
            strict_transport_security=True,
            strict_transport_security_max_age=31536000,  # 1 year
            content_security_policy=csp,
            referrer_policy='strict-origin-when-cross-origin',
        )
        logger.info("Security headers configured with Flask-Talisman")

        limiter = Limiter(
            key_func=get_remote_address,
            app=app,
            default_limits=["300 per hour", "60 per minute"],
            storage_uri="memory://",
            strategy="fixed-window"
        )

        from shining_star.decorators import LIMITER_KEY
        app.extensions[LIMITER_KEY] = limiter
        logger.info("Rate limiting configured with Flask-Limiter")

    from shining_star.cache import cache
    cache.init_app(app)

    # Distance lookup strategy, replaceable in tests
    from shining_star.services.distance_service import build_resolver
    app.extensions['distance_resolver'] = build_resolver(app.config)

    from shining_star.utils.localization import localize, current_language

    @app.context_processor
    def inject_globals():
        return {
            'now': datetime.now(),
            'lang': current_language(),
            'business_name': app.config['BUSINESS_NAME'],
        }

    app.add_template_filter(localize, 'localize')

    # Register blueprints
    from shining_star.routes.main_routes import main_bp
    app.register_blueprint(main_bp)

    from shining_star.routes.api_routes import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    from shining_star.routes.admin_routes import admin_bp
    app.register_blueprint(admin_bp)

    from shining_star.routes.payment_routes import payment_bp
    app.register_blueprint(payment_bp)

    register_error_handlers(app)

    # Initialize the database
    from shining_star.db_manager import init_db
    init_db(app)

    @app.route('/health')
    def health_check():
        """Health check endpoint for Docker and load balancers."""
        try:
            from shining_star.db_manager import query_db
            query_db("SELECT 1", one=True)

            return jsonify({
                'status': 'healthy',
                'timestamp': datetime.utcnow().isoformat(),
                'database': 'connected'
            }), 200
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return jsonify({
                'status': 'unhealthy',
                'timestamp': datetime.utcnow().isoformat(),
                'error': str(e)
            }), 503

    return app


def register_error_handlers(app):
    """Map domain errors to JSON responses."""

    @app.errorhandler(ValidationFailed)
    def handle_validation_failed(e):
        return validation_failed_response(e.errors)

    @app.errorhandler(InvalidSelection)
    def handle_invalid_selection(e):
        return error_response(str(e), status=400, error_code='INVALID_SELECTION')

    @app.errorhandler(ServiceUnavailable)
    def handle_service_unavailable(e):
        return error_response(str(e), status=409, error_code='SERVICE_NOT_BOOKABLE')

    @app.errorhandler(UnknownService)
    def handle_unknown_service(e):
        return not_found_response('Service', e.service_id)

    @app.errorhandler(UnknownPackage)
    def handle_unknown_package(e):
        return not_found_response('Package', e.package_id)

    @app.errorhandler(UnknownPortfolioItem)
    def handle_unknown_portfolio_item(e):
        return not_found_response('Portfolio item', e.item_id)

    @app.errorhandler(DistanceUnavailable)
    def handle_distance_unavailable(e):
        return service_unavailable_response('Distance lookup', str(e), error_code='DISTANCE_UNAVAILABLE')

    @app.errorhandler(PaymentError)
    def handle_payment_error(e):
        return error_response(str(e), status=400, error_code='PAYMENT_ERROR')

    @app.errorhandler(sqlite3.Error)
    def handle_database_error(e):
        logger.exception("Database failure while handling request")
        return error_response('Internal error, please try again later', status=500, error_code='DATABASE_ERROR')

    @app.errorhandler(429)
    def handle_rate_limited(e):
        return error_response('Too many requests, please try again later', status=429, error_code='RATE_LIMITED')

    @app.errorhandler(404)
    def handle_not_found(e):
        if '/api/' in request.path:
            return error_response('Not found', status=404, error_code='NOT_FOUND')
        return render_template('error.html', error='Page not found!'), 404
