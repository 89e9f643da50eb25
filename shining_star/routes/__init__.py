# Routes package initialization
from shining_star.routes.main_routes import main_bp
from shining_star.routes.api_routes import api_bp
from shining_star.routes.admin_routes import admin_bp
from shining_star.routes.payment_routes import payment_bp

__all__ = [
    'main_bp',
    'api_bp',
    'admin_bp',
    'payment_bp'
]
