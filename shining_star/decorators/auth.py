"""
Authentication decorators for admin route protection.

The admin capability check lives here, in the routing layer; the catalog
and quote services never look at the session.
"""

from functools import wraps
from flask import session, jsonify, flash, redirect, url_for, g, request
import logging

logger = logging.getLogger(__name__)


def _wants_json() -> bool:
    return request.is_json or '/api/' in request.path


def require_admin(f):
    """
    Decorator to require an admin session.

    Auto-detects JSON vs HTML routes and responds appropriately: API
    routes get a 401 JSON error, page routes redirect to the login page.

    Sets g.admin_username for the wrapped route.

    Usage:
        @admin_bp.route('/api/services', methods=['POST'])
        @require_admin
        def create_service():
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = session.get('user')
        if not user or user.get('role') != 'admin':
            logger.warning(
                f"Unauthenticated admin access attempt to {f.__name__} at {request.path}"
            )

            if _wants_json():
                return jsonify({
                    'success': False,
                    'error': 'Admin login required.'
                }), 401

            flash('Please log in first', 'warning')
            return redirect(url_for('admin.login'))

        g.admin_username = user.get('username')
        logger.debug(f"Admin request to {f.__name__} by {g.admin_username}")

        return f(*args, **kwargs)

    return decorated_function
