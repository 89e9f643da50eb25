"""
Per-route request limits for public form endpoints.

Limits only apply when create_app registered a Flask-Limiter instance
(production); elsewhere the wrapped view runs unthrottled.
"""

from functools import wraps
from flask import current_app

LIMITER_KEY = 'shining_star_limiter'


def rate_limit(limit_string):
    """
    Throttle a view, e.g. @rate_limit("10 per hour") on the contact form.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            limiter = current_app.extensions.get(LIMITER_KEY)
            if limiter is None:
                return view(*args, **kwargs)
            return limiter.limit(limit_string)(view)(*args, **kwargs)
        return wrapper
    return decorator
