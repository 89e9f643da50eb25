"""
Decorators for Flask routes.
"""

from shining_star.decorators.auth import require_admin
from shining_star.decorators.rate_limit import rate_limit, LIMITER_KEY

__all__ = ['require_admin', 'rate_limit', 'LIMITER_KEY']
