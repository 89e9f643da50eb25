"""
Cache configuration module.

Shared cache instance, configured in create_app.
Public catalog listings are cached; admin writes clear them.
"""

from flask_caching import Cache

# Initialize cache instance (will be configured in main.py)
cache = Cache()

CATALOG_CACHE_KEYS = ('catalog:services', 'catalog:packages', 'catalog:portfolio')


def get_catalog(key, loader):
    """Return the cached listing for key, loading it on a miss."""
    value = cache.get(key)
    if value is None:
        value = loader()
        cache.set(key, value)
    return value


def clear_catalog_cache():
    """Drop cached catalog listings after an admin write."""
    for key in CATALOG_CACHE_KEYS:
        cache.delete(key)
