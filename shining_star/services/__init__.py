"""
Service layer for business logic.

Quote and payment services are pure Python without Flask dependencies;
the catalog service reaches the database only through repositories.
"""

from shining_star.services.quote_service import QuoteService, Quote, PricingRules
from shining_star.services.catalog_service import CatalogService
from shining_star.services.distance_service import (
    DistanceResolver, FixedDistanceResolver, GoogleDistanceResolver, build_resolver
)
from shining_star.services.payment_service import PaymentService, BusinessInfo

__all__ = [
    'QuoteService',
    'Quote',
    'PricingRules',
    'CatalogService',
    'DistanceResolver',
    'FixedDistanceResolver',
    'GoogleDistanceResolver',
    'build_resolver',
    'PaymentService',
    'BusinessInfo'
]
