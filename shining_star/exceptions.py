"""Custom exceptions for the Shining Star booking site.

Pricing and catalog code raises these instead of returning partial results;
the routing layer maps them to HTTP responses.
"""


class ShiningStarError(Exception):
    """Base exception for all booking site operations."""
    pass


class InvalidSelection(ShiningStarError):
    """Quantity, area or hours do not fit the service's calculation type."""
    pass


class ServiceUnavailable(ShiningStarError):
    """Service exists but is not bookable right now."""
    pass


class UnknownService(ShiningStarError):
    """No service with the given id."""

    def __init__(self, service_id):
        self.service_id = service_id
        super().__init__(f"Unknown service: {service_id}")


class UnknownPackage(ShiningStarError):
    """No package with the given id."""

    def __init__(self, package_id):
        self.package_id = package_id
        super().__init__(f"Unknown package: {package_id}")


class UnknownPortfolioItem(ShiningStarError):
    """No portfolio item with the given id."""

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Unknown portfolio item: {item_id}")


class ValidationFailed(ShiningStarError):
    """Catalog record failed validation. Carries every field-level message."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))


class DistanceUnavailable(ShiningStarError):
    """Address-to-distance lookup failed or timed out."""
    pass


class PaymentError(ShiningStarError):
    """Mock payment flow rejected the request."""
    pass
