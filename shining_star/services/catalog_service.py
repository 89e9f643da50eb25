"""
Business logic for the admin catalog: services, packages, portfolio.

Validation and id assignment are pure; persistence goes through the
repository classes passed to the constructor so tests can swap them.
"""

from typing import Any, Dict, Optional
import logging

from shining_star.exceptions import (
    UnknownService, UnknownPackage, UnknownPortfolioItem, ValidationFailed
)
from shining_star.repositories import (
    ServiceRepository, PackageRepository, PortfolioRepository
)
from shining_star.utils.slug import assign_id
from shining_star.validation import (
    validate_service, validate_package, validate_portfolio_item
)

logger = logging.getLogger(__name__)

LANGUAGES = ('en', 'ru', 'es')


def normalize_localized(value: Any) -> Dict[str, str]:
    """Localized map with every supported language present."""
    value = value if isinstance(value, dict) else {}
    return {
        lang: (value.get(lang) or '').strip() if isinstance(value.get(lang), str) else ''
        for lang in LANGUAGES
    }


def normalize_service(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill defaults on an already validated service payload.

    Bounds that do not apply to the calculation type are stored as None.
    """
    calculation_type = payload['calculationType']
    quantity_type = calculation_type == 'quantity'
    area_type = calculation_type == 'area'
    return {
        'id': payload.get('id'),
        'name': normalize_localized(payload.get('name')),
        'description': normalize_localized(payload.get('description')),
        'price': payload['price'],
        'duration': int(payload['duration']),
        'category': payload.get('category'),
        'available': payload.get('available') is not False,
        'calculationType': calculation_type,
        'unit': payload.get('unit') or None,
        'maxQuantity': payload.get('maxQuantity') if quantity_type else None,
        'minArea': payload.get('minArea') if area_type else None,
        'maxArea': payload.get('maxArea') if area_type else None,
    }


def normalize_package(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Fill defaults on an already validated package payload."""
    services = []
    for service_id in payload['services']:
        if service_id not in services:
            services.append(service_id)
    return {
        'id': payload.get('id'),
        'name': normalize_localized(payload.get('name')),
        'description': normalize_localized(payload.get('description')),
        'services': services,
        'price': payload['price'],
        'discount': payload['discount'],
        'duration': int(payload['duration']),
        'available': payload.get('available') is not False,
    }


class CatalogService:
    """
    Create, update and delete catalog records.

    Every write is validated first; a non-empty error list is raised as
    ValidationFailed carrying all messages.
    """

    def __init__(
        self,
        services=ServiceRepository,
        packages=PackageRepository,
        portfolio=PortfolioRepository
    ):
        self.services = services
        self.packages = packages
        self.portfolio = portfolio

    # Services

    def get_service(self, service_id: str) -> Dict[str, Any]:
        service = self.services.get_by_id(service_id)
        if service is None:
            raise UnknownService(service_id)
        return service

    def create_service(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and persist a new service.

        Returns:
            The persisted record, with its assigned id
        """
        errors = validate_service(payload)
        if errors:
            logger.warning(f"Rejected new service: {errors}")
            raise ValidationFailed(errors)

        record = normalize_service(payload)
        record['id'] = assign_id(record['name']['en'], self.services.get_ids())
        self.services.create(record)
        logger.info(f"Created service {record['id']}")
        return record

    def update_service(self, service_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Merge payload over the stored service, validate, persist."""
        existing = self.get_service(service_id)
        merged = {**existing, **payload, 'id': service_id}

        errors = validate_service(merged)
        if errors:
            logger.warning(f"Rejected update of service {service_id}: {errors}")
            raise ValidationFailed(errors)

        record = normalize_service(merged)
        self.services.update(record)
        return record

    def delete_service(self, service_id: str) -> bool:
        """
        Delete a service and drop its id from every package that lists it.

        Each affected package is rewritten independently; concurrent edits
        to the same package are last-write-wins.

        Returns:
            True if any package was modified
        """
        self.get_service(service_id)
        self.services.delete(service_id)

        modified = False
        for package in self.packages.get_referencing(service_id):
            remaining = [s for s in package['services'] if s != service_id]
            self.packages.update_services(package['id'], remaining)
            logger.info(f"Removed service {service_id} from package {package['id']}")
            modified = True

        return modified

    # Packages

    def get_package(self, package_id: str) -> Dict[str, Any]:
        package = self.packages.get_by_id(package_id)
        if package is None:
            raise UnknownPackage(package_id)
        return package

    def create_package(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        errors = validate_package(payload, self.services.get_ids())
        if errors:
            logger.warning(f"Rejected new package: {errors}")
            raise ValidationFailed(errors)

        record = normalize_package(payload)
        record['id'] = assign_id(record['name']['en'], self.packages.get_ids())
        self.packages.create(record)
        logger.info(f"Created package {record['id']}")
        return record

    def update_package(self, package_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        existing = self.get_package(package_id)
        merged = {**existing, **payload, 'id': package_id}

        errors = validate_package(merged, self.services.get_ids())
        if errors:
            logger.warning(f"Rejected update of package {package_id}: {errors}")
            raise ValidationFailed(errors)

        record = normalize_package(merged)
        self.packages.update(record)
        return record

    def delete_package(self, package_id: str) -> None:
        self.get_package(package_id)
        self.packages.delete(package_id)

    # Portfolio

    def create_portfolio_item(
        self,
        payload: Dict[str, Any],
        before_image: Optional[str] = None,
        after_image: Optional[str] = None
    ) -> Dict[str, Any]:
        errors = validate_portfolio_item(payload)
        if errors:
            raise ValidationFailed(errors)

        title = normalize_localized(payload.get('title'))
        record = {
            'id': assign_id(title['en'], self.portfolio.get_ids()),
            'title': title,
            'description': normalize_localized(payload.get('description')),
            'category': payload.get('category'),
            'beforeImage': before_image,
            'afterImage': after_image,
            'featured': bool(payload.get('featured', False)),
        }
        self.portfolio.create(record)
        return record

    def delete_portfolio_item(self, item_id: str) -> Dict[str, Any]:
        """Delete an entry and return it so the caller can remove its images."""
        item = self.portfolio.get_by_id(item_id)
        if item is None:
            raise UnknownPortfolioItem(item_id)
        self.portfolio.delete(item_id)
        return item

    def dashboard_stats(self) -> Dict[str, int]:
        return {
            'services': self.services.count(),
            'packages': self.packages.count(),
            'portfolio': self.portfolio.count(),
        }
