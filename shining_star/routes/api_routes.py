"""
Public JSON API: catalog listings, quotes, estimates and customer requests.
"""

from flask import Blueprint, request, current_app
import logging
import time

from shining_star.exceptions import UnknownService
from shining_star.repositories import ServiceRepository
from shining_star.services.quote_service import QuoteService, SELECTION_FIELDS
from shining_star.utils.catalog import list_services, list_packages, list_portfolio
from shining_star.utils.response_helpers import (
    success_response, validation_failed_response
)
from shining_star.decorators import rate_limit
from shining_star.validation import validate_contact_submission

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)

quote_service = QuoteService()


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def resolve_customer_distance(address):
    """
    One-way miles from the business to the customer.

    An empty address is treated as 0 miles (inside the free radius);
    resolver failures propagate as DistanceUnavailable.
    """
    address = (address or '').strip()
    if not address:
        return 0
    resolver = current_app.extensions['distance_resolver']
    return resolver.resolve(current_app.config['BUSINESS_ADDRESS'], address)


@api_bp.route('/services')
def get_services():
    return success_response(data=list_services())


@api_bp.route('/services/<service_id>')
def get_service(service_id):
    service = ServiceRepository.get_by_id(service_id)
    if service is None:
        raise UnknownService(service_id)
    return success_response(data=service)


@api_bp.route('/packages')
def get_packages():
    return success_response(data=list_packages())


@api_bp.route('/portfolio')
def get_portfolio():
    return success_response(data=list_portfolio())


@api_bp.route('/quote', methods=['POST'])
def calculate_quote():
    """
    Price one service for a customer address.

    Body: serviceId, one of quantity/area/hours, optional address.
    """
    data = _json_body()
    service_id = data.get('serviceId')
    if not service_id:
        return validation_failed_response(['serviceId is required'])

    service = ServiceRepository.get_by_id(service_id)
    if service is None:
        raise UnknownService(service_id)

    selection = {
        key: data[key] for key in SELECTION_FIELDS.values() if key in data
    }
    distance = resolve_customer_distance(data.get('address'))
    quote = quote_service.compute_quote(service, selection, distance)

    logger.info(f"Quote for {service_id}: total {quote.total}")
    return success_response(data=quote.to_dict())


@api_bp.route('/estimate', methods=['POST'])
def estimate():
    """Sum selected services and packages (package discounts applied)."""
    data = _json_body()
    service_ids = data.get('services') or []
    package_ids = data.get('packages') or []
    if not isinstance(service_ids, list) or not isinstance(package_ids, list):
        return validation_failed_response(['services and packages must be lists'])

    result = quote_service.estimate_selection(
        list_services(), list_packages(), service_ids, package_ids
    )
    return success_response(data=result.to_dict())


@api_bp.route('/request', methods=['POST'])
@rate_limit("10 per hour")
def submit_service_request():
    """Accept a booking request. Requests are logged, not stored."""
    data = _json_body()
    errors = validate_contact_submission(data)

    services = data.get('services') or []
    packages = data.get('packages') or []
    if not isinstance(services, list) or not isinstance(packages, list):
        errors.append('services and packages must be lists')
    elif not services and not packages:
        errors.append('select at least one service or package')

    if errors:
        return validation_failed_response(errors)

    request_id = str(int(time.time() * 1000))
    logger.info(
        f"Service request {request_id} from {data.get('email')}: "
        f"services={services} packages={packages} date={data.get('preferredDate')}"
    )
    return success_response(
        data={'requestId': request_id, 'status': 'pending'},
        message='Your service request has been submitted successfully!'
    )


@api_bp.route('/contact', methods=['POST'])
@rate_limit("10 per hour")
def submit_contact():
    data = _json_body() or request.form.to_dict()
    errors = validate_contact_submission(data)
    if not str(data.get('message') or '').strip():
        errors.append('message is required')
    if errors:
        return validation_failed_response(errors)

    logger.info(f"Contact form submission from {data.get('email')}")
    return success_response(message='Message sent successfully!')

