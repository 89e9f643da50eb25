"""
JSON envelopes shared by the public API, the admin API and the error handlers.

Success bodies look like {'success': True, 'message': ..., 'data': ...};
failures like {'success': False, 'error': ..., 'details': ..., 'error_code': ...}.
"""
from flask import jsonify
from typing import Any, Dict, List, Optional, Union
import logging

logger = logging.getLogger(__name__)


def success_response(data: Any = None, message: Optional[str] = None, status: int = 200) -> tuple:
    """
    Example:
        return success_response(data=record, message='Service created', status=201)
    """
    body: Dict[str, Any] = {'success': True}
    if message is not None:
        body['message'] = message
    if data is not None:
        body['data'] = data
    return jsonify(body), status


def error_response(
    message: str,
    status: int = 400,
    details: Optional[Union[str, Dict, list]] = None,
    error_code: Optional[str] = None
) -> tuple:
    """
    Failure envelope.

    Status codes used by the site:
        400 - invalid catalog payload, selection or payment request
        401 - admin login required or wrong credentials
        404 - unknown service, package, portfolio item or invoice
        409 - service exists but is not bookable
        503 - distance lookup failed
    """
    body: Dict[str, Any] = {'success': False, 'error': message}
    if details is not None:
        body['details'] = details
    if error_code is not None:
        body['error_code'] = error_code

    logger.warning(f"{status} {error_code or 'ERROR'}: {message}")
    return jsonify(body), status


def validation_failed_response(errors: List[str]) -> tuple:
    """400 listing every validation message, in the order they were found."""
    return error_response(
        '; '.join(errors),
        status=400,
        details=list(errors),
        error_code='VALIDATION_ERROR'
    )


def not_found_response(resource: str, identifier: Optional[str] = None) -> tuple:
    if identifier is None:
        return error_response(f'{resource} not found', status=404, error_code='NOT_FOUND')
    return error_response(
        f'{resource} not found: {identifier}',
        status=404,
        details={'resource': resource, 'identifier': identifier},
        error_code='NOT_FOUND'
    )


def service_unavailable_response(
    service: str,
    message: Optional[str] = None,
    error_code: str = 'SERVICE_UNAVAILABLE'
) -> tuple:
    """503 for a failing external collaborator such as the distance lookup."""
    text = f'{service} is temporarily unavailable'
    if message:
        text = f'{text}: {message}'
    return error_response(text, status=503, details={'service': service}, error_code=error_code)
